from __future__ import annotations

import math
from collections import Counter
from typing import Iterable, Sequence

from .tokens import tokenize


def idf(document_count: int, document_frequency: int) -> float:
    return math.log((document_count + 1) / (document_frequency + 0.5))


def term_frequencies(documents: Iterable[str]) -> list[Counter]:
    return [Counter(tokenize(doc)) for doc in documents]


def document_frequencies(frequencies: Sequence[Counter]) -> Counter:
    df: Counter = Counter()
    for tf in frequencies:
        df.update(tf.keys())
    return df


def keyword_scores(documents: Sequence[str]) -> dict[str, float]:
    """Aggregate TF-IDF-lite importance of every token across ``documents``.

    Each call builds fresh frequency tables; nothing is shared between calls.
    The returned mapping keeps first-seen token order.
    """
    frequencies = term_frequencies(documents)
    n_docs = len(frequencies) or 1
    df = document_frequencies(frequencies)
    scores: dict[str, float] = {}
    for tf in frequencies:
        for token, count in tf.items():
            weight = count * idf(n_docs, df[token])
            scores[token] = scores.get(token, 0.0) + weight
    return scores


def top_keywords(documents: Sequence[str], limit: int = 10) -> list[str]:
    if limit <= 0:
        return []
    scores = keyword_scores(documents)
    # sorted() is stable, so equal scores keep first-seen order.
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [token for token, _ in ranked[:limit]]

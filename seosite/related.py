from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .content import slugify
from .models import Post
from .tokens import tokenize

TokenSets = dict[tuple[str, str], list[str]]


@dataclass(frozen=True, slots=True)
class RelatedWeights:
    tag: float = 5.0
    category: float = 2.0
    token: float = 0.2
    threshold: float = 0.5
    token_sample: int = 40


DEFAULT_WEIGHTS = RelatedWeights()


def post_text(post: Post) -> str:
    return " ".join([post.title, post.body or post.excerpt, " ".join(post.tags)])


def post_tokens(post: Post) -> list[str]:
    return tokenize(post_text(post))


def post_token_sets(corpus: Sequence[Post]) -> TokenSets:
    return {post.key: post_tokens(post) for post in corpus}


def tag_slugs(post: Post) -> set[str]:
    # Tag pages group by slug, so "amor propio" and "amor-propio" are one tag.
    return {slugify(tag) for tag in post.tags}


def token_sample(tokens: Sequence[str], size: int) -> list[str]:
    sample: list[str] = []
    seen = set()
    for token in tokens:
        if len(sample) >= size:
            break
        if token in seen:
            continue
        seen.add(token)
        sample.append(token)
    return sample


def score_candidate(
    source: Post,
    candidate: Post,
    weights: RelatedWeights = DEFAULT_WEIGHTS,
    source_tokens: Optional[Sequence[str]] = None,
    candidate_tokens: Optional[Sequence[str]] = None,
) -> Optional[float]:
    """Similarity of ``candidate`` to ``source``; ``None`` for the source itself."""
    if candidate.key == source.key:
        return None
    if source_tokens is None:
        source_tokens = post_tokens(source)
    if candidate_tokens is None:
        candidate_tokens = post_tokens(candidate)

    score = 0.0
    shared_tags = tag_slugs(source) & tag_slugs(candidate)
    score += weights.tag * len(shared_tags)
    if candidate.category == source.category:
        score += weights.category
    candidate_set = set(candidate_tokens)
    shared_tokens = sum(1 for token in token_sample(source_tokens, weights.token_sample) if token in candidate_set)
    score += weights.token * shared_tokens
    return score


def rank_related(
    source: Post,
    corpus: Sequence[Post],
    limit: int,
    weights: RelatedWeights = DEFAULT_WEIGHTS,
    token_sets: Optional[TokenSets] = None,
) -> list[tuple[Post, float]]:
    if limit <= 0:
        return []
    if token_sets is None:
        token_sets = {}
    source_tokens = token_sets.get(source.key)
    if source_tokens is None:
        source_tokens = post_tokens(source)

    scored: list[tuple[Post, float]] = []
    for candidate in corpus:
        candidate_tokens = token_sets.get(candidate.key)
        if candidate_tokens is None:
            candidate_tokens = post_tokens(candidate)
        score = score_candidate(source, candidate, weights, source_tokens, candidate_tokens)
        if score is None or score <= weights.threshold:
            continue
        scored.append((candidate, score))
    # Stable sort: equal scores keep corpus order.
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored[:limit]


def related_posts(
    source: Post,
    corpus: Sequence[Post],
    limit: int,
    weights: RelatedWeights = DEFAULT_WEIGHTS,
    token_sets: Optional[TokenSets] = None,
) -> list[Post]:
    selected = [post for post, _ in rank_related(source, corpus, limit, weights, token_sets)]
    if len(selected) >= limit:
        return selected
    taken = {post.key for post in selected}
    taken.add(source.key)
    for post in corpus:
        if len(selected) >= limit:
            break
        if post.key in taken:
            continue
        taken.add(post.key)
        selected.append(post)
    return selected

from __future__ import annotations

import re
from typing import Sequence

from .models import Post
from .scoring import top_keywords
from .shuffle import seeded_shuffle

META_DESCRIPTION_CHARS = 160
VISIBLE_DESCRIPTION_CHARS = 220
CATEGORY_KEYWORD_LIMIT = 8
DESCRIPTION_KEYWORDS = 6

FILLER_SENTENCES = (
    "Acá no venís a leer frases. Venís a encontrarte.",
    "Textos cortos, reales, para abrir el día sin maquillaje.",
    "Si estás en una mañana rota, esto te habla como a vos.",
)

WHITESPACE_RE = re.compile(r"\s+")
SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text or "").strip()


def split_sentences(text: str) -> list[str]:
    text = collapse_whitespace(text)
    if not text:
        return []
    return [part for part in SENTENCE_SPLIT_RE.split(text) if part]


def fit_sentences(sentences: Sequence[str], max_chars: int) -> str:
    """Join whole sentences until the next one would overflow ``max_chars``."""
    out = ""
    for sentence in sentences:
        sentence = collapse_whitespace(sentence)
        if not sentence:
            continue
        candidate = f"{out} {sentence}".strip()
        if len(candidate) > max_chars:
            break
        out = candidate
    if not out:
        out = collapse_whitespace(" ".join(sentences))[:max_chars].rstrip()
    return out


def first_sentence(text: str, max_chars: int = META_DESCRIPTION_CHARS) -> str:
    return fit_sentences(split_sentences(text)[:1], max_chars)


def category_documents(posts: Sequence[Post]) -> list[str]:
    return [" ".join(part for part in (p.title, p.excerpt, p.description) if part) for p in posts]


def dedupe(values: Sequence[str]) -> list[str]:
    seen = set()
    out = []
    for value in values:
        key = value.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(value.strip())
    return out


def category_keywords(name: str, posts: Sequence[Post], limit: int = CATEGORY_KEYWORD_LIMIT) -> list[str]:
    return dedupe([name, *top_keywords(category_documents(posts), limit)])


def count_sentence(count: int) -> str:
    if count <= 0:
        return "Todavía está naciendo."
    if count == 1:
        return "Ahora mismo hay 1 publicación."
    return f"Ahora mismo hay {count} publicaciones."


def category_sentences(
    name: str, posts: Sequence[Post], slug: str = "", filler_count: int = 1, keyword_limit: int = 10
) -> list[str]:
    keywords = top_keywords(category_documents(posts), keyword_limit)
    fillers = seeded_shuffle(FILLER_SENTENCES, slug or name)[: max(1, min(filler_count, len(FILLER_SENTENCES)))]
    if keywords:
        closing = f"Se toca mucho: {', '.join(keywords[:DESCRIPTION_KEYWORDS])}."
    else:
        closing = "De a poco se va armando con lo que vas viviendo."
    return [f"En esta categoría: {name}.", count_sentence(len(posts)), *fillers, closing]


def category_description(
    name: str,
    posts: Sequence[Post],
    slug: str = "",
    max_chars: int = META_DESCRIPTION_CHARS,
    filler_count: int = 1,
) -> str:
    return fit_sentences(category_sentences(name, posts, slug, filler_count), max_chars)


def tag_description(label: str, count: int) -> str:
    noun = "publicación" if count == 1 else "publicaciones"
    return f"Lecturas que tocan: {label}. {count} {noun}, sin humo."


def post_keywords(post: Post, limit: int = CATEGORY_KEYWORD_LIMIT) -> list[str]:
    if limit <= 0:
        return []
    text = " ".join([post.title, post.body or post.excerpt])
    return dedupe([*post.tags, *top_keywords([text], limit)])[:limit]


def post_description(post: Post, max_chars: int = META_DESCRIPTION_CHARS) -> str:
    if post.description:
        return fit_sentences([post.description], max_chars)
    return first_sentence(post.excerpt or post.body, max_chars)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from .content import humanize_slug, slugify
from .models import Category, Post, SeoFields, Tag
from .related import DEFAULT_WEIGHTS, RelatedWeights, post_token_sets, related_posts
from .seo import (
    CATEGORY_KEYWORD_LIMIT,
    META_DESCRIPTION_CHARS,
    category_description,
    category_keywords,
    post_description,
    post_keywords,
)


def corpus_key(post: Post) -> tuple[str, str]:
    return post.key


@dataclass(slots=True)
class Corpus:
    posts: list[Post] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    tags: dict[str, Tag] = field(default_factory=dict)

    def category(self, slug: str) -> Optional[Category]:
        for category in self.categories:
            if category.slug == slug:
                return category
        return None

    def latest(self, limit: int) -> list[Post]:
        # Python's sort is stable: posts with equal lastmod keep corpus order.
        ordered = sorted(self.posts, key=lambda p: p.lastmod, reverse=True)
        return ordered[: max(0, limit)]

    def top_tags(self, limit: int) -> list[Tag]:
        ordered = sorted(self.tags.values(), key=lambda t: len(t.posts), reverse=True)
        return ordered[: max(0, limit)]


def build_corpus(
    posts: Iterable[Post],
    declared_categories: Iterable[str] = (),
    category_names: Optional[Mapping[str, str]] = None,
) -> Corpus:
    """Group scanned posts into categories and tags under a stable order.

    Posts sharing a ``(category, slug)`` key are superseded by the later one.
    The corpus is sorted by category slug, then post slug, so the result does
    not depend on directory enumeration order.
    """
    unique: dict[tuple[str, str], Post] = {}
    for post in posts:
        unique[post.key] = post
    ordered = sorted(unique.values(), key=corpus_key)

    names = {slugify(key): value for key, value in (category_names or {}).items()}
    slugs = sorted({post.category for post in ordered} | {slugify(c) for c in declared_categories})
    categories = [Category(slug=slug, name=names.get(slug) or humanize_slug(slug)) for slug in slugs]
    by_slug = {category.slug: category for category in categories}
    for post in ordered:
        by_slug[post.category].posts.append(post)

    tags: dict[str, Tag] = {}
    for post in ordered:
        labels = post.raw_tags if len(post.raw_tags) == len(post.tags) else post.tags
        for tag, label in zip(post.tags, labels):
            slug = slugify(tag)
            if slug not in tags:
                tags[slug] = Tag(slug=slug, label=label or tag)
            members = tags[slug].posts
            if not members or members[-1].key != post.key:
                members.append(post)

    return Corpus(posts=ordered, categories=categories, tags=tags)


@dataclass(slots=True)
class SiteIndex:
    posts: dict[tuple[str, str], SeoFields] = field(default_factory=dict)
    categories: dict[str, SeoFields] = field(default_factory=dict)


def index_corpus(
    corpus: Corpus,
    related_limit: int = 5,
    weights: RelatedWeights = DEFAULT_WEIGHTS,
    keyword_limit: int = CATEGORY_KEYWORD_LIMIT,
    filler_count: int = 1,
) -> SiteIndex:
    index = SiteIndex()
    token_sets = post_token_sets(corpus.posts)
    for post in corpus.posts:
        related = related_posts(post, corpus.posts, related_limit, weights, token_sets)
        index.posts[post.key] = SeoFields(
            keywords=tuple(post_keywords(post, keyword_limit)),
            description=post_description(post, META_DESCRIPTION_CHARS),
            related_posts=tuple(related),
        )
    for category in corpus.categories:
        index.categories[category.slug] = SeoFields(
            keywords=tuple(category_keywords(category.name, category.posts, keyword_limit)),
            description=category_description(
                category.name, category.posts, category.slug, META_DESCRIPTION_CHARS, filler_count
            ),
        )
    return index

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True, slots=True)
class Post:
    category: str
    slug: str
    title: str
    description: str = ""
    excerpt: str = ""
    body: str = ""
    tags: tuple[str, ...] = ()
    raw_tags: tuple[str, ...] = ()
    lastmod: dt.datetime = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
    source: Optional[Path] = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.category, self.slug)

    @property
    def path(self) -> str:
        return f"posts/{self.category}/{self.slug}/"

    @property
    def summary(self) -> str:
        return (self.excerpt or self.description or "").strip()


@dataclass(slots=True)
class Category:
    slug: str
    name: str
    posts: list[Post] = field(default_factory=list)

    @property
    def path(self) -> str:
        return f"categories/{self.slug}/"


@dataclass(slots=True)
class Tag:
    slug: str
    label: str
    posts: list[Post] = field(default_factory=list)

    @property
    def path(self) -> str:
        return f"tags/{self.slug}/"


@dataclass(frozen=True, slots=True)
class SeoFields:
    """Values the indexing pipeline hands to the page renderer."""

    keywords: tuple[str, ...] = ()
    description: str = ""
    related_posts: tuple[Post, ...] = ()

    @property
    def keywords_text(self) -> str:
        return ", ".join(self.keywords)

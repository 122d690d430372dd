"""Shared fixtures for seosite tests."""

from __future__ import annotations

import datetime as dt
from typing import Callable

import pytest

from seosite.models import Post


def make_post(
    category: str,
    slug: str,
    title: str = "",
    tags: tuple[str, ...] = (),
    body: str = "",
    description: str = "",
    excerpt: str = "",
    day: int = 1,
) -> Post:
    return Post(
        category=category,
        slug=slug,
        title=title or slug.replace("-", " "),
        description=description,
        excerpt=excerpt,
        body=body,
        tags=tags,
        raw_tags=tags,
        lastmod=dt.datetime(2024, 5, day, tzinfo=dt.timezone.utc),
    )


@pytest.fixture
def post_factory() -> Callable[..., Post]:
    return make_post

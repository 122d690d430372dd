from __future__ import annotations

import datetime as dt
import html as html_lib
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .models import Post
from .seo import first_sentence
from .tokens import strip_accents

POST_FILENAME = "index.html"

SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]+>")
TITLE_RE = re.compile(r"<title[^>]*>([\s\S]*?)</title>", re.IGNORECASE)
PARAGRAPH_RE = re.compile(r"<p(?:\s[^>]*)?>([\s\S]*?)</p>", re.IGNORECASE)
BODY_RE = re.compile(r"<body[^>]*>([\s\S]*?)</body>", re.IGNORECASE)
META_RE = re.compile(r"<meta\b([^>]*)>", re.IGNORECASE)
ATTR_RE = re.compile(r"([\w:-]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")
DATA_TAGS_RE = re.compile(r"data-tags=[\"']([^\"']+)[\"']", re.IGNORECASE)
COMMENT_TAGS_RE = re.compile(r"<!--\s*tags:\s*([\s\S]*?)-->", re.IGNORECASE)
SLUG_STRIP_RE = re.compile(r"[^a-z0-9\s-]")


def slugify(text: str) -> str:
    text = strip_accents((text or "").lower())
    text = SLUG_STRIP_RE.sub("", text).strip()
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text).strip("-")
    return text or "post"


def humanize_slug(slug: str) -> str:
    return slug.replace("-", " ").strip()


def normalize_tag(raw: str) -> str:
    text = strip_accents((raw or "").lower())
    text = SLUG_STRIP_RE.sub("", text)
    return re.sub(r"\s+", " ", text).strip()


def html_to_text(html_text: str) -> str:
    text = SCRIPT_RE.sub(" ", html_text)
    text = STYLE_RE.sub(" ", text)
    text = TAG_RE.sub(" ", text)
    text = html_lib.unescape(text).replace("\xa0", " ")
    return re.sub(r"\s+", " ", text).strip()


def meta_attributes(html_text: str) -> list[dict[str, str]]:
    metas = []
    for match in META_RE.finditer(html_text):
        attrs = {}
        for attr in ATTR_RE.finditer(match.group(1)):
            value = attr.group(2) if attr.group(2) is not None else attr.group(3)
            attrs[attr.group(1).lower()] = html_lib.unescape(value)
        metas.append(attrs)
    return metas


def extract_meta(html_text: str, name: str) -> str:
    name = name.lower()
    for attrs in meta_attributes(html_text):
        key = (attrs.get("name") or attrs.get("property") or "").lower()
        if key == name and attrs.get("content"):
            return attrs["content"].strip()
    return ""


def extract_title(html_text: str) -> str:
    match = TITLE_RE.search(html_text)
    return html_to_text(match.group(1)) if match else ""


def extract_first_paragraph(html_text: str) -> str:
    match = PARAGRAPH_RE.search(html_text)
    return html_to_text(match.group(1)) if match else ""


def extract_body_text(html_text: str) -> str:
    match = BODY_RE.search(html_text)
    return html_to_text(match.group(1) if match else html_text)


def split_tag_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def extract_raw_tags(html_text: str) -> list[str]:
    tags = split_tag_list(extract_meta(html_text, "keywords"))
    match = DATA_TAGS_RE.search(html_text)
    if match:
        tags.extend(split_tag_list(match.group(1)))
    match = COMMENT_TAGS_RE.search(html_text)
    if match:
        tags.extend(split_tag_list(match.group(1)))
    return tags


def normalize_tags(raw_tags: list[str]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    tags: list[str] = []
    labels: list[str] = []
    seen: set[str] = set()
    for raw in raw_tags:
        tag = normalize_tag(raw)
        if not tag or slugify(tag) in seen:
            continue
        seen.add(slugify(tag))
        tags.append(tag)
        labels.append(raw.strip())
    return tuple(tags), tuple(labels)


def as_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def parse_post_date(html_text: str) -> Optional[dt.datetime]:
    for name in ("date", "article:modified_time", "article:published_time"):
        value = extract_meta(html_text, name)
        if not value:
            continue
        try:
            return as_utc(dt.datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            continue
    return None


def parse_post(html_text: str, category: str, slug: str, source: Optional[Path] = None) -> Post:
    body = extract_body_text(html_text)
    excerpt = extract_first_paragraph(html_text)
    title = extract_title(html_text) or humanize_slug(slug)
    description = extract_meta(html_text, "description") or first_sentence(excerpt or body)
    tags, raw_tags = normalize_tags(extract_raw_tags(html_text))
    lastmod = parse_post_date(html_text)
    if lastmod is None and source is not None:
        lastmod = dt.datetime.fromtimestamp(source.stat().st_mtime, tz=dt.timezone.utc)
    if lastmod is None:
        lastmod = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
    return Post(
        category=category,
        slug=slug,
        title=title,
        description=description,
        excerpt=excerpt,
        body=body,
        tags=tags,
        raw_tags=raw_tags,
        lastmod=lastmod,
        source=source,
    )


@dataclass(slots=True)
class ScanResult:
    posts: list[Post] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)


def sorted_dirs(path: Path) -> list[Path]:
    return sorted((item for item in path.iterdir() if item.is_dir()), key=lambda p: (slugify(p.name), p.name))


def scan_posts(posts_dir: Path) -> ScanResult:
    result = ScanResult()
    if not posts_dir.is_dir():
        return result
    for category_dir in sorted_dirs(posts_dir):
        category = slugify(category_dir.name)
        if category not in result.categories:
            result.categories.append(category)
        for post_dir in sorted_dirs(category_dir):
            post_file = post_dir / POST_FILENAME
            if not post_file.is_file():
                continue
            try:
                html_text = post_file.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                print(f"Skipping unreadable post {post_file}: {exc}", file=sys.stderr)
                continue
            result.posts.append(parse_post(html_text, category, slugify(post_dir.name), post_file))
    return result

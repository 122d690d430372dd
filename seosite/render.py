from __future__ import annotations

import enum
import re
import shutil
from pathlib import Path
from typing import Mapping, Union

from .models import SeoFields
from .utils import BuildError

PLACEHOLDER_RE = re.compile(r"\{\{[A-Z0-9_]+\}\}")


class Placeholder(str, enum.Enum):
    LANG = "LANG"
    TITLE = "TITLE"
    DESCRIPTION = "DESCRIPTION"
    KEYWORDS = "KEYWORDS"
    CANONICAL = "CANONICAL"
    SITE_NAME = "SITE_NAME"
    YEAR = "YEAR"
    H1 = "H1"
    CATEGORIES_PILLS = "CATEGORIES_PILLS"
    CATEGORIES_BAR = "CATEGORIES_BAR"
    CATEGORY_SEO_DESCRIPTION = "CATEGORY_SEO_DESCRIPTION"
    LATEST_POSTS = "LATEST_POSTS"
    FEATURED_POSTS = "FEATURED_POSTS"
    TOP_TAGS = "TOP_TAGS"
    POST_LIST = "POST_LIST"
    RELATED_POSTS = "RELATED_POSTS"
    CONTENT = "CONTENT"

    @property
    def token(self) -> str:
        return f"{{{{{self.value}}}}}"


Context = Mapping[Union[Placeholder, str], str]


def seo_context(fields: SeoFields, related_html: str = "") -> dict[Placeholder, str]:
    context = {
        Placeholder.KEYWORDS: fields.keywords_text,
        Placeholder.DESCRIPTION: fields.description,
    }
    if related_html:
        context[Placeholder.RELATED_POSTS] = related_html
    return context


def render_template(template: str, context: Context, blank_unknown: bool = True) -> str:
    values = {Placeholder(key): value for key, value in context.items()}
    if Placeholder.CATEGORIES_PILLS in values and Placeholder.CATEGORIES_BAR not in values:
        values[Placeholder.CATEGORIES_BAR] = values[Placeholder.CATEGORIES_PILLS]
    output = template
    for key, value in values.items():
        output = output.replace(key.token, "" if value is None else str(value))
    if not blank_unknown:
        return output
    return PLACEHOLDER_RE.sub("", output)


def inject_block(html_text: str, block: str) -> str:
    if Placeholder.RELATED_POSTS.token in html_text:
        return html_text.replace(Placeholder.RELATED_POSTS.token, block)
    marker = html_text.lower().rfind("</body>")
    if marker == -1:
        return f"{html_text}\n{block}\n"
    return f"{html_text[:marker]}{block}\n{html_text[marker:]}"


def read_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BuildError(f"Cannot read template {path}: {exc}") from exc


def write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise BuildError(f"Cannot write {path}: {exc}") from exc


def copy_tree(src: Path, dest: Path, skip: frozenset[str] = frozenset()) -> None:
    try:
        dest.mkdir(parents=True, exist_ok=True)
        for item in sorted(src.iterdir(), key=lambda p: p.name):
            if item.name in skip:
                continue
            target = dest / item.name
            if item.is_dir():
                shutil.copytree(item, target, dirs_exist_ok=True)
            else:
                shutil.copy2(item, target)
    except OSError as exc:
        raise BuildError(f"Cannot copy {src} to {dest}: {exc}") from exc

from __future__ import annotations

import html
import json
import os
import sys
from pathlib import Path

import markdown
import yaml

try:
    import tomllib as toml
except ImportError:  # pragma: no cover - Python < 3.11
    import tomli as toml

from .utils import BuildError

DEFAULT_SITE_URL = "https://buenosdia.com"
SITE_URL_ENV = "SITE_URL"


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BuildError(f"Cannot read config file {path}: {exc}") from exc
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            raise BuildError(f"Invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise BuildError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BuildError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise BuildError(f"Config file must be a mapping: {path}")
    return data


def resolve_site_url(flag_value: str, config_value: str) -> str:
    for value in (flag_value, os.environ.get(SITE_URL_ENV, ""), config_value, DEFAULT_SITE_URL):
        value = (value or "").strip()
        if value:
            return value.rstrip("/")
    return DEFAULT_SITE_URL


def resolve_category_names(config: dict) -> dict[str, str]:
    names = config.get("category_names") or {}
    if not isinstance(names, dict):
        print("Ignoring category_names: expected a table of slug = name.", file=sys.stderr)
        return {}
    return {str(key): str(value) for key, value in names.items() if str(value).strip()}


def resolve_page_html(pages_dir: Path, name: str, fallback: str = "") -> str:
    for suffix in (".html", ".htm", ".md", ".txt"):
        path = pages_dir / f"{name}{suffix}"
        if not path.exists():
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise BuildError(f"Cannot read page {path}: {exc}") from exc
        if suffix in {".html", ".htm"}:
            return text
        if suffix == ".md":
            md = markdown.Markdown(extensions=["tables"])
            return md.convert(text)
        escaped = html.escape(text.strip()).replace("\n", "<br>")
        return f"<p>{escaped}</p>"
    return fallback

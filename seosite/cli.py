from __future__ import annotations

import argparse
import datetime as dt
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import load_config, resolve_category_names, resolve_site_url
from .content import scan_posts
from .corpus import build_corpus, index_corpus
from .pages import (
    build_categories,
    build_categories_json,
    build_contact,
    build_index,
    build_posts,
    build_robots,
    build_sitemap,
    build_tags,
    newest,
)
from .related import RelatedWeights
from .render import copy_tree
from .shuffle import time_bucket
from .templates import load_templates
from .utils import BuildError, discard_staging, parse_bool, parse_float, parse_int, prepare_staging, promote_staging

ASSET_DIRS = ("css", "js", "img")


@dataclass(slots=True)
class BuildSummary:
    posts: int
    categories: int
    tags: int
    bucket: str
    output: Path


def build_site(args: argparse.Namespace, now: Optional[dt.datetime] = None) -> BuildSummary:
    project_root = Path.cwd()
    posts_dir = Path(args.posts)
    templates_dir = Path(args.templates)
    assets_dir = Path(args.assets)
    output_dir = Path(args.output)
    now = now or dt.datetime.now(dt.timezone.utc)
    quiet = parse_bool(getattr(args, "quiet", False))

    templates = load_templates(templates_dir)

    if not posts_dir.is_dir():
        print(f"Posts directory not found: {posts_dir} (building an empty site)", file=sys.stderr)
    scan = scan_posts(posts_dir)
    corpus = build_corpus(scan.posts, scan.categories, getattr(args, "category_names", None))
    weights = RelatedWeights(
        tag=args.tag_weight,
        category=args.category_weight,
        token=args.token_weight,
        threshold=args.related_threshold,
        token_sample=max(0, args.token_sample),
    )
    index = index_corpus(
        corpus,
        related_limit=args.related_limit,
        weights=weights,
        keyword_limit=args.keyword_limit,
        filler_count=args.filler_sentences,
    )
    if not quiet:
        print(f"Indexed {len(corpus.posts)} posts in {len(corpus.categories)} categories.")

    reference = newest(corpus.posts, now)
    bucket = (args.rotation_bucket or "").strip() or time_bucket(now)

    staging = prepare_staging(output_dir, project_root)
    try:
        for name in ASSET_DIRS:
            source = assets_dir / name
            if source.is_dir():
                copy_tree(source, staging / name)
        entries = [build_index(templates, staging, corpus, args, bucket, reference)]
        entries.append(build_contact(templates, staging, args, reference))
        entries.extend(build_categories(templates, staging, corpus, index, args, bucket, reference))
        entries.extend(build_tags(templates, staging, corpus, args, reference))
        entries.extend(build_posts(staging, corpus, index, args))
        build_sitemap(staging, entries)
        build_robots(staging, args.site_url)
        if args.write_categories_json:
            build_categories_json(staging, corpus, index, reference)
        promote_staging(staging, output_dir, clean=args.clean)
    except BaseException:
        discard_staging(staging)
        raise

    return BuildSummary(
        posts=len(corpus.posts),
        categories=len(corpus.categories),
        tags=len(corpus.tags),
        bucket=bucket,
        output=output_dir,
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        return str(cfg_value(key, default))

    def cfg_bool(key: str, default: bool) -> bool:
        return parse_bool(cfg_value(key, default))

    def cfg_int(key: str, default: int) -> int:
        return parse_int(cfg_value(key, default), default)

    def cfg_float(key: str, default: float) -> float:
        return parse_float(cfg_value(key, default), default)

    parser = argparse.ArgumentParser(description="Deterministic static site generator for HTML post fragments.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--posts", default=cfg_str("posts", "posts"), help="Directory with <category>/<post>/index.html.")
    parser.add_argument("--templates", default=cfg_str("templates", "templates"), help="Directory with page templates.")
    parser.add_argument("--assets", default=cfg_str("assets", "."), help="Directory holding css/, js/ and img/.")
    parser.add_argument("--pages", default=cfg_str("pages", "pages"), help="Directory with optional page bodies.")
    parser.add_argument("--output", default=cfg_str("output", "dist"), help="Output directory for the site.")
    parser.add_argument("--site-name", default=cfg_str("site_name", "BUENOSDIA.COM"), help="Site title.")
    parser.add_argument("--site-url", default="", help="Public site URL (overrides SITE_URL and the config).")
    parser.add_argument("--lang", default=cfg_str("lang", "es-AR"), help="Value of <html lang>.")
    parser.add_argument(
        "--clean",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("clean", True),
        help="Replace the output directory instead of merging into it.",
    )
    parser.add_argument(
        "--related-limit",
        default=cfg_int("related_limit", 5),
        type=int,
        help="Related posts per post page.",
    )
    parser.add_argument(
        "--keyword-limit",
        default=cfg_int("keyword_limit", 8),
        type=int,
        help="Keywords per page.",
    )
    parser.add_argument(
        "--latest-limit",
        default=cfg_int("latest_limit", 15),
        type=int,
        help="Posts listed under latest on the home page.",
    )
    parser.add_argument(
        "--featured-limit",
        default=cfg_int("featured_limit", 3),
        type=int,
        help="Posts in the monthly featured rotation.",
    )
    parser.add_argument(
        "--top-tags-limit",
        default=cfg_int("top_tags_limit", 20),
        type=int,
        help="Tags in the home page tag cloud.",
    )
    parser.add_argument(
        "--filler-sentences",
        default=cfg_int("filler_sentences", 1),
        type=int,
        help="Brand-voice sentences in category descriptions (1-3).",
    )
    parser.add_argument("--tag-weight", default=cfg_float("tag_weight", 5.0), type=float, help="Score per shared tag.")
    parser.add_argument(
        "--category-weight",
        default=cfg_float("category_weight", 2.0),
        type=float,
        help="Score for sharing the category.",
    )
    parser.add_argument(
        "--token-weight",
        default=cfg_float("token_weight", 0.2),
        type=float,
        help="Score per shared word.",
    )
    parser.add_argument(
        "--related-threshold",
        default=cfg_float("related_threshold", 0.5),
        type=float,
        help="Minimum score for a ranked related post.",
    )
    parser.add_argument(
        "--token-sample",
        default=cfg_int("token_sample", 40),
        type=int,
        help="Distinct source words compared per candidate.",
    )
    parser.add_argument(
        "--rotation-bucket",
        default=cfg_str("rotation_bucket", ""),
        help="Seed period for featured rotation (default: current YYYY-MM).",
    )
    parser.add_argument(
        "--write-categories-json",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("write_categories_json", True),
        help="Write categories.json.",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print errors.")
    args = parser.parse_args(argv)
    args.site_url = resolve_site_url(args.site_url, cfg_str("site_url", ""))
    args.category_names = resolve_category_names(config)
    return args


def main(argv: Optional[list[str]] = None) -> None:
    start = time.perf_counter()
    try:
        args = parse_args(argv)
        summary = build_site(args)
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    if not args.quiet:
        print(f"Build OK: {summary.posts} posts | {summary.categories} categories | {summary.tags} tags")
        print(f"Build completed in {elapsed:.2f}s.")
        print(f"Site generated in: {summary.output}")

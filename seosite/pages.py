from __future__ import annotations

import datetime as dt
import html
import json
from pathlib import Path
from typing import Sequence

from .config import resolve_page_html
from .content import slugify
from .corpus import Corpus, SiteIndex
from .models import Category, Post, Tag
from .render import Placeholder, copy_tree, inject_block, render_template, seo_context, write_text
from .seo import VISIBLE_DESCRIPTION_CHARS, category_description, tag_description
from .shuffle import featured
from .utils import iso_day, join_url

SitemapEntry = tuple[str, dt.datetime]

EXCERPT_CHARS = 140
LIST_TAGS = 6
HOME_TITLE = "Buenos días de verdad"
HOME_DESCRIPTION = (
    "Textos cortos, reales y humanos para abrir el día. "
    "Hecho para leer rápido y sentir que te hablan a vos. Sin humo."
)
HOME_KEYWORDS = "buenos días, textos, mañana, motivación real, ansiedad, ánimo, esperanza"
EMPTY_LIST_HTML = (
    "<p><strong>0 publicaciones</strong><br> Todavía no hay publicaciones. "
    "Subí tu primer post en <code>/posts/&lt;categoria&gt;/&lt;post&gt;/index.html</code>.</p>"
)
CONTACT_HTML = (
    "<p>Si querés decir algo (en serio), escribime.</p>"
    '<p><a href="mailto:hola@buenosdia.com">hola@buenosdia.com</a></p>'
)


def newest(posts: Sequence[Post], fallback: dt.datetime) -> dt.datetime:
    return max((post.lastmod for post in posts), default=fallback)


def page_title(title: str, args: object) -> str:
    return f"{title} — {args.site_name}"


def base_context(args: object, reference: dt.datetime) -> dict[Placeholder, str]:
    return {
        Placeholder.LANG: args.lang,
        Placeholder.SITE_NAME: html.escape(args.site_name),
        Placeholder.YEAR: str(reference.year),
    }


def build_pills(categories: Sequence[Category]) -> str:
    return "".join(
        f'<a class="pill" href="/{category.path}">{html.escape(category.name)}</a>' for category in categories
    )


def render_tag_links(post: Post) -> str:
    if not post.tags:
        return ""
    links = [
        f'<a class="tag" href="/tags/{slugify(tag)}/">{html.escape(tag)}</a>' for tag in post.tags[:LIST_TAGS]
    ]
    return f'<div class="tags">{" ".join(links)}</div>'


def render_post_item(post: Post, with_tags: bool = True) -> str:
    summary = post.summary
    excerpt = ""
    if summary:
        short = summary[:EXCERPT_CHARS] + ("…" if len(summary) > EXCERPT_CHARS else "")
        excerpt = f'<div class="muted">{html.escape(short)}</div>'
    tags = render_tag_links(post) if with_tags else ""
    return f'<li class="postitem"><a href="/{post.path}">{html.escape(post.title)}</a>{excerpt}{tags}</li>'


def render_post_list(posts: Sequence[Post]) -> str:
    if not posts:
        return EMPTY_LIST_HTML
    return '<ul class="postlist">' + "".join(render_post_item(post) for post in posts) + "</ul>"


def render_related(posts: Sequence[Post]) -> str:
    if not posts:
        return ""
    items = "".join(render_post_item(post, with_tags=False) for post in posts)
    return (
        '<aside class="related" data-related>'
        "<h3>Para seguir leyendo</h3>"
        f'<ul class="postlist">{items}</ul>'
        "</aside>"
    )


def render_top_tags(tags: Sequence[Tag]) -> str:
    if not tags:
        return "<p>Todavía no hay etiquetas.</p>"
    links = " ".join(
        f'<a class="tag" href="/{tag.path}">{html.escape(tag.label)} '
        f'<span class="muted">({len(tag.posts)})</span></a>'
        for tag in tags
    )
    return f'<div class="tagcloud">{links}</div>'


def build_index(
    templates: dict[str, str],
    output_dir: Path,
    corpus: Corpus,
    args: object,
    bucket: str,
    reference: dt.datetime,
) -> SitemapEntry:
    context = base_context(args, reference)
    context.update(
        {
            Placeholder.TITLE: html.escape(page_title(HOME_TITLE, args)),
            Placeholder.DESCRIPTION: HOME_DESCRIPTION,
            Placeholder.KEYWORDS: HOME_KEYWORDS,
            Placeholder.CANONICAL: join_url(args.site_url, ""),
            Placeholder.CATEGORIES_PILLS: build_pills(corpus.categories),
            Placeholder.LATEST_POSTS: render_post_list(corpus.latest(args.latest_limit)),
            Placeholder.FEATURED_POSTS: render_post_list(featured(corpus.posts, bucket, "home", args.featured_limit)),
            Placeholder.TOP_TAGS: render_top_tags(corpus.top_tags(args.top_tags_limit)),
        }
    )
    write_text(output_dir / "index.html", render_template(templates["index"], context))
    return join_url(args.site_url, ""), newest(corpus.posts, reference)


def build_contact(
    templates: dict[str, str],
    output_dir: Path,
    args: object,
    reference: dt.datetime,
) -> SitemapEntry:
    url = join_url(args.site_url, "contacto/")
    context = base_context(args, reference)
    context.update(
        {
            Placeholder.TITLE: html.escape(page_title("Contacto", args)),
            Placeholder.DESCRIPTION: html.escape(f"Contacto directo con {args.site_name}"),
            Placeholder.CANONICAL: url,
            Placeholder.H1: "Contacto",
            Placeholder.CONTENT: resolve_page_html(Path(args.pages), "contacto", CONTACT_HTML),
        }
    )
    write_text(output_dir / "contacto" / "index.html", render_template(templates["contact"], context))
    return url, reference


def build_categories(
    templates: dict[str, str],
    output_dir: Path,
    corpus: Corpus,
    index: SiteIndex,
    args: object,
    bucket: str,
    reference: dt.datetime,
) -> list[SitemapEntry]:
    entries = []
    pills = build_pills(corpus.categories)
    for category in corpus.categories:
        fields = index.categories[category.slug]
        url = join_url(args.site_url, category.path)
        visible = category_description(
            category.name, category.posts, category.slug, VISIBLE_DESCRIPTION_CHARS, args.filler_sentences
        )
        context = base_context(args, reference)
        context.update(
            {
                Placeholder.TITLE: html.escape(page_title(category.name, args)),
                Placeholder.CANONICAL: url,
                Placeholder.CATEGORIES_PILLS: pills,
                Placeholder.H1: html.escape(category.name.upper()),
                Placeholder.CATEGORY_SEO_DESCRIPTION: html.escape(visible),
                Placeholder.FEATURED_POSTS: render_post_list(
                    featured(category.posts, bucket, category.slug, args.featured_limit)
                ),
                Placeholder.POST_LIST: render_post_list(category.posts),
            }
        )
        context.update({key: html.escape(value) for key, value in seo_context(fields).items()})
        write_text(output_dir / category.path / "index.html", render_template(templates["category"], context))
        entries.append((url, newest(category.posts, reference)))
    return entries


def build_tags(
    templates: dict[str, str],
    output_dir: Path,
    corpus: Corpus,
    args: object,
    reference: dt.datetime,
) -> list[SitemapEntry]:
    entries = []
    for tag in corpus.tags.values():
        url = join_url(args.site_url, tag.path)
        context = base_context(args, reference)
        context.update(
            {
                Placeholder.TITLE: html.escape(page_title(f"{tag.label} — etiquetas", args)),
                Placeholder.DESCRIPTION: html.escape(tag_description(tag.label, len(tag.posts))),
                Placeholder.CANONICAL: url,
                Placeholder.H1: html.escape(f"Etiqueta: {tag.label}"),
                Placeholder.POST_LIST: render_post_list(tag.posts),
            }
        )
        write_text(output_dir / tag.path / "index.html", render_template(templates["tag"], context))
        entries.append((url, newest(tag.posts, reference)))
    return entries


def build_posts(output_dir: Path, corpus: Corpus, index: SiteIndex, args: object) -> list[SitemapEntry]:
    entries = []
    for post in corpus.posts:
        target_dir = output_dir / post.path
        if post.source is not None and post.source.parent.is_dir():
            copy_tree(post.source.parent, target_dir, skip=frozenset({post.source.name}))
            html_text = post.source.read_text(encoding="utf-8", errors="replace")
        else:
            html_text = ""
        fields = index.posts[post.key]
        related_html = render_related(fields.related_posts)
        has_slot = Placeholder.RELATED_POSTS.token in html_text
        if "{{" in html_text:
            context = {key: html.escape(value) for key, value in seo_context(fields).items()}
            context[Placeholder.RELATED_POSTS] = related_html
            # Post bodies are authored text; only the SEO slots are ours to fill.
            html_text = render_template(html_text, context, blank_unknown=False)
        if related_html and not has_slot:
            html_text = inject_block(html_text, related_html)
        write_text(target_dir / "index.html", html_text)
        entries.append((join_url(args.site_url, post.path), post.lastmod))
    return entries


def build_sitemap(output_dir: Path, entries: Sequence[SitemapEntry]) -> None:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for url, lastmod in entries:
        lines.append(f"<url><loc>{html.escape(url)}</loc><lastmod>{iso_day(lastmod)}</lastmod></url>")
    lines.append("</urlset>")
    write_text(output_dir / "sitemap.xml", "\n".join(lines))


def build_robots(output_dir: Path, site_url: str) -> None:
    write_text(output_dir / "robots.txt", f"User-agent: *\nAllow: /\n\nSitemap: {join_url(site_url, 'sitemap.xml')}\n")


def build_categories_json(
    output_dir: Path, corpus: Corpus, index: SiteIndex, reference: dt.datetime
) -> None:
    data = {}
    for category in corpus.categories:
        data[category.slug] = {
            "name": category.slug,
            "display": category.name,
            "description": index.categories[category.slug].description,
            "keywords": list(index.categories[category.slug].keywords),
            "count": len(category.posts),
            "updatedAt": newest(category.posts, reference).isoformat(),
        }
    write_text(output_dir / "categories.json", json.dumps(data, indent=2, ensure_ascii=False))

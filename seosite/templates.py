from __future__ import annotations

from pathlib import Path

from .render import read_template, write_text

HEAD = """<!doctype html>
<html lang="{{LANG}}">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>{{TITLE}}</title>
<meta name="description" content="{{DESCRIPTION}}">
"""

SEO_HEAD = """<meta name="keywords" content="{{KEYWORDS}}">
<link rel="canonical" href="{{CANONICAL}}">
<meta property="og:title" content="{{TITLE}}">
<meta property="og:description" content="{{DESCRIPTION}}">
<meta property="og:type" content="website">
<meta property="og:url" content="{{CANONICAL}}">
<meta name="twitter:card" content="summary">
<link rel="stylesheet" href="/css/site.css">
</head>
"""

PLAIN_HEAD = """<link rel="canonical" href="{{CANONICAL}}">
<link rel="stylesheet" href="/css/site.css">
</head>
"""

HEADER = """<body>
<header class="top">
  <a class="brand" href="/"><span class="logo">BD</span> <strong>{{SITE_NAME}}</strong></a>
  <nav class="nav">
    <a href="/">Inicio</a>
    <a href="/contacto/">Contacto</a>
  </nav>
</header>
"""

FOOTER = """  <footer class="foot">
    <p>Diseñado en {{YEAR}} — {{SITE_NAME}}</p>
  </footer>
</main>
<script src="/js/site.js" defer></script>
</body>
</html>
"""

DEFAULT_TEMPLATES = {
    "index.template.html": HEAD
    + SEO_HEAD
    + HEADER
    + """
<main class="wrap">
  <div class="pillbar">{{CATEGORIES_PILLS}}</div>

  <h1>TEXTOS PARA MAÑANAS REALES</h1>
  <h2>Este no es el típico blog de frases.</h2>
  <p>Hecho para abrir rápido, leer fácil y sentir que te hablan a vos. Sin humo.</p>

  <section class="block">
    <h3>Últimas publicaciones</h3>
    {{LATEST_POSTS}}
  </section>

  <section class="block">
    <h3>Para leer este mes</h3>
    {{FEATURED_POSTS}}
  </section>

  <section class="block">
    <h3>Etiquetas (top)</h3>
    {{TOP_TAGS}}
  </section>

"""
    + FOOTER,
    "category.template.html": HEAD
    + SEO_HEAD
    + HEADER
    + """
<main class="wrap">
  <div class="pillbar">{{CATEGORIES_PILLS}}</div>
  <h1>{{H1}}</h1>
  <p class="desc">{{CATEGORY_SEO_DESCRIPTION}}</p>

  <section class="block">
    <h3>Para leer este mes</h3>
    {{FEATURED_POSTS}}
  </section>

  <section class="block">
    <h3>Publicaciones</h3>
    {{POST_LIST}}
  </section>

"""
    + FOOTER,
    "tag.template.html": HEAD
    + PLAIN_HEAD
    + HEADER
    + """
<main class="wrap">
  <h1>{{H1}}</h1>
  <section class="block">
    {{POST_LIST}}
  </section>

"""
    + FOOTER,
    "contact.template.html": HEAD
    + PLAIN_HEAD
    + HEADER
    + """
<main class="wrap">
  <h1>{{H1}}</h1>
  {{CONTENT}}

"""
    + FOOTER,
}

TEMPLATE_KEYS = {
    "index": "index.template.html",
    "category": "category.template.html",
    "tag": "tag.template.html",
    "contact": "contact.template.html",
}


def ensure_templates(templates_dir: Path) -> list[Path]:
    written = []
    for filename, text in DEFAULT_TEMPLATES.items():
        path = templates_dir / filename
        if not path.exists():
            write_text(path, text)
            written.append(path)
    return written


def load_templates(templates_dir: Path) -> dict[str, str]:
    ensure_templates(templates_dir)
    return {key: read_template(templates_dir / filename) for key, filename in TEMPLATE_KEYS.items()}

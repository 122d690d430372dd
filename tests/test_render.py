"""Tests for placeholder rendering and template loading."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from seosite.models import SeoFields
from seosite.render import Placeholder, copy_tree, inject_block, read_template, render_template, seo_context
from seosite.templates import DEFAULT_TEMPLATES, TEMPLATE_KEYS, ensure_templates, load_templates
from seosite.utils import BuildError


class TestRenderTemplate:
    """Test render_template function."""

    def test_substitutes_enum_and_string_keys(self) -> None:
        template = "<title>{{TITLE}}</title><p>{{DESCRIPTION}}</p>"
        output = render_template(template, {Placeholder.TITLE: "Hola", "DESCRIPTION": "Texto"})
        assert output == "<title>Hola</title><p>Texto</p>"

    def test_blanks_unfilled_placeholders(self) -> None:
        assert render_template("a{{H1}}b{{WHATEVER_9}}c", {}) == "abc"

    def test_keeps_unfilled_placeholders_on_request(self) -> None:
        output = render_template("{{KEYWORDS}} {{NOMBRE}}", {Placeholder.KEYWORDS: "a"}, blank_unknown=False)
        assert output == "a {{NOMBRE}}"

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValueError):
            render_template("{{TITLE}}", {"NOT_A_FIELD": "x"})

    def test_categories_bar_alias(self) -> None:
        output = render_template("{{CATEGORIES_BAR}}", {Placeholder.CATEGORIES_PILLS: "pills"})
        assert output == "pills"

    def test_repeated_placeholder(self) -> None:
        assert render_template("{{TITLE}}-{{TITLE}}", {Placeholder.TITLE: "x"}) == "x-x"

    def test_seo_context(self) -> None:
        context = seo_context(SeoFields(keywords=("a", "b"), description="d"), "<aside></aside>")
        assert context == {
            Placeholder.KEYWORDS: "a, b",
            Placeholder.DESCRIPTION: "d",
            Placeholder.RELATED_POSTS: "<aside></aside>",
        }
        assert Placeholder.RELATED_POSTS not in seo_context(SeoFields())


class TestInjectBlock:
    """Test inject_block function."""

    def test_uses_placeholder_when_present(self) -> None:
        assert inject_block("<p>{{RELATED_POSTS}}</p>", "X") == "<p>X</p>"

    def test_before_closing_body(self) -> None:
        assert inject_block("<body><p>t</p></BODY>", "X") == "<body><p>t</p>X\n</BODY>"

    def test_appends_without_body(self) -> None:
        assert inject_block("<p>t</p>", "X") == "<p>t</p>\nX\n"


class TestFiles:
    """Test template and file helpers."""

    def test_read_template_missing_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(BuildError):
            read_template(tmp_path / "missing.html")

    def test_ensure_templates_writes_defaults_once(self, tmp_path: Path) -> None:
        written = ensure_templates(tmp_path)
        assert sorted(path.name for path in written) == sorted(DEFAULT_TEMPLATES)
        custom = tmp_path / "tag.template.html"
        custom.write_text("custom {{H1}}", encoding="utf-8")
        assert ensure_templates(tmp_path) == []
        assert custom.read_text(encoding="utf-8") == "custom {{H1}}"

    def test_load_templates(self, tmp_path: Path) -> None:
        templates = load_templates(tmp_path / "templates")
        assert set(templates) == set(TEMPLATE_KEYS)
        assert "{{CATEGORY_SEO_DESCRIPTION}}" in templates["category"]
        assert "{{FEATURED_POSTS}}" in templates["index"]

    def test_default_templates_use_known_placeholders(self) -> None:
        known = {member.value for member in Placeholder}
        for text in DEFAULT_TEMPLATES.values():
            assert set(re.findall(r"\{\{([A-Z0-9_]+)\}\}", text)) <= known

    def test_copy_tree_skips_names(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        (src / "img").mkdir(parents=True)
        (src / "index.html").write_text("x", encoding="utf-8")
        (src / "img" / "foto.txt").write_text("y", encoding="utf-8")
        copy_tree(src, tmp_path / "dest", skip=frozenset({"index.html"}))
        assert (tmp_path / "dest" / "img" / "foto.txt").read_text(encoding="utf-8") == "y"
        assert not (tmp_path / "dest" / "index.html").exists()

"""Tests for SEO text synthesis."""

from __future__ import annotations

import pytest

from seosite.seo import (
    FILLER_SENTENCES,
    META_DESCRIPTION_CHARS,
    VISIBLE_DESCRIPTION_CHARS,
    category_description,
    category_documents,
    category_keywords,
    category_sentences,
    count_sentence,
    first_sentence,
    fit_sentences,
    post_description,
    post_keywords,
    split_sentences,
    tag_description,
)


@pytest.fixture
def amor_posts(post_factory):
    return [
        post_factory("amor", "uno", title="Amor propio", excerpt="Cuidarte cuando nadie mira.", description=""),
        post_factory("amor", "dos", title="Amor sereno", excerpt="Cuidarte despacio.", description="Calma real."),
    ]


class TestFitSentences:
    """Test fit_sentences function."""

    def test_appends_whole_sentences(self) -> None:
        assert fit_sentences(["Uno dos.", "Tres cuatro.", "Cinco."], 22) == "Uno dos. Tres cuatro."

    def test_stops_at_first_overflow(self) -> None:
        """A later short sentence is not squeezed in after an overflow."""
        assert fit_sentences(["Hola.", "Una frase bastante larga.", "Chau."], 12) == "Hola."

    def test_hard_slice_when_first_is_too_long(self) -> None:
        assert fit_sentences(["Una frase muy larga para el presupuesto."], 9) == "Una frase"

    def test_collapses_whitespace(self) -> None:
        assert fit_sentences(["  Hola   mundo. "], 50) == "Hola mundo."

    def test_empty(self) -> None:
        assert fit_sentences([], 10) == ""


class TestSentences:
    """Test sentence splitting helpers."""

    def test_split_sentences(self) -> None:
        assert split_sentences("Uno. ¿Dos? ¡Tres!  Cuatro") == ["Uno.", "¿Dos?", "¡Tres!", "Cuatro"]

    def test_first_sentence(self) -> None:
        assert first_sentence("Primera frase. Segunda frase.") == "Primera frase."
        assert first_sentence("") == ""

    def test_count_sentence(self) -> None:
        assert count_sentence(0) == "Todavía está naciendo."
        assert count_sentence(1) == "Ahora mismo hay 1 publicación."
        assert count_sentence(4) == "Ahora mismo hay 4 publicaciones."


class TestCategoryText:
    """Test category keyword and description synthesis."""

    def test_category_documents(self, amor_posts) -> None:
        assert category_documents(amor_posts) == [
            "Amor propio Cuidarte cuando nadie mira.",
            "Amor sereno Cuidarte despacio. Calma real.",
        ]

    def test_keywords_lead_with_name(self, amor_posts) -> None:
        keywords = category_keywords("amor", amor_posts, limit=8)
        assert keywords[0] == "amor"
        assert keywords.count("amor") == 1
        assert "propio" in keywords
        assert len(keywords) <= 9
        assert "cuidarte" in category_keywords("amor", amor_posts, limit=10)

    def test_sentences_structure(self, amor_posts) -> None:
        sentences = category_sentences("amor", amor_posts, "amor", filler_count=1)
        assert sentences[0] == "En esta categoría: amor."
        assert sentences[1] == "Ahora mismo hay 2 publicaciones."
        assert sentences[2] in FILLER_SENTENCES
        assert sentences[-1].startswith("Se toca mucho: ")
        assert len(sentences) == 4

    def test_filler_count_clamped(self, amor_posts) -> None:
        assert len(category_sentences("amor", amor_posts, "amor", filler_count=9)) == 6
        assert len(category_sentences("amor", amor_posts, "amor", filler_count=0)) == 4

    def test_empty_category(self) -> None:
        sentences = category_sentences("vacia", [], "vacia")
        assert sentences[1] == "Todavía está naciendo."
        assert sentences[-1] == "De a poco se va armando con lo que vas viviendo."

    def test_description_budgets(self, amor_posts) -> None:
        meta = category_description("amor", amor_posts, "amor", META_DESCRIPTION_CHARS)
        visible = category_description("amor", amor_posts, "amor", VISIBLE_DESCRIPTION_CHARS)
        assert 0 < len(meta) <= META_DESCRIPTION_CHARS
        assert len(meta) <= len(visible) <= VISIBLE_DESCRIPTION_CHARS
        assert meta.startswith("En esta categoría: amor.")
        assert visible.startswith(meta)

    def test_description_is_deterministic(self, amor_posts) -> None:
        assert category_description("amor", amor_posts, "amor") == category_description(
            "amor", amor_posts, "amor"
        )


class TestTagAndPostText:
    """Test tag and post helpers."""

    def test_tag_description(self) -> None:
        assert tag_description("amor", 3) == "Lecturas que tocan: amor. 3 publicaciones, sin humo."
        assert tag_description("amor", 1) == "Lecturas que tocan: amor. 1 publicación, sin humo."

    def test_post_keywords_start_with_tags(self, post_factory) -> None:
        post = post_factory("amor", "p", title="Respirar hondo", tags=("calma", "respirar"), body="Respirar cuesta.")
        keywords = post_keywords(post, limit=4)
        assert keywords[:2] == ["calma", "respirar"]
        assert keywords.count("respirar") == 1
        assert len(keywords) <= 4

    def test_post_description_prefers_meta(self, post_factory) -> None:
        post = post_factory("amor", "p", description="Texto propio.", excerpt="Otra cosa. Y mas.")
        assert post_description(post) == "Texto propio."

    def test_post_description_falls_back_to_excerpt(self, post_factory) -> None:
        post = post_factory("amor", "p", excerpt="Otra cosa. Y mas.")
        assert post_description(post) == "Otra cosa."

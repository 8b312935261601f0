"""Tests for text utilities."""

from __future__ import annotations

from docnav.utils.text import (
    extract_excerpt,
    first_paragraph,
    index_tokens,
    title_from_stem,
    tokenize,
)


class TestTokenize:
    """Test tokenize and index_tokens."""

    def test_lowercases_and_splits_on_punctuation(self) -> None:
        """Should produce lowercase alphanumeric runs."""
        assert tokenize("Hello, World! v2-API") == ["hello", "world", "v2", "api"]

    def test_underscore_is_a_separator(self) -> None:
        """Underscores split tokens."""
        assert tokenize("snake_case") == ["snake", "case"]

    def test_unicode_letters(self) -> None:
        """Accented letters belong to tokens."""
        assert tokenize("Café Überblick") == ["café", "überblick"]

    def test_punctuation_only(self) -> None:
        """No tokens from punctuation."""
        assert tokenize("?! ... --") == []

    def test_index_tokens_drop_short_words(self) -> None:
        """Tokens of two characters or fewer are not indexed."""
        assert index_tokens("an API is on the way") == ["api", "the", "way"]


class TestTitleFromStem:
    """Test title inference from filenames."""

    def test_dashes(self) -> None:
        assert title_from_stem("getting-started") == "Getting Started"

    def test_underscores(self) -> None:
        assert title_from_stem("release_notes") == "Release Notes"

    def test_keeps_rest_of_word(self) -> None:
        """Only the first letter changes case."""
        assert title_from_stem("faq-iOS") == "Faq IOS"


class TestFirstParagraph:
    """Test summary inference."""

    def test_skips_short_heading(self) -> None:
        """Headings shorter than the threshold are skipped."""
        content = "# Intro\n\nThis paragraph is definitely long enough.\n"
        assert first_paragraph(content) == "This paragraph is definitely long enough."

    def test_strips_heading_markers(self) -> None:
        """A long heading is used without its markers."""
        content = "## A heading that is long enough to count\n\nbody"
        assert first_paragraph(content) == "A heading that is long enough to count"

    def test_truncates(self) -> None:
        """Summaries are capped at 200 characters."""
        content = "x" * 500
        assert first_paragraph(content) == "x" * 200

    def test_empty_when_nothing_qualifies(self) -> None:
        assert first_paragraph("short\n\ntiny") == ""

    def test_exactly_twenty_chars_not_enough(self) -> None:
        """The paragraph must be longer than 20 characters."""
        assert first_paragraph("a" * 20) == ""
        assert first_paragraph("a" * 21) == "a" * 21


class TestExtractExcerpt:
    """Test excerpt extraction."""

    def test_not_found_returns_prefix(self) -> None:
        content = "abc " * 100
        assert extract_excerpt(content, "missing", context_length=10) == content[:10] + "..."

    def test_found_in_middle_has_ellipses(self) -> None:
        content = "a" * 200 + "needle" + "b" * 200
        excerpt = extract_excerpt(content, "NEEDLE", context_length=20)
        assert excerpt == "..." + "a" * 10 + "needle" + "b" * 10 + "..."

    def test_found_at_start(self) -> None:
        """No leading ellipsis when the match is near the start."""
        content = "needle and more text"
        excerpt = extract_excerpt(content, "needle", context_length=150)
        assert excerpt == content

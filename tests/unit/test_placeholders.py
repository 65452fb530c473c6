"""Unit and property-based tests for placeholder detection.

Test Coverage:
- Raw and percent-encoded placeholder forms
- Name length limits and word characters
- Leftmost, non-overlapping matching
- Property: every match is found again inside its own text
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from glfm_markdown.placeholders import has_placeholder, iter_placeholders, placeholder_names

NAME_ALPHABET = st.characters(whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters="_")


@pytest.mark.unit
class TestPlaceholderMatching:
    """Tests for the placeholder pattern."""

    @pytest.mark.parametrize(
        "text,names",
        [
            ("%{foo}", ["foo"]),
            ("%7Bfoo%7D", ["foo"]),
            ("Hi %{user}, see %7Bdocs%7D", ["user", "docs"]),
            ("%{a_b1}", ["a_b1"]),
            ("%{%{x}}", ["x"]),
            ("%%7Bid%7D", ["id"]),
        ],
    )
    def test_names(self, text, names):
        """Test placeholder names are extracted in order."""
        assert placeholder_names(text) == names

    @pytest.mark.parametrize(
        "text",
        [
            "%{}",
            "%7B%7D",
            "{foo}",
            "%{foo bar}",
            "%{foo-bar}",
            "%{" + "a" * 31 + "}",
            "%7bfoo%7d",
            "plain text",
            "",
        ],
    )
    def test_non_matches(self, text):
        """Test strings that are not placeholders."""
        assert not has_placeholder(text)
        assert list(iter_placeholders(text)) == []

    def test_thirty_character_name(self):
        """Test the longest allowed name."""
        assert placeholder_names("%{" + "a" * 30 + "}") == ["a" * 30]

    def test_unicode_word_characters(self):
        """Test non-ASCII letters count as word characters."""
        assert placeholder_names("%{prénom}") == ["prénom"]

    def test_match_positions(self):
        """Test match spans cover the delimiters."""
        matches = list(iter_placeholders("x %{a} y"))
        assert [(m.start(), m.end(), m.group(0)) for m in matches] == [(2, 6, "%{a}")]

    def test_iterator_is_restartable(self):
        """Test each call scans from the start again."""
        text = "%{a} %{b}"
        assert len(list(iter_placeholders(text))) == 2
        assert len(list(iter_placeholders(text))) == 2


@pytest.mark.unit
class TestPlaceholderProperties:
    """Property-based tests for placeholder detection."""

    @given(st.text(alphabet=NAME_ALPHABET, min_size=1, max_size=30), st.text(max_size=20), st.text(max_size=20))
    def test_embedded_placeholder_is_found(self, name, prefix, suffix):
        """Test a valid placeholder is always detected wherever it appears."""
        assert has_placeholder(f"{prefix}%{{{name}}}{suffix}")

    @given(st.text(max_size=200))
    def test_matches_are_ordered_and_disjoint(self, text):
        """Test matches never overlap and come in source order."""
        end = 0
        for match in iter_placeholders(text):
            assert match.start() >= end
            assert text[match.start() : match.end()] == match.group(0)
            end = match.end()

    @given(st.text(alphabet=st.characters(blacklist_characters="%"), max_size=100))
    def test_no_percent_no_placeholder(self, text):
        """Test text without a percent sign never holds a placeholder."""
        assert not has_placeholder(text)

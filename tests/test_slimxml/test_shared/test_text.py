"""Tests for the whitespace and string helpers."""

import pytest

from slimxml.shared.text import is_ascii_space, to_owned_or_none, trim, trim_bounds


class TestTrimBounds:
    """Test slice-based trimming."""

    def test_trims_both_ends(self) -> None:
        """Test leading and trailing whitespace is excluded."""
        text = "  \tabc \n"
        start, end = trim_bounds(text)

        assert (start, end) == (3, 6)
        assert text[start:end] == "abc"

    def test_respects_given_span(self) -> None:
        """Test trimming only looks inside the given span."""
        text = "xx  ab  yy"
        start, end = trim_bounds(text, 2, 8)

        assert text[start:end] == "ab"

    def test_all_whitespace_collapses_to_empty_span(self) -> None:
        """Test an all-whitespace span becomes empty without going out of range."""
        text = " \t\r\n "
        start, end = trim_bounds(text)

        assert start == end
        assert text[start:end] == ""

    def test_empty_input(self) -> None:
        """Test empty input gives an empty span."""
        assert trim_bounds("") == (0, 0)

    def test_out_of_range_bounds_are_clamped(self) -> None:
        """Test bounds beyond the buffer are clamped."""
        assert trim_bounds("ab", -3, 10) == (0, 2)


class TestTrim:
    """Test string trimming."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("  a b  ", "a b"),
            ("\x0b\x0cvalue\r\n", "value"),
            ("   ", ""),
            ("", ""),
        ],
    )
    def test_trim(self, raw: str, expected: str) -> None:
        """Test ASCII whitespace is stripped from both ends only."""
        assert trim(raw) == expected

    def test_non_ascii_space_is_kept(self) -> None:
        """Test that a non-breaking space is not treated as whitespace."""
        assert trim("\xa0a\xa0") == "\xa0a\xa0"


class TestHelpers:
    """Test the remaining helpers."""

    def test_is_ascii_space(self) -> None:
        """Test the whitespace predicate."""
        assert all(is_ascii_space(char) for char in " \t\n\r\x0b\x0c")
        assert not is_ascii_space("a")
        assert not is_ascii_space("")

    def test_to_owned_or_none_empty_is_none(self) -> None:
        """Test empty strings collapse to None."""
        assert to_owned_or_none("") is None

    def test_to_owned_or_none_keeps_content(self) -> None:
        """Test non-empty strings are returned unchanged."""
        assert to_owned_or_none(" x ") == " x "

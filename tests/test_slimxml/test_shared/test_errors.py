"""Tests for the error taxonomy and source positions."""

import pytest

from slimxml.shared.errors import (
    AttributeIndexError,
    IoFailureError,
    MalformedInputError,
    ResourceLimitError,
    SlimXMLError,
    SourcePosition,
    TagRedefinitionError,
    UnbalancedTagsError,
    XMLParseError,
)


class TestSourcePosition:
    """Test SourcePosition construction and offset mapping."""

    def test_valid_position(self) -> None:
        """Test creating a valid position."""
        position = SourcePosition(line=2, column=3, offset=10)

        assert position.to_dict() == {"line": 2, "column": 3, "offset": 10}

    @pytest.mark.parametrize(
        "line,column,offset",
        [(0, 1, 0), (1, 0, 0), (1, 1, -1)],
    )
    def test_invalid_position(self, line: int, column: int, offset: int) -> None:
        """Test out-of-range values are rejected."""
        with pytest.raises(ValueError):
            SourcePosition(line=line, column=column, offset=offset)

    def test_from_offset_first_line(self) -> None:
        """Test offsets on the first line."""
        position = SourcePosition.from_offset("<a></a>", 3)

        assert (position.line, position.column, position.offset) == (1, 4, 3)

    def test_from_offset_later_line(self) -> None:
        """Test offsets after newlines count lines and reset the column."""
        text = "<a>\n  <b>\n</a>"
        position = SourcePosition.from_offset(text, text.index("<b>"))

        assert (position.line, position.column) == (2, 3)

    def test_from_offset_clamps(self) -> None:
        """Test offsets beyond the buffer are clamped to its end."""
        position = SourcePosition.from_offset("ab", 99)

        assert position.offset == 2
        assert position.column == 3


class TestErrorHierarchy:
    """Test error kinds and message formatting."""

    @pytest.mark.parametrize(
        "error_class,kind",
        [
            (MalformedInputError, "MalformedInput"),
            (UnbalancedTagsError, "UnbalancedTags"),
            (ResourceLimitError, "ResourceLimit"),
        ],
    )
    def test_parse_error_kinds(self, error_class: type, kind: str) -> None:
        """Test each parse error reports its kind and is a SlimXMLError."""
        error = error_class("broken")

        assert error.kind == kind
        assert isinstance(error, XMLParseError)
        assert isinstance(error, SlimXMLError)

    def test_message_includes_position(self) -> None:
        """Test the position is appended to the string form."""
        error = MalformedInputError(
            "Tag name is empty", position=SourcePosition(line=3, column=7, offset=20)
        )

        assert error.message == "Tag name is empty"
        assert str(error) == "Tag name is empty (line 3, column 7)"

    def test_message_without_position(self) -> None:
        """Test errors without a position keep the bare message."""
        error = UnbalancedTagsError("End tag </b> found but no element is open", tag="b")

        assert str(error) == "End tag </b> found but no element is open"
        assert error.tag == "b"
        assert error.position is None

    def test_io_failure(self) -> None:
        """Test IoFailureError carries the path."""
        error = IoFailureError("File not found", path="missing.xml")

        assert error.kind == "IoFailure"
        assert error.path == "missing.xml"
        assert str(error) == "File not found: missing.xml"
        assert not isinstance(error, XMLParseError)

    def test_tree_errors_extend_builtins(self) -> None:
        """Test tree errors can be caught as the matching builtin errors."""
        assert issubclass(AttributeIndexError, IndexError)
        assert issubclass(TagRedefinitionError, ValueError)

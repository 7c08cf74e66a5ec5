"""Tests for the parser API.

Tests the progressive disclosure API with simple functions for basic use
and the configurable parser class.
"""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from slimxml.api import SlimXMLParser, parse, parse_bytes, parse_file, parse_string
from slimxml.api.result import ParseResult
from slimxml.shared.config import GlobalConfig, ParserConfig, TokenizerConfig
from slimxml.shared.errors import (
    IoFailureError,
    MalformedInputError,
    UnbalancedTagsError,
)
from slimxml.shared.result import DiagnosticSeverity
from slimxml.tree.node import XMLDocument


class TestSimpleParsingFunctions:
    """Test the level 1 parsing functions."""

    def test_parse_string_success(self) -> None:
        """Test parsing a simple document."""
        result = parse_string('<root><item id="1">value</item></root>')

        assert isinstance(result, ParseResult)
        assert result.success is True
        assert result.error is None
        assert result.error_kind is None
        assert result.message is None
        assert result.document.root.tag == "root"
        assert result.document.root.children[0].get_attribute("id") == "1"
        assert result.element_count == 2

    def test_parse_string_failure(self) -> None:
        """Test a failed parse carries the error and no document."""
        result = parse_string("<a><b></a>")

        assert result.success is False
        assert result.document is None
        assert result.error_kind == "UnbalancedTags"
        assert isinstance(result.error, UnbalancedTagsError)
        assert "does not match" in result.message
        assert result.element_count == 0

    def test_parse_bytes(self) -> None:
        """Test parsing single-byte input."""
        result = parse_bytes(b"<a>caf\xe9</a>")

        assert result.success
        assert result.document.root.inner_text == "café"

    def test_parse_detects_input_type(self, tmp_path: Path) -> None:
        """Test parse() accepts strings, bytes, paths and file objects."""
        file_path = tmp_path / "doc.xml"
        file_path.write_text("<a>file</a>")

        assert parse("<a>s</a>").document.root.inner_text == "s"
        assert parse(b"<a>b</a>").document.root.inner_text == "b"
        assert parse(file_path).document.root.inner_text == "file"
        assert parse(io.StringIO("<a>t</a>")).document.root.inner_text == "t"
        assert parse(io.BytesIO(b"<a>u</a>")).document.root.inner_text == "u"

    def test_parse_unsupported_type(self) -> None:
        """Test unsupported input types raise TypeError."""
        with pytest.raises(TypeError, match="Unsupported input type"):
            parse(123)  # type: ignore[arg-type]

    def test_parse_with_config(self) -> None:
        """Test configuration is passed through to the tokenizer."""
        result = parse_string("<a>x</a>", config=ParserConfig.legacy())

        assert result.success
        assert result.document.root.inner_text is None

    def test_parse_with_correlation_id(self) -> None:
        """Test a given correlation ID is attached to the result."""
        result = parse_string("<a></a>", correlation_id="req-1")

        assert result.correlation_id == "req-1"


class TestParseFile:
    """Test file input."""

    def test_parse_file(self, tmp_path: Path) -> None:
        """Test parsing a file records its path as the source."""
        file_path = tmp_path / "doc.xml"
        file_path.write_bytes(b"<doc><p>text</p></doc>")

        result = parse_file(file_path)

        assert result.success
        assert result.source == str(file_path)
        assert result.document.find("p").inner_text == "text"

    def test_parse_file_accepts_str_path(self, tmp_path: Path) -> None:
        """Test a string path is accepted."""
        file_path = tmp_path / "doc.xml"
        file_path.write_text("<doc></doc>")

        assert parse_file(str(file_path)).success

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file yields an IoFailure result."""
        result = parse_file(tmp_path / "missing.xml")

        assert not result.success
        assert result.error_kind == "IoFailure"
        assert isinstance(result.error, IoFailureError)
        assert result.message.startswith("File not found")
        assert result.has_errors()

    def test_directory(self, tmp_path: Path) -> None:
        """Test a directory is reported as IoFailure."""
        result = parse_file(tmp_path)

        assert result.error_kind == "IoFailure"

    def test_unreadable_file(self, tmp_path: Path) -> None:
        """Test other OS errors are reported as IoFailure."""
        file_path = tmp_path / "locked.xml"
        file_path.write_text("<a></a>")

        with patch.object(Path, "read_bytes", side_effect=PermissionError(13, "Permission denied")):
            result = parse_file(file_path)

        assert result.error_kind == "IoFailure"
        assert result.message == f"Cannot read file (Permission denied): {file_path}"

    def test_malformed_file(self, tmp_path: Path) -> None:
        """Test parse errors in files carry the source path."""
        file_path = tmp_path / "bad.xml"
        file_path.write_text("text<a></a>")

        result = parse_file(file_path)

        assert result.error_kind == "MalformedInput"
        assert result.source == str(file_path)
        assert result.summary()["line"] == 1


class TestSlimXMLParser:
    """Test the level 2 parser class."""

    def test_reuse_with_config(self) -> None:
        """Test one parser instance applies its config to every parse."""
        parser = SlimXMLParser(ParserConfig(tokenizer=TokenizerConfig(max_tag_length=3)))

        assert parser.parse_string("<abc></abc>").success
        assert parser.parse_string("<abcd></abcd>").error_kind == "ResourceLimit"

    def test_fresh_correlation_ids(self) -> None:
        """Test each parse gets its own correlation ID when none is fixed."""
        parser = SlimXMLParser()

        first = parser.parse_string("<a></a>")
        second = parser.parse_string("<a></a>")

        assert first.correlation_id and second.correlation_id
        assert first.correlation_id != second.correlation_id

    def test_correlation_tracking_disabled(self) -> None:
        """Test no ID is generated when tracking is off."""
        config = ParserConfig(global_=GlobalConfig(enable_correlation_tracking=False))

        assert SlimXMLParser(config).parse_string("<a></a>").correlation_id is None

    def test_failure_diagnostic(self) -> None:
        """Test a failure adds one ERROR diagnostic with the position."""
        result = SlimXMLParser().parse_string("<a>\n</b>")

        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.severity is DiagnosticSeverity.ERROR
        assert diagnostic.component == "parser"
        assert diagnostic.position == {"line": 2, "column": 1, "offset": 4}
        assert diagnostic.details["error_kind"] == "UnbalancedTags"
        assert diagnostic.details["tag"] == "b"

    def test_metrics_recorded(self) -> None:
        """Test performance counters are filled in."""
        result = SlimXMLParser().parse_string('<a k="v"><b>t</b></a>')

        assert result.performance.elements_created == 2
        assert result.performance.attributes_parsed == 1
        assert result.processing_time_ms >= 0


class TestParseResult:
    """Test the result object."""

    def test_requires_document_or_error(self) -> None:
        """Test a result must hold exactly one of document and error."""
        with pytest.raises(ValueError):
            ParseResult()
        with pytest.raises(ValueError):
            ParseResult(document=XMLDocument(), error=MalformedInputError("x"))

    def test_raise_for_error(self) -> None:
        """Test raise_for_error returns the document or raises the error."""
        ok = parse_string("<a></a>")
        failed = parse_string("<a>")

        assert ok.raise_for_error() is ok.document
        with pytest.raises(UnbalancedTagsError):
            failed.raise_for_error()

    def test_summary_success(self) -> None:
        """Test the summary of a successful parse."""
        summary = parse_string('<a x="1"><b></b></a>').summary()

        assert summary["success"] is True
        assert summary["element_count"] == 2
        assert summary["attribute_count"] == 1
        assert summary["max_depth"] == 1
        assert "error_kind" not in summary

    def test_summary_failure(self) -> None:
        """Test the summary of a failed parse includes the error location."""
        summary = parse_string("<a>\n</b>").summary()

        assert summary["success"] is False
        assert summary["error_kind"] == "UnbalancedTags"
        assert (summary["line"], summary["column"]) == (2, 1)

    def test_to_dict(self) -> None:
        """Test the full dictionary form contains the tree."""
        data = parse_string("<a>t</a>").to_dict()

        assert data["document"]["root"] == {"tag": "a", "attributes": [], "text": "t"}
        assert data["diagnostics"] == []
        assert data["performance"]["elements_created"] == 1

"""Tests for the integration adapters."""

import xml.etree.ElementTree as ET

import pytest

from slimxml.api import parse_string
from slimxml.api.adapters import (
    AdapterType,
    ElementTreeAdapter,
    LxmlAdapter,
    PandasAdapter,
    from_etree,
    get_adapter,
    list_available_adapters,
    to_dataframe,
    to_etree,
    to_lxml,
)
from slimxml.shared.errors import UnbalancedTagsError
from slimxml.tree.node import XMLDocument

SAMPLE = '<catalog kind="books"><book id="1">First</book><book id="2"><title>Second</title></book></catalog>'


@pytest.fixture
def document() -> XMLDocument:
    return parse_string(SAMPLE).raise_for_error()


class TestElementTreeAdapter:
    """Test conversion to and from xml.etree.ElementTree."""

    def test_to_etree(self, document: XMLDocument) -> None:
        """Test structure, attributes and text carry over."""
        element = to_etree(document)

        assert element.tag == "catalog"
        assert element.get("kind") == "books"
        assert [child.get("id") for child in element] == ["1", "2"]
        assert element[0].text == "First"
        assert element.find("book/title").text == "Second"

    def test_to_etree_accepts_parse_result(self) -> None:
        """Test a successful ParseResult is accepted directly."""
        assert to_etree(parse_string("<a></a>")).tag == "a"

    def test_to_etree_failed_result_raises(self) -> None:
        """Test a failed ParseResult raises its error."""
        with pytest.raises(UnbalancedTagsError):
            to_etree(parse_string("<a>"))

    def test_round_trip_through_etree(self, document: XMLDocument) -> None:
        """Test converting to ElementTree and back gives an equal tree."""
        assert from_etree(to_etree(document)) == document

    def test_from_etree_collects_tails(self) -> None:
        """Test text and child tails become newline-joined fragments."""
        element = ET.fromstring("<a> one <b/> two </a>")

        document = from_etree(element)

        assert document.root.inner_text == "one\ntwo"
        assert document.root.children[0].inner_text is None

    def test_from_etree_accepts_tree(self) -> None:
        """Test an ElementTree wrapper is unwrapped to its root."""
        tree = ET.ElementTree(ET.fromstring("<r><c/></r>"))

        assert from_etree(tree).root.children[0].tag == "c"

    def test_from_etree_rejects_non_element(self) -> None:
        """Test objects without a string tag are rejected."""
        with pytest.raises(TypeError):
            from_etree(object())

    def test_to_target_wraps_result(self, document: XMLDocument) -> None:
        """Test the adapter reports success and element count."""
        result = ElementTreeAdapter().to_target(document)

        assert result.success
        assert result.metadata["element_count"] == 4
        assert result.converted_data.tag == "catalog"

    def test_to_target_failure_is_reported(self) -> None:
        """Test conversion errors become a failed ConversionResult."""
        result = ElementTreeAdapter().to_target(XMLDocument())

        assert not result.success
        assert result.converted_data is None
        assert "no root element" in result.errors[0]
        assert result.diagnostics[0].component == "ElementTreeAdapter"

    def test_from_target(self, document: XMLDocument) -> None:
        """Test conversion back through from_target."""
        result = ElementTreeAdapter().from_target(to_etree(document))

        assert result.success
        assert result.converted_data == document


class TestLxmlAdapter:
    """Test conversion to and from lxml."""

    def test_to_lxml(self, document: XMLDocument) -> None:
        """Test building an lxml tree."""
        pytest.importorskip("lxml")

        element = to_lxml(document)

        assert element.tag == "catalog"
        assert element.xpath("string(book[2]/title)") == "Second"

    def test_round_trip_through_lxml(self, document: XMLDocument) -> None:
        """Test converting to lxml and back gives an equal tree."""
        pytest.importorskip("lxml")

        assert from_etree(to_lxml(document)) == document

    def test_from_lxml_skips_comments(self) -> None:
        """Test comments in an lxml tree are ignored."""
        etree = pytest.importorskip("lxml.etree")
        element = etree.fromstring("<a>x<!-- note --><b/></a>")

        document = from_etree(element)

        assert [child.tag for child in document.root.children] == ["b"]
        assert document.root.inner_text == "x"

    def test_availability(self) -> None:
        """Test the adapter reports lxml as available when importable."""
        pytest.importorskip("lxml")

        assert LxmlAdapter().is_available()


class TestPandasAdapter:
    """Test conversion to and from pandas."""

    def test_to_dataframe(self, document: XMLDocument) -> None:
        """Test one row per element in document order."""
        pytest.importorskip("pandas")

        frame = to_dataframe(document)

        assert list(frame.columns) == PandasAdapter.COLUMNS
        assert list(frame["tag"]) == ["catalog", "book", "book", "title"]
        assert list(frame["path"]) == [
            "/catalog",
            "/catalog/book[1]",
            "/catalog/book[2]",
            "/catalog/book[2]/title",
        ]
        assert list(frame["depth"]) == [0, 1, 1, 2]
        assert frame["attributes"][0] == {"kind": "books"}

    def test_round_trip_through_dataframe(self, document: XMLDocument) -> None:
        """Test the frame can be turned back into an equal tree."""
        pytest.importorskip("pandas")

        adapter = PandasAdapter()

        assert adapter.convert_from(adapter.convert_to(document)) == document

    def test_from_target_rejects_other_data(self) -> None:
        """Test non-DataFrame input is reported as a failed conversion."""
        pytest.importorskip("pandas")

        result = PandasAdapter().from_target([1, 2, 3])

        assert not result.success
        assert "not a pandas DataFrame" in result.errors[0]


class TestAdapterRegistry:
    """Test adapter discovery."""

    def test_etree_always_available(self) -> None:
        """Test the standard library adapter is always listed."""
        names = [metadata.name for metadata in list_available_adapters()]

        assert "etree" in names

    def test_get_adapter(self) -> None:
        """Test looking up adapters by name."""
        adapter = get_adapter("etree", correlation_id="cid")

        assert isinstance(adapter, ElementTreeAdapter)
        assert adapter.correlation_id == "cid"
        assert adapter.metadata.adapter_type is AdapterType.XML_LIBRARY
        assert get_adapter("unknown") is None

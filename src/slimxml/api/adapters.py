"""Integration adapters for other XML and data libraries.

Each adapter converts a parsed :class:`XMLDocument` into a target
representation and back. ``xml.etree.ElementTree`` is always available;
lxml and pandas are optional and imported only when their adapter runs.

Element order, tags and inner text carry over unchanged. Attribute order
is kept, but ElementTree-style targets store attributes in a mapping, so
of duplicate keys only the last survives there.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Type, Union

from slimxml.api.result import ParseResult
from slimxml.shared import DiagnosticEntry, DiagnosticSeverity, get_logger
from slimxml.shared.text import trim
from slimxml.tree.node import XMLDocument, XMLNode

MS_PER_SECOND = 1000

Convertible = Union[XMLDocument, ParseResult]


class AdapterType(Enum):
    """Types of integration adapters."""

    XML_LIBRARY = auto()
    DATA_FRAME = auto()


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    adapter_type: AdapterType
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


def _document_of(source: Convertible) -> XMLDocument:
    if isinstance(source, ParseResult):
        return source.raise_for_error()
    if isinstance(source, XMLDocument):
        return source
    raise TypeError(f"Expected XMLDocument or ParseResult, got {type(source).__name__}")


class IntegrationAdapter(ABC):
    """Base class for bidirectional conversions with a target library."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Describe the adapter."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the target library can be imported."""

    @abstractmethod
    def convert_to(self, document: XMLDocument) -> Any:
        """Build the target representation; may raise on unconvertible input."""

    @abstractmethod
    def convert_from(self, target_data: Any) -> XMLDocument:
        """Build a document from the target representation."""

    def to_target(self, source: Convertible) -> ConversionResult:
        """Convert a document (or successful parse result) to the target format."""
        start_time = time.perf_counter()
        try:
            document = _document_of(source)
            converted = self.convert_to(document)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert to {self.metadata.target_library}: {e}",
                source,
                start_time,
            )
        return ConversionResult(
            success=True,
            converted_data=converted,
            original_data=source,
            conversion_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
            metadata={"element_count": document.element_count},
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert target-format data back into an :class:`XMLDocument`."""
        start_time = time.perf_counter()
        try:
            document = self.convert_from(target_data)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert from {self.metadata.target_library}: {e}",
                target_data,
                start_time,
            )
        return ConversionResult(
            success=True,
            converted_data=document,
            original_data=target_data,
            conversion_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
            metadata={"element_count": document.element_count},
        )

    def _create_error_result(
        self, error_message: str, original_data: Any, start_time: float
    ) -> ConversionResult:
        """Create a ConversionResult for error conditions."""
        self._logger.warning(error_message)
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id,
                )
            ],
        )


def _build_etree(node: XMLNode, element_factory: Any) -> Any:
    element = element_factory(node.tag, dict(node.attributes.items()))
    element.text = node.inner_text
    for child in node.children:
        element.append(_build_etree(child, element_factory))
    return element


def _node_from_etree(element: Any, parent: Optional[XMLNode]) -> XMLNode:
    node = XMLNode(parent=parent) if parent is None else parent.create_child()
    node.set_tag(str(element.tag))
    for key, value in element.attrib.items():
        node.attributes.append(str(key), str(value))

    # ElementTree splits character data into text and per-child tails; the
    # parser joins the same pieces as newline-separated fragments.
    fragments = [element.text]
    for child in element:
        if isinstance(child.tag, str):
            _node_from_etree(child, node)
        fragments.append(child.tail)
    for fragment in fragments:
        if fragment:
            node.append_inner_text(trim(fragment))
    return node


def from_etree(element: Any) -> XMLDocument:
    """Build a document from an ElementTree-compatible element (lxml included).

    Comments and processing instructions are skipped.
    """
    if hasattr(element, "getroot"):
        element = element.getroot()
    if not isinstance(getattr(element, "tag", None), str):
        raise TypeError("Expected an element with a string tag")
    return XMLDocument(root=_node_from_etree(element, None))


class ElementTreeAdapter(IntegrationAdapter):
    """Adapter for the standard library's ``xml.etree.ElementTree``."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="etree",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="xml.etree.ElementTree",
            description="Conversion between XMLDocument and ElementTree elements",
        )

    def is_available(self) -> bool:
        return True

    def convert_to(self, document: XMLDocument) -> Any:
        import xml.etree.ElementTree as ET

        if document.root is None:
            raise ValueError("Document has no root element")
        return _build_etree(document.root, ET.Element)

    def convert_from(self, target_data: Any) -> XMLDocument:
        return from_etree(target_data)


class LxmlAdapter(IntegrationAdapter):
    """Adapter for ``lxml.etree``."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="lxml",
            description="Conversion between XMLDocument and lxml.etree elements",
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
        except ImportError:
            return False
        return True

    def convert_to(self, document: XMLDocument) -> Any:
        from lxml import etree

        if document.root is None:
            raise ValueError("Document has no root element")
        return _build_etree(document.root, etree.Element)

    def convert_from(self, target_data: Any) -> XMLDocument:
        return from_etree(target_data)


class PandasAdapter(IntegrationAdapter):
    """Adapter flattening a document into a pandas DataFrame, one row per element."""

    COLUMNS = ["path", "tag", "depth", "text", "attribute_count", "attributes"]

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="pandas",
            adapter_type=AdapterType.DATA_FRAME,
            target_library="pandas",
            description="Flat element table as a pandas DataFrame",
        )

    def is_available(self) -> bool:
        try:
            import pandas  # noqa: F401
        except ImportError:
            return False
        return True

    def convert_to(self, document: XMLDocument) -> Any:
        import pandas as pd

        rows = [
            {
                "path": node.path,
                "tag": node.tag,
                "depth": node.depth,
                "text": node.inner_text,
                "attribute_count": len(node.attributes),
                "attributes": node.attributes.to_dict(),
            }
            for node in document.iter_elements()
        ]
        return pd.DataFrame(rows, columns=self.COLUMNS)

    def convert_from(self, target_data: Any) -> XMLDocument:
        """Rebuild a tree from a frame produced by :meth:`convert_to`.

        Rows must be in document order; nesting comes from the ``depth``
        column.
        """
        import pandas as pd

        if not isinstance(target_data, pd.DataFrame):
            raise TypeError("Target data is not a pandas DataFrame")

        document = XMLDocument()
        open_nodes: List[XMLNode] = []
        for row in target_data.itertuples(index=False):
            depth = int(row.depth)
            if depth == 0:
                if document.root is not None:
                    raise ValueError("More than one row at depth 0")
                node = XMLNode()
                document.root = node
            else:
                if depth > len(open_nodes):
                    raise ValueError(f"Row for <{row.tag}> skips a nesting level")
                node = open_nodes[depth - 1].create_child()
            del open_nodes[depth:]
            open_nodes.append(node)

            node.set_tag(str(row.tag))
            if isinstance(row.text, str) and row.text:
                node.append_inner_text(row.text)
            for key, value in dict(row.attributes or {}).items():
                node.attributes.append(str(key), str(value))

        if document.root is None:
            raise ValueError("DataFrame has no rows")
        return document


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self, adapter_name: str, correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance by name, None if unknown or unavailable."""
        adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of every registered adapter whose library imports."""
        return [
            instance.metadata
            for instance in (adapter_class() for adapter_class in self._adapters.values())
            if instance.is_available()
        ]


_adapter_registry = AdapterRegistry()
for _adapter_class in (ElementTreeAdapter, LxmlAdapter, PandasAdapter):
    _adapter_registry.register(_adapter_class)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str, correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()


def to_etree(source: Convertible) -> Any:
    """Convert to an ``xml.etree.ElementTree.Element``; raises on failure."""
    return ElementTreeAdapter().convert_to(_document_of(source))


def to_lxml(source: Convertible) -> Any:
    """Convert to an ``lxml.etree._Element``; requires lxml."""
    return LxmlAdapter().convert_to(_document_of(source))


def to_dataframe(source: Convertible) -> Any:
    """Convert to a pandas DataFrame with one row per element; requires pandas."""
    return PandasAdapter().convert_to(_document_of(source))

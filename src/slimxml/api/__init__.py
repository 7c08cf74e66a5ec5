"""Public parsing API for slimxml."""

from .adapters import (
    ConversionResult,
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    PandasAdapter,
    from_etree,
    get_adapter,
    list_available_adapters,
    register_adapter,
    to_dataframe,
    to_etree,
    to_lxml,
)
from .parser import SlimXMLParser, parse, parse_bytes, parse_file, parse_string
from .result import ParseResult

__all__ = [
    "ConversionResult",
    "ElementTreeAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "PandasAdapter",
    "ParseResult",
    "SlimXMLParser",
    "from_etree",
    "get_adapter",
    "list_available_adapters",
    "parse",
    "parse_bytes",
    "parse_file",
    "parse_string",
    "register_adapter",
    "to_dataframe",
    "to_etree",
    "to_lxml",
]

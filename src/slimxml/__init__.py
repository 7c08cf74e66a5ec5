"""slimxml: a small, strict parser for XML-like markup.

Reads a whole buffer and builds a tree of elements with ordered
attributes and accumulated inner text. Anything beyond start tags, end
tags, attributes and text (comments, entities, CDATA, namespaces,
self-closing tags) is out of scope.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_bytes(), parse_file()
- Level 2: Configured parser - SlimXMLParser(ParserConfig(...))
- Level 3: Tokenizer - XMLTokenizer, which raises instead of returning results
"""

__version__ = "0.1.0"
__author__ = "slimxml developers"

from .api import SlimXMLParser, parse, parse_bytes, parse_file, parse_string
from .api.result import ParseResult
from .shared.config import ParserConfig, TokenizerConfig
from .shared.errors import (
    IoFailureError,
    MalformedInputError,
    ResourceLimitError,
    SlimXMLError,
    UnbalancedTagsError,
    XMLParseError,
)
from .tokenization import XMLTokenizer
from .tree import Attribute, AttributeList, XMLDocument, XMLNode, format_tree, print_tree, to_markup

__all__ = [
    "__author__",
    "__version__",
    "parse",
    "parse_string",
    "parse_bytes",
    "parse_file",
    "SlimXMLParser",
    "XMLTokenizer",
    "ParseResult",
    "XMLDocument",
    "XMLNode",
    "Attribute",
    "AttributeList",
    "format_tree",
    "print_tree",
    "to_markup",
    "ParserConfig",
    "TokenizerConfig",
    "SlimXMLError",
    "XMLParseError",
    "MalformedInputError",
    "UnbalancedTagsError",
    "ResourceLimitError",
    "IoFailureError",
]

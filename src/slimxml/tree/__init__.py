"""Document tree for slimxml.

Key Components:
    Attribute / AttributeList: ordered key/value pairs of one element
    XMLNode: element with tag, inner text, attributes and owned children
    XMLDocument: container exposing the first element as ``root``
    format_tree / print_tree / to_markup: read-only renderers
"""

from .attributes import Attribute, AttributeList
from .node import XMLDocument, XMLNode
from .render import format_tree, print_tree, to_markup

__all__ = [
    "Attribute",
    "AttributeList",
    "XMLDocument",
    "XMLNode",
    "format_tree",
    "print_tree",
    "to_markup",
]

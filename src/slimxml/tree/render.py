"""Presentation helpers: debug tree dumps and markup serialization.

Nothing here is used while parsing; both renderers only read the tree.
"""

import sys
from typing import List, Optional, TextIO, Tuple, Union

from slimxml.tree.attributes import Attribute
from slimxml.tree.node import XMLDocument, XMLNode

Renderable = Union[XMLDocument, XMLNode]


def _root_of(target: Renderable) -> Optional[XMLNode]:
    if isinstance(target, XMLDocument):
        return target.root
    return target


def format_tree(target: Renderable, indent: int = 0, step: int = 2) -> str:
    """Render a tree in the legacy debug dump layout.

    Each element becomes ``tag: text``, followed by one
    ``arg: { key = K, value = V }`` line per attribute and then its
    children, both indented ``step`` columns further.

    Args:
        target: Document or node to render
        indent: Columns of padding before the top element
        step: Additional padding per nesting level

    Returns:
        The rendered lines joined with newlines (no trailing newline)
    """
    root = _root_of(target)
    if root is None:
        return ""

    lines: List[str] = []
    stack = [(root, indent)]
    while stack:
        node, padding = stack.pop()
        pad = " " * padding
        lines.append(f"{pad}{node.tag}: {node.inner_text or ''}".rstrip())
        for attribute in node.attributes:
            lines.append(
                f"{pad}{' ' * step}arg: {{ key = {attribute.key}, value = {attribute.value} }}"
            )
        stack.extend((child, padding + step) for child in reversed(node.children))
    return "\n".join(lines)


def print_tree(target: Renderable, file: Optional[TextIO] = None, indent: int = 0) -> None:
    """Write :func:`format_tree` output to ``file`` (stdout by default)."""
    text = format_tree(target, indent=indent)
    if text:
        print(text, file=file or sys.stdout)


def _quote_value(attribute: Attribute) -> str:
    value = attribute.value
    if "<" in value:
        raise ValueError(f"Attribute '{attribute.key}' value contains '<' and cannot be rendered")
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    raise ValueError(
        f"Attribute '{attribute.key}' value contains both quote characters and cannot be rendered"
    )


def _start_tag(node: XMLNode) -> str:
    if not node.tag:
        raise ValueError("Cannot render an element without a tag")
    parts = [node.tag]
    parts.extend(f"{attribute.key}={_quote_value(attribute)}" for attribute in node.attributes)
    return "<" + " ".join(parts) + ">"


def _text(node: XMLNode) -> str:
    text = node.inner_text or ""
    if "<" in text:
        raise ValueError(f"Text of <{node.tag}> contains '<' and cannot be rendered")
    return text


def to_markup(target: Renderable, indent: Optional[int] = None) -> str:
    """Serialize a tree back into markup the parser accepts.

    An element's inner text is written before its children, so re-parsing
    the output yields an equal tree.

    Args:
        target: Document or node to serialize
        indent: If given, put each child on its own line indented by this
            many spaces per level

    Returns:
        Markup string

    Raises:
        ValueError: If a value or text cannot be expressed without entities
    """
    root = _root_of(target)
    if root is None:
        return ""

    pieces: List[str] = []
    _render_nodes(root, pieces, indent)
    return "".join(pieces)


def _render_nodes(root: XMLNode, pieces: List[str], indent: Optional[int]) -> None:
    # Entries are (node, level, closing); a closing entry writes the end tag.
    stack: List[Tuple[XMLNode, int, bool]] = [(root, 0, False)]
    while stack:
        node, level, closing = stack.pop()
        pad = "" if indent is None else " " * (indent * level)

        if closing:
            if node.children and indent is not None:
                pieces.append("\n" + pad)
            pieces.append(f"</{node.tag}>")
            continue

        if level > 0 and indent is not None:
            pieces.append("\n")
        pieces.append(pad + _start_tag(node))
        pieces.append(_text(node))

        stack.append((node, level, True))
        stack.extend((child, level + 1, False) for child in reversed(node.children))

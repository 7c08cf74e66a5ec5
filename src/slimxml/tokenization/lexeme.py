"""Splitting of tag lexemes into tag names and attributes.

A lexeme is the span between ``<`` (or ``</``) and ``>``. The functions
here work on bounds into the input buffer, so error positions point at
the offending character in the input.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from slimxml.shared.errors import MalformedInputError, SourcePosition
from slimxml.shared.text import ASCII_WHITESPACE, trim_bounds

QUOTE_CHARS = "\"'"
_NAME_FORBIDDEN = "=\"'</"


@dataclass
class StartTagLexeme:
    """Result of splitting a start tag span."""

    name: str
    attributes: List[Tuple[str, str]] = field(default_factory=list)


def _error(text: str, offset: int, message: str, tag: Optional[str] = None) -> MalformedInputError:
    return MalformedInputError(message, SourcePosition.from_offset(text, offset), tag)


def _skip_space(text: str, i: int, end: int) -> int:
    while i < end and text[i] in ASCII_WHITESPACE:
        i += 1
    return i


def _read_name(text: str, start: int, end: int) -> Tuple[str, int]:
    """Read the tag name, i.e. the leading run of non-whitespace."""
    i = start
    while i < end and text[i] not in ASCII_WHITESPACE:
        i += 1
    name = text[start:i]

    if not name:
        raise _error(text, start, "Tag name is empty")
    if name.endswith("/"):
        raise _error(text, start, f"Self-closing tag <{name}> is not supported", name.rstrip("/"))
    for char in name:
        if char in _NAME_FORBIDDEN:
            raise _error(text, start, f"Invalid character {char!r} in tag name '{name}'", name)
    return name, i


def _read_attribute(text: str, i: int, end: int, tag: str) -> Tuple[str, str, int]:
    """Read one ``key=value`` item starting at ``i``; returns key, value and new cursor."""
    key_start = i
    while i < end and text[i] not in ASCII_WHITESPACE and text[i] != "=":
        if text[i] in QUOTE_CHARS:
            raise _error(text, i, f"Unexpected quote in attribute name of <{tag}>", tag)
        i += 1
    key = text[key_start:i]

    i = _skip_space(text, i, end)
    if not key:
        raise _error(text, key_start, f"Attribute value without a name in <{tag}>", tag)
    if i >= end or text[i] != "=":
        raise _error(text, key_start, f"Attribute '{key}' of <{tag}> has no value", tag)

    i = _skip_space(text, i + 1, end)
    if i >= end:
        raise _error(text, key_start, f"Attribute '{key}' of <{tag}> has no value", tag)

    if text[i] in QUOTE_CHARS:
        quote = text[i]
        close = text.find(quote, i + 1, end)
        if close == -1:
            raise _error(text, i, f"Unterminated value for attribute '{key}' of <{tag}>", tag)
        value = text[i + 1:close]
        i = close + 1
        if i < end and text[i] not in ASCII_WHITESPACE:
            raise _error(
                text, i, f"Missing whitespace after attribute '{key}' of <{tag}>", tag
            )
        return key, value, i

    value_start = i
    while i < end and text[i] not in ASCII_WHITESPACE:
        i += 1
    return key, text[value_start:i], i


def split_start_tag(text: str, start: int, end: int) -> StartTagLexeme:
    """Split the start tag span ``text[start:end]`` into name and attributes.

    The span is tokenized left to right: the leading non-whitespace run is
    the tag name, then ``key=value`` items separated by whitespace that is
    not inside quotes. Whitespace around ``=`` is allowed. Quoted values
    lose their quotes; unquoted values end at the next whitespace.

    Args:
        text: Whole input buffer
        start: Index just after ``<``
        end: Index of the closing ``>``

    Returns:
        StartTagLexeme with attributes in written order

    Raises:
        MalformedInputError: On an empty or invalid name, or broken attribute syntax
    """
    start, end = trim_bounds(text, start, end)
    if end > start and text[end - 1] == "/":
        name = text[start:end - 1].split()[0] if end - 1 > start else ""
        raise _error(text, start, f"Self-closing tag <{name}/> is not supported", name or None)

    name, i = _read_name(text, start, end)
    lexeme = StartTagLexeme(name=name)

    while True:
        i = _skip_space(text, i, end)
        if i >= end:
            break
        key, value, i = _read_attribute(text, i, end, name)
        lexeme.attributes.append((key, value))

    return lexeme


def split_end_tag(text: str, start: int, end: int) -> str:
    """Return the tag name of the end tag span ``text[start:end]``.

    Args:
        text: Whole input buffer
        start: Index just after ``</``
        end: Index of the closing ``>``

    Raises:
        MalformedInputError: If the name is empty or followed by more content
    """
    start, end = trim_bounds(text, start, end)
    if start == end:
        raise _error(text, start, "End tag name is empty")

    for i in range(start, end):
        if text[i] in ASCII_WHITESPACE:
            name = text[start:i]
            raise _error(text, i, f"End tag </{name}> must not carry attributes", name)
    return text[start:end]

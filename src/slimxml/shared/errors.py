"""Exception hierarchy for slimxml.

Parse failures carry the position of the offending markup and, when one is
known, the tag involved. The API layer turns them into failed
:class:`~slimxml.api.parser.ParseResult` objects; the tokenizer itself
always raises.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class SourcePosition:
    """Location of a character in the input buffer."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    @classmethod
    def from_offset(cls, text: str, offset: int) -> "SourcePosition":
        """Compute line and column of ``offset`` inside ``text``."""
        offset = max(0, min(offset, len(text)))
        line = text.count("\n", 0, offset) + 1
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(line=line, column=offset - line_start + 1, offset=offset)

    def to_dict(self) -> Dict[str, int]:
        """Convert position to dictionary representation."""
        return {"line": self.line, "column": self.column, "offset": self.offset}


class SlimXMLError(Exception):
    """Base exception for every error raised by slimxml."""

    kind = "SlimXMLError"


class XMLParseError(SlimXMLError):
    """A parse attempt failed; the partially built tree must not be used."""

    kind = "ParseError"

    def __init__(
        self,
        message: str,
        position: Optional[SourcePosition] = None,
        tag: Optional[str] = None,
    ) -> None:
        self.message = message
        self.position = position
        self.tag = tag
        super().__init__(self._format())

    def _format(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (line {self.position.line}, column {self.position.column})"


class MalformedInputError(XMLParseError):
    """Freestanding text, or a tag or attribute with broken syntax."""

    kind = "MalformedInput"


class UnbalancedTagsError(XMLParseError):
    """Mismatched, unexpected or missing end tag."""

    kind = "UnbalancedTags"


class ResourceLimitError(XMLParseError):
    """A tag span exceeded the lexeme buffer bound."""

    kind = "ResourceLimit"


class IoFailureError(SlimXMLError):
    """The input buffer could not be obtained."""

    kind = "IoFailure"

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message if path is None else f"{message}: {path}")


class AttributeIndexError(IndexError):
    """Attribute list accessed outside its bounds."""


class TagRedefinitionError(ValueError):
    """An element's tag was set a second time with a different name."""

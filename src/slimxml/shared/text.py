"""Text helpers shared by the tokenizer and the tree layer.

Whitespace classification is ASCII only; input is treated as single-byte
characters, so nothing here knows about Unicode spacing.
"""

from typing import Optional, Tuple

ASCII_WHITESPACE = " \t\n\r\x0b\x0c"


def is_ascii_space(char: str) -> bool:
    """Return True if ``char`` is one of the six ASCII whitespace characters."""
    return char != "" and char in ASCII_WHITESPACE


def trim_bounds(text: str, start: int = 0, end: Optional[int] = None) -> Tuple[int, int]:
    """Narrow ``text[start:end]`` so it excludes surrounding whitespace.

    Only the bounds move; no substring is built. An all-whitespace span
    collapses to ``(end, end)``.

    Args:
        text: Buffer the span refers to
        start: Inclusive start of the span
        end: Exclusive end of the span (defaults to ``len(text)``)

    Returns:
        Tuple of the trimmed ``(start, end)`` bounds
    """
    if end is None:
        end = len(text)
    start = max(0, start)
    end = min(len(text), end)

    while start < end and text[start] in ASCII_WHITESPACE:
        start += 1
    while end > start and text[end - 1] in ASCII_WHITESPACE:
        end -= 1

    if start > end:
        return end, end
    return start, end


def trim(text: str) -> str:
    """Strip leading and trailing ASCII whitespace."""
    return text.strip(ASCII_WHITESPACE)


def to_owned_or_none(text: str) -> Optional[str]:
    """Return ``None`` for an empty string, otherwise the string itself."""
    if not text:
        return None
    return text

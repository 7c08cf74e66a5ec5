"""Ordered attribute storage for elements."""

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from slimxml.shared.errors import AttributeIndexError


@dataclass(frozen=True)
class Attribute:
    """A single ``key="value"`` pair written in a start tag."""

    key: str
    value: str

    def __post_init__(self) -> None:
        """Validate attribute values."""
        if not isinstance(self.key, str) or not isinstance(self.value, str):
            raise TypeError("Attribute key and value must be strings")
        if not self.key:
            raise ValueError("Attribute key cannot be empty")

    def as_tuple(self) -> Tuple[str, str]:
        return (self.key, self.value)


class AttributeList:
    """Attributes of one element in the order they were written.

    Duplicate keys are kept as separate entries; nothing is overwritten.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Optional[List[Tuple[str, str]]] = None) -> None:
        self._items: List[Attribute] = []
        for key, value in items or []:
            self.append(key, value)

    def append(self, key: str, value: str) -> Attribute:
        """Add an attribute after the existing ones and return it."""
        attribute = Attribute(key, value)
        self._items.append(attribute)
        return attribute

    def get(self, index: int) -> Attribute:
        """Return the attribute at ``index``.

        Raises:
            AttributeIndexError: If ``index`` is outside ``0 <= index < count()``
        """
        if not 0 <= index < len(self._items):
            raise AttributeIndexError(
                f"Attribute index {index} out of range for {len(self._items)} attribute(s)"
            )
        return self._items[index]

    def count(self) -> int:
        return len(self._items)

    def for_each(self, callback: Callable[[Attribute], None]) -> None:
        """Call ``callback`` once per attribute, in order."""
        for attribute in self._items:
            callback(attribute)

    def find(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first attribute named ``key``."""
        for attribute in self._items:
            if attribute.key == key:
                return attribute.value
        return default

    def keys(self) -> List[str]:
        return [attribute.key for attribute in self._items]

    def items(self) -> List[Tuple[str, str]]:
        return [attribute.as_tuple() for attribute in self._items]

    def to_dict(self) -> Dict[str, str]:
        """Convert to a dict; with duplicate keys the last one wins."""
        return dict(self.items())

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._items)

    def __contains__(self, key: object) -> bool:
        return any(attribute.key == key for attribute in self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeList):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeList({self.items()!r})"

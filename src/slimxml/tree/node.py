"""Element nodes and the document container.

A node owns its children; the ``parent`` reference is only a way back up
the tree and takes no part in equality or ``repr``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from slimxml.shared.errors import TagRedefinitionError
from slimxml.tree.attributes import AttributeList

INNER_TEXT_SEPARATOR = "\n"


@dataclass
class XMLNode:
    """A single element of the document tree.

    ``tag`` is None only while the tokenizer is between creating a node and
    consuming its start tag. ``inner_text`` is None when the element holds
    no text at all.
    """

    tag: Optional[str] = None
    inner_text: Optional[str] = None
    attributes: AttributeList = field(default_factory=AttributeList)
    children: List["XMLNode"] = field(default_factory=list)
    parent: Optional["XMLNode"] = field(default=None, compare=False, repr=False)

    def create_child(self) -> "XMLNode":
        """Append a new, empty child and return it for the caller to fill in."""
        child = XMLNode(parent=self)
        self.children.append(child)
        return child

    def set_tag(self, name: str) -> None:
        """Give the node its tag name.

        Raises:
            ValueError: If ``name`` is empty
            TagRedefinitionError: If a different tag was already set
        """
        if not name:
            raise ValueError("Element tag cannot be empty")
        if self.tag is not None and self.tag != name:
            raise TagRedefinitionError(
                f"Element tag already set to '{self.tag}', cannot rename to '{name}'"
            )
        self.tag = name

    def append_inner_text(self, fragment: str) -> None:
        """Add a text fragment, newline-separated from earlier ones."""
        if not fragment:
            return
        if self.inner_text is None:
            self.inner_text = fragment
        else:
            self.inner_text = f"{self.inner_text}{INNER_TEXT_SEPARATOR}{fragment}"

    def get_attribute(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first attribute value named ``key``."""
        return self.attributes.find(key, default)

    def iter(self) -> Iterator["XMLNode"]:
        """Yield this node and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, tag: str) -> Optional["XMLNode"]:
        """Find first descendant element with matching tag name."""
        for node in self.iter():
            if node is not self and node.tag == tag:
                return node
        return None

    def find_all(self, tag: str) -> List["XMLNode"]:
        """Find all descendant elements with matching tag name."""
        return [node for node in self.iter() if node is not self and node.tag == tag]

    @property
    def depth(self) -> int:
        """Depth of this node in the tree (root = 0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def path(self) -> str:
        """XPath-like path to this node."""
        steps = []
        node: Optional[XMLNode] = self
        while node is not None:
            step = str(node.tag)
            if node.parent is not None:
                siblings = [child for child in node.parent.children if child.tag == node.tag]
                if len(siblings) > 1:
                    position = next(i for i, sibling in enumerate(siblings, 1) if sibling is node)
                    step = f"{step}[{position}]"
            steps.append(step)
            node = node.parent
        return "/" + "/".join(reversed(steps))

    def _shallow_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "tag": self.tag,
            "attributes": [list(pair) for pair in self.attributes.items()],
        }
        if self.inner_text is not None:
            result["text"] = self.inner_text
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        result = self._shallow_dict()
        stack = [(self, result)]
        while stack:
            node, data = stack.pop()
            if node.children:
                data["children"] = [child._shallow_dict() for child in node.children]
                stack.extend(zip(node.children, data["children"]))
        return result


@dataclass
class XMLDocument:
    """Parsed document; ``root`` is the first element of the input."""

    root: Optional[XMLNode] = None

    def iter_elements(self) -> Iterator[XMLNode]:
        """Iterate over all elements in document order."""
        if self.root is None:
            return iter(())
        return self.root.iter()

    def find(self, tag: str) -> Optional[XMLNode]:
        """Find first element with matching tag name, the root included."""
        return next((node for node in self.iter_elements() if node.tag == tag), None)

    def find_all(self, tag: str) -> List[XMLNode]:
        """Find all elements with matching tag name, the root included."""
        return [node for node in self.iter_elements() if node.tag == tag]

    @property
    def element_count(self) -> int:
        return sum(1 for _ in self.iter_elements())

    @property
    def attribute_count(self) -> int:
        return sum(len(node.attributes) for node in self.iter_elements())

    @property
    def max_depth(self) -> int:
        """Deepest nesting level, 0 for a lone root."""
        if self.root is None:
            return 0

        deepest = 0
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in node.children)
        return deepest

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        result: Dict[str, Any] = {
            "total_elements": self.element_count,
            "total_attributes": self.attribute_count,
            "max_depth": self.max_depth,
        }
        if self.root is not None:
            result["root"] = self.root.to_dict()
        return result

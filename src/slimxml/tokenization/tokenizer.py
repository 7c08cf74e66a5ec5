"""Single-pass tokenizer that builds the element tree.

The tokenizer walks the buffer once, switching between three lexical
states. Free text is collected in ``NORMAL``; on ``<`` the pending text is
flushed into the current element and the tag span is scanned up to ``>``.
A start tag creates an element and descends into it, an end tag checks the
name against the current element and ascends to its parent.

All mutable data of one run lives in :class:`ParserState`, which is
created per call and handed to each transition method, so a tokenizer
instance only carries configuration and can be reused.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Union

from slimxml.shared.config import TokenizerConfig
from slimxml.shared.errors import (
    MalformedInputError,
    ResourceLimitError,
    SourcePosition,
    UnbalancedTagsError,
)
from slimxml.shared.logging import get_logger
from slimxml.shared.result import PerformanceMetrics
from slimxml.shared.text import ASCII_WHITESPACE, to_owned_or_none, trim_bounds
from slimxml.tokenization.lexeme import QUOTE_CHARS, split_end_tag, split_start_tag
from slimxml.tree.node import XMLDocument, XMLNode

NUL = "\x00"
PREVIEW_LENGTH = 40
UNTERMINATED_TAG = "Unterminated tag: missing '>' before end of input"


class LexState(Enum):
    """Lexical states of the tokenizer."""

    NORMAL = auto()     # Outside any tag, collecting free text
    TAG = auto()        # Inside a start tag: < ... >
    END_TAG = auto()    # Inside an end tag: </ ... >


@dataclass
class ParserState:
    """Everything that changes while one buffer is tokenized.

    Attributes:
        text: Input buffer, already cut at the end-of-input sentinel
        document: Document under construction
        lex_state: Current lexical state
        position: Scan cursor into ``text``
        current: Element open for nesting, None at document level
        pending_text: Free text collected since the last tag
        pending_start: Offset where ``pending_text`` began
        tag_start: Offset of the ``<`` of the tag being scanned
        metrics: Counters for the parse result
    """

    text: str
    document: XMLDocument = field(default_factory=XMLDocument)
    lex_state: LexState = LexState.NORMAL
    position: int = 0
    current: Optional[XMLNode] = None
    pending_text: List[str] = field(default_factory=list)
    pending_start: int = 0
    tag_start: int = 0
    metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    def position_of(self, offset: int) -> SourcePosition:
        return SourcePosition.from_offset(self.text, offset)

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)


class XMLTokenizer:
    """State-machine tokenizer turning markup text into an :class:`XMLDocument`.

    Examples:
        >>> document = XMLTokenizer().tokenize('<a x="1"><b>hi</b></a>')
        >>> document.root.children[0].inner_text
        'hi'
    """

    def __init__(
        self,
        config: Optional[TokenizerConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the tokenizer.

        Args:
            config: Limits and input handling; defaults to TokenizerConfig()
            correlation_id: Optional correlation ID for log records
        """
        self.config = config or TokenizerConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_tokenizer")

    def prepare_input(self, data: Union[str, bytes]) -> str:
        """Decode ``bytes`` with the single-byte codec and cut at the first NUL."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            try:
                text = bytes(data).decode(self.config.encoding)
            except UnicodeDecodeError as e:
                raise MalformedInputError(
                    f"Input is not valid {self.config.encoding} at byte {e.start}: {e.reason}"
                ) from e
        elif isinstance(data, str):
            text = data
        else:
            raise TypeError(f"Expected str or bytes, got {type(data).__name__}")

        if self.config.stop_at_nul:
            nul = text.find(NUL)
            if nul != -1:
                text = text[:nul]
        return text

    def tokenize(
        self, data: Union[str, bytes], metrics: Optional[PerformanceMetrics] = None
    ) -> XMLDocument:
        """Parse ``data`` into a document.

        Args:
            data: Markup as text or single-byte encoded bytes
            metrics: Optional metrics object to fill in; counters are
                updated even when parsing fails

        Returns:
            The parsed document, whose ``root`` is the first element

        Raises:
            MalformedInputError: Freestanding text or broken tag syntax
            UnbalancedTagsError: Unexpected, mismatched or missing end tags
            ResourceLimitError: A tag span longer than ``max_tag_length``
        """
        state = ParserState(text=self.prepare_input(data))
        if metrics is not None:
            state.metrics = metrics
        state.metrics.characters_processed = len(state.text)

        self.logger.debug(
            "Tokenizing buffer",
            extra={"content_length": len(state.text), "preview": state.text[:PREVIEW_LENGTH]},
        )

        while not state.at_end:
            if state.lex_state is LexState.NORMAL:
                self._step_normal(state)
            else:
                self._step_tag(state)

        self._finish(state)
        return state.document

    # NORMAL state

    def _step_normal(self, state: ParserState) -> None:
        """Consume free text up to the next ``<`` and open the tag that follows."""
        text = state.text
        lt = text.find("<", state.position)
        if lt == -1:
            lt = len(text)

        if lt > state.position:
            if not state.pending_text:
                state.pending_start = state.position
            state.pending_text.append(text[state.position:lt])
            state.position = lt
            if state.at_end:
                return

        self._flush_text(state)
        state.tag_start = lt
        if text.startswith("</", lt):
            state.lex_state = LexState.END_TAG
            state.position = lt + 2
        else:
            state.lex_state = LexState.TAG
            state.position = lt + 1

    def _flush_text(self, state: ParserState) -> None:
        """Move pending free text into the current element's inner text."""
        if not state.pending_text:
            return

        raw = "".join(state.pending_text)
        offset = state.pending_start
        state.pending_text = []

        start, end = trim_bounds(raw)
        fragment = to_owned_or_none(raw[start:end])
        if fragment is None:
            return

        if state.current is None:
            if state.document.root is None:
                message = "Freestanding text before the first element is not allowed"
            else:
                message = f"Freestanding text after </{state.document.root.tag}> is not allowed"
            raise MalformedInputError(message, state.position_of(offset + start))

        if len(fragment) < self.config.min_text_length:
            self.logger.debug(
                "Dropping short text fragment",
                extra={"fragment": fragment, "tag": state.current.tag},
            )
            return

        state.current.append_inner_text(fragment)
        state.metrics.text_fragments += 1

    # TAG and END_TAG states

    def _step_tag(self, state: ParserState) -> None:
        """Scan the tag span up to ``>`` and apply the start or end tag."""
        end = self._scan_tag(state)
        if state.lex_state is LexState.TAG:
            self._open_element(state, state.position, end)
        else:
            self._close_element(state, state.position, end)
        state.position = end + 1
        state.lex_state = LexState.NORMAL

    def _scan_tag(self, state: ParserState) -> int:
        """Find the ``>`` closing the current tag, enforcing the lexeme bound.

        In a start tag, a quote that directly follows ``=`` (whitespace
        aside) opens a quoted value and ``>`` inside it does not end the tag.
        """
        text = state.text
        limit = self.config.max_tag_length
        quote: Optional[str] = None
        previous = ""
        i = state.position

        while i < len(text):
            char = text[i]
            if quote is None and char == ">":
                return i
            if i - state.position >= limit:
                raise ResourceLimitError(
                    f"Tag exceeds the maximum length of {limit} characters",
                    state.position_of(state.tag_start),
                )
            if quote is not None:
                if char == quote:
                    quote = None
                    previous = char
            elif state.lex_state is LexState.TAG and char in QUOTE_CHARS and previous == "=":
                quote = char
            elif char not in ASCII_WHITESPACE:
                previous = char
            i += 1

        raise MalformedInputError(UNTERMINATED_TAG, state.position_of(state.tag_start))

    def _open_element(self, state: ParserState, start: int, end: int) -> None:
        lexeme = split_start_tag(state.text, start, end)

        if state.current is None:
            if state.document.root is not None:
                raise MalformedInputError(
                    f"Second top-level element <{lexeme.name}> after "
                    f"</{state.document.root.tag}>; only one root element is allowed",
                    state.position_of(state.tag_start),
                    lexeme.name,
                )
            node = XMLNode()
            state.document.root = node
        else:
            node = state.current.create_child()

        node.set_tag(lexeme.name)
        for key, value in lexeme.attributes:
            node.attributes.append(key, value)

        state.current = node
        state.metrics.elements_created += 1
        state.metrics.attributes_parsed += len(lexeme.attributes)

    def _close_element(self, state: ParserState, start: int, end: int) -> None:
        name = split_end_tag(state.text, start, end)
        current = state.current

        if current is None:
            raise UnbalancedTagsError(
                f"End tag </{name}> found but no element is open",
                state.position_of(state.tag_start),
                name,
            )
        if current.tag != name:
            raise UnbalancedTagsError(
                f"End tag </{name}> does not match open element <{current.tag}>",
                state.position_of(state.tag_start),
                name,
            )
        state.current = current.parent

    def _finish(self, state: ParserState) -> None:
        """Check that input ended at document level with a root element."""
        if state.lex_state is not LexState.NORMAL:
            # Buffer ended right after '<' or '</'
            raise MalformedInputError(UNTERMINATED_TAG, state.position_of(state.tag_start))

        self._flush_text(state)

        if state.current is not None:
            unclosed = []
            node: Optional[XMLNode] = state.current
            while node is not None:
                unclosed.append(f"<{node.tag}>")
                node = node.parent
            raise UnbalancedTagsError(
                f"End of input with unclosed element(s): {', '.join(reversed(unclosed))}",
                state.position_of(len(state.text)),
                state.current.tag,
            )
        if state.document.root is None:
            raise MalformedInputError(
                "Input contains no elements", state.position_of(len(state.text))
            )

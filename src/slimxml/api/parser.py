"""Parser API with progressive disclosure.

Level 1 is the module-level functions :func:`parse`, :func:`parse_string`,
:func:`parse_bytes` and :func:`parse_file`. Level 2 is
:class:`SlimXMLParser`, which binds one :class:`ParserConfig` to all of
them. Every entry point returns a :class:`ParseResult`; parse and I/O
failures are reported through it rather than raised.
"""

import time
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from slimxml.api.result import ParseResult
from slimxml.shared.config import ParserConfig
from slimxml.shared.errors import IoFailureError, SlimXMLError, XMLParseError
from slimxml.shared.logging import get_logger
from slimxml.shared.result import DiagnosticSeverity, PerformanceMetrics
from slimxml.tokenization.tokenizer import XMLTokenizer

InputType = Union[str, bytes, Path, BinaryIO, TextIO]

MS_PER_SECOND = 1000


class SlimXMLParser:
    """Parser bound to one configuration.

    Examples:
        >>> parser = SlimXMLParser(ParserConfig.legacy())
        >>> result = parser.parse_string('<a><b>hi</b></a>')
        >>> result.success
        True
        >>> parser.parse_string('<a></b>').error_kind
        'UnbalancedTags'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration; defaults to ParserConfig()
            correlation_id: Fixed correlation ID for every parse; when None
                and tracking is enabled, each parse gets a fresh one
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "parser")

    def _correlation_id(self) -> Optional[str]:
        if self.correlation_id is not None:
            return self.correlation_id
        if self.config.global_.enable_correlation_tracking:
            return uuid.uuid4().hex[:12]
        return None

    def parse(self, input_data: InputType) -> ParseResult:
        """Parse from a string, bytes, Path or file-like object."""
        if isinstance(input_data, (str, bytes, bytearray)):
            return self._parse_content(input_data, source=None)
        if isinstance(input_data, Path):
            return self.parse_file(input_data)
        if hasattr(input_data, "read"):
            return self._parse_file_like(input_data)
        raise TypeError(f"Unsupported input type: {type(input_data).__name__}")

    def parse_string(self, text: str) -> ParseResult:
        """Parse markup held in a string."""
        return self._parse_content(text, source=None)

    def parse_bytes(self, data: bytes) -> ParseResult:
        """Parse single-byte encoded markup."""
        return self._parse_content(data, source=None)

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """Read a whole file into memory and parse it.

        A missing or unreadable file produces a failed result with an
        ``IoFailure`` error.
        """
        path_obj = Path(file_path)
        correlation_id = self._correlation_id()
        logger = self.logger.bind(correlation_id)
        logger.debug("Reading file", extra={"file_path": str(path_obj)})

        try:
            data = path_obj.read_bytes()
        except FileNotFoundError:
            error = IoFailureError("File not found", str(path_obj))
        except IsADirectoryError:
            error = IoFailureError("Path is not a file", str(path_obj))
        except OSError as e:
            error = IoFailureError(f"Cannot read file ({e.strerror or e})", str(path_obj))
        else:
            return self._parse_content(data, source=str(path_obj), correlation_id=correlation_id)

        return self._failure(error, PerformanceMetrics(), correlation_id, str(path_obj))

    def _parse_file_like(self, file_obj: Union[BinaryIO, TextIO]) -> ParseResult:
        source = getattr(file_obj, "name", None)
        source = source if isinstance(source, str) else None
        try:
            content = file_obj.read()
        except OSError as e:
            return self._failure(
                IoFailureError(f"Cannot read input ({e})", source),
                PerformanceMetrics(),
                self._correlation_id(),
                source,
            )
        return self._parse_content(content, source=source)

    def _parse_content(
        self,
        content: Union[str, bytes],
        source: Optional[str],
        correlation_id: Optional[str] = None,
    ) -> ParseResult:
        correlation_id = correlation_id or self._correlation_id()
        logger = self.logger.bind(correlation_id)
        tokenizer = XMLTokenizer(self.config.tokenizer, correlation_id)
        metrics = PerformanceMetrics()
        start_time = time.perf_counter()

        try:
            document = tokenizer.tokenize(content, metrics)
        except XMLParseError as e:
            metrics.processing_time_ms = (time.perf_counter() - start_time) * MS_PER_SECOND
            return self._failure(e, metrics, correlation_id, source)

        metrics.processing_time_ms = (time.perf_counter() - start_time) * MS_PER_SECOND
        logger.debug(
            "Parse completed",
            extra={
                "source": source,
                "element_count": metrics.elements_created,
                "processing_time_ms": metrics.processing_time_ms,
                "characters_per_second": metrics.characters_per_second,
            },
        )
        return ParseResult(
            document=document,
            performance=metrics,
            correlation_id=correlation_id,
            source=source,
        )

    def _failure(
        self,
        error: SlimXMLError,
        metrics: PerformanceMetrics,
        correlation_id: Optional[str],
        source: Optional[str],
    ) -> ParseResult:
        """Report ``error`` on the diagnostic sink and wrap it in a result."""
        position = None
        details = {"error_kind": error.kind}
        if isinstance(error, XMLParseError):
            if error.position is not None:
                position = error.position.to_dict()
            if error.tag is not None:
                details["tag"] = error.tag
        if source is not None:
            details["source"] = source

        self.logger.bind(correlation_id).error(str(error), extra=details)

        result = ParseResult(
            error=error,
            performance=metrics,
            correlation_id=correlation_id,
            source=source,
        )
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            str(error),
            "parser",
            position=position,
            details=details,
        )
        return result


def parse(
    input_data: InputType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse markup from various input sources with automatic type detection.

    Args:
        input_data: Markup as string, bytes, file-like object, or Path
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ParseResult holding the document or the error

    Examples:
        >>> result = parse('<root><item id="1">value</item></root>')
        >>> result.document.root.tag
        'root'
        >>> parse('hello<a></a>').error_kind
        'MalformedInput'
    """
    return SlimXMLParser(config, correlation_id).parse(input_data)


def parse_string(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse markup held in a string."""
    return SlimXMLParser(config, correlation_id).parse_string(text)


def parse_bytes(
    data: bytes,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse single-byte encoded markup; decoding follows ``config.tokenizer.encoding``."""
    return SlimXMLParser(config, correlation_id).parse_bytes(data)


def parse_file(
    file_path: Union[str, Path],
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse a file from disk.

    Examples:
        >>> result = parse_file('missing.xml')
        >>> result.success, result.error_kind
        (False, 'IoFailure')
    """
    return SlimXMLParser(config, correlation_id).parse_file(file_path)

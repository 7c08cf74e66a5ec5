"""Result object returned by every parse entry point."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, cast

from slimxml.shared.errors import SlimXMLError, XMLParseError
from slimxml.shared.result import DiagnosticEntry, DiagnosticSeverity, PerformanceMetrics
from slimxml.tree.node import XMLDocument


@dataclass
class ParseResult:
    """Outcome of one parse: a document on success, one error otherwise.

    A failed result never carries a document; whatever the tokenizer had
    built before the error is discarded.
    """

    document: Optional[XMLDocument] = None
    error: Optional[SlimXMLError] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None
    source: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that exactly one of document and error is set."""
        if (self.document is None) == (self.error is None):
            raise ValueError("ParseResult needs either a document or an error")

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        """Human-readable failure message, None on success."""
        return None if self.error is None else str(self.error)

    @property
    def error_kind(self) -> Optional[str]:
        """Error taxonomy name such as ``UnbalancedTags``, None on success."""
        return None if self.error is None else self.error.kind

    @property
    def element_count(self) -> int:
        return self.document.element_count if self.document else 0

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    def raise_for_error(self) -> XMLDocument:
        """Return the document, or raise the error that ended the parse."""
        if self.error is not None:
            raise self.error
        return cast(XMLDocument, self.document)

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(diag.severity is DiagnosticSeverity.ERROR for diag in self.diagnostics)

    def summary(self) -> Dict[str, Any]:
        """Flat summary used by the CLI report formats."""
        summary: Dict[str, Any] = {
            "source": self.source,
            "success": self.success,
            "element_count": self.element_count,
            "attribute_count": self.document.attribute_count if self.document else 0,
            "max_depth": self.document.max_depth if self.document else 0,
            "processing_time_ms": round(self.processing_time_ms, 3),
        }
        if self.error is not None:
            summary["error_kind"] = self.error_kind
            summary["message"] = self.message
            if isinstance(self.error, XMLParseError) and self.error.position is not None:
                summary["line"] = self.error.position.line
                summary["column"] = self.error.position.column
        return summary

    def to_dict(self) -> Dict[str, Any]:
        """Convert the whole result, tree included, to a dictionary."""
        result = self.summary()
        result["diagnostics"] = [diag.to_dict() for diag in self.diagnostics]
        result["performance"] = self.performance.to_dict()
        if self.document is not None:
            result["document"] = self.document.to_dict()
        return result

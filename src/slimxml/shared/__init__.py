"""Shared utilities for slimxml.

Configuration objects, logging, diagnostics, the error taxonomy and the
whitespace helpers used by every layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    TokenizerConfig,
)
from .errors import (
    AttributeIndexError,
    IoFailureError,
    MalformedInputError,
    ResourceLimitError,
    SlimXMLError,
    SourcePosition,
    TagRedefinitionError,
    UnbalancedTagsError,
    XMLParseError,
)
from .logging import CorrelationLogger, configure_logging, get_logger
from .result import DiagnosticEntry, DiagnosticSeverity, PerformanceMetrics
from .text import is_ascii_space, to_owned_or_none, trim, trim_bounds

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "ParserConfig",
    "TokenizerConfig",
    "AttributeIndexError",
    "IoFailureError",
    "MalformedInputError",
    "ResourceLimitError",
    "SlimXMLError",
    "SourcePosition",
    "TagRedefinitionError",
    "UnbalancedTagsError",
    "XMLParseError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "is_ascii_space",
    "to_owned_or_none",
    "trim",
    "trim_bounds",
]

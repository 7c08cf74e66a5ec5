"""Configuration classes for slimxml.

Configuration objects are plain dataclasses that validate themselves on
construction. :class:`ParserConfig` is frozen so one instance can be shared
by any number of parsers.
"""

import codecs
import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

DEFAULT_MAX_TAG_LENGTH = 256
LEGACY_MAX_TAG_LENGTH = 255
VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_COMPONENTS = ["tokenizer", "global_"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class TokenizerConfig:
    """Limits and input handling for the tokenizer.

    Attributes:
        max_tag_length: Largest number of characters allowed between ``<``
            and ``>`` of one tag (the lexeme buffer bound)
        min_text_length: Trimmed text fragments shorter than this are
            dropped; 1 keeps every non-empty fragment
        stop_at_nul: Treat the first NUL character as end of input
        encoding: Single-byte codec used to turn ``bytes`` input into text
    """

    max_tag_length: int = DEFAULT_MAX_TAG_LENGTH
    min_text_length: int = 1
    stop_at_nul: bool = True
    encoding: str = "latin-1"

    def __post_init__(self) -> None:
        """Validate tokenizer configuration."""
        if self.max_tag_length <= 0:
            raise ValueError("max_tag_length must be > 0")
        if self.min_text_length < 1:
            raise ValueError("min_text_length must be >= 1")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding}") from e


@dataclass(frozen=True)
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "WARNING"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for one parser.

    Thread-safe due to frozen dataclass implementation.
    """

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Type-check the component configurations."""
        if not isinstance(self.tokenizer, TokenizerConfig):
            raise ConfigValidationError(
                "tokenizer must be a TokenizerConfig", field_name="tokenizer"
            )
        if not isinstance(self.global_, GlobalConfig):
            raise ConfigValidationError(
                "global_ must be a GlobalConfig", field_name="global_"
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; component fields use
                ``component__field`` notation

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig().override(tokenizer__max_tag_length=1024)
            >>> config.tokenizer.max_tag_length
            1024
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=list(_COMPONENTS),
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for component in _COMPONENTS:
                if component in nested_overrides:
                    new_fields[component] = replace(
                        getattr(self, component), **nested_overrides.pop(component)
                    )
            new_fields.update(nested_overrides)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "tokenizer": {
                "max_tag_length": self.tokenizer.max_tag_length,
                "min_text_length": self.tokenizer.min_text_length,
                "stop_at_nul": self.tokenizer.stop_at_nul,
                "encoding": self.tokenizer.encoding,
            },
            "global_": {
                "logging_level": self.global_.logging_level,
                "enable_correlation_tracking": self.global_.enable_correlation_tracking,
            },
            "name": self.name,
            "description": self.description,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so typos in configuration files surface
        instead of being ignored.
        """
        known = set(_COMPONENTS) | {"name", "description"}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                suggestions=sorted(known),
            )

        try:
            return cls(
                tokenizer=TokenizerConfig(**data.get("tokenizer", {})),
                global_=GlobalConfig(**data.get("global_", {})),
                name=data.get("name"),
                description=data.get("description"),
            )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default configuration."""
        return cls(name="default")

    @classmethod
    def legacy(cls) -> "ParserConfig":
        """Fixed-buffer limits of the legacy loader.

        Tag spans are capped at 255 characters and trimmed text fragments
        of a single character are dropped.
        """
        return cls(
            tokenizer=TokenizerConfig(
                max_tag_length=LEGACY_MAX_TAG_LENGTH,
                min_text_length=2,
            ),
            name="legacy",
            description="Legacy loader limits: 255-character tags, text under 2 chars dropped",
        )

    @classmethod
    def permissive_limits(cls) -> "ParserConfig":
        """Allow very long tags, e.g. for machine-generated attribute lists."""
        return cls(
            tokenizer=TokenizerConfig(max_tag_length=64 * 1024),
            name="permissive_limits",
            description="64 KiB tag spans",
        )

"""Configuration classes for corpus reading.

This module provides configuration objects for every stage of the reader:
chunked decoding, fragment extraction, document building and segment
enumeration, aggregated by the immutable :class:`ReaderConfig`.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .errors import ConfigValidationError

SEGMENT_ERROR_POLICIES = ("raise", "skip")

_COMPONENTS = ("streaming", "fragments", "document", "corpus")


@dataclass
class StreamingConfig:
    """Configuration for reading and decoding segment bytes."""

    chunk_size: int = 65536
    encoding: str = "utf-8"
    errors: str = "replace"

    def __post_init__(self) -> None:
        """Validate streaming configuration."""
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")
        if self.errors not in ("strict", "replace", "ignore", "backslashreplace"):
            raise ValueError(
                "errors must be 'strict', 'replace', 'ignore' or 'backslashreplace'"
            )


@dataclass
class FragmentConfig:
    """Configuration for top-level fragment extraction."""

    root_tag: str = "REUTERS"

    def __post_init__(self) -> None:
        """Validate fragment configuration."""
        if not self.root_tag or not self.root_tag.replace("-", "").replace("_", "").isalnum():
            raise ValueError("root_tag must be a non-empty tag name")


@dataclass
class DocumentConfig:
    """Attribute names read from the root element of each fragment."""

    root_element: str = "REUTERS"
    id_attribute: str = "NEWID"
    split_attribute: str = "LEWISSPLIT"
    test_marker: str = "TEST"

    def __post_init__(self) -> None:
        """Validate document configuration."""
        if not self.root_element:
            raise ValueError("root_element cannot be empty")
        if not self.id_attribute:
            raise ValueError("id_attribute cannot be empty")
        if not self.split_attribute:
            raise ValueError("split_attribute cannot be empty")
        if not self.test_marker:
            raise ValueError("test_marker cannot be empty")


@dataclass
class CorpusConfig:
    """Location and naming of the segment files."""

    directory: str = "."
    segment_count: int = 22
    segment_pattern: str = "reut2-{index:03d}.sgm"
    on_segment_error: str = "raise"

    def __post_init__(self) -> None:
        """Validate corpus configuration."""
        if self.segment_count < 0:
            raise ValueError("segment_count must be >= 0")
        if "{index" not in self.segment_pattern:
            raise ValueError("segment_pattern must contain an {index} field")
        if self.on_segment_error not in SEGMENT_ERROR_POLICIES:
            raise ValueError(
                f"on_segment_error must be one of {list(SEGMENT_ERROR_POLICIES)}"
            )


@dataclass(frozen=True)
class ReaderConfig:
    """Complete, immutable configuration for a corpus read."""

    streaming: StreamingConfig = field(default_factory=StreamingConfig)
    fragments: FragmentConfig = field(default_factory=FragmentConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)
    corpus: CorpusConfig = field(default_factory=CorpusConfig)

    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Re-run component validation so mutated components are caught."""
        try:
            for name in _COMPONENTS:
                getattr(self, name).__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def for_directory(cls, directory: Any, **kwargs: Any) -> "ReaderConfig":
        """Create a configuration reading segments from ``directory``."""
        return cls().override(corpus__directory=str(directory), **kwargs)

    def override(self, **kwargs: Any) -> "ReaderConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; nested fields use ``component__field``

        Returns:
            New ReaderConfig instance with overrides applied

        Example:
            >>> config = ReaderConfig()
            >>> config.override(streaming__chunk_size=4096).streaming.chunk_size
            4096
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {list(_COMPONENTS)}"],
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        try:
            for component, values in nested.items():
                new_fields[component] = replace(getattr(self, component), **values)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for name in _COMPONENTS:
            component = getattr(self, name)
            result[name] = {
                key: getattr(component, key) for key in component.__dataclass_fields__
            }
        result["correlation_id"] = self.correlation_id
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReaderConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files do not
        silently fall back to defaults.
        """
        component_classes = {
            "streaming": StreamingConfig,
            "fragments": FragmentConfig,
            "document": DocumentConfig,
            "corpus": CorpusConfig,
        }
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_classes:
                target = component_classes[key]
                unknown = set(value) - set(target.__dataclass_fields__)
                if unknown:
                    raise ConfigValidationError(
                        f"Unknown fields for {key}: {sorted(unknown)}", field_name=key
                    )
                try:
                    kwargs[key] = target(**value)
                except ValueError as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key == "correlation_id":
                kwargs[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}", field_name=key
                )
        return cls(**kwargs)

    @classmethod
    def from_json(cls, json_str: str) -> "ReaderConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

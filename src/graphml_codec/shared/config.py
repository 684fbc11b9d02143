"""Configuration classes for GraphML decoding and encoding.

This module provides configuration objects for the decoder and encoder, with
validation on construction, nested overrides and JSON round-tripping.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

from .errors import ConfigValidationError

# libxml2 needs the whole XML declaration inside the first chunk
MIN_CHUNK_SIZE = 256


@dataclass
class DecoderConfig:
    """Configuration for the streaming decoder."""

    chunk_size: int = 65536
    require_namespace: bool = True
    max_depth: int = 256
    collect_metrics: bool = True

    def __post_init__(self) -> None:
        """Validate decoder configuration."""
        if self.chunk_size < MIN_CHUNK_SIZE:
            raise ValueError(f"chunk_size must be >= {MIN_CHUNK_SIZE}")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass
class EncoderConfig:
    """Configuration for the streaming encoder."""

    encoding: Optional[str] = None  # falls back to the declaration, then utf-8
    indent: Optional[str] = None
    write_declaration: bool = True
    collect_metrics: bool = True

    def __post_init__(self) -> None:
        """Validate encoder configuration."""
        if self.encoding is not None and not self.encoding.strip():
            raise ValueError("encoding must be a non-empty string or None")
        if self.indent is not None and self.indent.strip():
            raise ValueError("indent must contain only whitespace")


@dataclass(frozen=True)
class CodecConfig:
    """Combined configuration for a decode/encode round trip.

    Immutable once built; use ``override`` to derive variants.
    """

    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    encoder: EncoderConfig = field(default_factory=EncoderConfig)

    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete codec configuration."""
        try:
            self.decoder.__post_init__()
            self.encoder.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "CodecConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override, nested with ``component__field``

        Returns:
            New CodecConfig instance with overrides applied

        Example:
            >>> config = CodecConfig().override(
            ...     decoder__require_namespace=False,
            ...     encoder__indent="  ",
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in ("decoder", "encoder") and isinstance(value, dict):
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodecConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored so older configuration files keep loading.
        """
        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            field_values: Dict[str, Any] = {}
            for field_name, field_info in target_class.__dataclass_fields__.items():
                if field_name not in data_dict:
                    continue
                value = data_dict[field_name]
                if hasattr(field_info.type, "__dataclass_fields__"):
                    value = _dict_to_dataclass(value, field_info.type)
                field_values[field_name] = value
            return target_class(**field_values)

        try:
            return _dict_to_dataclass(data, cls)
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "CodecConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def strict(cls) -> "CodecConfig":
        """Preset that only accepts namespaced GraphML and writes compactly."""
        return cls(
            decoder=DecoderConfig(require_namespace=True),
            encoder=EncoderConfig(indent=None),
            name="strict",
        )

    @classmethod
    def lenient(cls) -> "CodecConfig":
        """Preset that accepts a bare ``graphml`` root and indents output."""
        return cls(
            decoder=DecoderConfig(require_namespace=False),
            encoder=EncoderConfig(indent="  "),
            name="lenient",
        )

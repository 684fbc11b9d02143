"""Tests for the codec configuration system."""

import json

import pytest

from graphml_codec.shared.config import (
    MIN_CHUNK_SIZE,
    CodecConfig,
    DecoderConfig,
    EncoderConfig,
)
from graphml_codec.shared.errors import ConfigError, ConfigValidationError


class TestDecoderConfig:
    """Test suite for DecoderConfig."""

    def test_default_configuration(self) -> None:
        """Test default decoder configuration values."""
        config = DecoderConfig()

        assert config.chunk_size == 65536
        assert config.require_namespace is True
        assert config.max_depth == 256
        assert config.collect_metrics is True

    def test_validation_failures(self) -> None:
        """Test decoder configuration validation failures."""
        with pytest.raises(ValueError, match="chunk_size must be >= 256"):
            DecoderConfig(chunk_size=MIN_CHUNK_SIZE - 1)

        with pytest.raises(ValueError, match="max_depth must be > 0"):
            DecoderConfig(max_depth=0)

    def test_minimum_chunk_size_accepted(self) -> None:
        """Test that the minimum chunk size is valid."""
        assert DecoderConfig(chunk_size=MIN_CHUNK_SIZE).chunk_size == MIN_CHUNK_SIZE


class TestEncoderConfig:
    """Test suite for EncoderConfig."""

    def test_default_configuration(self) -> None:
        """Test default encoder configuration values."""
        config = EncoderConfig()

        assert config.encoding is None
        assert config.indent is None
        assert config.write_declaration is True
        assert config.collect_metrics is True

    def test_validation_failures(self) -> None:
        """Test encoder configuration validation failures."""
        with pytest.raises(ValueError, match="encoding must be a non-empty string"):
            EncoderConfig(encoding="  ")

        with pytest.raises(ValueError, match="indent must contain only whitespace"):
            EncoderConfig(indent="--")

    def test_whitespace_indent_accepted(self) -> None:
        """Test that tabs and spaces are accepted as indentation."""
        assert EncoderConfig(indent="\t").indent == "\t"
        assert EncoderConfig(indent="").indent == ""


class TestCodecConfig:
    """Test suite for CodecConfig."""

    def test_default_configuration(self) -> None:
        """Test default codec configuration."""
        config = CodecConfig()

        assert config.decoder == DecoderConfig()
        assert config.encoder == EncoderConfig()
        assert config.name is None

    def test_config_is_immutable(self) -> None:
        """Test that the combined configuration cannot be modified."""
        config = CodecConfig()

        with pytest.raises(AttributeError):
            config.name = "changed"  # type: ignore[misc]

    def test_override_nested_fields(self) -> None:
        """Test overriding nested component fields."""
        config = CodecConfig()
        modified = config.override(
            decoder__require_namespace=False,
            encoder__indent="  ",
            name="custom",
        )

        assert modified.decoder.require_namespace is False
        assert modified.encoder.indent == "  "
        assert modified.name == "custom"
        # Original is untouched
        assert config.decoder.require_namespace is True
        assert config.encoder.indent is None

    def test_override_invalid_value(self) -> None:
        """Test that invalid overrides raise ConfigValidationError."""
        with pytest.raises(ConfigValidationError, match="max_depth must be > 0") as exc:
            CodecConfig().override(decoder__max_depth=-1)

        assert exc.value.field_name == "decoder"
        assert isinstance(exc.value, ConfigError)

    def test_override_unknown_field(self) -> None:
        """Test that unknown nested fields raise ConfigValidationError."""
        with pytest.raises(ConfigValidationError):
            CodecConfig().override(decoder__no_such_field=1)

    def test_dict_round_trip(self) -> None:
        """Test conversion to and from a dictionary."""
        config = CodecConfig.lenient()
        data = config.to_dict()

        assert data["decoder"]["require_namespace"] is False
        assert data["encoder"]["indent"] == "  "
        assert data["name"] == "lenient"
        assert CodecConfig.from_dict(data) == config

    def test_json_round_trip(self) -> None:
        """Test conversion to and from JSON."""
        config = CodecConfig().override(decoder__chunk_size=1024)
        json_str = config.to_json()

        assert json.loads(json_str)["decoder"]["chunk_size"] == 1024
        assert CodecConfig.from_json(json_str) == config

    def test_from_dict_ignores_unknown_keys(self) -> None:
        """Test that unknown keys in stored configurations are ignored."""
        config = CodecConfig.from_dict(
            {"decoder": {"max_depth": 4, "legacy_option": True}, "extra": 1}
        )

        assert config.decoder.max_depth == 4

    def test_from_dict_invalid_value(self) -> None:
        """Test that invalid stored values raise ConfigValidationError."""
        with pytest.raises(ConfigValidationError, match="chunk_size"):
            CodecConfig.from_dict({"decoder": {"chunk_size": 1}})

    def test_presets(self) -> None:
        """Test the strict and lenient presets."""
        strict = CodecConfig.strict()
        lenient = CodecConfig.lenient()

        assert strict.name == "strict"
        assert strict.decoder.require_namespace is True
        assert strict.encoder.indent is None

        assert lenient.name == "lenient"
        assert lenient.decoder.require_namespace is False
        assert lenient.encoder.indent == "  "

"""Shared utilities for GraphML encoding and decoding.

This module provides configuration objects, the exception hierarchy, metrics
and correlation-aware logging used across all codec layers.
"""

from .config import (
    CodecConfig,
    DecoderConfig,
    EncoderConfig,
)
from .errors import (
    ConfigError,
    ConfigValidationError,
    DuplicateIDError,
    DuplicateKeyError,
    GraphMLError,
    MalformedRootError,
    PrematureEndError,
    TokenStreamError,
    UnexpectedElementError,
    UnexpectedTokenError,
    UnknownAttributeError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import CodecMetrics

__all__ = [
    "CodecConfig",
    "DecoderConfig",
    "EncoderConfig",
    "ConfigError",
    "ConfigValidationError",
    "DuplicateIDError",
    "DuplicateKeyError",
    "GraphMLError",
    "MalformedRootError",
    "PrematureEndError",
    "TokenStreamError",
    "UnexpectedElementError",
    "UnexpectedTokenError",
    "UnknownAttributeError",
    "CorrelationLogger",
    "get_logger",
    "CodecMetrics",
]

"""Shared utilities for corpus reading.

This module provides configuration objects, error types, diagnostics and
logging helpers used across all stages of the reader.
"""

from .config import (
    CorpusConfig,
    DocumentConfig,
    FragmentConfig,
    ReaderConfig,
    StreamingConfig,
)
from .errors import (
    BuilderStateError,
    ConfigError,
    ConfigValidationError,
    CorpusError,
    SegmentReadError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ReadStatistics,
)

__all__ = [
    "CorpusConfig",
    "DocumentConfig",
    "FragmentConfig",
    "ReaderConfig",
    "StreamingConfig",
    "BuilderStateError",
    "ConfigError",
    "ConfigValidationError",
    "CorpusError",
    "SegmentReadError",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ReadStatistics",
]

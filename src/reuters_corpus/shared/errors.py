"""Exception hierarchy for the corpus reader.

Field-level problems (bad identifiers, unparsable dates) never surface as
exceptions; only structural and I/O failures do.
"""

from pathlib import Path
from typing import List, Optional, Union


class CorpusError(Exception):
    """Base exception for all corpus reading errors."""


class SegmentReadError(CorpusError):
    """Raised when a segment file cannot be opened or read."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None):
        message = f"Failed to read segment {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.path = Path(path)
        self.cause = cause


class BuilderStateError(CorpusError):
    """Raised when a DocumentBuilder is used after it has been built."""


class ConfigError(CorpusError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []

"""Diagnostics and read statistics for corpus reading."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()      # Segment-level failure that was skipped
    CRITICAL = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    segment: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "segment": self.segment,
            "details": self.details,
        }


@dataclass
class ReadStatistics:
    """Counters accumulated while a corpus sequence is consumed.

    The counters only cover what the consumer has actually pulled; stopping
    iteration early leaves them at the point reached.
    """

    segments_read: int = 0
    segments_failed: int = 0
    fragments_extracted: int = 0
    documents_built: int = 0
    invalid_documents: int = 0
    bytes_read: int = 0
    dropped_characters: int = 0
    processing_time_ms: float = 0.0
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)

    @property
    def documents_per_second(self) -> float:
        """Calculate documents built per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.documents_built * 1000.0) / self.processing_time_ms

    @property
    def has_errors(self) -> bool:
        """Check whether any segment failed."""
        return any(
            d.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for d in self.diagnostics
        )

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        segment: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Record a diagnostic entry."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                segment=segment,
                details=details,
                correlation_id=correlation_id,
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to a dictionary."""
        return {
            "segments_read": self.segments_read,
            "segments_failed": self.segments_failed,
            "fragments_extracted": self.fragments_extracted,
            "documents_built": self.documents_built,
            "invalid_documents": self.invalid_documents,
            "bytes_read": self.bytes_read,
            "dropped_characters": self.dropped_characters,
            "processing_time_ms": round(self.processing_time_ms, 3),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }

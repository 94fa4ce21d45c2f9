# eonsub_core/models/results.py
"""
Result types for subtitle parsing and loading.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .enums import ErrorKind


@dataclass
class ParseResult:
    """Outcome of a single parser run."""

    success: bool = False
    parsed: int = 0
    skipped: int = 0
    detected_format: str = ""
    detected_encoding: str = ""
    error_message: str = ""
    error_kind: ErrorKind | None = None

    def fail(self, kind: ErrorKind, message: str) -> ParseResult:
        """Mark this result as failed and return it."""
        self.success = False
        self.error_kind = kind
        self.error_message = message
        return self

    def summary(self) -> str:
        if self.success:
            return f"Successfully parsed {self.parsed} entries ({self.skipped} skipped)"
        return f"Parsing failed: {self.error_message}"


@dataclass
class LoadResult:
    """Outcome of an engine load (file or in-memory content)."""

    success: bool = False
    source: str = ""
    error_message: str = ""
    error_kind: ErrorKind | None = None
    detected_format: str = ""
    detected_encoding: str = ""
    loaded_entries: int = 0
    total_duration: int = 0
    track_index: int = -1

    @classmethod
    def failed(cls, source: str, kind: ErrorKind, message: str) -> LoadResult:
        """Create a failed result."""
        return cls(success=False, source=source, error_kind=kind, error_message=message)

    def summary(self) -> str:
        name = Path(self.source).name if self.source else self.source
        if self.success:
            return (
                f"Loaded {self.loaded_entries} entries from {name} "
                f"({self.detected_format}, {self.detected_encoding})"
            )
        return f"Failed to load {name}: {self.error_message}"

# eonsub_core/subtitles/errors.py
# -*- coding: utf-8 -*-
"""
Exceptions raised inside the subtitle subsystem.

Guards raise; parsers and the engine turn these into ParseResult/LoadResult
so public engine calls fail without raising.
"""
from __future__ import annotations

from ..models.enums import ErrorKind


class SubtitleError(Exception):
    """Raised when input cannot be turned into a subtitle track."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class LoadCancelled(SubtitleError):
    """Raised when a background load is cancelled between stages."""

    def __init__(self, message: str = "Load cancelled"):
        super().__init__(ErrorKind.CANCELLED, message)


class TimestampError(ValueError):
    """Raised for timestamps that do not match their format or are out of range."""
    pass

# eonsub_core/subtitles/parsers/base.py
# -*- coding: utf-8 -*-
"""
Parser base class.

A parser advertises a name and a set of file extensions and turns decoded
text into a SubtitleTrack. Parsers never raise for bad input: every failure
is reported through ParseResult.error_kind/error_message.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from ...models.enums import ErrorKind
from ...models.results import ParseResult
from ...models.settings import SubtitleSettings
from ..errors import SubtitleError
from ..guard import InputGuard, encode_text
from ..track import SubtitleTrack

logger = logging.getLogger(__name__)


class SubtitleParser(ABC):
    """
    Base class for subtitle format parsers.

    Subclasses set ``name`` and ``extensions`` and implement
    can_parse_content() and _parse_text().
    """

    # Format tag written to ParseResult.detected_format and SubtitleTrack.format
    name: str = ''

    # Lowercase extensions without the leading dot
    extensions: frozenset[str] = frozenset()

    def __init__(self, settings: SubtitleSettings | None = None, guard: InputGuard | None = None):
        self.settings = settings or SubtitleSettings()
        self.guard = guard or InputGuard(self.settings)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    @property
    def max_file_size(self) -> int:
        return self.settings.max_file_size

    @property
    def max_entries(self) -> int:
        return self.settings.max_entries

    # ------------------------------------------------------------------
    # Capability checks
    # ------------------------------------------------------------------

    def handles_extension(self, extension: str) -> bool:
        return extension.lower().lstrip('.') in self.extensions

    def can_parse(self, path: Path | str) -> bool:
        """Extension matches and the file content passes the structural test."""
        path = Path(path)
        if not self.handles_extension(path.suffix):
            return False
        try:
            text, _encoding = self._read_text(path)
        except SubtitleError:
            return False
        return self.can_parse_content(text)

    @abstractmethod
    def can_parse_content(self, text: str) -> bool:
        """Structural test on decoded text."""
        pass

    def validate_file(self, path: Path | str) -> bool:
        """File exists, fits the size limit, decodes and passes the content scan."""
        try:
            self.guard.check_file(path, self.extensions)
            text, _encoding = self._read_text(Path(path))
            self.guard.scan(text)
        except SubtitleError as e:
            logger.warning("Subtitle file validation failed for %s: %s", path, e)
            return False
        return True

    def validate_content(self, text: str) -> bool:
        try:
            self._check_content(text)
        except SubtitleError as e:
            logger.warning("Subtitle content validation failed: %s", e)
            return False
        return True

    def detect_encoding(self, path: Path | str) -> str:
        """Encoding label for a file; UTF-8 when it cannot be read."""
        try:
            raw = self.guard.read_file(path)
        except SubtitleError:
            return "UTF-8"
        return self.guard.detect_encoding(raw)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse_file(self, path: Path | str) -> tuple[SubtitleTrack, ParseResult]:
        """Read, decode and parse a file. The track title falls back to the file stem."""
        path = Path(path)
        try:
            text, encoding = self._read_text(path)
        except SubtitleError as e:
            result = ParseResult(detected_format=self.name)
            return SubtitleTrack(format=self.name), result.fail(e.kind, e.message)

        track, result = self.parse_content(text, encoding=encoding)
        if result.success and not track.title:
            track.title = path.stem
        return track, result

    def parse_content(self, text: str, encoding: str = "UTF-8") -> tuple[SubtitleTrack, ParseResult]:
        """
        Parse decoded text.

        Returns:
            (track, result). On failure the track is empty.
        """
        result = ParseResult(detected_format=self.name, detected_encoding=encoding)
        try:
            self._check_content(text)
            if not self.can_parse_content(text):
                raise SubtitleError(ErrorKind.STRUCTURE_INVALID, f"Invalid {self.name} format structure")
            track = SubtitleTrack(format=self.name, encoding=encoding)
            self._parse_text(text, track, result)
        except SubtitleError as e:
            return SubtitleTrack(format=self.name, encoding=encoding), result.fail(e.kind, e.message)

        track.sort_by_time()
        removed = track.validate()
        if removed:
            result.parsed -= removed
            result.skipped += removed

        if result.parsed <= 0:
            result.fail(ErrorKind.EMPTY_RESULT, "No valid subtitle entries found")
            return SubtitleTrack(format=self.name, encoding=encoding), result

        result.success = True
        logger.debug("%s parsing completed: %s", self.name, result.summary())
        return track, result

    @abstractmethod
    def _parse_text(self, text: str, track: SubtitleTrack, result: ParseResult) -> None:
        """Fill track with entries, counting parsed/skipped on result."""
        pass

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_text(self, path: Path) -> tuple[str, str]:
        raw = self.guard.read_file(path)
        return self.guard.decode(raw)

    def _check_content(self, text: str) -> None:
        if not text.strip():
            raise SubtitleError(ErrorKind.EMPTY_RESULT, "Subtitle content is empty")
        if len(encode_text(text)) > self.max_file_size:
            raise SubtitleError(
                ErrorKind.TOO_LARGE,
                f"Subtitle content too large (limit {self.max_file_size} bytes)",
            )
        self.guard.scan(text)

    def _entry_limit_reached(self, result: ParseResult, remaining: int) -> bool:
        """
        True once max_entries entries were parsed.

        The blocks that were not reached are counted as skipped.
        """
        if result.parsed < self.max_entries:
            return False
        logger.warning("Reached maximum entries limit: %d", self.max_entries)
        result.skipped += remaining
        return True

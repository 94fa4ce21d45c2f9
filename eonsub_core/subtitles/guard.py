# eonsub_core/subtitles/guard.py
# -*- coding: utf-8 -*-
"""
Input checks applied before and after parsing.

Order for a file load:
    check_file -> read_file -> decode -> scan -> (parse) -> is_safe_text

Each check raises SubtitleError with a typed ErrorKind. Callers that must
not raise (parsers, the engine) convert the error into a result object.
"""
from __future__ import annotations

import codecs
import logging
import re
from pathlib import Path
from typing import Callable, Iterable

from ..models.enums import ErrorKind
from ..models.settings import SubtitleSettings
from .errors import SubtitleError

logger = logging.getLogger(__name__)

FileReader = Callable[[Path], bytes]

# UTF-32 BOMs first: the UTF-32LE BOM starts with the UTF-16LE BOM
_BOMS: tuple[tuple[bytes, str, str], ...] = (
    (codecs.BOM_UTF32_LE, "UTF-32LE", "utf-32-le"),
    (codecs.BOM_UTF32_BE, "UTF-32BE", "utf-32-be"),
    (codecs.BOM_UTF8, "UTF-8", "utf-8"),
    (codecs.BOM_UTF16_LE, "UTF-16LE", "utf-16-le"),
    (codecs.BOM_UTF16_BE, "UTF-16BE", "utf-16-be"),
)

_EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)
_TAG_SPAN_RE = re.compile(r"<[^>]*>")
_CONTROL_RE = re.compile(r"[\x01-\x08\x0b\x0c\x0e-\x1f\x7f]")


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def encode_text(text: str) -> bytes:
    """UTF-8 bytes of text; lone surrogates raise DecodeError."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SubtitleError(ErrorKind.DECODE_ERROR, f"Content is not valid Unicode: {e.reason}") from e


def _default_reader(path: Path) -> bytes:
    return Path(path).read_bytes()


class InputGuard:
    """
    Size, encoding and content checks for subtitle input.

    Args:
        settings: Limits and pattern sets
        reader: Callable returning the raw bytes of a path
    """

    def __init__(self, settings: SubtitleSettings | None = None, reader: FileReader | None = None):
        self.settings = settings or SubtitleSettings()
        self.reader = reader or _default_reader

    # ------------------------------------------------------------------
    # File level
    # ------------------------------------------------------------------

    def check_file(self, path: Path | str, supported_extensions: Iterable[str] | None = None) -> None:
        """
        Check existence, size and extension without reading content.

        Raises:
            SubtitleError: NotFound, TooLarge or UnsupportedFormat
        """
        path = Path(path)
        if not path.is_file():
            raise SubtitleError(ErrorKind.NOT_FOUND, f"File not found: {path}")

        size = path.stat().st_size
        if size > self.settings.max_file_size:
            raise SubtitleError(
                ErrorKind.TOO_LARGE,
                f"File too large: {size} bytes (limit {self.settings.max_file_size})",
            )

        if supported_extensions is not None:
            extension = path.suffix.lower().lstrip(".")
            allowed = {e.lower().lstrip(".") for e in supported_extensions}
            if extension not in allowed:
                raise SubtitleError(
                    ErrorKind.UNSUPPORTED_FORMAT,
                    f"Unsupported subtitle extension: {path.suffix or '(none)'}",
                )

    def read_file(self, path: Path | str) -> bytes:
        """
        Read raw bytes through the configured reader.

        Raises:
            SubtitleError: NotFound when the reader fails, TooLarge on size
        """
        try:
            raw = self.reader(Path(path))
        except OSError as e:
            raise SubtitleError(ErrorKind.NOT_FOUND, f"Cannot read {path}: {e}") from e
        self.check_size(raw)
        return raw

    def check_size(self, raw: bytes) -> None:
        if len(raw) > self.settings.max_file_size:
            raise SubtitleError(
                ErrorKind.TOO_LARGE,
                f"Content too large: {len(raw)} bytes (limit {self.settings.max_file_size})",
            )

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    @staticmethod
    def detect_encoding(raw: bytes) -> str:
        """Return the encoding label for raw bytes; BOM sniff, else UTF-8."""
        for bom, label, _codec in _BOMS:
            if raw.startswith(bom):
                return label
        return "UTF-8"

    def decode(self, raw: bytes) -> tuple[str, str]:
        """
        Decode raw bytes to text with normalized newlines.

        Returns:
            (text, encoding label)

        Raises:
            SubtitleError: DecodeError
        """
        for bom, label, codec in _BOMS:
            if raw.startswith(bom):
                body = raw[len(bom):]
                break
        else:
            label, codec, body = "UTF-8", "utf-8", raw

        try:
            text = body.decode(codec)
        except UnicodeDecodeError as e:
            raise SubtitleError(ErrorKind.DECODE_ERROR, f"Cannot decode content as {label}: {e}") from e

        return normalize_newlines(text), label

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def _find_denied(self, text: str) -> str | None:
        lowered = text.lower()
        for pattern in self.settings.denylist_patterns:
            if pattern in lowered:
                return pattern
        match = _EVENT_HANDLER_RE.search(text)
        if match:
            return match.group(0)
        return None

    def scan(self, text: str) -> None:
        """
        Reject denylisted patterns and excessive tag-like spans.

        Raises:
            SubtitleError: SecurityRejected
        """
        denied = self._find_denied(text)
        if denied is not None:
            logger.warning("Suspicious subtitle content detected: %r", denied)
            raise SubtitleError(ErrorKind.SECURITY_REJECTED, f"Suspicious content detected: {denied!r}")

        limit = self.settings.max_tag_spans
        for count, _match in enumerate(_TAG_SPAN_RE.finditer(text), start=1):
            if count > limit:
                logger.warning("Too many tag-like spans in subtitle content (limit %d)", limit)
                raise SubtitleError(
                    ErrorKind.SECURITY_REJECTED,
                    f"Too many tag-like spans (limit {limit})",
                )

    def is_safe_text(self, text: str) -> bool:
        """Per-entry check: no denylisted pattern and within the length limit."""
        if len(text) > self.settings.max_text_length:
            return False
        return self._find_denied(text) is None

    @staticmethod
    def sanitize(text: str) -> str:
        """Drop NUL and replace other control characters (except \\n\\r\\t) with a space."""
        return _CONTROL_RE.sub(" ", text.replace("\x00", ""))

    def is_allowed_tag(self, name: str) -> bool:
        return name.lower() in self.settings.allowed_tags

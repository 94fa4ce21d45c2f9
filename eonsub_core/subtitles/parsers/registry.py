# eonsub_core/subtitles/parsers/registry.py
"""
Ordered parser registry.

Resolution walks parsers in registration order. The process-wide default
registry is built once with SRT then ASS and is read-only afterwards.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from ...models.settings import SubtitleSettings
from .ass_parser import AssParser
from .base import SubtitleParser
from .srt_parser import SrtParser

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Ordered collection of parser instances."""

    def __init__(self, parsers: list[SubtitleParser] | None = None):
        self._parsers: list[SubtitleParser] = []
        for parser in parsers or []:
            self.register(parser)

    @classmethod
    def with_defaults(cls, settings: SubtitleSettings | None = None) -> ParserRegistry:
        """Registry holding SRT then ASS parsers sharing the given settings."""
        return cls([SrtParser(settings), AssParser(settings)])

    def register(self, parser: SubtitleParser) -> None:
        self._parsers.append(parser)
        logger.debug("Registered subtitle parser %s for %s", parser.name, sorted(parser.extensions))

    @property
    def parsers(self) -> tuple[SubtitleParser, ...]:
        return tuple(self._parsers)

    def for_extension(self, extension: str) -> SubtitleParser | None:
        """First parser that handles the extension (case-insensitive, leading dot optional)."""
        for parser in self._parsers:
            if parser.handles_extension(extension):
                return parser
        return None

    def for_path(self, path: Path | str) -> SubtitleParser | None:
        """
        Parser for a file on disk.

        The extension match wins if that parser accepts the file; otherwise
        the first parser whose can_parse() accepts it.
        """
        path = Path(path)
        parser = self.for_extension(path.suffix)
        if parser is not None and parser.can_parse(path):
            return parser
        for candidate in self._parsers:
            if candidate is not parser and candidate.can_parse(path):
                return candidate
        return None

    def for_content(self, text: str) -> SubtitleParser | None:
        for parser in self._parsers:
            if parser.can_parse_content(text):
                return parser
        return None

    def supported_extensions(self) -> list[str]:
        """All extensions in registration order, without duplicates."""
        seen: list[str] = []
        for parser in self._parsers:
            for extension in sorted(parser.extensions):
                if extension not in seen:
                    seen.append(extension)
        return seen


# -- Process-wide default --

_default_registry: ParserRegistry | None = None
_default_registry_lock = threading.Lock()


def default_registry() -> ParserRegistry:
    """Return the shared registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = ParserRegistry.with_defaults()
    return _default_registry

# eonsub_core/subtitles/engine.py
# -*- coding: utf-8 -*-
"""
Subtitle engine: owns loaded tracks and publishes the active subtitle set.

The engine is driven from one thread (the clock driver). Loading is split
in two halves so the slow part can run elsewhere:

    prepared = engine.prepare_file(path)   # pure, any thread
    result = engine.publish(prepared)      # driver thread, mutates state

load_file()/load_content() do both halves in one call.

Position updates:
    engine.on_position(t_ms) looks up active_track.active_at(t_ms + offset)
    and emits ActiveSubtitlesChanged only when the set differs from the
    last one emitted (compared by start time and text per index).
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from ..models.enums import ErrorKind
from ..models.results import LoadResult, ParseResult
from ..models.settings import SubtitleSettings
from .discovery import discover_subtitles
from .entry import SubtitleEntry
from .errors import LoadCancelled, SubtitleError
from .events import (
    ActiveSubtitlesChanged,
    ActiveTrackChanged,
    EnabledChanged,
    EngineEvent,
    EventCallback,
    LoadFailed,
    TimingOffsetChanged,
    TrackLoaded,
)
from .guard import FileReader, InputGuard, encode_text, normalize_newlines
from .parsers.base import SubtitleParser
from .parsers.registry import ParserRegistry, default_registry
from .track import SubtitleTrack
from .utils.timestamps import format_display_timestamp

logger = logging.getLogger(__name__)

CONTENT_TITLE = "Loaded Content"
CONTENT_LABEL = "(content)"


@dataclass
class PreparedLoad:
    """
    Result of the pure half of a load.

    ``track`` is None when ``result`` is a failure. ``committed`` is set once
    the track has been published.
    """

    source: str
    track: SubtitleTrack | None
    result: LoadResult
    committed: bool = False


def _check_cancel(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise LoadCancelled()


class SubtitleEngine:
    """
    Owns subtitle tracks, the active selection and the timing offset.

    Args:
        settings: Limits and pattern sets (defaults when None)
        registry: Parser registry (process-wide default when None, or a
            private one built from ``settings`` when settings are given)
        file_reader: Callable returning a file's bytes
        event_callback: Optional first subscriber
    """

    def __init__(
        self,
        settings: SubtitleSettings | None = None,
        registry: ParserRegistry | None = None,
        file_reader: FileReader | None = None,
        event_callback: EventCallback | None = None,
    ):
        self.settings = settings or SubtitleSettings()
        if registry is None:
            registry = default_registry() if settings is None else ParserRegistry.with_defaults(settings)
        self.registry = registry
        self.guard = InputGuard(self.settings, reader=file_reader)

        self._tracks: list[SubtitleTrack] = []
        self._active_index = -1
        self._enabled = True
        self._timing_offset = 0
        self._position = 0

        # Last emitted active set: entries plus their (start_ms, text) keys
        self._last_active: tuple[SubtitleEntry, ...] = ()
        self._last_keys: tuple[tuple[int, str], ...] = ()

        self._subscribers: list[EventCallback] = []
        if event_callback is not None:
            self.subscribe(event_callback)

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, callback: EventCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: EventCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _emit(self, event: EngineEvent) -> None:
        for callback in list(self._subscribers):
            callback(event)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def tracks(self) -> tuple[SubtitleTrack, ...]:
        return tuple(self._tracks)

    @property
    def track_count(self) -> int:
        return len(self._tracks)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_track(self) -> SubtitleTrack | None:
        return self.track_at(self._active_index)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def timing_offset(self) -> int:
        return self._timing_offset

    @property
    def position(self) -> int:
        return self._position

    @property
    def last_active(self) -> tuple[SubtitleEntry, ...]:
        """Active set from the most recent emission."""
        return self._last_active

    def track_at(self, index: int) -> SubtitleTrack | None:
        if 0 <= index < len(self._tracks):
            return self._tracks[index]
        return None

    def supported_extensions(self) -> list[str]:
        return self.registry.supported_extensions()

    def validate_file(self, path: Path | str) -> bool:
        """True when a parser accepts the file and it passes every guard check."""
        path = Path(path)
        try:
            self.guard.check_file(path, self.supported_extensions())
            text, _encoding = self.guard.decode(self.guard.read_file(path))
            self.guard.scan(text)
        except SubtitleError as e:
            logger.debug("Subtitle file %s rejected: %s", path, e)
            return False
        parser = self._resolve_parser(text, path.suffix)
        return parser is not None and parser.can_parse_content(text)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _resolve_parser(self, text: str, extension: str = "") -> SubtitleParser | None:
        """
        Extension match first, kept if it accepts the content; otherwise the
        first parser whose structural test accepts the content.
        """
        parser = self.registry.for_extension(extension) if extension else None
        if parser is not None and parser.can_parse_content(text):
            return parser
        return self.registry.for_content(text) or parser

    def _resolve_hint(self, format_hint: str) -> SubtitleParser | None:
        hint = format_hint.strip().lower().lstrip('.')
        for parser in self.registry.parsers:
            if parser.name.lower() == hint:
                return parser
        return self.registry.for_extension(hint)

    def _scan_entries(self, track: SubtitleTrack) -> None:
        for entry in track:
            if not self.guard.is_safe_text(entry.text):
                raise SubtitleError(
                    ErrorKind.SECURITY_REJECTED,
                    f"Unsafe subtitle text at {format_display_timestamp(entry.start_ms)}",
                )

    def _parse(
        self,
        parser: SubtitleParser,
        text: str,
        encoding: str,
        cancel_event: threading.Event | None,
    ) -> tuple[SubtitleTrack, ParseResult]:
        track, parse_result = parser.parse_content(text, encoding=encoding)
        _check_cancel(cancel_event)
        if not parse_result.success:
            raise SubtitleError(
                parse_result.error_kind or ErrorKind.STRUCTURE_INVALID,
                parse_result.error_message or "Parsing failed",
            )
        self._scan_entries(track)
        return track, parse_result

    @staticmethod
    def _prepared(source: str, track: SubtitleTrack, parse_result: ParseResult) -> PreparedLoad:
        result = LoadResult(
            success=True,
            source=source,
            detected_format=parse_result.detected_format,
            detected_encoding=parse_result.detected_encoding,
            loaded_entries=len(track),
            total_duration=track.total_duration(),
        )
        return PreparedLoad(source=source, track=track, result=result)

    def prepare_file(self, path: Path | str, cancel_event: threading.Event | None = None) -> PreparedLoad:
        """
        Check, read, decode, parse and scan a file without touching engine state.

        Raises:
            LoadCancelled: cancel_event was set between stages
        """
        path = Path(path)
        source = str(path)
        try:
            self.guard.check_file(path, self.supported_extensions())
            _check_cancel(cancel_event)
            raw = self.guard.read_file(path)
            text, encoding = self.guard.decode(raw)
            _check_cancel(cancel_event)

            parser = self._resolve_parser(text, path.suffix)
            if parser is None:
                raise SubtitleError(ErrorKind.UNSUPPORTED_FORMAT, f"No parser accepts {path.name}")

            track, parse_result = self._parse(parser, text, encoding, cancel_event)
        except LoadCancelled:
            raise
        except SubtitleError as e:
            return PreparedLoad(source, None, LoadResult.failed(source, e.kind, e.message))

        if not track.title:
            track.title = path.stem
        return self._prepared(source, track, parse_result)

    def prepare_content(
        self,
        text: str,
        format_hint: str = "",
        label: str = CONTENT_LABEL,
        cancel_event: threading.Event | None = None,
    ) -> PreparedLoad:
        """Parse and scan in-memory content without touching engine state."""
        try:
            self.guard.check_size(encode_text(text))
            text = normalize_newlines(text.lstrip('\ufeff'))

            parser = self._resolve_hint(format_hint) if format_hint else None
            if parser is None:
                parser = self.registry.for_content(text)
            if parser is None:
                raise SubtitleError(ErrorKind.UNSUPPORTED_FORMAT, "No parser accepts the content")
            _check_cancel(cancel_event)

            track, parse_result = self._parse(parser, text, "UTF-8", cancel_event)
        except LoadCancelled:
            raise
        except SubtitleError as e:
            return PreparedLoad(label, None, LoadResult.failed(label, e.kind, e.message))

        if not track.title:
            track.title = CONTENT_TITLE
        return self._prepared(label, track, parse_result)

    def publish(self, prepared: PreparedLoad) -> LoadResult:
        """
        Commit a prepared load. Must run on the driver thread.

        Failures emit LoadFailed and leave the track list untouched.
        """
        result = prepared.result
        if prepared.committed:
            logger.warning("Load from %s was already published", prepared.source)
            return result

        if not result.success or prepared.track is None:
            logger.warning("Failed to load subtitles from %s: %s", prepared.source, result.error_message)
            self._emit(LoadFailed(prepared.source, result.error_message, result.error_kind))
            return result

        self._tracks.append(prepared.track)
        prepared.committed = True
        result.track_index = len(self._tracks) - 1
        logger.info("Subtitle track loaded: %s", result.summary())
        self._emit(TrackLoaded(result.track_index, prepared.track))

        if self._active_index == -1:
            self.set_active(result.track_index)
        return result

    def load_file(self, path: Path | str) -> LoadResult:
        return self.publish(self.prepare_file(path))

    def load_content(self, text: str, format_hint: str = "", label: str = CONTENT_LABEL) -> LoadResult:
        return self.publish(self.prepare_content(text, format_hint=format_hint, label=label))

    def clear(self) -> None:
        """Drop all tracks and emit an empty active set."""
        self._tracks.clear()
        if self._active_index != -1:
            self._active_index = -1
            self._emit(ActiveTrackChanged(-1))
        self._emit_active(())

    # ------------------------------------------------------------------
    # Selection and timing
    # ------------------------------------------------------------------

    def set_active(self, index: int) -> bool:
        """Select a track by index; -1 deselects. Out-of-range indices are refused."""
        if not -1 <= index < len(self._tracks):
            logger.warning("Invalid subtitle track index: %d", index)
            return False
        if index != self._active_index:
            self._active_index = index
            self._emit(ActiveTrackChanged(index))
            self._refresh()
        return True

    def set_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self._enabled:
            return
        self._enabled = enabled
        self._emit(EnabledChanged(enabled))
        if enabled:
            self._refresh()
        else:
            self._emit_active(())

    def set_timing_offset(self, offset_ms: int) -> None:
        """Non-destructive offset added to the position before lookup."""
        offset_ms = int(offset_ms)
        if offset_ms == self._timing_offset:
            return
        self._timing_offset = offset_ms
        self._emit(TimingOffsetChanged(offset_ms))
        self._refresh()

    def shift_active(self, delta_ms: int) -> bool:
        """Shift every entry of the active track in place."""
        track = self.active_track
        if track is None:
            return False
        track.shift(int(delta_ms))
        self._refresh()
        return True

    def scale_active(self, factor: float) -> bool:
        """Scale every time of the active track in place; factor must be positive."""
        track = self.active_track
        if track is None:
            return False
        try:
            track.scale(factor)
        except ValueError as e:
            logger.warning("Cannot scale subtitle track: %s", e)
            return False
        self._refresh()
        return True

    # ------------------------------------------------------------------
    # Position loop
    # ------------------------------------------------------------------

    def active_subtitles(self, time_ms: int) -> list[SubtitleEntry]:
        """Entries shown at time_ms with the current selection, offset and enabled flag."""
        track = self.active_track
        if not self._enabled or track is None:
            return []
        return track.active_at(time_ms + self._timing_offset)

    def on_position(self, time_ms: int) -> None:
        self._position = time_ms
        active = self.active_subtitles(time_ms)
        keys = tuple((e.start_ms, e.text) for e in active)
        if keys == self._last_keys:
            return
        self._publish_active(tuple(active), keys)

    def _refresh(self) -> None:
        self.on_position(self._position)

    def _emit_active(self, entries: tuple[SubtitleEntry, ...]) -> None:
        """Emit unconditionally and reset the snapshot."""
        self._publish_active(entries, tuple((e.start_ms, e.text) for e in entries))

    def _publish_active(self, entries: tuple[SubtitleEntry, ...], keys: tuple[tuple[int, str], ...]) -> None:
        self._last_active = entries
        self._last_keys = keys
        logger.debug("Active subtitles at %s: %d", format_display_timestamp(self._position), len(entries))
        self._emit(ActiveSubtitlesChanged(self._position, entries))

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def auto_discover(self, media_path: Path | str) -> list[Path]:
        return discover_subtitles(media_path, self.supported_extensions())

    def on_media_loaded(self, media_path: Path | str) -> list[LoadResult]:
        """Load every subtitle file found next to the media file."""
        results = []
        for path in self.auto_discover(media_path):
            result = self.load_file(path)
            if result.success:
                logger.info("Auto-loaded subtitle: %s", result.summary())
            results.append(result)
        return results

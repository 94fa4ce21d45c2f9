# eonsub_core/subtitles/events.py
# -*- coding: utf-8 -*-
"""
Notifications emitted by SubtitleEngine.

Every event is a frozen dataclass deriving from EngineEvent. Consumers either
take the raw events through a callback:

    engine.subscribe(lambda event: print(event))

or subclass SubtitleObserver and subscribe its dispatch method:

    engine.subscribe(MyObserver().dispatch)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from ..models.enums import ErrorKind

if TYPE_CHECKING:
    from .entry import SubtitleEntry
    from .track import SubtitleTrack


@dataclass(frozen=True)
class EngineEvent:
    """Base class for engine notifications."""
    pass


@dataclass(frozen=True)
class TrackLoaded(EngineEvent):
    index: int
    track: SubtitleTrack


@dataclass(frozen=True)
class ActiveTrackChanged(EngineEvent):
    index: int


@dataclass(frozen=True)
class EnabledChanged(EngineEvent):
    enabled: bool


@dataclass(frozen=True)
class TimingOffsetChanged(EngineEvent):
    offset_ms: int


@dataclass(frozen=True)
class ActiveSubtitlesChanged(EngineEvent):
    position_ms: int
    entries: tuple[SubtitleEntry, ...]


@dataclass(frozen=True)
class LoadFailed(EngineEvent):
    source: str
    error_message: str
    kind: ErrorKind | None = None


EventCallback = Callable[[EngineEvent], None]


class SubtitleObserver:
    """
    Convenience base for consumers that prefer one method per event.

    Override the handlers you need; the rest are no-ops.
    """

    def on_track_loaded(self, index: int, track: SubtitleTrack) -> None:
        pass

    def on_active_track_changed(self, index: int) -> None:
        pass

    def on_enabled_changed(self, enabled: bool) -> None:
        pass

    def on_timing_offset_changed(self, offset_ms: int) -> None:
        pass

    def on_active_subtitles_changed(self, position_ms: int, entries: tuple[SubtitleEntry, ...]) -> None:
        pass

    def on_load_failed(self, source: str, error_message: str, kind: ErrorKind | None) -> None:
        pass

    def dispatch(self, event: EngineEvent) -> None:
        """Route an event to its handler."""
        if isinstance(event, TrackLoaded):
            self.on_track_loaded(event.index, event.track)
        elif isinstance(event, ActiveTrackChanged):
            self.on_active_track_changed(event.index)
        elif isinstance(event, EnabledChanged):
            self.on_enabled_changed(event.enabled)
        elif isinstance(event, TimingOffsetChanged):
            self.on_timing_offset_changed(event.offset_ms)
        elif isinstance(event, ActiveSubtitlesChanged):
            self.on_active_subtitles_changed(event.position_ms, event.entries)
        elif isinstance(event, LoadFailed):
            self.on_load_failed(event.source, event.error_message, event.kind)

# eonsub_core/subtitles/__init__.py
"""
Subtitle loading, validation, time-indexing and publication.

Typical use:
    from eonsub_core.subtitles import SubtitleEngine

    engine = SubtitleEngine(event_callback=print)
    engine.load_file("film.srt")
    engine.on_position(12_000)

Layout:
    - style.py, entry.py, track.py: data model
    - guard.py: size, encoding and content checks
    - parsers/: SRT and ASS/SSA parsers plus the parser registry
    - engine.py: track ownership and the position loop
    - events.py: notifications emitted by the engine
    - discovery.py, loader.py: sibling-file discovery and background loads
    - writers/: export through pysubs2
"""

from .errors import LoadCancelled, SubtitleError, TimestampError
from .style import BLACK, TRANSPARENT, WHITE, Color, TextFormat
from .entry import SubtitleEntry
from .track import SubtitleTrack
from .guard import InputGuard
from .parsers import AssParser, ParserRegistry, SrtParser, SubtitleParser, default_registry
from .events import (
    ActiveSubtitlesChanged,
    ActiveTrackChanged,
    EnabledChanged,
    EngineEvent,
    LoadFailed,
    SubtitleObserver,
    TimingOffsetChanged,
    TrackLoaded,
)
from .discovery import discover_subtitles
from .engine import PreparedLoad, SubtitleEngine
from .loader import BackgroundLoader, LoadTicket

__all__ = [
    "ActiveSubtitlesChanged",
    "ActiveTrackChanged",
    "AssParser",
    "BackgroundLoader",
    "BLACK",
    "Color",
    "EnabledChanged",
    "EngineEvent",
    "InputGuard",
    "LoadCancelled",
    "LoadFailed",
    "LoadTicket",
    "ParserRegistry",
    "PreparedLoad",
    "SrtParser",
    "SubtitleEngine",
    "SubtitleEntry",
    "SubtitleError",
    "SubtitleObserver",
    "SubtitleParser",
    "SubtitleTrack",
    "TextFormat",
    "TimestampError",
    "TimingOffsetChanged",
    "TrackLoaded",
    "TRANSPARENT",
    "WHITE",
    "default_registry",
    "discover_subtitles",
]

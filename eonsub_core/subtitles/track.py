# eonsub_core/subtitles/track.py
# -*- coding: utf-8 -*-
"""
Ordered collection of subtitle entries with time queries.

Entries are kept sorted by start time after every bulk operation. Lookups
use a lazily built index of start times; the index is dropped whenever the
entry list changes.
"""
from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from typing import Iterator

from .entry import SubtitleEntry

logger = logging.getLogger(__name__)


@dataclass
class SubtitleTrack:
    """
    A subtitle track loaded from one file or content string.

    Attributes:
        title: Display title (file base name when loaded from disk)
        language: Language tag, empty when unknown
        encoding: Encoding label the source was decoded with
        format: Source format tag ("SRT", "ASS")
        is_default: Marked as the default track
        is_forced: Marked as forced
    """

    title: str = ""
    language: str = ""
    encoding: str = "UTF-8"
    format: str = ""
    is_default: bool = False
    is_forced: bool = False
    entries: list[SubtitleEntry] = field(default_factory=list)

    # Lookup cache, rebuilt on demand
    _starts: list[int] | None = field(default=None, init=False, repr=False, compare=False)
    _max_duration: int = field(default=0, init=False, repr=False, compare=False)
    _sorted: bool = field(default=False, init=False, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SubtitleEntry]:
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def _invalidate(self) -> None:
        self._starts = None

    def _ensure_index(self) -> None:
        if self._starts is not None:
            return
        self._starts = [e.start_ms for e in self.entries]
        self._max_duration = max((e.duration_ms for e in self.entries), default=0)
        self._sorted = all(a <= b for a, b in zip(self._starts, self._starts[1:]))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, entry: SubtitleEntry) -> bool:
        """Append an entry. Invalid entries are rejected and logged."""
        if not entry.is_valid():
            logger.warning("Rejected invalid subtitle entry: %r", entry)
            return False
        self.entries.append(entry)
        self._invalidate()
        return True

    def remove(self, index: int) -> None:
        del self.entries[index]
        self._invalidate()

    def clear(self) -> None:
        self.entries.clear()
        self._invalidate()

    def entry_at(self, index: int) -> SubtitleEntry | None:
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None

    def sort_by_time(self) -> None:
        """Stable sort by start time."""
        self.entries.sort(key=lambda e: e.start_ms)
        self._invalidate()

    def validate(self) -> int:
        """Drop invalid entries, return how many were removed."""
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.is_valid()]
        removed = before - len(self.entries)
        if removed:
            logger.warning("Removed %d invalid entries from track %r", removed, self.title)
            self._invalidate()
        return removed

    def shift(self, delta_ms: int) -> None:
        """
        Move every entry by delta_ms.

        Starts are clamped at zero; each entry keeps its duration.
        """
        for entry in self.entries:
            duration = entry.duration_ms
            entry.start_ms = max(0, entry.start_ms + delta_ms)
            entry.end_ms = entry.start_ms + duration
        self.sort_by_time()

    def scale(self, factor: float) -> None:
        """
        Multiply every start and end by factor.

        Entries truncated to zero length are dropped.

        Raises:
            ValueError: factor is not positive
        """
        if factor <= 0:
            raise ValueError(f"Scale factor must be positive, got {factor}")
        for entry in self.entries:
            entry.start_ms = int(entry.start_ms * factor)
            entry.end_ms = int(entry.end_ms * factor)
        self.sort_by_time()
        self.validate()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def active_at(self, time_ms: int) -> list[SubtitleEntry]:
        """All entries whose [start, end] contains time_ms, in track order."""
        self._ensure_index()
        if not self._sorted:
            return [e for e in self.entries if e.is_active_at(time_ms)]

        # Only entries starting in [time - longest duration, time] can be active
        lo = bisect.bisect_left(self._starts, time_ms - self._max_duration)
        hi = bisect.bisect_right(self._starts, time_ms)
        return [e for e in self.entries[lo:hi] if e.is_active_at(time_ms)]

    def next_after(self, time_ms: int) -> SubtitleEntry | None:
        """First entry starting strictly after time_ms."""
        self._ensure_index()
        if not self._sorted:
            later = [e for e in self.entries if e.start_ms > time_ms]
            return min(later, key=lambda e: e.start_ms) if later else None
        index = bisect.bisect_right(self._starts, time_ms)
        return self.entries[index] if index < len(self.entries) else None

    def previous_before(self, time_ms: int) -> SubtitleEntry | None:
        """Entry with the latest start strictly before time_ms."""
        best = None
        for entry in self.entries:
            if entry.start_ms < time_ms and (best is None or entry.start_ms > best.start_ms):
                best = entry
        return best

    def total_duration(self) -> int:
        """End time of the last-ending entry, 0 for an empty track."""
        return max((e.end_ms for e in self.entries), default=0)

# eonsub_core/subtitles/entry.py
# -*- coding: utf-8 -*-
"""
A single timed text unit.

Times are integer milliseconds. The interval is closed: an entry is active
at both its start and its end time.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from .style import TextFormat
from .utils.timestamps import format_display_timestamp

_MARKUP_RE = re.compile(r"<[^>]*>|\{[^}]*\}")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


@dataclass
class SubtitleEntry:
    """
    One subtitle event.

    Attributes:
        start_ms: Start time in milliseconds
        end_ms: End time in milliseconds
        text: Plain text, lines separated by newline
        format: Formatting attributes
        layer: ASS layer (0 for SRT)
        style: Name of the ASS style the format came from
        actor: ASS Name field
        effect: ASS Effect field
    """

    start_ms: int
    end_ms: int
    text: str
    format: TextFormat = field(default_factory=TextFormat)
    layer: int = 0
    style: str = ""
    actor: str = ""
    effect: str = ""

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    def is_active_at(self, time_ms: int) -> bool:
        return self.start_ms <= time_ms <= self.end_ms

    def overlaps_with(self, other: SubtitleEntry) -> bool:
        return self.start_ms <= other.end_ms and other.start_ms <= self.end_ms

    def is_valid(self) -> bool:
        if self.start_ms < 0 or self.start_ms >= self.end_ms:
            return False
        if not self.text.strip():
            return False
        return not _CONTROL_RE.search(self.text)

    def plain_text(self) -> str:
        """Text with markup removed and whitespace runs collapsed."""
        return " ".join(_MARKUP_RE.sub("", self.text).split())

    def to_string(self) -> str:
        return (
            f"[{format_display_timestamp(self.start_ms)} --> "
            f"{format_display_timestamp(self.end_ms)}] {self.plain_text()}"
        )

    def __str__(self) -> str:
        return self.to_string()

# eonsub_core/subtitles/parsers/ass_parser.py
# -*- coding: utf-8 -*-
"""
ASS/SSA subtitle parser.

Reads the three sections that matter for display:
- [Script Info]: Title and Language become track metadata
- [V4+ Styles]: 23-field Style: records; [V4 Styles]: 18-field SSA records
- [Events]: Dialogue: records with 10 fields, Text may contain commas
  (SSA writes Marked=N in place of Layer)

Other sections (Fonts, Graphics, Aegisub data) are ignored. Override blocks
{\\...} are stripped from the text; \\N and \\n become newlines, \\h a space.
"""
from __future__ import annotations

import logging
import re
from typing import Callable

from ...models.results import ParseResult
from ..entry import SubtitleEntry
from ..errors import TimestampError
from ..style import AssStyle
from ..track import SubtitleTrack
from ..utils.timestamps import parse_ass_timestamp
from .base import SubtitleParser

logger = logging.getLogger(__name__)

_DIALOGUE_LINE_RE = re.compile(r'^[ \t]*Dialogue:', re.MULTILINE | re.IGNORECASE)
_ASS_TIME_RE = re.compile(r'\d:\d{2}:\d{2}\.\d{2}')
_OVERRIDE_RE = re.compile(r'\{[^}]*\}')

SCRIPT_INFO = 'script info'
ASS_STYLES = 'v4+ styles'
SSA_STYLES = 'v4 styles'
EVENTS = 'events'

DIALOGUE_FIELDS = 10


def _int_or_zero(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def clean_ass_text(text: str) -> str:
    """Strip override blocks and convert ASS escapes to plain text."""
    text = _OVERRIDE_RE.sub('', text)
    text = text.replace('\\N', '\n').replace('\\n', '\n').replace('\\h', ' ')
    return '\n'.join(line.strip() for line in text.split('\n'))


class AssParser(SubtitleParser):
    """Parser for Advanced SubStation Alpha (.ass) and SubStation Alpha (.ssa) files."""

    name = 'ASS'
    extensions = frozenset({'ass', 'ssa'})

    def can_parse_content(self, text: str) -> bool:
        if not text or '[events]' not in text.lower():
            return False
        return bool(_DIALOGUE_LINE_RE.search(text)) and bool(_ASS_TIME_RE.search(text))

    def _parse_text(self, text: str, track: SubtitleTrack, result: ParseResult) -> None:
        sections = self._split_sections(text)

        self._parse_script_info(track, sections.get(SCRIPT_INFO, []))

        styles: dict[str, AssStyle] = {}
        styles.update(self._parse_styles(sections.get(SSA_STYLES, []), AssStyle.from_ssa_line))
        styles.update(self._parse_styles(sections.get(ASS_STYLES, []), AssStyle.from_ass_line))
        if not styles:
            styles['Default'] = AssStyle.default()

        self._parse_events(track, result, styles, sections.get(EVENTS, []))

    @staticmethod
    def _split_sections(text: str) -> dict[str, list[str]]:
        """Single pass over lines, grouping them under their lowercased [section] name."""
        sections: dict[str, list[str]] = {}
        current: str | None = None

        for line in text.split('\n'):
            stripped = line.strip()
            if stripped.startswith('[') and stripped.endswith(']'):
                current = stripped[1:-1].strip().lower()
                sections.setdefault(current, [])
                continue
            if current is None or not stripped or stripped.startswith(';'):
                continue
            sections[current].append(stripped)

        return sections

    @staticmethod
    def _parse_script_info(track: SubtitleTrack, lines: list[str]) -> None:
        for line in lines:
            if ':' not in line:
                continue
            key, value = line.split(':', 1)
            key = key.strip().lower()
            if key == 'title':
                track.title = value.strip()
            elif key == 'language':
                track.language = value.strip()

    @staticmethod
    def _parse_styles(
        lines: list[str],
        parse_line: Callable[[str], AssStyle],
    ) -> dict[str, AssStyle]:
        styles: dict[str, AssStyle] = {}
        for line in lines:
            if not line.lower().startswith('style:'):
                continue
            try:
                style = parse_line(line.split(':', 1)[1])
            except ValueError as e:
                logger.warning("Skipping malformed ASS style %r: %s", line[:50], e)
                continue
            styles[style.name] = style
        return styles

    def _parse_events(
        self,
        track: SubtitleTrack,
        result: ParseResult,
        styles: dict[str, AssStyle],
        lines: list[str],
    ) -> None:
        dialogues = [line for line in lines if line.lower().startswith('dialogue:')]
        logger.debug("Found %d ASS dialogue lines", len(dialogues))

        for position, line in enumerate(dialogues):
            if self._entry_limit_reached(result, len(dialogues) - position):
                break

            entry = self._parse_dialogue(line.split(':', 1)[1], styles)
            if entry is not None and track.add(entry):
                result.parsed += 1
            else:
                result.skipped += 1
                logger.warning("Failed to parse ASS dialogue: %.50s...", line)

    def _parse_dialogue(self, values_str: str, styles: dict[str, AssStyle]) -> SubtitleEntry | None:
        """
        Parse the value part of a Dialogue: line.

        Layer (or Marked=N), Start, End, Style, Name, MarginL, MarginR, MarginV,
        Effect, Text. Only bad timestamps reject the line; unreadable layer and
        margin values count as 0.
        """
        fields = values_str.split(',', DIALOGUE_FIELDS - 1)
        if len(fields) < DIALOGUE_FIELDS:
            return None

        try:
            start_ms = parse_ass_timestamp(fields[1])
            end_ms = parse_ass_timestamp(fields[2])
        except TimestampError:
            return None

        # SSA v4 puts Marked=N where V4+ has Layer; SSA has no layers
        layer = 0 if fields[0].strip().lower().startswith('marked=') else _int_or_zero(fields[0])
        margin_l = _int_or_zero(fields[5])
        margin_r = _int_or_zero(fields[6])
        margin_v = _int_or_zero(fields[7])

        style_name = fields[3].strip()
        style = styles.get(style_name) or styles.get('Default') or AssStyle.default()
        text_format = style.to_text_format()

        # Non-zero dialogue margins override the style
        if margin_l:
            text_format.margin_left = margin_l
        if margin_r:
            text_format.margin_right = margin_r
        if margin_v:
            text_format.margin_top = margin_v
            text_format.margin_bottom = margin_v

        text = self.guard.sanitize(clean_ass_text(fields[9]))
        if len(text) > self.settings.max_text_length:
            return None

        return SubtitleEntry(
            start_ms=start_ms,
            end_ms=end_ms,
            text=text,
            format=text_format,
            layer=layer,
            style=style_name,
            actor=fields[4].strip(),
            effect=fields[8].strip(),
        )

# eonsub_core/subtitles/parsers/srt_parser.py
# -*- coding: utf-8 -*-
"""
SRT subtitle parser.

SRT format:
```
1
00:00:01,000 --> 00:00:04,000
First subtitle line
Maybe second line

2
00:00:05,000 --> 00:00:08,000
<b>Second</b> subtitle
```

Formatting tags only set flags on the entry format; <b>, <i>, <u> and <s>
apply to the whole entry when their opener appears anywhere in the text.
<font color="..."> sets the text color. Every other tag is stripped.
"""
from __future__ import annotations

import logging
import re

from ...models.results import ParseResult
from ..entry import SubtitleEntry
from ..errors import TimestampError
from ..style import TextFormat, parse_css_color
from ..track import SubtitleTrack
from ..utils.timestamps import parse_srt_timestamp
from .base import SubtitleParser

logger = logging.getLogger(__name__)

_STRUCTURE_RE = re.compile(
    r'\d+\s*\n\s*\d{2}:\d{2}:\d{2},\d{3}\s*-->\s*\d{2}:\d{2}:\d{2},\d{3}'
)
_SEQUENCE_LINE_RE = re.compile(r'^\d+[ \t]*$', re.MULTILINE)
_TIMING_LINE_RE = re.compile(
    r'^[ \t]*\d{2}:\d{2}:\d{2},\d{3}\s*-->\s*\d{2}:\d{2}:\d{2},\d{3}', re.MULTILINE
)
_TIMING_RE = re.compile(
    r'^(\d{1,2}:\d{2}:\d{2}[,.]\d{3})\s*-->\s*(\d{1,2}:\d{2}:\d{2}[,.]\d{3})'
)
_BLOCK_SPLIT_RE = re.compile(r'\n\s*\n')
_SEQUENCE_RE = re.compile(r'^\d+$')

_TAG_RE = re.compile(r'<[^>]*>')
_TAG_NAME_RE = re.compile(r'^<\s*/?\s*([A-Za-z][\w-]*)')
_FONT_COLOR_RE = re.compile(r'''<\s*font\b[^>]*?\bcolor\s*=\s*["']?([^"'\s>]+)''', re.IGNORECASE)

_FLAG_TAGS = {
    'b': 'bold',
    'i': 'italic',
    'u': 'underline',
    's': 'strikethrough',
}

# &amp; last so "&amp;lt;" decodes to "&lt;"
_ENTITIES = (
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&quot;', '"'),
    ('&#39;', "'"),
    ('&amp;', '&'),
)


def decode_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


class SrtParser(SubtitleParser):
    """Parser for SubRip (.srt) files."""

    name = 'SRT'
    extensions = frozenset({'srt'})

    def can_parse_content(self, text: str) -> bool:
        """
        At least one sequence/timing pair, and sequence lines roughly match
        timing lines (ratio 0.8-1.2, or off by at most one block).
        """
        if not text or not _STRUCTURE_RE.search(text):
            return False

        sequence_lines = len(_SEQUENCE_LINE_RE.findall(text))
        timing_lines = len(_TIMING_LINE_RE.findall(text))
        if timing_lines == 0:
            return False

        ratio = sequence_lines / timing_lines
        return 0.8 <= ratio <= 1.2 or abs(sequence_lines - timing_lines) <= 1

    def _parse_text(self, text: str, track: SubtitleTrack, result: ParseResult) -> None:
        blocks = [b for b in _BLOCK_SPLIT_RE.split(text.strip()) if b.strip()]
        logger.debug("Found %d SRT blocks", len(blocks))

        for position, block in enumerate(blocks):
            if self._entry_limit_reached(result, len(blocks) - position):
                break

            entry = self._parse_block(block.strip())
            if entry is not None and track.add(entry):
                result.parsed += 1
            else:
                result.skipped += 1
                logger.warning("Failed to parse SRT block: %.50s...", block.strip())

    def _parse_block(self, block: str) -> SubtitleEntry | None:
        lines = block.split('\n')
        if len(lines) < 3:
            return None

        sequence = lines[0].strip()
        if not _SEQUENCE_RE.match(sequence) or int(sequence) <= 0:
            return None

        match = _TIMING_RE.match(lines[1].strip())
        if not match:
            return None
        try:
            start_ms = parse_srt_timestamp(match.group(1))
            end_ms = parse_srt_timestamp(match.group(2))
        except TimestampError:
            return None
        if start_ms >= end_ms:
            return None

        raw_text = '\n'.join(line.strip() for line in lines[2:] if line.strip())
        if not raw_text:
            return None

        text, text_format = self._convert_markup(raw_text)
        if not text.strip() or len(text) > self.settings.max_text_length:
            return None

        return SubtitleEntry(start_ms=start_ms, end_ms=end_ms, text=text, format=text_format)

    def _convert_markup(self, raw_text: str) -> tuple[str, TextFormat]:
        """Derive format flags from tags, then strip tags and decode entities."""
        text_format = TextFormat()

        for tag in _TAG_RE.findall(raw_text):
            name_match = _TAG_NAME_RE.match(tag)
            if not name_match:
                continue
            name = name_match.group(1).lower()
            if not self.guard.is_allowed_tag(name):
                logger.debug("Stripping unknown SRT tag: %s", tag)
                continue
            if tag.lstrip('< \t').startswith('/'):
                continue
            if name in _FLAG_TAGS:
                setattr(text_format, _FLAG_TAGS[name], True)

        color_match = _FONT_COLOR_RE.search(raw_text)
        if color_match:
            color = parse_css_color(color_match.group(1))
            if color is not None:
                text_format.text_color = color
            else:
                logger.debug("Unrecognized SRT font color: %s", color_match.group(1))

        text = decode_entities(_TAG_RE.sub('', raw_text))
        text = '\n'.join(line.strip() for line in self.guard.sanitize(text).split('\n'))
        return text, text_format

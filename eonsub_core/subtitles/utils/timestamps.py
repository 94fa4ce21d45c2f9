# eonsub_core/subtitles/utils/timestamps.py
"""
Timestamp parsing and formatting for subtitle files.

Formats:
- SRT: HH:MM:SS,mmm (two digit hour with comma, milliseconds; a period is
  accepted in place of the comma when parsing)
- ASS: H:MM:SS.cc (single digit hour, centiseconds)
- Display: HH:MM:SS.mmm (log lines and entry dumps)

All times are integer milliseconds. Parsers raise TimestampError instead of
returning a sentinel.
"""

from __future__ import annotations

import re

from ..errors import TimestampError

_SRT_RE = re.compile(r"^(\d+):(\d{2}):(\d{2})[,.](\d{3})$")
_ASS_RE = re.compile(r"^(\d+):(\d{2}):(\d{2})\.(\d{2})$")
_GENERIC_RE = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})(?:[,.](\d{1,3}))?$")


def _split_ms(ms: int) -> tuple[int, int, int, int]:
    hours, ms = divmod(ms, 3600000)
    minutes, ms = divmod(ms, 60000)
    seconds, ms = divmod(ms, 1000)
    return hours, minutes, seconds, ms


def _to_ms(hours: int, minutes: int, seconds: int, milliseconds: int) -> int:
    return hours * 3600000 + minutes * 60000 + seconds * 1000 + milliseconds


def _check_ranges(time_str: str, minutes: int, seconds: int) -> None:
    if minutes >= 60 or seconds >= 60:
        raise TimestampError(f"Invalid time values: {time_str!r}")


def format_srt_timestamp(ms: int) -> str:
    """
    Format milliseconds as an SRT timestamp.

    Args:
        ms: Time in milliseconds; negative values format as zero

    Returns:
        SRT timestamp (HH:MM:SS,mmm)
    """
    if ms < 0:
        return "00:00:00,000"
    hours, minutes, seconds, milliseconds = _split_ms(int(ms))
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"


def parse_srt_timestamp(time_str: str) -> int:
    """
    Parse an SRT timestamp to milliseconds.

    Format: HH:MM:SS,mmm or HH:MM:SS.mmm
    Example: "00:01:23,456" = 83456

    Raises:
        TimestampError: format mismatch or out-of-range component
    """
    match = _SRT_RE.match(time_str.strip())
    if not match:
        raise TimestampError(f"Invalid SRT time format: {time_str!r}")

    hours, minutes, seconds, milliseconds = (int(g) for g in match.groups())
    _check_ranges(time_str, minutes, seconds)
    return _to_ms(hours, minutes, seconds, milliseconds)


def format_ass_timestamp(ms: int) -> str:
    """
    Format milliseconds as an ASS timestamp.

    Centiseconds are truncated toward zero, so 1239 ms -> "0:00:01.23".
    """
    if ms < 0:
        return "0:00:00.00"
    hours, minutes, seconds, milliseconds = _split_ms(int(ms))
    return f"{hours}:{minutes:02d}:{seconds:02d}.{milliseconds // 10:02d}"


def parse_ass_timestamp(time_str: str) -> int:
    """
    Parse an ASS timestamp to milliseconds.

    Format: H:MM:SS.cc (exactly two centisecond digits)
    Example: "0:01:23.45" = 83450

    Raises:
        TimestampError: format mismatch or out-of-range component
    """
    match = _ASS_RE.match(time_str.strip())
    if not match:
        raise TimestampError(f"Invalid ASS time format: {time_str!r}")

    hours, minutes, seconds, centiseconds = (int(g) for g in match.groups())
    _check_ranges(time_str, minutes, seconds)
    return _to_ms(hours, minutes, seconds, centiseconds * 10)


def parse_generic_timestamp(time_str: str) -> int:
    """
    Parse any of the supported timestamp forms.

    Tries SRT, then ASS, then a relaxed HH:MM:SS[.,]f form whose fraction
    is padded to milliseconds (one digit x100, two digits x10, otherwise the
    first three digits).
    """
    for parser in (parse_srt_timestamp, parse_ass_timestamp):
        try:
            return parser(time_str)
        except TimestampError:
            continue

    match = _GENERIC_RE.match(time_str.strip())
    if not match:
        raise TimestampError(f"Unrecognized time format: {time_str!r}")

    hours, minutes, seconds = (int(g) for g in match.groups()[:3])
    _check_ranges(time_str, minutes, seconds)

    fraction = match.group(4) or ""
    if len(fraction) == 1:
        milliseconds = int(fraction) * 100
    elif len(fraction) == 2:
        milliseconds = int(fraction) * 10
    elif fraction:
        milliseconds = int(fraction[:3])
    else:
        milliseconds = 0

    return _to_ms(hours, minutes, seconds, milliseconds)


def format_display_timestamp(ms: int) -> str:
    """
    Format milliseconds for human-readable display (HH:MM:SS.mmm).

    Used for entry dumps and log lines.
    """
    ms = max(int(ms), 0)
    hours, minutes, seconds, milliseconds = _split_ms(ms)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"

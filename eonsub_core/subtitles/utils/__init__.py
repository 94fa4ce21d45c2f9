# eonsub_core/subtitles/utils/__init__.py
"""Shared utilities for subtitle processing."""

from .timestamps import (
    format_ass_timestamp,
    format_display_timestamp,
    format_srt_timestamp,
    parse_ass_timestamp,
    parse_generic_timestamp,
    parse_srt_timestamp,
)

__all__ = [
    "format_ass_timestamp",
    "format_display_timestamp",
    "format_srt_timestamp",
    "parse_ass_timestamp",
    "parse_generic_timestamp",
    "parse_srt_timestamp",
]

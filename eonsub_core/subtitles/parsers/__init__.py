# eonsub_core/subtitles/parsers/__init__.py
"""
Subtitle file parsers.

    from eonsub_core.subtitles.parsers import default_registry

    parser = default_registry().for_path(path)
    track, result = parser.parse_file(path)
"""

from .ass_parser import AssParser
from .base import SubtitleParser
from .registry import ParserRegistry, default_registry
from .srt_parser import SrtParser

__all__ = [
    "AssParser",
    "ParserRegistry",
    "SrtParser",
    "SubtitleParser",
    "default_registry",
]

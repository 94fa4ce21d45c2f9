# eonsub_core/models/__init__.py
"""
Model definitions for the subtitle subsystem.

    from eonsub_core.models import (
        ErrorKind, HorizontalAlign, VerticalAlign,
        ParseResult, LoadResult,
        SubtitleSettings,
    )

Model Organization:
    - enums.py: ErrorKind and alignment enums
    - results.py: ParseResult, LoadResult
    - settings.py: SubtitleSettings (limits and pattern sets)
"""

from .enums import ErrorKind, HorizontalAlign, VerticalAlign
from .results import LoadResult, ParseResult
from .settings import SubtitleSettings

__all__ = [
    "ErrorKind",
    "HorizontalAlign",
    "VerticalAlign",
    "LoadResult",
    "ParseResult",
    "SubtitleSettings",
]

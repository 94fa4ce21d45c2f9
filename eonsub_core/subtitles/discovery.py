# eonsub_core/subtitles/discovery.py
# -*- coding: utf-8 -*-
from __future__ import annotations
from pathlib import Path
from typing import Iterable, List

# Language/role suffixes tried after the exact base name, in order
SUBTITLE_NAME_SUFFIXES = ('eng', 'en', 'english', 'sub', 'subtitle')


def _candidate_names(stem: str, extensions: List[str]) -> List[str]:
    names = [f"{stem}.{ext}" for ext in extensions]
    for suffix in SUBTITLE_NAME_SUFFIXES:
        names.extend(f"{stem}.{suffix}.{ext}" for ext in extensions)
    return names


def discover_subtitles(media_path: Path | str, extensions: Iterable[str]) -> List[Path]:
    """
    Finds subtitle files next to a media file.
    Matches siblings named after the media file stem, either exactly
    (film.srt) or followed by a language/role suffix (film.en.srt).

    Args:
        media_path: Path to the media file (need not exist)
        extensions: Supported subtitle extensions in preference order

    Returns:
        Existing files in candidate order, without duplicates
    """
    media_path = Path(media_path)
    folder = media_path.parent
    if not folder.is_dir():
        return []

    ordered_extensions = []
    for ext in extensions:
        ext = ext.lower().lstrip('.')
        if ext and ext not in ordered_extensions:
            ordered_extensions.append(ext)

    found: List[Path] = []
    for name in _candidate_names(media_path.stem, ordered_extensions):
        candidate = folder / name
        if candidate != media_path and candidate.is_file() and candidate not in found:
            found.append(candidate)

    return found

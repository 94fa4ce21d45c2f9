# eonsub_core/subtitles/writers/export.py
# -*- coding: utf-8 -*-
"""
Track export through pysubs2.

Entries become SSAEvents. Each distinct formatting (font, colors, outline,
alignment, margins) becomes one SSAStyle named after the entry's source
style; bold/italic/underline/strikeout are written as override tags so the
styles stay shared between entries.
"""

from __future__ import annotations
from dataclasses import astuple
from pathlib import Path
from typing import Dict, Tuple
import pysubs2
from pysubs2 import SSAFile, SSAEvent, SSAStyle, Alignment

from ..style import Color, TextFormat, alignment_to_numpad
from ..track import SubtitleTrack

EXPORT_FORMATS = {'.srt': 'srt', '.ass': 'ass', '.ssa': 'ssa'}

_FLAG_OVERRIDES = (
    ('bold', 'b'),
    ('italic', 'i'),
    ('underline', 'u'),
    ('strikethrough', 's'),
)


def to_pysubs2_color(color: Color) -> pysubs2.Color:
    """RGBA (255 = opaque) to pysubs2 color (0 = opaque)."""
    return pysubs2.Color(color.r, color.g, color.b, 255 - color.a)


def _style_key(text_format: TextFormat) -> Tuple:
    return astuple(text_format.copy(bold=False, italic=False, underline=False, strikethrough=False))


def build_style(text_format: TextFormat) -> SSAStyle:
    """SSAStyle for a TextFormat, ignoring the bold/italic/underline/strike flags."""
    return SSAStyle(
        fontname=text_format.font_family,
        fontsize=float(text_format.font_size),
        primarycolor=to_pysubs2_color(text_format.text_color),
        outlinecolor=to_pysubs2_color(text_format.outline_color),
        backcolor=to_pysubs2_color(text_format.background_color),
        outline=float(text_format.outline_width),
        alignment=Alignment(alignment_to_numpad(text_format.h_align, text_format.v_align)),
        marginl=text_format.margin_left,
        marginr=text_format.margin_right,
        marginv=max(text_format.margin_top, text_format.margin_bottom),
    )


def _event_text(text: str, text_format: TextFormat) -> str:
    overrides = ''.join(
        f"\\{tag}1" for attr, tag in _FLAG_OVERRIDES if getattr(text_format, attr)
    )
    body = text.replace('\n', '\\N')
    return f"{{{overrides}}}{body}" if overrides else body


def build_ssa_file(track: SubtitleTrack) -> SSAFile:
    """
    Convert a track to a pysubs2 SSAFile.

    Args:
        track: Track to convert

    Returns:
        SSAFile with one style per distinct format and one event per entry
    """
    subs = SSAFile()
    subs.styles.clear()
    subs.info['ScriptType'] = 'v4.00+'
    if track.title:
        subs.info['Title'] = track.title
    if track.language:
        subs.info['Language'] = track.language

    style_names: Dict[Tuple, str] = {}
    for entry in track:
        key = _style_key(entry.format)
        name = style_names.get(key)
        if name is None:
            base = entry.style or 'Default'
            name = base
            suffix = 2
            while name in subs.styles:
                name = f"{base}_{suffix}"
                suffix += 1
            subs.styles[name] = build_style(entry.format)
            style_names[key] = name

        subs.events.append(SSAEvent(
            start=entry.start_ms,
            end=entry.end_ms,
            text=_event_text(entry.text, entry.format),
            style=name,
            layer=entry.layer,
            name=entry.actor,
            effect=entry.effect,
        ))

    if not subs.styles:
        subs.styles['Default'] = build_style(TextFormat())

    return subs


def export_track(track: SubtitleTrack, path: Path | str, format_: str | None = None) -> Path:
    """
    Write a track to disk.

    Args:
        track: Track to write
        path: Output path
        format_: 'srt', 'ass' or 'ssa'; taken from the path suffix when None

    Returns:
        The output path

    Raises:
        ValueError: format cannot be determined
    """
    path = Path(path)
    if format_ is None:
        format_ = EXPORT_FORMATS.get(path.suffix.lower())
        if format_ is None:
            raise ValueError(f"Cannot determine subtitle format for {path.name}")

    subs = build_ssa_file(track)
    subs.save(str(path), format_=format_, encoding='utf-8')
    return path

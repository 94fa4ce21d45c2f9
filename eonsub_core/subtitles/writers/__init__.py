# eonsub_core/subtitles/writers/__init__.py
"""Subtitle writers."""

from .export import build_ssa_file, export_track

__all__ = ["build_ssa_file", "export_track"]

# eonsub_core/__init__.py
"""Subtitle loading, validation, time-indexing and publication for EonPlay."""

__version__ = "0.3.0"

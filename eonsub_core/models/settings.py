# eonsub_core/models/settings.py
"""Subtitle subsystem settings dataclass.

Single source of truth for the limits and pattern sets used by the input
guard, the parsers and the engine. All settings are typed and have defaults,
so callers never touch raw dicts.

Settings are organized by category:
- Limits: file size, entry count, tag spans, per-entry text length
- Security: denylisted substrings, allowed formatting tags
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_ENTRIES = 50_000
DEFAULT_MAX_TAG_SPANS = 1_000
DEFAULT_MAX_TEXT_LENGTH = 10_000

DEFAULT_DENYLIST: tuple[str, ...] = (
    "javascript:",
    "vbscript:",
    "<script",
    "</script>",
    "eval(",
    "document.",
    "window.",
    "alert(",
    "file://",
    "ftp://",
    "data:",
    "blob:",
    "expression(",
    "behavior:",
    "binding:",
    "import(",
    "require(",
    "fetch(",
    "xmlhttprequest",
    "\\x",
    "\\u",
    "%3c",
    "%3e",
    "&#x",
    "&#",
)

DEFAULT_ALLOWED_TAGS: frozenset[str] = frozenset(
    {"b", "i", "u", "s", "font", "color", "size", "br", "p", "div", "span", "strong", "em"}
)


@dataclass(frozen=True)
class SubtitleSettings:
    """Typed subtitle settings.

    Frozen so a single instance can be shared between the engine, its guard
    and background loaders without copying.
    """

    # =========================================================================
    # Limits
    # =========================================================================
    max_file_size: int = DEFAULT_MAX_FILE_SIZE  # bytes
    max_entries: int = DEFAULT_MAX_ENTRIES  # per track
    max_tag_spans: int = DEFAULT_MAX_TAG_SPANS  # <...> spans per file
    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH  # characters per entry

    # =========================================================================
    # Security
    # =========================================================================
    denylist_patterns: tuple[str, ...] = DEFAULT_DENYLIST
    allowed_tags: frozenset[str] = field(default=DEFAULT_ALLOWED_TAGS)

    @classmethod
    def from_config(cls, cfg: dict) -> SubtitleSettings:
        """Create SubtitleSettings from a config dictionary.

        Missing keys fall back to defaults; pattern lists are lowercased.
        """
        denylist = cfg.get("denylist_patterns")
        allowed = cfg.get("allowed_tags")
        return cls(
            max_file_size=int(cfg.get("max_file_size", DEFAULT_MAX_FILE_SIZE)),
            max_entries=int(cfg.get("max_entries", DEFAULT_MAX_ENTRIES)),
            max_tag_spans=int(cfg.get("max_tag_spans", DEFAULT_MAX_TAG_SPANS)),
            max_text_length=int(cfg.get("max_text_length", DEFAULT_MAX_TEXT_LENGTH)),
            denylist_patterns=(
                tuple(str(p).lower() for p in denylist)
                if denylist is not None
                else DEFAULT_DENYLIST
            ),
            allowed_tags=(
                frozenset(str(t).lower() for t in allowed)
                if allowed is not None
                else DEFAULT_ALLOWED_TAGS
            ),
        )

    def to_dict(self) -> dict:
        return {
            "max_file_size": self.max_file_size,
            "max_entries": self.max_entries,
            "max_tag_spans": self.max_tag_spans,
            "max_text_length": self.max_text_length,
            "denylist_patterns": list(self.denylist_patterns),
            "allowed_tags": sorted(self.allowed_tags),
        }

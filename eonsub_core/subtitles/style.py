# eonsub_core/subtitles/style.py
"""
Per-entry formatting attributes and color/alignment conversions.

Colors are kept as RGBA. Parsers translate their native encodings at
construction time:
- ASS/SSA: &Hbbggrr& / &HAABBGGRR (hex, BGR order, inverted alpha) or decimal
- SRT: CSS/HTML color names or #RRGGBB inside <font color="...">
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace

from PIL import ImageColor

from ..models.enums import HorizontalAlign, VerticalAlign

_CSS_COLOR_RE = re.compile(r"^(#[0-9a-fA-F]{6}|[A-Za-z]+)$")


@dataclass(frozen=True)
class Color:
    """RGBA color, 0-255 per component, a=255 is opaque."""

    r: int
    g: int
    b: int
    a: int = 255

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @classmethod
    def from_bgr_value(cls, value: int) -> Color:
        """Build from a packed AABBGGRR integer (ASS alpha: 0 = opaque)."""
        blue = (value >> 16) & 0xFF
        green = (value >> 8) & 0xFF
        red = value & 0xFF
        ass_alpha = (value >> 24) & 0xFF
        return cls(red, green, blue, 255 - ass_alpha)


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
TRANSPARENT = Color(0, 0, 0, 0)


def parse_ass_color(color_str: str, fallback: Color = WHITE) -> Color:
    """
    Parse an ASS/SSA color field.

    Accepts &Hbbggrr&, &HAABBGGRR (trailing & optional) and decimal BGR.
    Unparseable values return the fallback.

    Example: "&H00FFFF&" -> Color(255, 255, 0)
    """
    color = color_str.strip()
    if color.upper().startswith("&H"):
        digits = color[2:].rstrip("&")
        try:
            return Color.from_bgr_value(int(digits, 16))
        except ValueError:
            return fallback

    try:
        return Color.from_bgr_value(int(color))
    except ValueError:
        return fallback


def parse_css_color(name: str) -> Color | None:
    """
    Resolve an HTML color name or #RRGGBB through Pillow.

    Returns None for anything else, including rgb()/hsl() forms.
    """
    value = name.strip()
    if not _CSS_COLOR_RE.match(value):
        return None
    try:
        red, green, blue = ImageColor.getrgb(value)[:3]
    except ValueError:
        return None
    return Color(red, green, blue)


def alignment_from_ssa(value: int) -> tuple[HorizontalAlign, VerticalAlign]:
    """
    Map an SSA alignment code to (horizontal, vertical).

    Classic SSA layout: 1/2/3 bottom, 5/6/7 middle, 9/10/11 top, each
    left/center/right. Codes outside the layout map to center/middle.
    """
    horizontal = {
        1: HorizontalAlign.LEFT, 5: HorizontalAlign.LEFT, 9: HorizontalAlign.LEFT,
        3: HorizontalAlign.RIGHT, 7: HorizontalAlign.RIGHT, 11: HorizontalAlign.RIGHT,
    }.get(value, HorizontalAlign.CENTER)

    if value in (1, 2, 3):
        vertical = VerticalAlign.BOTTOM
    elif value in (9, 10, 11):
        vertical = VerticalAlign.TOP
    else:
        vertical = VerticalAlign.MIDDLE

    return horizontal, vertical


def alignment_to_numpad(horizontal: HorizontalAlign, vertical: VerticalAlign) -> int:
    """Map (horizontal, vertical) to the V4+ numpad code (1-9)."""
    column = {HorizontalAlign.LEFT: 1, HorizontalAlign.CENTER: 2, HorizontalAlign.RIGHT: 3}[horizontal]
    row = {VerticalAlign.BOTTOM: 0, VerticalAlign.MIDDLE: 3, VerticalAlign.TOP: 6}[vertical]
    return row + column


@dataclass
class TextFormat:
    """
    Formatting attributes carried by a subtitle entry.

    Defaults match a plain bottom-centered white subtitle with a thin black
    outline and no background.
    """

    font_family: str = "Arial"
    font_size: int = 16
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    text_color: Color = WHITE
    outline_color: Color = BLACK
    outline_width: int = 1
    background_color: Color = TRANSPARENT
    h_align: HorizontalAlign = HorizontalAlign.CENTER
    v_align: VerticalAlign = VerticalAlign.BOTTOM
    margin_left: int = 0
    margin_right: int = 0
    margin_top: int = 0
    margin_bottom: int = 0

    @property
    def alignment(self) -> tuple[HorizontalAlign, VerticalAlign]:
        return self.h_align, self.v_align

    def copy(self, **changes) -> TextFormat:
        return replace(self, **changes)


@dataclass
class AssStyle:
    """
    One Style: record from a [V4+ Styles]/[V4 Styles] section.

    Field order matches the 23-field V4+ Format line.
    """

    name: str
    fontname: str = "Arial"
    fontsize: float = 16.0
    primary_color: Color = WHITE
    secondary_color: Color = Color(255, 0, 0)
    outline_color: Color = BLACK
    back_color: Color = BLACK
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike_out: bool = False
    scale_x: float = 100.0
    scale_y: float = 100.0
    spacing: float = 0.0
    angle: float = 0.0
    border_style: int = 1
    outline: float = 1.0
    shadow: float = 0.0
    alignment: int = 2
    margin_l: int = 0
    margin_r: int = 0
    margin_v: int = 0
    encoding: int = 1

    # Original line for debugging
    _original_line: str | None = field(default=None, repr=False)

    FIELD_COUNT = 23
    SSA_FIELD_COUNT = 18

    @classmethod
    def from_ass_line(cls, values_str: str) -> AssStyle:
        """
        Parse the value part of a Style: line (everything after "Style:").

        Raises:
            ValueError: fewer than 23 fields or a non-numeric numeric field
        """
        values = [v.strip() for v in values_str.split(",")]
        if len(values) < cls.FIELD_COUNT:
            raise ValueError(f"Style has {len(values)} fields, expected {cls.FIELD_COUNT}")

        return cls(
            name=values[0],
            fontname=values[1],
            fontsize=float(values[2]),
            primary_color=parse_ass_color(values[3]),
            secondary_color=parse_ass_color(values[4]),
            outline_color=parse_ass_color(values[5], fallback=BLACK),
            back_color=parse_ass_color(values[6], fallback=BLACK),
            bold=int(values[7]) != 0,
            italic=int(values[8]) != 0,
            underline=int(values[9]) != 0,
            strike_out=int(values[10]) != 0,
            scale_x=float(values[11]),
            scale_y=float(values[12]),
            spacing=float(values[13]),
            angle=float(values[14]),
            border_style=int(values[15]),
            outline=float(values[16]),
            shadow=float(values[17]),
            alignment=int(values[18]),
            margin_l=int(values[19]),
            margin_r=int(values[20]),
            margin_v=int(values[21]),
            encoding=int(values[22]),
            _original_line=values_str,
        )

    @classmethod
    def from_ssa_line(cls, values_str: str) -> AssStyle:
        """
        Parse an 18-field SSA v4 Style: record.

        Name, Fontname, Fontsize, PrimaryColour, SecondaryColour,
        TertiaryColour, BackColour, Bold, Italic, BorderStyle, Outline,
        Shadow, Alignment, MarginL, MarginR, MarginV, AlphaLevel, Encoding

        TertiaryColour is the outline color. SSA has no underline, strikeout,
        scaling, spacing or angle.

        Raises:
            ValueError: fewer than 18 fields or a non-numeric numeric field
        """
        values = [v.strip() for v in values_str.split(",")]
        if len(values) < cls.SSA_FIELD_COUNT:
            raise ValueError(f"Style has {len(values)} fields, expected {cls.SSA_FIELD_COUNT}")

        return cls(
            name=values[0],
            fontname=values[1],
            fontsize=float(values[2]),
            primary_color=parse_ass_color(values[3]),
            secondary_color=parse_ass_color(values[4]),
            outline_color=parse_ass_color(values[5], fallback=BLACK),
            back_color=parse_ass_color(values[6], fallback=BLACK),
            bold=int(values[7]) != 0,
            italic=int(values[8]) != 0,
            border_style=int(values[9]),
            outline=float(values[10]),
            shadow=float(values[11]),
            alignment=int(values[12]),
            margin_l=int(values[13]),
            margin_r=int(values[14]),
            margin_v=int(values[15]),
            encoding=int(values[17]),
            _original_line=values_str,
        )

    @classmethod
    def default(cls) -> AssStyle:
        """Create the style used when a script declares none."""
        return cls(name="Default")

    def to_text_format(self) -> TextFormat:
        h_align, v_align = alignment_from_ssa(self.alignment)
        return TextFormat(
            font_family=self.fontname,
            font_size=int(self.fontsize),
            bold=self.bold,
            italic=self.italic,
            underline=self.underline,
            strikethrough=self.strike_out,
            text_color=self.primary_color,
            outline_color=self.outline_color,
            outline_width=int(self.outline),
            h_align=h_align,
            v_align=v_align,
            margin_left=self.margin_l,
            margin_right=self.margin_r,
            margin_top=self.margin_v,
            margin_bottom=self.margin_v,
        )

# tests/test_style.py
import pytest

from eonsub_core.models import HorizontalAlign, VerticalAlign
from eonsub_core.subtitles.style import (
    BLACK,
    WHITE,
    AssStyle,
    Color,
    TextFormat,
    alignment_from_ssa,
    alignment_to_numpad,
    parse_ass_color,
    parse_css_color,
)


def test_ass_color_is_bgr():
    assert parse_ass_color("&H00FFFF&") == Color(255, 255, 0, 255)
    assert parse_ass_color("&H000000FF") == Color(255, 0, 0, 255)


def test_ass_color_alpha_is_inverted():
    assert parse_ass_color("&H80FF0000").a == 255 - 0x80
    assert parse_ass_color("&HFF000000").a == 0


def test_ass_color_decimal_and_fallback():
    assert parse_ass_color("255") == Color(255, 0, 0)
    assert parse_ass_color("&Hzz&") == WHITE
    assert parse_ass_color("nope", fallback=BLACK) == BLACK


def test_css_colors_resolve_names_and_hex():
    assert parse_css_color("red") == Color(255, 0, 0)
    assert parse_css_color("#00FF7f") == Color(0, 255, 127)
    assert parse_css_color("notacolor") is None
    assert parse_css_color("rgb(1,2,3)") is None


@pytest.mark.parametrize("code,expected", [
    (1, (HorizontalAlign.LEFT, VerticalAlign.BOTTOM)),
    (2, (HorizontalAlign.CENTER, VerticalAlign.BOTTOM)),
    (7, (HorizontalAlign.RIGHT, VerticalAlign.MIDDLE)),
    (10, (HorizontalAlign.CENTER, VerticalAlign.TOP)),
    (4, (HorizontalAlign.CENTER, VerticalAlign.MIDDLE)),
])
def test_alignment_from_ssa(code, expected):
    assert alignment_from_ssa(code) == expected


def test_alignment_to_numpad():
    assert alignment_to_numpad(HorizontalAlign.CENTER, VerticalAlign.BOTTOM) == 2
    assert alignment_to_numpad(HorizontalAlign.RIGHT, VerticalAlign.TOP) == 9
    assert alignment_to_numpad(HorizontalAlign.LEFT, VerticalAlign.MIDDLE) == 4


def test_text_format_defaults():
    fmt = TextFormat()
    assert fmt.font_family == "Arial"
    assert fmt.font_size == 16
    assert fmt.text_color == WHITE
    assert fmt.background_color.a == 0
    assert fmt.alignment == (HorizontalAlign.CENTER, VerticalAlign.BOTTOM)


def test_ass_style_line_to_format():
    style = AssStyle.from_ass_line(
        "Sign,Verdana,24,&H00FFFF&,&H000000FF,&H00000000,&H00000000,-1,0,0,0,100,100,0,0,1,3.5,0,9,5,6,15,1"
    )
    fmt = style.to_text_format()
    assert fmt.font_family == "Verdana"
    assert fmt.bold is True
    assert fmt.text_color == Color(255, 255, 0)
    assert fmt.outline_width == 3
    assert (fmt.h_align, fmt.v_align) == (HorizontalAlign.LEFT, VerticalAlign.TOP)
    assert (fmt.margin_left, fmt.margin_right, fmt.margin_top, fmt.margin_bottom) == (5, 6, 15, 15)


def test_ass_style_too_few_fields():
    with pytest.raises(ValueError):
        AssStyle.from_ass_line("Default,Arial,20")

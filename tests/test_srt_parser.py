# tests/test_srt_parser.py
from eonsub_core.models import ErrorKind
from eonsub_core.subtitles import Color, SrtParser

from tests.samples import SRT_BASIC, SRT_THREE


def test_basic_entry():
    track, result = SrtParser().parse_content(SRT_BASIC)
    assert result.success
    assert result.parsed == 1 and result.skipped == 0
    assert result.detected_format == "SRT"
    entry = track.entries[0]
    assert (entry.start_ms, entry.end_ms) == (1000, 4000)
    assert entry.plain_text() == "Hello world"
    assert entry.format.bold is False
    assert track.format == "SRT"
    assert track.title == ""


def test_bold_and_entity():
    text = "1\n00:00:02,500 --> 00:00:05,000\n<b>A &amp; B</b>\n"
    track, result = SrtParser().parse_content(text)
    assert result.success
    entry = track.entries[0]
    assert (entry.start_ms, entry.end_ms) == (2500, 5000)
    assert entry.plain_text() == "A & B"
    assert entry.format.bold is True


def test_malformed_middle_block_is_skipped():
    text = (
        "1\n00:00:01,000 --> 00:00:02,000\nFirst\n\n"
        "2\nNo timing here\nstill none\n\n"
        "3\n00:00:05,000 --> 00:00:06,000\nThird\n"
    )
    track, result = SrtParser().parse_content(text)
    assert result.success
    assert (result.parsed, result.skipped) == (2, 1)
    assert [e.text for e in track] == ["First", "Third"]


def test_flags_colors_and_unknown_tags():
    text = (
        "1\n00:00:01,000 --> 00:00:02,000\n"
        '<I>slanted</I> <u>under</u> <s>gone</s> <font color="red">red</font> <blink>x</blink>\n'
    )
    entry = SrtParser().parse_content(text)[0].entries[0]
    assert entry.format.italic and entry.format.underline and entry.format.strikethrough
    assert not entry.format.bold
    assert entry.format.text_color == Color(255, 0, 0)
    assert entry.text == "slanted under gone red x"


def test_hex_font_color_and_unknown_color():
    text = (
        "1\n00:00:01,000 --> 00:00:02,000\n<font color=#00ff00>green</font>\n\n"
        "2\n00:00:03,000 --> 00:00:04,000\n<font color=\"nosuch\">plain</font>\n"
    )
    track, _ = SrtParser().parse_content(text)
    assert track.entries[0].format.text_color == Color(0, 255, 0)
    assert track.entries[1].format.text_color == Color(255, 255, 255)


def test_multiline_text_and_period_separator():
    text = "7\n00:00:01.000 --> 00:00:02,000\nline one\nline two\n\n8\n00:00:03,000 --> 00:00:04,000\nx\n"
    track, result = SrtParser().parse_content(text)
    assert result.success
    assert track.entries[0].text == "line one\nline two"


def test_entries_are_sorted():
    text = (
        "1\n00:00:05,000 --> 00:00:06,000\nlater\n\n"
        "2\n00:00:01,000 --> 00:00:02,000\nearlier\n"
    )
    track, _ = SrtParser().parse_content(text)
    assert [e.text for e in track] == ["earlier", "later"]


def test_inverted_timing_is_skipped():
    text = SRT_BASIC + "\n2\n00:00:09,000 --> 00:00:08,000\nbackwards\n"
    _, result = SrtParser().parse_content(text)
    assert (result.parsed, result.skipped) == (1, 1)


def test_structure_mismatch():
    track, result = SrtParser().parse_content("just some prose\nwith no timing\n")
    assert not result.success
    assert result.error_kind is ErrorKind.STRUCTURE_INVALID
    assert track.is_empty


def test_security_rejection():
    text = "1\n00:00:01,000 --> 00:00:02,000\n<script>alert(1)</script>\n"
    _, result = SrtParser().parse_content(text)
    assert not result.success
    assert result.error_kind is ErrorKind.SECURITY_REJECTED


def test_empty_result_when_all_blocks_bad():
    text = "1\n00:00:01,000 --> 00:00:02,000\n<i></i>\n"
    _, result = SrtParser().parse_content(text)
    assert not result.success
    assert result.error_kind is ErrorKind.EMPTY_RESULT
    assert result.skipped == 1


def test_entry_ceiling_keeps_prior_entries(small_settings):
    track, result = SrtParser(small_settings).parse_content(SRT_THREE)
    assert result.success
    assert (result.parsed, result.skipped) == (2, 1)
    assert len(track) == 2


def test_text_length_limit(small_settings):
    text = "1\n00:00:01,000 --> 00:00:02,000\n" + "w" * 41 + "\n\n2\n00:00:03,000 --> 00:00:04,000\nok\n"
    _, result = SrtParser(small_settings).parse_content(text)
    assert (result.parsed, result.skipped) == (1, 1)


def test_parse_file_sets_title_and_encoding(write_sub):
    path = write_sub("movie.srt", "\ufeff" + SRT_BASIC.replace("\n", "\r\n"), encoding="utf-16-le")
    track, result = SrtParser().parse_file(path)
    assert result.success
    assert result.detected_encoding == "UTF-16LE"
    assert track.title == "movie"
    assert track.encoding == "UTF-16LE"


def test_parse_file_missing(tmp_path):
    _, result = SrtParser().parse_file(tmp_path / "gone.srt")
    assert result.error_kind is ErrorKind.NOT_FOUND


def test_can_parse_checks_extension_and_content(write_sub):
    parser = SrtParser()
    assert parser.can_parse(write_sub("a.srt", SRT_BASIC))
    assert not parser.can_parse(write_sub("a.txt", SRT_BASIC))
    assert not parser.can_parse(write_sub("b.srt", "nothing"))
    assert parser.validate_file(write_sub("c.srt", SRT_BASIC))
    assert not parser.validate_content("")
    assert parser.detect_encoding(write_sub("d.srt", SRT_BASIC)) == "UTF-8"


def test_lone_surrogate_is_decode_error():
    track, result = SrtParser().parse_content("1\n00:00:01,000 --> 00:00:02,000\nbad \ud800\n")
    assert result.error_kind is ErrorKind.DECODE_ERROR
    assert track.is_empty()

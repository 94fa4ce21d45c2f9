# tests/test_discovery.py
from pathlib import Path

from eonsub_core.subtitles import discover_subtitles


def _touch(root: Path, *names):
    for name in names:
        (root / name).write_text("x", encoding="utf-8")


def test_exact_name_before_suffixed(tmp_path):
    _touch(tmp_path, "film.mkv", "film.srt", "film.en.srt", "unrelated.srt")
    found = discover_subtitles(tmp_path / "film.mkv", ["srt", "ass", "ssa"])
    assert found == [tmp_path / "film.srt", tmp_path / "film.en.srt"]


def test_suffix_order_then_extension_order(tmp_path):
    _touch(tmp_path, "film.subtitle.srt", "film.eng.ass", "film.eng.srt", "film.ssa", "film.english.srt")
    found = discover_subtitles(tmp_path / "film.mkv", [".SRT", "ass", "ssa", "srt"])
    assert [p.name for p in found] == [
        "film.ssa",
        "film.eng.srt",
        "film.eng.ass",
        "film.english.srt",
        "film.subtitle.srt",
    ]


def test_media_file_need_not_exist_but_folder_must(tmp_path):
    _touch(tmp_path, "show.srt")
    assert discover_subtitles(tmp_path / "show.mp4", ["srt"]) == [tmp_path / "show.srt"]
    assert discover_subtitles(tmp_path / "nope" / "show.mp4", ["srt"]) == []


def test_directories_are_ignored(tmp_path):
    (tmp_path / "film.srt").mkdir()
    assert discover_subtitles(tmp_path / "film.mkv", ["srt"]) == []

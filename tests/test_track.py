# tests/test_track.py
import pytest

from eonsub_core.subtitles import SubtitleEntry, SubtitleTrack


def _track(*spans):
    track = SubtitleTrack(title="t")
    for i, (start, end) in enumerate(spans):
        assert track.add(SubtitleEntry(start, end, f"line {i}"))
    track.sort_by_time()
    return track


# -------- entry --------

def test_entry_active_interval_is_closed():
    entry = SubtitleEntry(1000, 2000, "x")
    assert entry.is_active_at(1000)
    assert entry.is_active_at(2000)
    assert not entry.is_active_at(2001)


def test_entry_validity():
    assert SubtitleEntry(0, 1, "ok").is_valid()
    assert not SubtitleEntry(-1, 1, "neg").is_valid()
    assert not SubtitleEntry(5, 5, "empty interval").is_valid()
    assert not SubtitleEntry(0, 1, "   ").is_valid()
    assert not SubtitleEntry(0, 1, "bell\x07").is_valid()
    assert SubtitleEntry(0, 1, "tab\tand\nnewline").is_valid()


def test_entry_plain_text_strips_markup():
    entry = SubtitleEntry(0, 1, "{\\an8}<i>Hello</i>\n   there  ")
    assert entry.plain_text() == "Hello there"


def test_entry_overlap_and_string():
    a = SubtitleEntry(0, 1000, "a")
    assert a.overlaps_with(SubtitleEntry(1000, 2000, "b"))
    assert not a.overlaps_with(SubtitleEntry(1001, 2000, "c"))
    assert a.to_string() == "[00:00:00.000 --> 00:00:01.000] a"


# -------- track --------

def test_add_rejects_invalid_entries():
    track = SubtitleTrack()
    assert not track.add(SubtitleEntry(10, 5, "backwards"))
    assert track.is_empty


def test_sort_is_stable():
    track = SubtitleTrack()
    track.add(SubtitleEntry(500, 900, "b"))
    track.add(SubtitleEntry(100, 200, "a"))
    track.add(SubtitleEntry(500, 600, "c"))
    track.sort_by_time()
    assert [e.text for e in track] == ["a", "b", "c"]


def test_validate_removes_entries_made_invalid():
    track = _track((0, 100), (200, 300))
    track.entries[1].text = ""
    assert track.validate() == 1
    assert len(track) == 1


def test_active_at_matches_linear_scan():
    track = _track((0, 5000), (1000, 1500), (1400, 2000), (3000, 3100))
    for t in range(0, 5200, 50):
        expected = [e for e in track.entries if e.start_ms <= t <= e.end_ms]
        assert track.active_at(t) == expected


def test_active_at_on_unsorted_track():
    track = SubtitleTrack()
    track.add(SubtitleEntry(3000, 4000, "late"))
    track.add(SubtitleEntry(0, 3500, "early"))
    assert [e.text for e in track.active_at(3200)] == ["late", "early"]


def test_active_at_sees_added_entries():
    track = _track((0, 100))
    assert track.active_at(500) == []
    track.add(SubtitleEntry(400, 600, "new"))
    assert [e.text for e in track.active_at(500)] == ["new"]


def test_next_and_previous():
    track = _track((0, 100), (200, 300), (400, 500))
    assert track.next_after(200).start_ms == 400
    assert track.next_after(500) is None
    assert track.previous_before(200).start_ms == 0
    assert track.previous_before(0) is None


def test_total_duration():
    assert SubtitleTrack().total_duration() == 0
    assert _track((0, 9000), (100, 200)).total_duration() == 9000


def test_shift_clamps_and_keeps_duration():
    track = _track((500, 1500), (3000, 3200))
    track.shift(-1000)
    assert [(e.start_ms, e.end_ms) for e in track] == [(0, 1000), (2000, 2200)]


def test_scale_truncates():
    track = _track((1000, 2001))
    track.scale(1.5)
    assert (track.entries[0].start_ms, track.entries[0].end_ms) == (1500, 3001)


def test_scale_drops_entries_truncated_to_zero_length():
    track = _track((1000, 1001), (2000, 4000))
    track.scale(0.5)
    assert [(e.start_ms, e.end_ms) for e in track] == [(1000, 2000)]
    assert all(e.is_valid() for e in track)
    assert track.active_at(500) == []


def test_scale_rejects_non_positive_factor():
    track = _track((1000, 2000))
    with pytest.raises(ValueError):
        track.scale(0)
    assert (track.entries[0].start_ms, track.entries[0].end_ms) == (1000, 2000)


def test_remove_and_clear():
    track = _track((0, 100), (200, 300))
    track.remove(0)
    assert track.entry_at(0).start_ms == 200
    assert track.entry_at(5) is None
    track.clear()
    assert len(track) == 0

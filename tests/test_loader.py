# tests/test_loader.py
import threading

import pytest

from eonsub_core.models import ErrorKind
from eonsub_core.subtitles import BackgroundLoader, LoadCancelled, SubtitleEngine, TrackLoaded
from tests.fakes import EventRecorder
from tests.samples import ASS_TWO_STYLES, SRT_BASIC


class GatedReader:
    """Reader that blocks until released, so tests control when a load finishes."""
    def __init__(self):
        self.release = threading.Event()

    def __call__(self, path):
        self.release.wait(timeout=5)
        return path.read_bytes()


def test_loads_publish_in_submission_order(write_sub):
    recorder = EventRecorder()
    engine = SubtitleEngine(event_callback=recorder)
    first = write_sub("a.srt", SRT_BASIC)
    second = write_sub("b.ass", ASS_TWO_STYLES)

    with BackgroundLoader(engine) as loader:
        tickets = [loader.submit(first), loader.submit(second)]
        for ticket in tickets:
            ticket.wait(timeout=5)
        results = loader.publish_ready()

    assert [r.success for r in results] == [True, True]
    assert [e.track.title for e in recorder.of(TrackLoaded)] == ["a", "Two Styles"]
    assert engine.active_index == 0


def test_nothing_published_before_driver_call(write_sub):
    reader = GatedReader()
    engine = SubtitleEngine(file_reader=reader)
    loader = BackgroundLoader(engine)
    try:
        ticket = loader.submit(write_sub("a.srt", SRT_BASIC))
        assert loader.publish_ready() == []
        assert engine.track_count == 0
        reader.release.set()
        ticket.wait(timeout=5)
        assert engine.track_count == 0
        assert len(loader.publish_ready()) == 1
        assert engine.track_count == 1
    finally:
        reader.release.set()
        loader.shutdown()


def test_cancelled_load_is_discarded(write_sub):
    reader = GatedReader()
    engine = SubtitleEngine(file_reader=reader)
    loader = BackgroundLoader(engine, max_workers=1)
    try:
        ticket = loader.submit(write_sub("a.srt", SRT_BASIC))
        ticket.cancel()
        reader.release.set()
        ticket.wait(timeout=5)
        assert ticket.cancelled
        assert ticket.prepared() is None
        assert loader.publish_ready() == []
        assert loader.pending == 0
        assert engine.track_count == 0
    finally:
        reader.release.set()
        loader.shutdown()


def test_failed_load_is_published_as_failure(tmp_path):
    engine = SubtitleEngine()
    with BackgroundLoader(engine) as loader:
        ticket = loader.submit(tmp_path / "missing.srt")
        ticket.wait(timeout=5)
        results = loader.publish_ready()
    assert len(results) == 1
    assert results[0].error_kind is ErrorKind.NOT_FOUND


def test_prepare_file_honors_cancel_event(write_sub):
    engine = SubtitleEngine()
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(LoadCancelled) as excinfo:
        engine.prepare_file(write_sub("a.srt", SRT_BASIC), cancel)
    assert excinfo.value.kind is ErrorKind.CANCELLED
    assert engine.track_count == 0

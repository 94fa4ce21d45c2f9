# tests/conftest.py
from pathlib import Path
import pytest

from eonsub_core.models import SubtitleSettings

@pytest.fixture
def write_sub(tmp_path: Path):
    """Write subtitle text to a file under tmp_path and return its path."""
    def _write(name: str, text: str, encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path
    return _write


@pytest.fixture
def small_settings():
    """Tight limits so ceiling behavior can be exercised with tiny inputs."""
    return SubtitleSettings(max_file_size=4096, max_entries=2, max_tag_spans=3, max_text_length=40)


@pytest.fixture
def recorder():
    from tests.fakes import EventRecorder
    return EventRecorder()


@pytest.fixture
def engine(recorder):
    from eonsub_core.subtitles import SubtitleEngine
    return SubtitleEngine(event_callback=recorder)

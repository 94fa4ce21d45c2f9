# tests/test_registry.py
from eonsub_core.subtitles import AssParser, ParserRegistry, SrtParser, default_registry

from tests.samples import ASS_TWO_STYLES, SRT_BASIC


def test_default_registry_is_shared_and_ordered():
    registry = default_registry()
    assert registry is default_registry()
    assert [p.name for p in registry.parsers] == ["SRT", "ASS"]
    assert registry.supported_extensions() == ["srt", "ass", "ssa"]


def test_for_extension_normalizes():
    registry = ParserRegistry.with_defaults()
    assert isinstance(registry.for_extension(".SRT"), SrtParser)
    assert isinstance(registry.for_extension("ssa"), AssParser)
    assert registry.for_extension("vtt") is None


def test_for_content():
    registry = ParserRegistry.with_defaults()
    assert isinstance(registry.for_content(SRT_BASIC), SrtParser)
    assert isinstance(registry.for_content(ASS_TWO_STYLES), AssParser)
    assert registry.for_content("hello") is None


def test_for_path_prefers_extension_then_falls_back(write_sub):
    registry = ParserRegistry.with_defaults()
    assert isinstance(registry.for_path(write_sub("a.srt", SRT_BASIC)), SrtParser)
    # ASS content saved with an .ssa name resolves by extension
    assert isinstance(registry.for_path(write_sub("b.ssa", ASS_TWO_STYLES)), AssParser)
    # SRT content under an .ass name: the ASS parser refuses it, SRT only accepts .srt
    assert registry.for_path(write_sub("c.ass", SRT_BASIC)) is None


def test_register_is_additive():
    registry = ParserRegistry()
    registry.register(AssParser())
    registry.register(SrtParser())
    assert registry.supported_extensions() == ["ass", "ssa", "srt"]

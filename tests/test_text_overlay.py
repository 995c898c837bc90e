from __future__ import annotations

from arcade_frame import Color, Frame
from arcade_overlay import BUILD_LINES, CompileLanguage, CompileLog, _split_verb
from arcade_text import TEXTS, Language, Translations, detect_system_language


# ── Translations ────────────────────────────────────────────────────────

def test_namespaced_lookup():
    texts = Translations("tetris", Language.ENGLISH)
    assert texts.get_text("score") == "Score:"
    texts.set_language(Language.CHINESE)
    assert texts.get_text("score") == "分数："


def test_common_lookup_without_namespace():
    assert Translations(language=Language.ENGLISH).get_text("snake_title") == "Snake"


def test_falls_back_to_english(monkeypatch):
    monkeypatch.setitem(TEXTS, "tetris.only_en", {Language.ENGLISH: "Hello"})
    assert Translations("tetris", Language.CHINESE).get_text("only_en") == "Hello"


def test_missing_key_placeholder():
    texts = Translations("tetris", Language.ENGLISH)
    assert texts.get_text("nope") == "Missing translation: tetris.nope"


def test_lines_split_multiline_entries():
    rows = Translations(language=Language.ENGLISH).lines("controls")
    assert rows[0] == "Controls:"
    assert len(rows) > 1


def test_detect_system_language(monkeypatch):
    monkeypatch.setenv("LANG", "zh_CN.UTF-8")
    assert detect_system_language() is Language.CHINESE
    assert Translations().language is Language.CHINESE
    monkeypatch.setenv("LANG", "de_DE.UTF-8")
    assert detect_system_language() is Language.ENGLISH
    monkeypatch.delenv("LANG")
    assert detect_system_language() is Language.ENGLISH


# ── Compile overlay ─────────────────────────────────────────────────────

def test_rotates_every_five_ticks():
    log = CompileLog()
    rust = BUILD_LINES[CompileLanguage.RUST]
    assert log.visible(3) == rust[:3]
    for _ in range(4):
        log.tick()
    assert log.visible(1) == [rust[0]]
    log.tick()
    assert log.visible(1) == [rust[1]]
    assert log.visible(len(rust))[-1] == rust[0]


def test_set_style_restarts_rotation():
    log = CompileLog()
    for _ in range(10):
        log.tick()
    log.set_style(CompileLanguage.GO)
    assert log.style is CompileLanguage.GO
    assert log.tick_count == 0
    assert log.visible(1) == [BUILD_LINES[CompileLanguage.GO][0]]


def test_visible_never_exceeds_rows():
    log = CompileLog(CompileLanguage.CMAKE)
    assert log.visible(0) == []
    assert len(log.visible(500)) == len(BUILD_LINES[CompileLanguage.CMAKE])


def test_render_colors_the_verb():
    frame = Frame(60, 10)
    CompileLog().render(frame)
    assert frame.row_text(0).startswith("┌Compiling")
    assert frame.row_text(1).startswith("│Compiling libc")
    glyph, fg, _ = frame.cell(1, 1)
    assert glyph == "C"
    assert fg is Color.GREEN
    assert bool(frame.bold[1, 1])


def test_split_verb():
    assert _split_verb("Compiling rand v0.8.5") == ("Compiling", "rand v0.8.5")
    assert _split_verb("[ 27%] Built target core") == ("[ 27%]", "Built target core")

from __future__ import annotations

import curses

import pytest

from arcade import (
    MENU_ORDER, Arcade, EventLog, GameKind, build_game, paint,
)
from arcade_2048 import TwentyFortyEight
from arcade_bench import FakeWindow, NullColorMap, measure
from arcade_engine import KEY_ESC, Phase
from arcade_frame import text_width
from arcade_goldminer import GoldMiner
from arcade_mines import Minesweeper
from arcade_overlay import CompileLanguage
from arcade_snake import Snake
from arcade_tetris import Tetris
from arcade_text import Language

ENTER = 10


@pytest.fixture
def arcade() -> Arcade:
    return Arcade(viewport=(80, 24))


class RecordingWindow(FakeWindow):
    def __init__(self, rows: int, cols: int) -> None:
        super().__init__(rows, cols)
        self.writes: list[tuple[int, int, str]] = []

    def addstr(self, *args: object) -> None:
        super().addstr(*args)
        y, x, text = args[0], args[1], args[2]
        self.writes.append((y, x, text))  # type: ignore[arg-type]


def test_build_game_types():
    assert isinstance(build_game(GameKind.GOLDMINER), GoldMiner)
    assert isinstance(build_game(GameKind.TETRIS), Tetris)
    assert isinstance(build_game(GameKind.SNAKE), Snake)
    assert isinstance(build_game(GameKind.TWENTY_FORTY_EIGHT), TwentyFortyEight)
    assert isinstance(build_game(GameKind.MINESWEEPER), Minesweeper)


def test_starts_on_menu(arcade):
    assert arcade.active is None
    assert arcade.running
    frame = arcade.render(80, 24)
    assert "Terminal Game Collection" in frame
    assert "1. Gold Miner" in frame
    assert "5. Minesweeper" in frame


def test_arrows_move_the_highlight_and_clamp(arcade):
    arcade.handle_input(curses.KEY_UP)
    assert arcade.selected == 0
    for _ in range(10):
        arcade.handle_input(curses.KEY_DOWN)
    assert arcade.selected == len(MENU_ORDER) - 1
    arcade.handle_input(curses.KEY_UP)
    arcade.handle_input(ENTER)
    assert arcade.active is GameKind.TWENTY_FORTY_EIGHT


def test_digit_opens_game_on_welcome(arcade):
    arcade.handle_input(ord("3"))
    assert arcade.active is GameKind.SNAKE
    assert arcade.selected == 2
    assert arcade.active_game.phase is Phase.WELCOME


def test_digit_out_of_range_is_ignored(arcade):
    arcade.handle_input(ord("9"))
    assert arcade.active is None


def test_keys_go_to_the_active_game(arcade):
    arcade.handle_input(ord("2"))
    arcade.handle_input(ENTER)
    assert arcade.games[GameKind.TETRIS].phase is Phase.PLAYING
    assert arcade.games[GameKind.SNAKE].phase is Phase.WELCOME


def test_q_returns_to_menu_then_quits(arcade):
    arcade.handle_input(ord("2"))
    arcade.handle_input(ENTER)
    arcade.handle_input(ord("q"))
    assert arcade.active is None
    assert arcade.running
    # the game keeps its state
    arcade.handle_input(ord("2"))
    assert arcade.active_game.phase is Phase.PLAYING
    arcade.handle_input(ord("Q"))
    arcade.handle_input(ord("q"))
    assert not arcade.running


def test_language_chooser_forwards_to_every_game(arcade):
    arcade.handle_input(ord("t"))
    assert arcade.selecting_language
    assert "Select Language:" in arcade.render(80, 24)
    # q does not quit while choosing
    arcade.handle_input(ord("q"))
    assert arcade.running and arcade.selecting_language
    arcade.handle_input(ord("c"))
    assert not arcade.selecting_language
    assert arcade.texts.language is Language.CHINESE
    for game in arcade.games.values():
        assert game.texts.language is Language.CHINESE
        assert game.common_texts.language is Language.CHINESE
    assert "终端游戏集合" in arcade.render(80, 24)


def test_language_chooser_cancel(arcade):
    arcade.handle_input(ord("t"))
    arcade.handle_input(KEY_ESC)
    assert not arcade.selecting_language
    assert arcade.texts.language is Language.ENGLISH


def test_compile_chooser_forwards_to_every_game(arcade):
    arcade.handle_input(ord("c"))
    assert arcade.selecting_compile
    arcade.handle_input(ord("g"))
    assert not arcade.selecting_compile
    assert arcade.compile_language is CompileLanguage.GO
    for game in arcade.games.values():
        assert game.overlay.style is CompileLanguage.GO
    assert "Go" in arcade.render(80, 24)


def test_update_ticks_only_the_active_game(arcade):
    assert arcade.update() == []
    arcade.handle_input(ord("2"))
    arcade.handle_input(ENTER)
    assert arcade.update() == [(GameKind.TETRIS, "start", 0)]
    tetris = arcade.games[GameKind.TETRIS]
    assert tetris.tick_count == 1
    assert arcade.games[GameKind.SNAKE].tick_count == 0


def test_render_follows_the_active_game(arcade):
    arcade.handle_input(ord("4"))
    frame = arcade.render(80, 24)
    assert frame.title == "2048"
    assert "Welcome to 2048!" in frame


def test_paint_copies_frame_rows(arcade):
    window = RecordingWindow(24, 80)
    paint(window, arcade.render(80, 24), NullColorMap())  # type: ignore[arg-type]
    assert window.calls == len(window.writes) > 0
    first = [w for w in window.writes if w[0] == 0]
    assert first[0][1] == 0
    assert first[0][2].startswith("┌")
    assert "".join(w[2] for w in first).startswith("┌Terminal Game Collection")


def test_paint_clips_to_window(arcade):
    window = RecordingWindow(5, 10)
    paint(window, arcade.render(80, 24), NullColorMap())  # type: ignore[arg-type]
    assert all(y < 5 and x < 10 for y, x, _ in window.writes)


def test_event_log_writes_csv(tmp_path):
    path = tmp_path / "events.csv"
    log = EventLog(path)
    log.open()
    log.log("tetris", "lines:2", 300)
    log.close()
    rows = path.read_text().splitlines()
    assert rows[0] == "time_s,game,event,score"
    assert rows[1].endswith(",tetris,lines:2,300")


def test_event_log_survives_bad_path(tmp_path):
    log = EventLog(tmp_path / "missing" / "events.csv")
    log.open()
    log.log("snake", "start", 0)
    log.close()
    assert not (tmp_path / "missing").exists()


@pytest.mark.parametrize("kind", list(GameKind))
def test_bench_drives_every_game(kind):
    timings = measure(kind, 40, term_rows=30, term_cols=90)
    assert set(timings) == {"input", "tick", "render", "paint", "total"}
    assert all(len(v) == 40 for v in timings.values())


def test_chinese_rows_stay_inside_the_frame(arcade):
    arcade.set_language(Language.CHINESE)
    frames = [arcade.render(60, 24)]
    arcade.handle_input(ord("1"))
    frames.append(arcade.render(60, 24))
    for frame in frames:
        for y in range(frame.height):
            assert text_width(frame.row_text(y)) == 60
        for y in range(1, frame.height - 1):
            assert frame.cell(59, y)[0] == "│"

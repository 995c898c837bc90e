from __future__ import annotations

import curses

from arcade_engine import (
    KEY_ESC, ArcadeGame, Direction, Phase, direction_for_key, is_pause, key_is,
)
from arcade_frame import (
    WIDE_FILLER, Color, Frame, Span, char_width, clip_text, line, text_width,
)


class Counter(ArcadeGame):
    """Smallest possible game: counts its Playing ticks."""

    NAMESPACE = "tetris"

    def _reset_board(self) -> None:
        self.advanced = 0

    def _advance(self) -> None:
        self.advanced += 1

    def _render_board(self, frame: Frame) -> None:
        frame.paragraph([line(f"count {self.advanced}")])


# ── Frame ───────────────────────────────────────────────────────────────

def test_put_outside_grid_is_dropped():
    frame = Frame(10, 4)
    frame.put(-1, 0, "x")
    frame.put(10, 0, "x")
    frame.put(0, 4, "x")
    assert "x" not in frame


def test_write_returns_next_column():
    frame = Frame(10, 4)
    assert frame.write(2, 1, "abc") == 5
    assert frame.row_text(1) == "  abc     "


def test_write_line_respects_limit():
    frame = Frame(10, 3)
    end = frame.write_line(1, 1, [Span("abcd"), Span("efghijkl")], limit=9)
    assert end == 9
    assert frame.row_text(1) == " abcdefgh "


def test_cell_reports_colors():
    frame = Frame(4, 4)
    frame.put(1, 1, "x", Color.RED, Color.YELLOW)
    assert frame.cell(1, 1) == ("x", Color.RED, Color.YELLOW)
    assert frame.cell(0, 0) == (" ", Color.DEFAULT, Color.DEFAULT)


def test_box_corners_and_title():
    frame = Frame(10, 4)
    frame.box("Hi", Color.CYAN)
    assert frame.row_text(0).startswith("┌Hi")
    assert frame.cell(9, 0)[0] == "┐"
    assert frame.cell(0, 3)[0] == "└"
    assert frame.cell(9, 3)[0] == "┘"
    assert frame.cell(1, 0)[1] is Color.CYAN
    assert frame.title == "Hi"


def test_paragraph_truncates_from_bottom():
    frame = Frame(10, 4)
    frame.paragraph([line("a"), line("b"), line("c")])
    assert frame.row_text(1).strip() == "a"
    assert frame.row_text(2).strip() == "b"


def test_paragraph_centers():
    frame = Frame(12, 3)
    frame.paragraph([line("ab")], centered=True)
    assert frame.row_text(1)[5:7] == "ab"


# ── Double-width glyphs ─────────────────────────────────────────────────

def test_char_width():
    assert char_width("a") == 1
    assert char_width("█") == 1
    assert char_width("中") == 2
    assert text_width("分数：12") == 8
    assert clip_text("中文ab", 3) == "中"
    assert clip_text("中文ab", 5) == "中文a"


def test_wide_glyph_takes_two_cells():
    frame = Frame(6, 3)
    assert frame.write(1, 1, "中a") == 4
    assert frame.cell(1, 1)[0] == "中"
    assert frame.cell(2, 1)[0] == WIDE_FILLER
    assert frame.row_text(1) == " 中a  "


def test_overwriting_half_a_wide_glyph_blanks_it():
    frame = Frame(6, 3)
    frame.write(1, 1, "中a")
    frame.write(2, 1, "b")
    assert frame.row_text(1) == "  ba  "
    frame.write(0, 2, "中")
    frame.write(0, 2, "x")
    assert frame.row_text(2) == "x     "


def test_wide_glyph_never_spills_past_the_edge():
    frame = Frame(4, 3)
    assert frame.write_line(1, 1, [Span("中文"), Span("x")], limit=3) == 3
    assert frame.row_text(1) == " 中 "
    edge = Frame(3, 1)
    edge.write(2, 0, "中")
    assert text_width(edge.row_text(0)) == 3


def test_paragraph_centers_by_display_width():
    frame = Frame(12, 3)
    frame.paragraph([line("中文")], centered=True)
    assert frame.cell(4, 1)[0] == "中"


def test_too_small():
    assert Frame.too_small(19, 10, 20, 10)
    assert Frame.too_small(20, 9, 20, 10)
    assert not Frame.too_small(20, 10, 20, 10)


# ── Keys ────────────────────────────────────────────────────────────────

def test_key_helpers():
    assert key_is(ord("Q"), "q")
    assert key_is(ord("q"), "q")
    assert not key_is(-1, "q")
    assert is_pause(KEY_ESC)
    assert is_pause(ord("P"))
    assert not is_pause(ord("x"))


def test_direction_for_key():
    assert direction_for_key(curses.KEY_UP) is Direction.UP
    assert direction_for_key(ord("a")) is Direction.LEFT
    assert direction_for_key(ord("D")) is Direction.RIGHT
    assert direction_for_key(ord("x")) is None
    assert Direction.LEFT.opposite() is Direction.RIGHT


# ── Phase machine ───────────────────────────────────────────────────────

def test_starts_on_welcome_and_does_not_advance():
    game = Counter()
    assert game.phase is Phase.WELCOME
    game.tick()
    assert game.advanced == 0
    assert not game.handle_input(ord("x"))
    assert game.phase is Phase.WELCOME


def test_enter_starts_playing():
    game = Counter()
    assert game.handle_input(10)
    assert game.phase is Phase.PLAYING
    game.tick()
    assert game.advanced == 1
    assert game.pop_events() == ["start"]
    assert game.pop_events() == []


def test_pause_freezes_game_and_ticks_overlay():
    game = Counter()
    game.handle_input(10)
    game.handle_input(ord("p"))
    assert game.phase is Phase.PAUSED
    for _ in range(7):
        game.tick()
    assert game.advanced == 0
    assert game.overlay.tick_count == 7
    # only the pause key leaves Paused
    assert not game.handle_input(ord("x"))
    assert game.handle_input(KEY_ESC)
    assert game.phase is Phase.PLAYING
    game.tick()
    assert game.advanced == 1
    assert game.overlay.tick_count == 7
    assert game.pop_events() == ["start", "pause", "resume"]


def test_paused_render_is_the_overlay():
    game = Counter()
    game.handle_input(10)
    game.handle_input(ord("p"))
    frame = game.render(80, 24)
    assert frame.title == "Compiling"
    assert "Compiling libc" in frame


def test_paused_render_refreshes_viewport():
    game = Counter(viewport=(80, 24))
    game.handle_input(10)
    game.handle_input(ord("p"))
    game.render(50, 20)
    assert (game.view_w, game.view_h) == (50, 20)
    assert game.phase is Phase.PAUSED


def test_game_over_only_restarts_on_r():
    game = Counter()
    game.handle_input(10)
    game.score = 42
    game.game_over = True
    assert not game.handle_input(ord("p"))
    assert game.phase is Phase.PLAYING
    assert game.handle_input(ord("R"))
    assert game.phase is Phase.PLAYING
    assert not game.game_over
    assert game.score == 0
    assert game.pop_events()[-1] == "restart"


def test_too_small_render_does_not_touch_state():
    game = Counter(viewport=(80, 24))
    game.handle_input(10)
    frame = game.render(30, 5)
    assert "Window too small!" in frame
    assert (game.view_w, game.view_h) == (80, 24)
    assert game.phase is Phase.PLAYING


def test_render_welcome_and_board():
    game = Counter()
    welcome = game.render(40, 12)
    assert welcome.title == "Tetris"
    game.handle_input(10)
    game.tick()
    board = game.render(40, 12)
    assert "count 1" in board
    assert (game.view_w, game.view_h) == (40, 12)

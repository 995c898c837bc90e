from __future__ import annotations

import curses
import random

import numpy as np
import pytest

from arcade_engine import KEY_SPACE, Phase
from arcade_tetris import SHAPES, Piece, Tetris

I_PIECE = 0


@pytest.fixture
def game() -> Tetris:
    g = Tetris(rng=random.Random(3))
    g.handle_input(10)
    g.pop_events()
    return g


def vertical_i(x: int, y: int) -> Piece:
    # clockwise turn puts the I's blocks in mask column 2
    return Piece(I_PIECE, x, y, np.rot90(SHAPES[I_PIECE], k=-1).copy())


def test_spawns_inside_the_well(game):
    rows, cols = game.piece.cells()
    assert (cols >= 0).all() and (cols < 10).all()
    assert (rows >= 0).all()
    assert game.board.shape == (20, 10)


def test_move_into_wall_is_rejected(game):
    game.piece = Piece(I_PIECE, 0, 5, SHAPES[I_PIECE].copy())
    assert not game.handle_input(curses.KEY_LEFT)
    assert game.piece.x == 0
    assert game.handle_input(ord("d"))
    assert game.piece.x == 1


def test_move_into_blocks_is_rejected(game):
    game.piece = Piece(I_PIECE, 3, 5, SHAPES[I_PIECE].copy())
    game.board[7, 4] = 1
    assert not game.move_piece(0, 1)
    assert game.piece.y == 5


def test_rotate_clockwise(game):
    game.piece = Piece(I_PIECE, 3, 5, SHAPES[I_PIECE].copy())
    assert game.handle_input(curses.KEY_UP)
    assert game.piece.shape[:, 2].all()
    assert game.piece.shape.sum() == 4


def test_rotation_blocked_by_wall(game):
    game.piece = vertical_i(7, 5)
    before = game.piece.shape.copy()
    assert not game.rotate_piece()
    assert np.array_equal(game.piece.shape, before)


def test_single_line_clear(game):
    game.board[19, :] = 1
    game.board[19, 3:7] = 0
    game.piece = Piece(I_PIECE, 3, 0, SHAPES[I_PIECE].copy())
    assert game.handle_input(KEY_SPACE)
    assert game.score == 100
    assert game.lines_cleared == 1
    assert not game.board.any()
    assert "lines:1" in game.pop_events()


def test_double_line_clear_shifts_rows_down(game):
    game.board[18:, 1:] = 1
    game.piece = vertical_i(-2, 0)
    game.hard_drop()
    assert game.score == 300
    assert game.lines_cleared == 2
    assert (game.board[18:, 0] > 0).all()
    assert not game.board[18:, 1:].any()
    assert not game.board[:18].any()


@pytest.mark.parametrize("n, points", [(1, 100), (2, 300), (3, 500), (4, 800)])
def test_line_scores(game, n, points):
    game.board[20 - n:, :] = 1
    assert game.clear_lines() == n
    assert game.score == points


def test_gravity_every_twenty_ticks(game):
    game.piece = Piece(I_PIECE, 3, 0, SHAPES[I_PIECE].copy())
    for _ in range(19):
        game.tick()
    assert game.piece.y == 0
    game.tick()
    assert game.piece.y == 1


def test_piece_locks_when_gravity_is_blocked(game):
    game.piece = Piece(I_PIECE, 3, 18, SHAPES[I_PIECE].copy())
    game.tick_count = 19
    game.tick()
    assert (game.board[19, 3:7] == I_PIECE + 1).all()
    assert game.piece.y == 0


def test_blocked_spawn_ends_game_and_r_restarts(game):
    game.board[0:4, :] = 1
    game._spawn_piece()
    assert game.game_over
    assert "game_over" in game.pop_events()
    assert not game.handle_input(curses.KEY_LEFT)
    assert game.handle_input(ord("r"))
    assert game.phase is Phase.PLAYING
    assert not game.game_over
    assert game.score == 0
    assert not game.board.any()


def test_paused_game_ignores_gravity(game):
    game.handle_input(ord("p"))
    y = game.piece.y
    for _ in range(100):
        game.tick()
    assert game.piece.y == y


def test_render_board_and_score(game):
    frame = game.render(40, 30)
    assert "Score: 0" in frame
    assert "██" in frame
    assert "··" in frame


def test_short_window_shows_resize_notice(game):
    frame = game.render(40, 12)
    assert "Please resize" in frame
    assert "Score: 0" not in frame


def test_smallest_window_shows_every_well_row(game):
    assert game.min_size() == (36, 24)
    frame = game.render(36, 24)
    well_rows = [
        y for y in range(frame.height)
        if "··" in frame.row_text(y) or "██" in frame.row_text(y)
    ]
    assert len(well_rows) == 20
    assert "Score: 0" in frame
    game.game_over = True
    assert "Game Over!" in game.render(36, 24)

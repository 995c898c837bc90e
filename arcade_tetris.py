"""
Falling blocks on a 10 × 20 well.

The board is an int8 grid: 0 is empty, k + 1 is a locked block of shape k
(kept so locked blocks stay colored by the piece they came from). The
active piece is a 4 × 4 boolean mask with a position; every move or
rotation is checked against the walls and the locked blocks before it is
committed, and rejected whole if it does not fit.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray

from arcade_engine import KEY_SPACE, ArcadeGame, Direction, direction_for_key
from arcade_frame import Color, Frame, Line, Span, line


def _shape(*rows: str) -> NDArray[np.bool_]:
    return np.array([[ch == "#" for ch in row] for row in rows], dtype=np.bool_)


# I, O, T, J, L, S, Z
SHAPES: tuple[NDArray[np.bool_], ...] = (
    _shape("....", "####", "....", "...."),
    _shape("....", ".##.", ".##.", "...."),
    _shape("....", ".#..", "###.", "...."),
    _shape("....", "#...", "###.", "...."),
    _shape("....", "..#.", "###.", "...."),
    _shape("....", ".##.", "##..", "...."),
    _shape("....", "##..", ".##.", "...."),
)

PIECE_COLORS: tuple[Color, ...] = (
    Color.CYAN, Color.YELLOW, Color.MAGENTA, Color.BLUE,
    Color.WHITE, Color.GREEN, Color.RED,
)

BLOCK = "██"
EMPTY = "··"


@dataclass(frozen=True)
class TetrisTuning:
    width: int = 10
    height: int = 20
    gravity_ticks: int = 20           # ticks per automatic one-row drop
    spawn_x: int = 3
    spawn_y: int = 0
    line_scores: tuple[int, ...] = (0, 100, 300, 500, 800)


DEFAULT_TUNING = TetrisTuning()


@dataclass
class Piece:
    kind: int
    x: int
    y: int
    shape: NDArray[np.bool_] = field(repr=False)

    def cells(self, shape: NDArray[np.bool_] | None = None,
               x: int | None = None, y: int | None = None) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
        """Board (rows, cols) covered by this piece, optionally displaced."""
        s = self.shape if shape is None else shape
        rows, cols = np.nonzero(s)
        return rows + (self.y if y is None else y), cols + (self.x if x is None else x)


class Tetris(ArcadeGame):

    NAMESPACE: ClassVar[str] = "tetris"
    TITLE_COLOR: ClassVar[Color] = Color.CYAN
    MIN_WIDTH: ClassVar[int] = 36

    def __init__(
        self,
        tuning: TetrisTuning = DEFAULT_TUNING,
        rng: random.Random | None = None,
        viewport: tuple[int, int] | None = None,
    ) -> None:
        self.tuning = tuning
        super().__init__(rng=rng, viewport=viewport)

    def _reset_board(self) -> None:
        t = self.tuning
        self.board: NDArray[np.int8] = np.zeros((t.height, t.width), dtype=np.int8)
        self.tick_count: int = 0
        self.lines_cleared: int = 0
        self.piece: Piece = self._new_piece()

    # ── Placement rules ─────────────────────────────────────────────

    def _new_piece(self) -> Piece:
        kind = self.rng.randrange(len(SHAPES))
        return Piece(kind, self.tuning.spawn_x, self.tuning.spawn_y, SHAPES[kind].copy())

    def fits(self, shape: NDArray[np.bool_], x: int, y: int) -> bool:
        """Inside the walls and floor and clear of locked blocks.

        Rows above the top of the well are allowed so pieces can rotate
        right after spawning.
        """
        rows, cols = self.piece.cells(shape, x, y)
        t = self.tuning
        if (cols < 0).any() or (cols >= t.width).any() or (rows >= t.height).any():
            return False
        inside = rows >= 0
        return not (self.board[rows[inside], cols[inside]] > 0).any()

    def move_piece(self, dx: int, dy: int) -> bool:
        p = self.piece
        if not self.fits(p.shape, p.x + dx, p.y + dy):
            return False
        p.x += dx
        p.y += dy
        return True

    def rotate_piece(self) -> bool:
        """Rotate clockwise in place, or leave the piece untouched."""
        rotated = np.rot90(self.piece.shape, k=-1)
        if not self.fits(rotated, self.piece.x, self.piece.y):
            return False
        self.piece.shape = rotated.copy()
        return True

    def hard_drop(self) -> bool:
        while self.move_piece(0, 1):
            pass
        self._lock_piece()
        return True

    # ── Locking ─────────────────────────────────────────────────────

    def _lock_piece(self) -> None:
        self._freeze_piece()
        self.clear_lines()
        self._spawn_piece()

    def _freeze_piece(self) -> None:
        rows, cols = self.piece.cells()
        t = self.tuning
        keep = (rows >= 0) & (rows < t.height) & (cols >= 0) & (cols < t.width)
        self.board[rows[keep], cols[keep]] = self.piece.kind + 1

    def clear_lines(self) -> int:
        """Drop every full row and score them as one clear."""
        full = (self.board > 0).all(axis=1)
        n = int(full.sum())
        if n == 0:
            return 0
        kept = self.board[~full]
        self.board = np.vstack(
            [np.zeros((n, self.tuning.width), dtype=np.int8), kept]
        )
        scores = self.tuning.line_scores
        self.score += scores[min(n, len(scores) - 1)]
        self.lines_cleared += n
        self._emit(f"lines:{n}")
        return n

    def _spawn_piece(self) -> None:
        self.piece = self._new_piece()
        if not self.fits(self.piece.shape, self.piece.x, self.piece.y):
            self.game_over = True
            self._emit("game_over")

    # ── Input / tick ────────────────────────────────────────────────

    def _play_input(self, key: int) -> bool:
        if key == KEY_SPACE:
            return self.hard_drop()
        direction = direction_for_key(key)
        if direction is Direction.LEFT:
            return self.move_piece(-1, 0)
        if direction is Direction.RIGHT:
            return self.move_piece(1, 0)
        if direction is Direction.DOWN:
            return self.move_piece(0, 1)
        if direction is Direction.UP:
            return self.rotate_piece()
        return False

    def _advance(self) -> None:
        self.tick_count += 1
        if self.tick_count % self.tuning.gravity_ticks == 0:
            if not self.move_piece(0, 1):
                self._lock_piece()

    # ── Rendering ───────────────────────────────────────────────────

    def min_size(self) -> tuple[int, int]:
        # board rows, status row, game-over row, border
        return self.MIN_WIDTH, self.tuning.height + 4

    def display_board(self) -> NDArray[np.int8]:
        """Locked blocks with the falling piece drawn in."""
        board = self.board.copy()
        if not self.game_over:
            rows, cols = self.piece.cells()
            t = self.tuning
            keep = (rows >= 0) & (rows < t.height) & (cols >= 0) & (cols < t.width)
            board[rows[keep], cols[keep]] = self.piece.kind + 1
        return board

    def _welcome_lines(self) -> list[Line]:
        tx = self.texts.get_text
        keys = [
            "move_horizontal", "speed_up", "rotate", "hard_drop", "clear_lines",
            "one_line", "two_lines", "three_lines", "four_lines", "game_ends",
        ]
        lines: list[Line] = [
            line(f"{tx('welcome_to')} {tx('title')}!", Color.YELLOW),
            line(),
            line(tx("how_to_play")),
            line(),
        ]
        lines += [line(tx(k)) for k in keys]
        lines += [
            line(),
            line(tx("quit_control")),
            line(tx("pause_game")),
            line(tx("restart")),
            line(tx("press_enter"), Color.GREEN),
        ]
        return lines

    def _render_board(self, frame: Frame) -> None:
        tx = self.texts.get_text
        board = self.display_board()
        inner_w = frame.width - 2
        pad = max(0, (inner_w - board.shape[1] * len(BLOCK)) // 2)

        lines: list[Line] = []
        for row in board.tolist():
            spans: Line = [Span(" " * pad)]
            for v in row:
                if v:
                    spans.append(Span(BLOCK, PIECE_COLORS[v - 1]))
                else:
                    spans.append(Span(EMPTY, Color.DARK_GRAY))
            lines.append(spans)
        lines.append([
            Span(" " * pad),
            Span(f"{tx('score')} {self.score}", Color.YELLOW),
            Span(f"   {tx('lines')} {self.lines_cleared}"),
        ])
        if self.game_over:
            lines.append([
                Span(tx("game_over"), Color.RED, bold=True),
                Span(f"  {tx('press_r_restart')}"),
            ])
        frame.paragraph(lines)

"""
2048 on a 4 × 4 grid.

All four moves reuse one line routine: the board is rotated so the move
edge is on the left, every row is slid and merged toward index 0, and the
board is rotated back.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray

from arcade_engine import ArcadeGame, Direction, direction_for_key
from arcade_frame import Color, Frame, Line, Span, line


@dataclass(frozen=True)
class MergeTuning:
    size: int = 4
    start_tiles: int = 2
    four_chance: float = 0.1


DEFAULT_TUNING = MergeTuning()

# quarter turns (np.rot90, counter-clockwise) that bring a move edge to the left
_TURNS: dict[Direction, int] = {
    Direction.LEFT: 0,
    Direction.UP: 1,
    Direction.RIGHT: 2,
    Direction.DOWN: 3,
}

TILE_COLORS: dict[int, Color] = {
    2: Color.WHITE, 4: Color.WHITE, 8: Color.YELLOW, 16: Color.YELLOW,
    32: Color.RED, 64: Color.RED, 128: Color.MAGENTA, 256: Color.MAGENTA,
    512: Color.CYAN, 1024: Color.CYAN, 2048: Color.GREEN,
}


def slide_line(values: list[int]) -> tuple[list[int], int]:
    """Merge and compact one line toward index 0.

    Each tile merges at most once per move: [2, 2, 2, 2] gives [4, 4, 0, 0],
    never [8, 0, 0, 0]. Returns the new line and the points gained.
    """
    out = list(values)
    n = len(out)
    gained = 0
    for i in range(n - 1):
        if out[i] == 0:
            continue
        for j in range(i + 1, n):
            if out[j] == 0:
                continue
            if out[j] == out[i]:
                out[i] *= 2
                out[j] = 0
                gained += out[i]
            break
    packed = [v for v in out if v != 0]
    return packed + [0] * (n - len(packed)), gained


class TwentyFortyEight(ArcadeGame):

    NAMESPACE: ClassVar[str] = "twenty_forty_eight"
    TITLE_COLOR: ClassVar[Color] = Color.YELLOW
    MIN_WIDTH: ClassVar[int] = 32

    def __init__(
        self,
        tuning: MergeTuning = DEFAULT_TUNING,
        rng: random.Random | None = None,
        viewport: tuple[int, int] | None = None,
    ) -> None:
        self.tuning = tuning
        super().__init__(rng=rng, viewport=viewport)

    def _reset_board(self) -> None:
        n = self.tuning.size
        self.board: NDArray[np.int64] = np.zeros((n, n), dtype=np.int64)
        for _ in range(self.tuning.start_tiles):
            self.spawn_tile()

    # ── Rules ───────────────────────────────────────────────────────

    def slide(self, direction: Direction) -> bool:
        """Slide every line toward `direction`. True if the board changed."""
        k = _TURNS[direction]
        turned = np.rot90(self.board, k)
        rows = []
        gained = 0
        for row in turned.tolist():
            new_row, points = slide_line(row)
            rows.append(new_row)
            gained += points
        result = np.rot90(np.array(rows, dtype=np.int64), -k)
        moved = not np.array_equal(result, self.board)
        self.board = np.ascontiguousarray(result)
        self.score += gained
        return moved

    def spawn_tile(self) -> bool:
        empty = np.argwhere(self.board == 0)
        if len(empty) == 0:
            return False
        r, c = empty[self.rng.randrange(len(empty))]
        self.board[r, c] = 4 if self.rng.random() < self.tuning.four_chance else 2
        return True

    def can_move(self) -> bool:
        b = self.board
        if (b == 0).any():
            return True
        return bool((b[:, 1:] == b[:, :-1]).any() or (b[1:, :] == b[:-1, :]).any())

    def move(self, direction: Direction) -> bool:
        """A full player move: slide, spawn on change, check for game over."""
        if not self.slide(direction):
            return False
        self.spawn_tile()
        if not self.can_move():
            self.game_over = True
            self._emit("game_over")
        return True

    def _play_input(self, key: int) -> bool:
        direction = direction_for_key(key)
        if direction is None:
            return False
        return self.move(direction)

    # ── Rendering ───────────────────────────────────────────────────

    def min_size(self) -> tuple[int, int]:
        # grid with rules, score and game-over rows, border
        return self.MIN_WIDTH, 2 * self.tuning.size + 7

    def _welcome_lines(self) -> list[Line]:
        tx = self.texts.get_text
        return [
            line(tx("welcome_title"), Color.YELLOW),
            line(),
            line(tx("how_to_play")),
            line(tx("move_controls")),
            line(tx("merge_tip")),
            line(tx("pause_control")),
            line(),
            line(tx("press_enter"), Color.GREEN),
        ]

    def _render_board(self, frame: Frame) -> None:
        tx = self.texts.get_text
        n = self.tuning.size
        cell_w = 6
        rule = "─" * cell_w
        lines: list[Line] = [line("┌" + "┬".join([rule] * n) + "┐")]
        for i, row in enumerate(self.board.tolist()):
            spans: Line = [Span("│")]
            for v in row:
                text = f"{v:^{cell_w}}" if v else " " * cell_w
                spans.append(Span(text, TILE_COLORS.get(v, Color.GREEN), bold=v >= 8))
                spans.append(Span("│"))
            lines.append(spans)
            if i < n - 1:
                lines.append(line("├" + "┼".join([rule] * n) + "┤"))
        lines.append(line("└" + "┴".join([rule] * n) + "┘"))
        lines.append(line())
        lines.append(line(f"{tx('score')}{self.score}", Color.YELLOW))
        if self.game_over:
            lines.append(line())
            lines.append(line(tx("game_over"), Color.RED, bold=True))
        frame.paragraph(lines, centered=True)

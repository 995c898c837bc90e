"""
Minesweeper on a 16 × 16 field with 40 mines.

Mines are laid uniformly at random when the board is created, with no
safe-first-click guarantee. Neighbour counts are computed once with a 3 × 3
convolution. Revealing a zero cell opens its whole zero region plus the
numbered cells bordering it, using an explicit work list.

A game is won either when every safe cell is revealed or when the flags
sit on exactly the mines, no more and no fewer.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import convolve

from arcade_engine import KEY_SPACE, ArcadeGame, direction_for_key, key_is
from arcade_frame import Color, Frame, Line, Span, line

NEIGHBOR_KERNEL: NDArray[np.int8] = np.array(
    [[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.int8
)

COUNT_COLORS: dict[int, Color] = {
    1: Color.BLUE, 2: Color.GREEN, 3: Color.RED, 4: Color.MAGENTA,
    5: Color.YELLOW, 6: Color.CYAN, 7: Color.WHITE, 8: Color.GRAY,
}


@dataclass(frozen=True)
class MinesTuning:
    width: int = 16
    height: int = 16
    mines: int = 40


DEFAULT_TUNING = MinesTuning()


def neighbor_counts(mines: NDArray[np.bool_]) -> NDArray[np.int8]:
    """Number of mines in the 8 cells around each cell."""
    return convolve(mines.astype(np.int8), NEIGHBOR_KERNEL, mode="constant", cval=0)


class Minesweeper(ArcadeGame):

    NAMESPACE: ClassVar[str] = "minesweeper"
    TITLE_COLOR: ClassVar[Color] = Color.RED
    MIN_WIDTH: ClassVar[int] = 50

    def __init__(
        self,
        tuning: MinesTuning = DEFAULT_TUNING,
        rng: random.Random | None = None,
        viewport: tuple[int, int] | None = None,
    ) -> None:
        self.tuning = tuning
        super().__init__(rng=rng, viewport=viewport)

    def _reset_board(self) -> None:
        t = self.tuning
        shape = (t.height, t.width)
        self.mines: NDArray[np.bool_] = np.zeros(shape, dtype=np.bool_)
        self.revealed: NDArray[np.bool_] = np.zeros(shape, dtype=np.bool_)
        self.flagged: NDArray[np.bool_] = np.zeros(shape, dtype=np.bool_)
        self.cursor: tuple[int, int] = (t.width // 2, t.height // 2)
        self.won: bool = False

        n_mines = min(t.mines, t.width * t.height)
        for idx in self.rng.sample(range(t.width * t.height), n_mines):
            self.mines.flat[idx] = True
        self.counts: NDArray[np.int8] = neighbor_counts(self.mines)

    def place_mines(self, cells: list[tuple[int, int]]) -> None:
        """Replace the mine layout with the given (x, y) cells."""
        self.mines[:] = False
        for x, y in cells:
            self.mines[y, x] = True
        self.counts = neighbor_counts(self.mines)

    # ── Rules ───────────────────────────────────────────────────────

    def reveal(self, x: int, y: int) -> bool:
        """Open a cell. Returns False if it was already open or flagged."""
        if self.revealed[y, x] or self.flagged[y, x]:
            return False

        if self.mines[y, x]:
            self.revealed |= self.mines
            self.game_over = True
            self._emit("game_over")
            return True

        t = self.tuning
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            if self.revealed[cy, cx] or self.flagged[cy, cx]:
                continue
            self.revealed[cy, cx] = True
            if self.counts[cy, cx] != 0:
                continue
            for ny in range(max(0, cy - 1), min(t.height, cy + 2)):
                for nx in range(max(0, cx - 1), min(t.width, cx + 2)):
                    if not self.revealed[ny, nx] and not self.flagged[ny, nx]:
                        stack.append((nx, ny))

        self.score = int((self.revealed & ~self.mines).sum())
        self._check_win()
        return True

    def toggle_flag(self, x: int, y: int) -> bool:
        if self.revealed[y, x]:
            return False
        self.flagged[y, x] = not self.flagged[y, x]
        self._check_win()
        return True

    def _check_win(self) -> None:
        all_safe_open = bool((self.revealed | self.mines).all())
        flags_exact = bool(np.array_equal(self.flagged, self.mines))
        if all_safe_open or flags_exact:
            self.won = True
            self.game_over = True
            self.revealed |= self.mines
            self._emit("win")

    def mines_left(self) -> int:
        return int(self.mines.sum()) - int(self.flagged.sum())

    # ── Input ───────────────────────────────────────────────────────

    def move_cursor(self, dx: int, dy: int) -> bool:
        t = self.tuning
        x = min(max(self.cursor[0] + dx, 0), t.width - 1)
        y = min(max(self.cursor[1] + dy, 0), t.height - 1)
        moved = (x, y) != self.cursor
        self.cursor = (x, y)
        return moved

    def _play_input(self, key: int) -> bool:
        if key == KEY_SPACE:
            return self.reveal(*self.cursor)
        if key_is(key, "f"):
            return self.toggle_flag(*self.cursor)
        direction = direction_for_key(key)
        if direction is not None:
            return self.move_cursor(direction.dx, direction.dy)
        return False

    # ── Rendering ───────────────────────────────────────────────────

    def min_size(self) -> tuple[int, int]:
        # field rows, status row, result row, border
        return self.MIN_WIDTH, self.tuning.height + 4

    def _welcome_lines(self) -> list[Line]:
        tx = self.texts.get_text
        lines: list[Line] = [
            line(f"{tx('welcome_to')} {tx('title')}!", Color.YELLOW),
            line(),
            line(tx("how_to_play")),
        ]
        lines += self._text_block("controls")
        lines.append(line())
        lines += self._text_block("goal")
        lines += [line(), line(tx("press_enter"), Color.GREEN)]
        return lines

    def _cell_span(self, x: int, y: int) -> Span:
        if self.revealed[y, x]:
            if self.mines[y, x]:
                return Span("* ", Color.RED, bold=True)
            n = int(self.counts[y, x])
            if n == 0:
                return Span("  ")
            return Span(f"{n} ", COUNT_COLORS[n], bold=True)
        if self.flagged[y, x]:
            return Span("F ", Color.RED, bold=True)
        return Span("■ ", Color.GRAY)

    def _render_board(self, frame: Frame) -> None:
        tx = self.texts.get_text
        t = self.tuning
        lines: list[Line] = []
        for y in range(t.height):
            spans: Line = []
            for x in range(t.width):
                span = self._cell_span(x, y)
                if (x, y) == self.cursor and not self.game_over:
                    span.bg = Color.YELLOW
                spans.append(span)
            lines.append(spans)
        lines.append([
            Span(f"{tx('score')} {self.score}", Color.YELLOW),
            Span(f"   {tx('mines_left')} {self.mines_left()}"),
        ])
        if self.won:
            lines.append([
                Span(tx("game_win"), Color.GREEN, bold=True),
                Span(f"  {tx('press_r_restart')}"),
            ])
        elif self.game_over:
            lines.append([
                Span(tx("game_over"), Color.RED, bold=True),
                Span(f"  {tx('press_r_restart')}"),
            ])
        frame.paragraph(lines, centered=True)

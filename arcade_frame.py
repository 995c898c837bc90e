"""
The drawing surface every game renders into.

A Frame is a fixed-size grid of character cells. Each cell has a glyph, a
foreground and background palette index and a bold flag. Games build a
fresh Frame per render call; the shell paints it onto curses afterwards.
Nothing here knows about curses, so frames can be inspected in tests.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from numpy.typing import NDArray


class Color(IntEnum):
    """Palette indices. DEFAULT means the terminal's own colors."""
    DEFAULT = 0
    WHITE = 1
    YELLOW = 2
    GREEN = 3
    RED = 4
    CYAN = 5
    GRAY = 6
    DARK_GRAY = 7
    BLUE = 8
    MAGENTA = 9


# ── Box drawing ─────────────────────────────────────────────────────────
TOP_LEFT, TOP_RIGHT = "┌", "┐"
BOTTOM_LEFT, BOTTOM_RIGHT = "└", "┘"
HORIZONTAL, VERTICAL = "─", "│"

# ── Display width ───────────────────────────────────────────────────────
# A double-width glyph (CJK) owns its cell and the one to its right; the
# right cell holds WIDE_FILLER, which adds nothing when a row is joined.
WIDE_FILLER = ""


def char_width(ch: str) -> int:
    """Terminal columns taken by one character."""
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def text_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def clip_text(text: str, columns: int) -> str:
    """Longest prefix of `text` that fits in `columns` terminal columns."""
    used = 0
    for i, ch in enumerate(text):
        used += char_width(ch)
        if used > columns:
            return text[:i]
    return text


@dataclass
class Span:
    """A run of text in one style."""
    text: str
    fg: Color = Color.DEFAULT
    bold: bool = False
    bg: Color = Color.DEFAULT


Line = list[Span]


def line(text: str = "", fg: Color = Color.DEFAULT, bold: bool = False) -> Line:
    """Single-span line shorthand."""
    return [Span(text, fg, bold)]


class Frame:
    """A width × height grid of styled cells."""

    def __init__(self, width: int, height: int) -> None:
        self.width: int = max(0, width)
        self.height: int = max(0, height)
        self.glyphs: list[list[str]] = [
            [" "] * self.width for _ in range(self.height)
        ]
        self.fg: NDArray[np.int8] = np.zeros((self.height, self.width), dtype=np.int8)
        self.bg: NDArray[np.int8] = np.zeros((self.height, self.width), dtype=np.int8)
        self.bold: NDArray[np.bool_] = np.zeros((self.height, self.width), dtype=np.bool_)
        self.title: str = ""

    # ── Cell access ─────────────────────────────────────────────────

    def put(
        self,
        x: int,
        y: int,
        glyph: str,
        fg: Color = Color.DEFAULT,
        bg: Color = Color.DEFAULT,
        bold: bool = False,
    ) -> None:
        """Set one cell; anything outside the grid is dropped.

        Overwriting half of a double-width glyph blanks its other half.
        """
        if 0 <= y < self.height and 0 <= x < self.width:
            row = self.glyphs[y]
            if glyph != WIDE_FILLER and row[x] == WIDE_FILLER and x > 0:
                row[x - 1] = " "
            if x + 1 < self.width and row[x + 1] == WIDE_FILLER:
                row[x + 1] = " "
            row[x] = glyph
            self.fg[y, x] = fg
            self.bg[y, x] = bg
            self.bold[y, x] = bold

    def write(
        self,
        x: int,
        y: int,
        text: str,
        fg: Color = Color.DEFAULT,
        bg: Color = Color.DEFAULT,
        bold: bool = False,
    ) -> int:
        """Write text left to right starting at (x, y). Returns the next column."""
        for ch in text:
            if char_width(ch) == 2:
                if x + 1 >= self.width:
                    # half a glyph would spill past the right edge
                    self.put(x, y, " ", fg, bg, bold)
                else:
                    self.put(x, y, ch, fg, bg, bold)
                    self.put(x + 1, y, WIDE_FILLER, fg, bg, bold)
                x += 2
            else:
                self.put(x, y, ch, fg, bg, bold)
                x += 1
        return x

    def write_line(self, x: int, y: int, spans: Line, limit: int | None = None) -> int:
        """Write a sequence of spans, stopping at column `limit` (exclusive)."""
        end = self.width if limit is None else min(limit, self.width)
        for span in spans:
            room = end - x
            if room <= 0:
                break
            text = clip_text(span.text, room)
            x = self.write(x, y, text, span.fg, span.bg, span.bold)
            if len(text) < len(span.text):
                break
        return x

    def cell(self, x: int, y: int) -> tuple[str, Color, Color]:
        return self.glyphs[y][x], Color(int(self.fg[y, x])), Color(int(self.bg[y, x]))

    # ── Layout helpers ──────────────────────────────────────────────

    def box(self, title: str = "", title_color: Color = Color.DEFAULT) -> None:
        """Single-line border around the whole frame, title on the top edge."""
        w, h = self.width, self.height
        if w < 2 or h < 2:
            return
        for x in range(1, w - 1):
            self.put(x, 0, HORIZONTAL)
            self.put(x, h - 1, HORIZONTAL)
        for y in range(1, h - 1):
            self.put(0, y, VERTICAL)
            self.put(w - 1, y, VERTICAL)
        self.put(0, 0, TOP_LEFT)
        self.put(w - 1, 0, TOP_RIGHT)
        self.put(0, h - 1, BOTTOM_LEFT)
        self.put(w - 1, h - 1, BOTTOM_RIGHT)
        if title:
            self.title = title
            self.write_line(1, 0, [Span(title, title_color)], limit=w - 1)

    def paragraph(self, lines: list[Line], centered: bool = False) -> None:
        """Lay lines out inside the border, one per row.

        Lines that do not fit are dropped from the bottom; games with a
        fixed-size board avoid that through ArcadeGame.min_size().
        """
        inner_w = self.width - 2
        inner_h = self.height - 2
        if inner_w <= 0 or inner_h <= 0:
            return
        for row, spans in enumerate(lines[:inner_h]):
            length = sum(text_width(s.text) for s in spans)
            x = 1
            if centered and length < inner_w:
                x = 1 + (inner_w - length) // 2
            self.write_line(x, row + 1, spans, limit=self.width - 1)

    # ── Inspection ──────────────────────────────────────────────────

    def row_text(self, y: int) -> str:
        return "".join(self.glyphs[y])

    def text(self) -> str:
        return "\n".join(self.row_text(y) for y in range(self.height))

    def __contains__(self, needle: str) -> bool:
        return any(needle in self.row_text(y) for y in range(self.height))

    # ── Degenerate viewport ─────────────────────────────────────────

    @staticmethod
    def too_small(width: int, height: int, min_width: int, min_height: int) -> bool:
        return width < min_width or height < min_height

    @classmethod
    def resize_notice(
        cls, width: int, height: int, message: str = "Window too small!",
        hint: str = "Please resize",
    ) -> Frame:
        frame = cls(width, height)
        frame.box()
        frame.paragraph([line(message, Color.RED), line(hint, Color.YELLOW)])
        return frame

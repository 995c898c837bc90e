#!/usr/bin/env python3
"""
  ▶  T E R M I N A L   A R C A D E  ◀
  Five small games in one terminal: gold miner, tetris, snake, 2048 and
  minesweeper, picked from a menu.

  Menu:
    1-5        open a game            UP/DOWN   move the highlight
    ENTER      open highlighted game  t         display language
    c          pause-screen style     q         quit

  In a game:
    ENTER      start                  p / ESC   pause / resume
    r          restart after game over
    q          back to the menu (the game keeps its state)

  Game events (start, pause, level ups, game overs, ...) are logged to
  arcade_events.csv beside this script.
"""

from __future__ import annotations

import curses
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import IO, ClassVar

from arcade_2048 import TwentyFortyEight
from arcade_engine import KEY_ESC, ArcadeGame, is_enter, key_is
from arcade_frame import Color, Frame, Line, Span, line
from arcade_goldminer import GoldMiner
from arcade_mines import Minesweeper
from arcade_overlay import CompileLanguage
from arcade_snake import Snake
from arcade_tetris import Tetris
from arcade_text import Language, Translations

TICK_MS = 16

LOG_PATH = Path(__file__).resolve().parent / "arcade_events.csv"


class GameKind(Enum):
    GOLDMINER = "goldminer"
    TETRIS = "tetris"
    SNAKE = "snake"
    TWENTY_FORTY_EIGHT = "twenty_forty_eight"
    MINESWEEPER = "minesweeper"


MENU_ORDER: list[GameKind] = list(GameKind)

TITLE_KEYS: dict[GameKind, str] = {
    GameKind.GOLDMINER: "goldminer_title",
    GameKind.TETRIS: "tetris_title",
    GameKind.SNAKE: "snake_title",
    GameKind.TWENTY_FORTY_EIGHT: "twenty_forty_eight_title",
    GameKind.MINESWEEPER: "minesweeper_title",
}


def build_game(kind: GameKind, viewport: tuple[int, int] | None = None) -> ArcadeGame:
    if kind is GameKind.GOLDMINER:
        return GoldMiner(viewport=viewport)
    if kind is GameKind.TETRIS:
        return Tetris(viewport=viewport)
    if kind is GameKind.SNAKE:
        return Snake(viewport=viewport)
    if kind is GameKind.TWENTY_FORTY_EIGHT:
        return TwentyFortyEight(viewport=viewport)
    return Minesweeper(viewport=viewport)


# ═══════════════════════════════════════════════════════════════════════
#  Menu / dispatcher
# ═══════════════════════════════════════════════════════════════════════

class Arcade:
    """
    Owns one instance of every game and routes keys, ticks and renders to
    the active one. With no active game it is the menu.

    The dispatcher only ever talks to a game through handle_input, tick,
    render, the language setters and pop_events.
    """

    def __init__(
        self,
        viewport: tuple[int, int] | None = None,
        games: dict[GameKind, ArcadeGame] | None = None,
    ) -> None:
        if games is None:
            games = {kind: build_game(kind, viewport) for kind in MENU_ORDER}
        self.games: dict[GameKind, ArcadeGame] = games
        self.active: GameKind | None = None
        self.selected: int = 0
        self.texts: Translations = Translations()
        self.compile_language: CompileLanguage = CompileLanguage.RUST
        self.selecting_language: bool = False
        self.selecting_compile: bool = False
        self.running: bool = True

    @property
    def active_game(self) -> ArcadeGame | None:
        if self.active is None:
            return None
        return self.games[self.active]

    # ── Input ───────────────────────────────────────────────────────

    def handle_input(self, key: int) -> None:
        if key_is(key, "q") and not (self.selecting_language or self.selecting_compile):
            if self.active is None:
                self.running = False
            else:
                self.active = None
            return

        game = self.active_game
        if game is not None:
            game.handle_input(key)
            return

        if self.selecting_language:
            self._choose_language(key)
        elif self.selecting_compile:
            self._choose_compile(key)
        else:
            self._menu_input(key)

    def _menu_input(self, key: int) -> None:
        if ord("1") <= key <= ord("9"):
            index = key - ord("1")
            if index < len(MENU_ORDER):
                self.selected = index
                self.active = MENU_ORDER[index]
        elif key == curses.KEY_UP:
            self.selected = max(0, self.selected - 1)
        elif key == curses.KEY_DOWN:
            self.selected = min(len(MENU_ORDER) - 1, self.selected + 1)
        elif is_enter(key):
            self.active = MENU_ORDER[self.selected]
        elif key_is(key, "t"):
            self.selecting_language = True
        elif key_is(key, "c"):
            self.selecting_compile = True

    def _choose_language(self, key: int) -> None:
        if key_is(key, "e"):
            self.set_language(Language.ENGLISH)
        elif key_is(key, "c"):
            self.set_language(Language.CHINESE)
        elif key != KEY_ESC:
            return
        self.selecting_language = False

    def _choose_compile(self, key: int) -> None:
        if key_is(key, "r"):
            self.set_compile_language(CompileLanguage.RUST)
        elif key_is(key, "g"):
            self.set_compile_language(CompileLanguage.GO)
        elif key_is(key, "m"):
            self.set_compile_language(CompileLanguage.CMAKE)
        elif key != KEY_ESC:
            return
        self.selecting_compile = False

    def set_language(self, language: Language) -> None:
        self.texts.set_language(language)
        for game in self.games.values():
            game.set_display_language(language)

    def set_compile_language(self, style: CompileLanguage) -> None:
        self.compile_language = style
        for game in self.games.values():
            game.set_overlay_language(style)

    # ── Update / render ─────────────────────────────────────────────

    def update(self) -> list[tuple[GameKind, str, int]]:
        """Tick the active game. Returns (game, event, score) for its events."""
        game = self.active_game
        if game is None or self.active is None:
            return []
        game.tick()
        return [(self.active, event, game.score) for event in game.pop_events()]

    def render(self, width: int, height: int) -> Frame:
        game = self.active_game
        if game is not None:
            return game.render(width, height)
        return self._render_menu(width, height)

    def _render_menu(self, width: int, height: int) -> Frame:
        tx = self.texts.get_text
        frame = Frame(width, height)
        frame.box(tx("menu_title"), Color.YELLOW)

        lines: list[Line] = [
            line(tx("menu_title"), Color.YELLOW),
            line(),
            line(tx("available_games")),
            line(),
        ]
        for index, kind in enumerate(MENU_ORDER):
            color = Color.GREEN if index == self.selected else Color.WHITE
            lines.append(line(f" {index + 1}. {tx(TITLE_KEYS[kind])}", color, bold=index == self.selected))
        lines.append(line())

        if self.selecting_language:
            lines += [
                line(tx("select_language"), Color.YELLOW),
                line("E: English"),
                line("C: 中文"),
                line(tx("cancel")),
            ]
        elif self.selecting_compile:
            lines.append(line(tx("select_compile"), Color.YELLOW))
            for style, letter in zip(CompileLanguage, "RGM"):
                lines.append(line(f"{letter}: {style.value}"))
            lines.append(line(tx("cancel")))
        else:
            lines += [line(row) for row in self.texts.lines("controls")]
            lines.append(line(tx("compiling")))
            lines.append([
                Span(f"{tx('compile_style')} "),
                Span(self.compile_language.value, Color.GREEN),
            ])

        frame.paragraph(lines, centered=True)
        return frame


# ═══════════════════════════════════════════════════════════════════════
#  Event log
# ═══════════════════════════════════════════════════════════════════════

class EventLog:
    """Writes game events to CSV. Never lets a file error reach the game."""

    HEADER: ClassVar[str] = "time_s,game,event,score\n"

    def __init__(self, path: Path) -> None:
        self._path = path
        self._fh: IO[str] | None = None
        self._t0: float = time.monotonic()

    def open(self) -> None:
        try:
            self._fh = open(self._path, "w")
            self._fh.write(self.HEADER)
            self._fh.flush()
        except OSError:
            self._fh = None

    def log(self, game: str, event: str, score: int) -> None:
        if self._fh is None:
            return
        t = time.monotonic() - self._t0
        try:
            self._fh.write(f"{t:.1f},{game},{event},{score}\n")
            self._fh.flush()
        except OSError:
            pass

    def close(self) -> None:
        if self._fh is not None:
            try:
                self._fh.close()
            except OSError:
                pass
            self._fh = None


# ═══════════════════════════════════════════════════════════════════════
#  Color management + painting
# ═══════════════════════════════════════════════════════════════════════

# 256-color terminal numbers, then the 8-color fallback
PALETTE_256: dict[Color, int] = {
    Color.WHITE: 231, Color.YELLOW: 220, Color.GREEN: 40, Color.RED: 196,
    Color.CYAN: 51, Color.GRAY: 250, Color.DARK_GRAY: 240, Color.BLUE: 33,
    Color.MAGENTA: 201,
}
PALETTE_8: dict[Color, int] = {
    Color.WHITE: curses.COLOR_WHITE, Color.YELLOW: curses.COLOR_YELLOW,
    Color.GREEN: curses.COLOR_GREEN, Color.RED: curses.COLOR_RED,
    Color.CYAN: curses.COLOR_CYAN, Color.GRAY: curses.COLOR_WHITE,
    Color.DARK_GRAY: curses.COLOR_BLACK, Color.BLUE: curses.COLOR_BLUE,
    Color.MAGENTA: curses.COLOR_MAGENTA,
}


@dataclass
class ColorMap:
    """Manages curses color pairs for every (foreground, background) combination."""

    _pairs: dict[tuple[int, int], int] = field(default_factory=dict)

    def setup(self) -> None:
        curses.start_color()
        curses.use_default_colors()

        palette = PALETTE_256 if curses.COLORS >= 256 else PALETTE_8
        numbers = {Color.DEFAULT: -1, **palette}
        max_pairs = curses.COLOR_PAIRS - 1
        pair_id = 1
        for fg in Color:
            for bg in Color:
                if fg is Color.DEFAULT and bg is Color.DEFAULT:
                    continue
                if pair_id > max_pairs:
                    break
                curses.init_pair(pair_id, numbers[fg], numbers[bg])
                self._pairs[(fg, bg)] = pair_id
                pair_id += 1

    def attr(self, fg: int, bg: int, bold: bool) -> int:
        attr = curses.color_pair(self._pairs.get((fg, bg), 0))
        if bold:
            attr |= curses.A_BOLD
        return attr


def paint(stdscr: curses.window, frame: Frame, cmap: ColorMap) -> None:
    """Copy a frame onto the screen, one addstr per run of equal style."""
    max_y, max_x = stdscr.getmaxyx()
    rows = min(frame.height, max_y)
    cols = min(frame.width, max_x)
    fg = frame.fg.tolist()
    bg = frame.bg.tolist()
    bold = frame.bold.tolist()
    _addstr = stdscr.addstr

    for y in range(rows):
        glyphs = frame.glyphs[y]
        start = 0
        while start < cols:
            style = (fg[y][start], bg[y][start], bold[y][start])
            end = start + 1
            while end < cols and (fg[y][end], bg[y][end], bold[y][end]) == style:
                end += 1
            try:
                _addstr(y, start, "".join(glyphs[start:end]), cmap.attr(*style))
            except curses.error:
                # writing the bottom-right cell always reports an error
                pass
            start = end


# ═══════════════════════════════════════════════════════════════════════
#  Main loop
# ═══════════════════════════════════════════════════════════════════════

def main(stdscr: curses.window) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)
    stdscr.timeout(TICK_MS)

    cmap = ColorMap()
    cmap.setup()

    max_y, max_x = stdscr.getmaxyx()
    arcade = Arcade(viewport=(max_x, max_y))

    logger = EventLog(LOG_PATH)
    logger.open()

    try:
        while arcade.running:
            # ── Input (waits at most one tick) ─────────────────────
            try:
                key = stdscr.getch()
            except curses.error:
                key = -1
            if key != -1:
                arcade.handle_input(key)
                if not arcade.running:
                    break

            # ── Simulate ───────────────────────────────────────────
            for kind, event, score in arcade.update():
                logger.log(kind.value, event, score)

            # ── Render ─────────────────────────────────────────────
            max_y, max_x = stdscr.getmaxyx()
            stdscr.erase()
            paint(stdscr, arcade.render(max_x, max_y), cmap)
            stdscr.refresh()
    finally:
        logger.close()


def run() -> None:
    try:
        curses.wrapper(main)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()

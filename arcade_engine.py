"""
The skeleton every arcade game shares.

A game lives in one of three phases. It starts on a Welcome screen, Enter
moves it to Playing, and P or Esc toggles between Playing and Paused. The
shell calls four things on it: handle_input(key) for each key event,
tick() once per main-loop iteration, render(width, height) to get a Frame,
and the two language setters. Games only fill in the board-specific parts.
"""

from __future__ import annotations

import curses
import random
from enum import Enum
from typing import ClassVar

from arcade_frame import Color, Frame, Line, line
from arcade_overlay import CompileLanguage, CompileLog
from arcade_text import Language, Translations

# Viewport assumed until the first render reports the real terminal size
DEFAULT_VIEW_W: int = 80
DEFAULT_VIEW_H: int = 24


# ═══════════════════════════════════════════════════════════════════════
#  Keys
# ═══════════════════════════════════════════════════════════════════════

NO_KEY = -1
KEY_ESC = 27
KEY_SPACE = ord(" ")
ENTER_KEYS: tuple[int, ...] = (10, 13, curses.KEY_ENTER)


def key_is(key: int, *chars: str) -> bool:
    """True if `key` is any of the given letters, in either case."""
    if key < 0:
        return False
    for ch in chars:
        if key in (ord(ch.lower()), ord(ch.upper())):
            return True
    return False


def is_enter(key: int) -> bool:
    return key in ENTER_KEYS


def is_pause(key: int) -> bool:
    return key == KEY_ESC or key_is(key, "p")


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def opposite(self) -> Direction:
        return _OPPOSITE[self]


_OPPOSITE: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def direction_for_key(key: int) -> Direction | None:
    """Arrow keys and their WASD equivalents."""
    if key == curses.KEY_UP or key_is(key, "w"):
        return Direction.UP
    if key == curses.KEY_DOWN or key_is(key, "s"):
        return Direction.DOWN
    if key == curses.KEY_LEFT or key_is(key, "a"):
        return Direction.LEFT
    if key == curses.KEY_RIGHT or key_is(key, "d"):
        return Direction.RIGHT
    return None


# ═══════════════════════════════════════════════════════════════════════
#  Game skeleton
# ═══════════════════════════════════════════════════════════════════════

class Phase(Enum):
    WELCOME = "welcome"
    PLAYING = "playing"
    PAUSED = "paused"


class ArcadeGame:
    """
    Base for the five games.

    Subclasses implement _reset_board() (fresh board state), _advance()
    (one Playing tick), _play_input(key) (keys while Playing),
    _welcome_lines() and _render_board(frame). The phase machine, the
    restart-after-game-over key, the pause overlay and the degenerate
    viewport check live here. Games whose board has a fixed size override
    min_size() so a short terminal gets the resize notice instead of a
    board with rows missing.
    """

    NAMESPACE: ClassVar[str] = ""
    TITLE_COLOR: ClassVar[Color] = Color.YELLOW
    MIN_WIDTH: ClassVar[int] = 20
    MIN_HEIGHT: ClassVar[int] = 10

    def __init__(
        self,
        rng: random.Random | None = None,
        viewport: tuple[int, int] | None = None,
    ) -> None:
        self.rng: random.Random = rng if rng is not None else random.Random()
        self.texts: Translations = Translations(self.NAMESPACE)
        self.common_texts: Translations = Translations(language=self.texts.language)
        self.overlay: CompileLog = CompileLog()
        self.view_w: int = DEFAULT_VIEW_W
        self.view_h: int = DEFAULT_VIEW_H
        if viewport is not None:
            self.view_w, self.view_h = viewport
        self._events: list[str] = []
        self.reset()

    # ── Lifecycle ───────────────────────────────────────────────────

    def reset(self) -> None:
        """Put every game field back to its fresh-start value, in place.

        Language and overlay style are settings, not game state, and
        survive a reset.
        """
        self.phase: Phase = Phase.WELCOME
        self.score: int = 0
        self.game_over: bool = False
        self._reset_board()

    def restart(self) -> None:
        """Reset and go straight back to Playing."""
        self.reset()
        self.phase = Phase.PLAYING
        self._resume_clock()
        self._emit("restart")

    def _reset_board(self) -> None:
        raise NotImplementedError

    # ── Input ───────────────────────────────────────────────────────

    def handle_input(self, key: int) -> bool:
        """Consume one key. Returns False when the key did nothing."""
        if self.game_over:
            if self.phase is Phase.PLAYING and key_is(key, "r"):
                self.restart()
                return True
            return False

        if self.phase is Phase.WELCOME:
            if is_enter(key):
                self.phase = Phase.PLAYING
                self._on_start()
                self._emit("start")
                return True
            return False

        if self.phase is Phase.PAUSED:
            if is_pause(key):
                self.phase = Phase.PLAYING
                self._resume_clock()
                self._emit("resume")
                return True
            return False

        if is_pause(key):
            self.phase = Phase.PAUSED
            self._emit("pause")
            return True
        return self._play_input(key)

    def _play_input(self, key: int) -> bool:
        return False

    def _on_start(self) -> None:
        self._resume_clock()

    def _resume_clock(self) -> None:
        """Continuous-time games resync their clock here."""

    # ── Update ──────────────────────────────────────────────────────

    def tick(self) -> None:
        if self.phase is Phase.PAUSED:
            self.overlay.tick()
        elif self.phase is Phase.PLAYING and not self.game_over:
            self._advance()

    def _advance(self) -> None:
        pass

    # ── Render ──────────────────────────────────────────────────────

    def title(self) -> str:
        return self.texts.get_text("title")

    def min_size(self) -> tuple[int, int]:
        """Smallest (width, height) that shows the whole board."""
        return self.MIN_WIDTH, self.MIN_HEIGHT

    def render(self, width: int, height: int) -> Frame:
        if self.phase is Phase.PAUSED:
            self._set_viewport(width, height)
            frame = Frame(width, height)
            self.overlay.render(frame)
            return frame

        if Frame.too_small(width, height, *self.min_size()):
            return Frame.resize_notice(
                width, height,
                self.common_texts.get_text("too_small"),
                self.common_texts.get_text("please_resize"),
            )

        self._set_viewport(width, height)
        frame = Frame(width, height)
        frame.box(self.title(), self.TITLE_COLOR)
        if self.phase is Phase.WELCOME:
            frame.paragraph(self._welcome_lines(), centered=True)
        else:
            self._render_board(frame)
        return frame

    def _set_viewport(self, width: int, height: int) -> None:
        self.view_w = width
        self.view_h = height

    def _welcome_lines(self) -> list[Line]:
        return [line(self.title(), Color.YELLOW)]

    def _render_board(self, frame: Frame) -> None:
        raise NotImplementedError

    def _text_block(self, key: str) -> list[Line]:
        return [line(row) for row in self.texts.lines(key)]

    # ── Settings ────────────────────────────────────────────────────

    def set_display_language(self, language: Language) -> None:
        self.texts.set_language(language)
        self.common_texts.set_language(language)

    def set_overlay_language(self, style: CompileLanguage) -> None:
        self.overlay.set_style(style)

    # ── Events (drained by the shell for the session log) ──────────

    def _emit(self, event: str) -> None:
        self._events.append(event)

    def pop_events(self) -> list[str]:
        events, self._events = self._events, []
        return events

"""
The pause screen: a fake build log that keeps scrolling while a game is
paused, so a glance at the terminal looks like work.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import ClassVar

from arcade_frame import Color, Frame, Span


class CompileLanguage(Enum):
    RUST = "Rust"
    GO = "Go"
    CMAKE = "CMake"


BUILD_LINES: dict[CompileLanguage, list[str]] = {
    CompileLanguage.RUST: [
        "Compiling libc v0.2.169",
        "Compiling proc-macro2 v1.0.93",
        "Compiling unicode-ident v1.0.16",
        "Compiling autocfg v1.4.0",
        "Compiling parking_lot_core v0.8.6",
        "Compiling signal-hook v0.3.17",
        "Compiling lock_api v0.4.12",
        "Compiling signal-hook-registry v1.4.2",
        "Compiling getrandom v0.2.15",
        "Compiling mio v0.7.14",
        "Compiling rand_core v0.6.4",
        "Compiling signal-hook-mio v0.2.4",
        "Compiling parking_lot v0.11.2",
        "Compiling quote v1.0.38",
        "Compiling syn v2.0.98",
        "Compiling crossterm v0.22.1",
        "Compiling tui v0.17.0",
        "Compiling zerocopy-derive v0.7.35",
        "Compiling zerocopy v0.7.35",
        "Compiling ppv-lite86 v0.2.20",
        "Compiling rand_chacha v0.3.1",
        "Compiling rand v0.8.5",
    ],
    CompileLanguage.GO: [
        "go: downloading golang.org/x/sys v0.15.0",
        "go: downloading golang.org/x/term v0.15.0",
        "go: downloading github.com/spf13/cobra v1.8.0",
        "go: downloading github.com/spf13/pflag v1.0.5",
        "go: downloading github.com/mattn/go-runewidth v0.0.15",
        "go: downloading github.com/rivo/uniseg v0.4.4",
        "go: downloading github.com/gdamore/tcell/v2 v2.7.0",
        "go: downloading github.com/lucasb-eyer/go-colorful v1.2.0",
        "go: building internal/cpu",
        "go: building runtime/internal/atomic",
        "go: building internal/abi",
        "go: building runtime",
        "go: building sync",
        "go: building golang.org/x/sys/unix",
        "go: building github.com/rivo/uniseg",
        "go: building github.com/gdamore/tcell/v2",
        "go: linking cmd/arcade",
    ],
    CompileLanguage.CMAKE: [
        "[  4%] Building CXX object src/CMakeFiles/core.dir/engine.cpp.o",
        "[  9%] Building CXX object src/CMakeFiles/core.dir/renderer.cpp.o",
        "[ 13%] Building CXX object src/CMakeFiles/core.dir/input.cpp.o",
        "[ 18%] Building CXX object src/CMakeFiles/core.dir/timer.cpp.o",
        "[ 22%] Linking CXX static library libcore.a",
        "[ 27%] Built target core",
        "[ 31%] Building CXX object games/CMakeFiles/games.dir/snake.cpp.o",
        "[ 36%] Building CXX object games/CMakeFiles/games.dir/tetris.cpp.o",
        "[ 40%] Building CXX object games/CMakeFiles/games.dir/mines.cpp.o",
        "[ 45%] Building CXX object games/CMakeFiles/games.dir/merge.cpp.o",
        "[ 50%] Building CXX object games/CMakeFiles/games.dir/miner.cpp.o",
        "[ 54%] Linking CXX static library libgames.a",
        "[ 59%] Built target games",
        "[ 63%] Building CXX object tests/CMakeFiles/unit.dir/test_board.cpp.o",
        "[ 68%] Building CXX object tests/CMakeFiles/unit.dir/test_timer.cpp.o",
        "[ 72%] Linking CXX executable unit",
        "[ 77%] Built target unit",
        "[ 81%] Building CXX object app/CMakeFiles/arcade.dir/main.cpp.o",
        "[ 86%] Building CXX object app/CMakeFiles/arcade.dir/menu.cpp.o",
        "[ 95%] Linking CXX executable arcade",
        "[100%] Built target arcade",
    ],
}


class CompileLog:
    """A rotating wall of build output.

    Owned by each game and ticked only while that game is paused. Every
    ROTATE_EVERY ticks the first line moves to the end, so the visible
    window appears to scroll.
    """

    ROTATE_EVERY: ClassVar[int] = 5

    def __init__(self, style: CompileLanguage = CompileLanguage.RUST) -> None:
        self.style: CompileLanguage = style
        self.messages: deque[str] = deque(BUILD_LINES[style])
        self.tick_count: int = 0

    def set_style(self, style: CompileLanguage) -> None:
        self.style = style
        self.messages = deque(BUILD_LINES[style])
        self.tick_count = 0

    def tick(self) -> None:
        self.tick_count += 1
        if self.tick_count % self.ROTATE_EVERY == 0 and self.messages:
            self.messages.rotate(-1)

    def visible(self, rows: int) -> list[str]:
        return [msg for _, msg in zip(range(max(0, rows)), self.messages)]

    def render(self, frame: Frame) -> None:
        frame.box("Compiling")
        lines = []
        for msg in self.visible(frame.height - 2):
            verb, rest = _split_verb(msg)
            lines.append([Span(verb, Color.GREEN, bold=True), Span(" " + rest)])
        frame.paragraph(lines)


def _split_verb(msg: str) -> tuple[str, str]:
    """Leading word, or the "[ nn%]" progress tag for cmake output."""
    if msg.startswith("["):
        tag, _, rest = msg.partition("] ")
        return tag + "]", rest
    verb, _, rest = msg.partition(" ")
    return verb, rest

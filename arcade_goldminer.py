"""
Gold miner: a hook swings over a field of gold and stones.

Space drops the hook. It extends until it touches an item or the bottom of
the field, then reels back in, slower when the catch is heavy. Reaching the
top banks the catch's value. Clearing every piece of gold moves to the next
level, which swings faster and scatters more, heavier items.

Motion is continuous: each tick advances by the wall-clock time since the
previous one, so the game plays at the same speed whatever the frame rate.
"""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar

import numpy as np
from numpy.typing import NDArray

from arcade_engine import KEY_SPACE, ArcadeGame
from arcade_frame import Color, Frame, Line, Span, line


# ═══════════════════════════════════════════════════════════════════════
#  Tuning
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HookTuning:
    base_angular_speed: float = 0.5   # rad/s at level 1
    level_speed_step: float = 0.1     # speed factor added per level
    max_speed_factor: float = 2.0     # factor from max_level on
    extend_speed: float = 20.0        # cells/s going down
    retract_speed: float = 15.0       # cells/s coming up, divided by weight
    ceiling: float = 2.0              # hook rest height
    margin: float = 10.0              # side margin for swing and items
    bottom_margin: float = 5.0
    top_band: float = 15.0            # items never spawn above this row
    slack: float = 1.0                # extra catch reach around an item
    max_level: int = 10
    min_field_w: int = 20
    min_field_h: int = 10


DEFAULT_TUNING = HookTuning()


def level_speed_factor(level: int, tuning: HookTuning = DEFAULT_TUNING) -> float:
    """Swing speed multiplier: +10% per level, capped at max_level."""
    if level >= tuning.max_level:
        return tuning.max_speed_factor
    return 1.0 + tuning.level_speed_step * (max(level, 1) - 1)


def level_item_counts(level: int, tuning: HookTuning = DEFAULT_TUNING) -> tuple[int, int, int]:
    """(big gold, small gold, stones) for a level."""
    lvl = max(1, min(level, tuning.max_level))
    return 2 + (lvl - 1) // 2, 4 + (lvl - 1), 3 + (lvl - 1)


# ═══════════════════════════════════════════════════════════════════════
#  Entities
# ═══════════════════════════════════════════════════════════════════════

class HookState(Enum):
    IDLE = "idle"
    EXTENDING = "extending"
    RETRACTING = "retracting"


class ItemKind(Enum):
    GOLD = "gold"
    STONE = "stone"


# glyph code -> (glyph, color); 0 is empty ground
ITEM_GLYPHS: dict[int, tuple[str, Color]] = {
    1: ("◆", Color.YELLOW),
    2: ("♦", Color.YELLOW),
    3: ("■", Color.GRAY),
    4: ("□", Color.DARK_GRAY),
}

HOOK_GLYPHS = ("▼", "▽")
ROPE_GLYPHS = ("║", "│")


@dataclass
class Item:
    x: float
    y: float
    kind: ItemKind
    value: int
    size: float
    weight: float

    @property
    def big(self) -> bool:
        return self.size > 1.5

    @property
    def glyph_code(self) -> int:
        if self.kind is ItemKind.GOLD:
            return 1 if self.big else 2
        return 3 if self.big else 4


@dataclass
class Hook:
    x: float
    y: float
    angle: float = 0.0
    state: HookState = HookState.IDLE


# ═══════════════════════════════════════════════════════════════════════
#  The game
# ═══════════════════════════════════════════════════════════════════════

class GoldMiner(ArcadeGame):

    NAMESPACE: ClassVar[str] = "goldminer"
    TITLE_COLOR: ClassVar[Color] = Color.YELLOW

    def __init__(
        self,
        tuning: HookTuning = DEFAULT_TUNING,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        viewport: tuple[int, int] | None = None,
    ) -> None:
        self.tuning = tuning
        self.clock = clock
        super().__init__(rng=rng, viewport=viewport)

    def _reset_board(self) -> None:
        self.level: int = 1
        self.items_collected: int = 0
        self.hook: Hook = Hook(x=self.view_w / 2.0, y=self.tuning.ceiling)
        self.items: list[Item] = []
        self.caught_item: Item | None = None
        self.last_update: float = self.clock()
        self._items_viewport: tuple[int, int] = (self.view_w, self.view_h)
        self.generate_items()

    # ── Level generation ────────────────────────────────────────────

    def generate_items(self) -> None:
        """Replace the whole item set with a fresh one for the current level."""
        t = self.tuning
        rng = self.rng
        self.items = []
        self.items_collected = 0
        self._items_viewport = (self.view_w, self.view_h)

        w, h = float(self.view_w), float(self.view_h)
        if w < t.min_field_w or h < t.min_field_h:
            return

        min_x = min(t.margin, w / 4.0)
        max_x = max(w - t.margin, min_x + 1.0)
        min_y = min(t.top_band, h / 4.0)
        max_y = max(h - t.bottom_margin, min_y + 1.0)

        lvl = min(self.level, t.max_level)
        big_gold, small_gold, stones = level_item_counts(lvl, t)

        for _ in range(big_gold):
            self.items.append(Item(
                x=rng.uniform(min_x, max_x), y=rng.uniform(min_y, max_y),
                kind=ItemKind.GOLD, value=200, size=2.0,
                weight=2.0 + lvl * 0.2,
            ))
        for _ in range(small_gold):
            self.items.append(Item(
                x=rng.uniform(min_x, max_x), y=rng.uniform(min_y, max_y),
                kind=ItemKind.GOLD, value=100, size=1.0,
                weight=1.0 + lvl * 0.1,
            ))
        for _ in range(stones):
            size = rng.uniform(1.0, 2.0)
            self.items.append(Item(
                x=rng.uniform(min_x, max_x), y=rng.uniform(min_y, max_y),
                kind=ItemKind.STONE, value=-50, size=size,
                weight=size * (1.5 + lvl * 0.1),
            ))

    def gold_remaining(self) -> bool:
        return any(item.kind is ItemKind.GOLD for item in self.items)

    # ── Input ───────────────────────────────────────────────────────

    def _play_input(self, key: int) -> bool:
        if key == KEY_SPACE and self.hook.state is HookState.IDLE:
            self.hook.state = HookState.EXTENDING
            return True
        return False

    def _on_start(self) -> None:
        # First start after a reset: lay the level out for the real terminal
        if self._items_viewport != (self.view_w, self.view_h) and self.score == 0:
            self.generate_items()
        self._resume_clock()

    def _resume_clock(self) -> None:
        self.last_update = self.clock()

    # ── Simulation ──────────────────────────────────────────────────

    def hook_screen_x(self) -> float:
        swing_range = self.view_w / 2.0 - self.tuning.margin
        return self.hook.x + math.sin(self.hook.angle) * swing_range

    def _advance(self) -> None:
        t = self.tuning
        hook = self.hook
        now = self.clock()
        elapsed = now - self.last_update
        self.last_update = now

        if hook.state is HookState.IDLE:
            hook.angle += elapsed * t.base_angular_speed * level_speed_factor(self.level, t)
            # Sawtooth, not a bounce
            if hook.angle > math.pi:
                hook.angle = -math.pi

        hook_x = self.hook_screen_x()

        if hook.state is HookState.EXTENDING:
            hook.y += elapsed * t.extend_speed
            if self.caught_item is None:
                self._try_catch(hook_x)
            if hook.y > self.view_h - t.bottom_margin:
                hook.state = HookState.RETRACTING

        if hook.state is HookState.RETRACTING:
            speed = t.retract_speed
            if self.caught_item is not None:
                speed = t.retract_speed / self.caught_item.weight
            hook.y -= elapsed * speed
            if hook.y <= t.ceiling:
                hook.y = t.ceiling
                self._bank_catch()
                hook.state = HookState.IDLE

    def _try_catch(self, hook_x: float) -> None:
        """Grab the first item under the hook, taking it out of play at once."""
        reach = self.tuning.slack
        hook_y = self.hook.y
        for i, item in enumerate(self.items):
            if (abs(hook_x - item.x) < item.size + reach
                    and abs(hook_y - item.y) < item.size + reach):
                self.caught_item = self.items.pop(i)
                self.hook.state = HookState.RETRACTING
                self._emit(f"catch:{item.kind.value}")
                return

    def _bank_catch(self) -> None:
        item = self.caught_item
        if item is None:
            return
        self.caught_item = None
        self.score += item.value
        self.items_collected += 1
        if not self.gold_remaining():
            self.level = min(self.level + 1, self.tuning.max_level)
            self.generate_items()
            self._emit(f"level_up:{self.level}")

    # ── Rendering ───────────────────────────────────────────────────

    def _set_viewport(self, width: int, height: int) -> None:
        super()._set_viewport(width, height)
        self.hook.x = width / 2.0

    def _welcome_lines(self) -> list[Line]:
        tx = self.texts.get_text
        keys = [
            "hook_swing", "press_space", "catch_gold", "big_gold_points",
            "small_gold_points", "avoid_stones", "collect_all_gold",
            "higher_levels", "faster_hook", "heavier_items", "more_obstacles",
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
            line(tx("controls_title")),
            line(tx("space_control")),
            line(tx("pause_control")),
            line(tx("quit_control")),
            line(),
            line(tx("press_enter"), Color.GREEN),
        ]
        return lines

    def item_layer(self, width: int, height: int) -> NDArray[np.int8]:
        """Glyph code per world cell; later items and the catch draw on top.

        Each item covers the square |dx| <= size, |dy| <= size around its
        centre. The caught item hangs just below the hook.
        """
        layer = np.zeros((max(0, height), max(0, width)), dtype=np.int8)
        ys = np.arange(layer.shape[0], dtype=np.float64)[:, None]
        xs = np.arange(layer.shape[1], dtype=np.float64)[None, :]

        placed: list[tuple[float, float, Item]] = [(it.x, it.y, it) for it in self.items]
        if self.caught_item is not None:
            caught = self.caught_item
            placed.append((self.hook_screen_x(), self.hook.y + caught.size, caught))

        for cx, cy, item in placed:
            mask = (np.abs(xs - cx) <= item.size) & (np.abs(ys - cy) <= item.size)
            layer[mask] = item.glyph_code
        return layer

    def _render_board(self, frame: Frame) -> None:
        tx = self.texts.get_text
        status = [
            Span(f"{tx('level')} ", Color.YELLOW), Span(str(self.level), Color.GREEN),
            Span("  "),
            Span(f"{tx('score')} ", Color.YELLOW), Span(str(self.score), Color.GREEN),
        ]
        frame.write_line(1, 1, status, limit=frame.width - 1)

        # World row y sits on frame row y + 2, world column x on x + 1
        world_w = frame.width - 2
        world_h = frame.height - 3
        layer = self.item_layer(world_w, world_h)
        ys, xs = np.nonzero(layer)
        for y, x, code in zip(ys.tolist(), xs.tolist(), layer[ys, xs].tolist()):
            glyph, color = ITEM_GLYPHS[code]
            frame.put(x + 1, y + 2, glyph, color)

        anim = int(self.clock() / 0.2) % 2
        col = math.floor(self.hook_screen_x())
        tip = math.floor(self.hook.y)
        if 0 <= col < world_w:
            for y in range(world_h):
                if y == tip:
                    frame.put(col + 1, y + 2, HOOK_GLYPHS[anim], Color.RED, bold=True)
                elif y < self.hook.y:
                    frame.put(col + 1, y + 2, ROPE_GLYPHS[anim], Color.RED)

"""
Snake on a 20 × 20 field.

The body is a deque of (x, y) cells with the head at the front. Steering
only records the wanted direction; it is applied on the next motion tick,
so two quick key presses cannot fold the snake back onto itself within one
step.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from arcade_engine import ArcadeGame, Direction, direction_for_key
from arcade_frame import Color, Frame, Line, Span, line

Cell = tuple[int, int]


@dataclass(frozen=True)
class SnakeTuning:
    width: int = 20
    height: int = 20
    move_every: int = 10              # ticks per step
    start: Cell = (10, 10)
    apple_chance: float = 0.7
    apple_points: int = 50
    candy_points: int = 150


DEFAULT_TUNING = SnakeTuning()


class FoodKind(Enum):
    APPLE = "apple"   # 2 × 2 cluster
    CANDY = "candy"   # single cell


FOOD_GLYPHS: dict[FoodKind, tuple[str, Color]] = {
    FoodKind.APPLE: ("()", Color.RED),
    FoodKind.CANDY: ("<>", Color.MAGENTA),
}


@dataclass
class Food:
    kind: FoodKind
    cells: list[Cell] = field(default_factory=list)


class Snake(ArcadeGame):

    NAMESPACE: ClassVar[str] = "snake"
    TITLE_COLOR: ClassVar[Color] = Color.GREEN
    MIN_WIDTH: ClassVar[int] = 44

    def __init__(
        self,
        tuning: SnakeTuning = DEFAULT_TUNING,
        rng: random.Random | None = None,
        viewport: tuple[int, int] | None = None,
    ) -> None:
        self.tuning = tuning
        super().__init__(rng=rng, viewport=viewport)

    def _reset_board(self) -> None:
        self.body: deque[Cell] = deque([self.tuning.start])
        self.direction: Direction = Direction.RIGHT
        self.next_direction: Direction = Direction.RIGHT
        self.tick_count: int = 0
        self.food: Food = Food(FoodKind.CANDY)
        self.spawn_food()

    # ── Steering ────────────────────────────────────────────────────

    def request_direction(self, direction: Direction) -> bool:
        """Queue a turn for the next step; a U-turn is refused."""
        if direction is self.direction.opposite():
            return False
        self.next_direction = direction
        return True

    def _play_input(self, key: int) -> bool:
        direction = direction_for_key(key)
        if direction is None:
            return False
        return self.request_direction(direction)

    # ── Food ────────────────────────────────────────────────────────

    def food_points(self) -> int:
        if self.food.kind is FoodKind.APPLE:
            return self.tuning.apple_points
        return self.tuning.candy_points

    def spawn_food(self) -> None:
        """Put new food on free cells: apples need a free 2 × 2 block."""
        t = self.tuning
        occupied = set(self.body)
        kind = FoodKind.APPLE if self.rng.random() < t.apple_chance else FoodKind.CANDY

        if kind is FoodKind.APPLE:
            spots = []
            for y in range(t.height - 1):
                for x in range(t.width - 1):
                    cluster = [(x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1)]
                    if not occupied.intersection(cluster):
                        spots.append(cluster)
            if spots:
                self.food = Food(kind, self.rng.choice(spots))
                return
            # no room for an apple, fall through to a candy

        free = [
            (x, y) for y in range(t.height) for x in range(t.width)
            if (x, y) not in occupied
        ]
        if free:
            self.food = Food(FoodKind.CANDY, [self.rng.choice(free)])
        else:
            self.food = Food(FoodKind.CANDY, [])

    # ── Motion ──────────────────────────────────────────────────────

    def _advance(self) -> None:
        self.tick_count += 1
        if self.tick_count % self.tuning.move_every == 0:
            self.direction = self.next_direction
            self.step()

    def step(self) -> bool:
        """Move one cell. Returns False when the move ended the game."""
        t = self.tuning
        hx, hy = self.body[0]
        head = (hx + self.direction.dx, hy + self.direction.dy)

        if (not (0 <= head[0] < t.width and 0 <= head[1] < t.height)
                or head in self.body):
            self.game_over = True
            self._emit("game_over")
            return False

        if head in self.food.cells:
            self.score += self.food_points()
            self.body.appendleft(head)
            self._emit(f"eat:{self.food.kind.value}")
            self.spawn_food()
        else:
            self.body.pop()
            self.body.appendleft(head)
        return True

    # ── Rendering ───────────────────────────────────────────────────

    def min_size(self) -> tuple[int, int]:
        # board rows, score row, game-over row, border
        return self.MIN_WIDTH, self.tuning.height + 4

    def _welcome_lines(self) -> list[Line]:
        tx = self.texts.get_text
        return [
            line(f"{tx('welcome_to')} {tx('title')}!", Color.YELLOW),
            line(),
            line(tx("how_to_play")),
            line(),
            line(tx("move_snake")),
            line(tx("eat_food_title")),
            line(tx("apple_desc")),
            line(tx("candy_desc")),
            line(tx("avoid_walls")),
            line(),
            line(tx("press_enter"), Color.GREEN),
            line(tx("pause_game")),
        ]

    def _render_board(self, frame: Frame) -> None:
        tx = self.texts.get_text
        t = self.tuning
        body = set(self.body)
        head = self.body[0]
        food = set(self.food.cells)
        food_glyph, food_color = FOOD_GLYPHS[self.food.kind]

        lines: list[Line] = []
        for y in range(t.height):
            spans: Line = []
            for x in range(t.width):
                cell = (x, y)
                if cell == head:
                    spans.append(Span("██", Color.GREEN, bold=True))
                elif cell in body:
                    spans.append(Span("██", Color.GREEN))
                elif cell in food:
                    spans.append(Span(food_glyph, food_color, bold=True))
                else:
                    spans.append(Span("··", Color.DARK_GRAY))
            lines.append(spans)
        lines.append(line(f"{tx('score')} {self.score}", Color.YELLOW))
        if self.game_over:
            lines.append([
                Span(tx("game_over"), Color.RED, bold=True),
                Span(f"  {tx('press_r_restart')}"),
            ])
        frame.paragraph(lines, centered=True)

"""Shared game state: enemy waves, background scrolling rules and the text window."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from moonshooter.config import (
    MAX_BULLETS,
    MAX_ENEMIES,
    MAX_EXPLOSION,
    SCREEN_TILE_ROWS,
    SCREEN_WIDTH,
    SCROLL_PLANES,
    Button,
)
from moonshooter.game_object import GameObject, ObjectPool

BG_A = "BG_A"
BG_B = "BG_B"


class EnemyPattern(IntEnum):
    """How a spawner places enemies."""

    NONE = 0
    HOR = 1  # two horizontal lines
    SIN = 2  # two sine waves in opposite phase


@dataclass(frozen=True)
class EnemySpawner:
    """Configuration of one enemy wave."""

    pattern: EnemyPattern
    enemy_count: int
    delay: int
    enemy_delay: int


@dataclass
class EnemyWave:
    """Progress of the wave currently being spawned."""

    spawner: EnemySpawner | None = None
    delay: int = 0
    enemy_delay: int = 0
    spawned_count: int = 0
    active: bool = False


@dataclass
class PlaneScrollingRule:
    """Automatic horizontal scrolling of a band of tile rows on one plane."""

    plane: str
    start_line_index: int
    num_of_lines: int
    auto_scroll_speed: float
    scroll_offset: float = 0.0


def default_scroll_rules() -> list[PlaneScrollingRule]:
    """Parallax bands of the moon surface and the sky behind it."""
    return [
        PlaneScrollingRule(BG_A, 0, 9, 0.04),
        PlaneScrollingRule(BG_A, 9, 4, 0.4),
        PlaneScrollingRule(BG_A, 13, 4, 1.1),
        PlaneScrollingRule(BG_A, 17, 11, 2.0),
        PlaneScrollingRule(BG_B, 0, 28, 0.01),
    ]


LINE_SPAWNER = EnemySpawner(EnemyPattern.HOR, enemy_count=8, delay=60, enemy_delay=15)
SIN_SPAWNER = EnemySpawner(EnemyPattern.SIN, enemy_count=8, delay=60, enemy_delay=15)


@dataclass
class TextWindow:
    """Character grid of the on-screen text window."""

    columns: int = SCREEN_WIDTH // 8
    rows: int = SCREEN_TILE_ROWS
    _cells: list[list[str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ValueError("window must have a positive size")
        self._cells = [[" "] * self.columns for _ in range(self.rows)]

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.columns and 0 <= y < self.rows):
            raise ValueError(f"position ({x}, {y}) is outside the window")

    def draw_text(self, text: str, x: int, y: int) -> None:
        """Write text starting at column x of row y, clipped at the right edge."""
        self._check(x, y)
        row = self._cells[y]
        for column, char in enumerate(text[: self.columns - x], start=x):
            row[column] = char

    def clear_area(self, x: int, y: int, width: int, height: int) -> None:
        """Blank a rectangle of cells, clipped to the window."""
        self._check(x, y)
        if width < 0 or height < 0:
            raise ValueError("area size must not be negative")
        for row in self._cells[y : y + height]:
            row[x : x + width] = [" "] * len(row[x : x + width])

    def row(self, y: int) -> str:
        self._check(0, y)
        return "".join(self._cells[y])


@dataclass
class GameState:
    """Everything a running game holds between frames."""

    players: list[Any] = field(default_factory=list)
    player_list_head: Any = None
    scroll_rules: list[PlaneScrollingRule] = field(default_factory=default_scroll_rules)
    wave: EnemyWave = field(default_factory=EnemyWave)
    projectile_pool: ObjectPool = field(
        default_factory=lambda: ObjectPool(GameObject, MAX_BULLETS)
    )
    enemy_pool: ObjectPool = field(
        default_factory=lambda: ObjectPool(GameObject, MAX_ENEMIES)
    )
    explosion_pool: ObjectPool = field(
        default_factory=lambda: ObjectPool(GameObject, MAX_EXPLOSION)
    )
    line_offset_x: list[list[int]] = field(
        default_factory=lambda: [[0] * SCREEN_TILE_ROWS for _ in range(SCROLL_PLANES)]
    )
    line_spawner: EnemySpawner = LINE_SPAWNER
    sin_spawner: EnemySpawner = SIN_SPAWNER
    window: TextWindow = field(default_factory=TextWindow)
    joypads: list[Button] = field(default_factory=lambda: [Button.NONE, Button.NONE])
    sound_log: list[tuple[str, int]] = field(default_factory=list)
    palettes: dict[int, str] = field(default_factory=dict)
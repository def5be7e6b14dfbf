from __future__ import annotations

import os
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

Direction = Tuple[int, int]
Point = Tuple[int, int]

TILE_SIZE = 20
CANVAS_SIZE = 400  # 400x400
MAX_MISTAKES = 10
PAUSE_MS = 500

# 속도 선택지: 이름 -> tick 간격(ms)
SPEED_OPTIONS: Dict[str, int] = {
    "Slow": 150,
    "Normal": 100,
    "Fast": 60,
}
DEFAULT_SPEED = "Normal"

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class StepOutcome(Enum):
    MOVED = "moved"
    ATE = "ate"
    MISTAKE = "mistake"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameConfig:
    """Board and rule constants for one game."""

    tile_size: int = TILE_SIZE
    canvas_size: int = CANVAS_SIZE
    max_mistakes: int = MAX_MISTAKES
    pause_ms: int = PAUSE_MS

    def __post_init__(self) -> None:
        if self.tile_size <= 0:
            raise ValueError("tile_size must be positive")
        if self.canvas_size % self.tile_size != 0:
            raise ValueError("canvas_size must be a multiple of tile_size")
        if self.canvas_size // self.tile_size < 3:
            raise ValueError("board must be at least three tiles wide")
        if self.max_mistakes < 1:
            raise ValueError("max_mistakes must be at least 1")
        if self.pause_ms < 0:
            raise ValueError("pause_ms must not be negative")

    @property
    def columns(self) -> int:
        return self.canvas_size // self.tile_size

    @classmethod
    def from_env(cls) -> "GameConfig":
        raw = os.getenv("SNAKE_MAX_MISTAKES", "").strip()
        if not raw:
            return cls()
        try:
            max_mistakes = int(raw)
        except ValueError as e:
            raise ValueError(f"SNAKE_MAX_MISTAKES is not an integer: {raw!r}") from e
        return cls(max_mistakes=max_mistakes)


def speed_from_env() -> str:
    """Return the initially selected speed name (``SNAKE_SPEED``)."""
    raw = os.getenv("SNAKE_SPEED", "").strip()
    if not raw:
        return DEFAULT_SPEED
    for name in SPEED_OPTIONS:
        if name.lower() == raw.lower():
            return name
    raise ValueError(f"SNAKE_SPEED must be one of {', '.join(SPEED_OPTIONS)}: {raw!r}")


@dataclass
class GameState:
    """Everything that changes while a game is played."""

    snake: List[Point]
    food: Optional[Point]
    direction: Direction = RIGHT
    score: int = 0
    mistakes: int = 0
    phase: Phase = Phase.RUNNING
    # 마지막 tick에 실제로 움직인 방향. 입력은 이 방향 기준으로 검사한다.
    moved_direction: Optional[Direction] = None

    def __post_init__(self) -> None:
        if self.moved_direction is None:
            self.moved_direction = self.direction

    @property
    def head(self) -> Point:
        return self.snake[0]


def initial_snake(config: GameConfig) -> List[Point]:
    """Three segments in the middle of the board, heading right."""
    center = config.canvas_size // 2
    center -= center % config.tile_size
    return [(center - i * config.tile_size, center) for i in range(3)]


def is_on_snake(pos: Point, snake: List[Point]) -> bool:
    return any(segment == pos for segment in snake)


def place_food(snake: List[Point], config: GameConfig, rng: random.Random) -> Optional[Point]:
    """Return a random grid cell that does not overlap with the snake.

    Candidates are drawn uniformly from the whole grid and rejected while they
    land on a segment. Returns ``None`` when the snake already covers every
    cell, since no candidate could ever be accepted.
    """
    occupied = set(snake)
    if len(occupied) >= config.columns * config.columns:
        return None
    while True:
        candidate = (
            rng.randrange(config.columns) * config.tile_size,
            rng.randrange(config.columns) * config.tile_size,
        )
        if candidate not in occupied:
            return candidate


def new_game(config: GameConfig, rng: random.Random) -> GameState:
    snake = initial_snake(config)
    return GameState(snake=snake, food=place_food(snake, config, rng))


def next_head(state: GameState, config: GameConfig) -> Point:
    head_x, head_y = state.head
    dx, dy = state.direction
    return (head_x + dx * config.tile_size, head_y + dy * config.tile_size)


def check_collision(head: Point, snake: List[Point], config: GameConfig) -> bool:
    """Wall hit, or the head lands on any segment behind the current head."""
    hit_wall = head[0] < 0 or head[0] >= config.canvas_size or head[1] < 0 or head[1] >= config.canvas_size
    hit_self = is_on_snake(head, snake[1:])
    return hit_wall or hit_self


def change_direction(state: GameState, proposed: Direction) -> bool:
    """Apply a turn if it is perpendicular to the last direction moved.

    Returns True when the direction changed. Several presses between two
    ticks are all checked against the direction of the last tick, so a quick
    UP then LEFT while moving RIGHT cannot fold the snake back onto itself.
    Input outside a game in progress is ignored.
    """
    if state.phase not in (Phase.RUNNING, Phase.PAUSED):
        return False
    current = state.moved_direction
    if proposed == state.direction:
        return False
    if proposed[0] != 0 and current[0] == 0:
        state.direction = proposed
        return True
    if proposed[1] != 0 and current[1] == 0:
        state.direction = proposed
        return True
    return False


def end_game(state: GameState) -> None:
    state.phase = Phase.GAME_OVER


def register_mistake(state: GameState, config: GameConfig) -> StepOutcome:
    """Count a collision; pause or finish the game depending on the total."""
    state.mistakes += 1
    if state.mistakes >= config.max_mistakes:
        end_game(state)
        return StepOutcome.GAME_OVER
    # 같은 방향으로 다시 부딪히지 않도록 오른쪽으로 되돌린다.
    state.direction = RIGHT
    state.moved_direction = RIGHT
    state.phase = Phase.PAUSED
    return StepOutcome.MISTAKE


def step(state: GameState, config: GameConfig, rng: random.Random) -> StepOutcome:
    """Advance the snake by one tile."""
    if state.phase is not Phase.RUNNING:
        raise RuntimeError(f"cannot step a game in phase {state.phase.value}")

    head = next_head(state, config)
    if check_collision(head, state.snake, config):
        return register_mistake(state, config)

    state.snake.insert(0, head)
    state.moved_direction = state.direction
    if head == state.food:
        state.score += 1
        state.food = place_food(state.snake, config, rng)
        if state.food is None:
            end_game(state)
            return StepOutcome.GAME_OVER
        return StepOutcome.ATE

    state.snake.pop()
    return StepOutcome.MOVED


def format_mistakes(state: GameState, config: GameConfig) -> str:
    return f"{state.mistakes} / {config.max_mistakes}"

"""
Snake State Model - Immutable snapshots of the game at one point in time.

Every transition in the engine produces a new GameState; nothing here is
mutated after construction, so a snapshot can be handed to the renderer or
a replay recorder without copying.
"""
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterable, Optional, Set, Tuple

import numpy as np

from .storage import HighScoreStore

logger = logging.getLogger(__name__)


class Direction(IntEnum):
    """Snake movement directions."""
    RIGHT = 0
    DOWN = 1
    LEFT = 2
    UP = 3

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit (dx, dy) step for this direction. y grows downwards."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def is_reversal_of(self, other: "Direction") -> bool:
        """True if moving this way right after ``other`` is a 180 degree turn."""
        return _OPPOSITES[other] is self


_DELTAS = {
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Position:
    """A cell on the game grid."""
    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def in_bounds(self, grid_size: int) -> bool:
        return 0 <= self.x < grid_size and 0 <= self.y < grid_size

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for serialization."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "Position":
        return cls(int(data["x"]), int(data["y"]))


@dataclass(frozen=True)
class GameRules:
    """Board size and pacing constants a game is played under."""

    grid_size: int = 20
    initial_speed: int = 200        # ms between ticks at the start
    speed_increment: int = 5        # ms shaved off per food eaten
    min_speed: int = 80             # fastest allowed tick interval
    queue_capacity: int = 2         # buffered turns between ticks

    def __post_init__(self):
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.min_speed <= 0 or self.initial_speed < self.min_speed:
            raise ValueError(
                f"speeds must satisfy 0 < min_speed <= initial_speed, "
                f"got min_speed={self.min_speed}, initial_speed={self.initial_speed}"
            )
        if self.speed_increment < 0:
            raise ValueError(f"speed_increment must be >= 0, got {self.speed_increment}")
        if self.queue_capacity < 1:
            raise ValueError(f"queue_capacity must be >= 1, got {self.queue_capacity}")

    @property
    def center(self) -> Position:
        return Position(self.grid_size // 2, self.grid_size // 2)

    def to_dict(self) -> Dict[str, int]:
        return {
            "grid_size": self.grid_size,
            "initial_speed": self.initial_speed,
            "speed_increment": self.speed_increment,
            "min_speed": self.min_speed,
            "queue_capacity": self.queue_capacity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameRules":
        """Create rules from dictionary, ignoring unknown keys."""
        defaults = cls()
        return cls(
            grid_size=data.get("grid_size", defaults.grid_size),
            initial_speed=data.get("initial_speed", defaults.initial_speed),
            speed_increment=data.get("speed_increment", defaults.speed_increment),
            min_speed=data.get("min_speed", defaults.min_speed),
            queue_capacity=data.get("queue_capacity", defaults.queue_capacity),
        )


@dataclass(frozen=True)
class DirectionQueue:
    """
    Fixed-capacity FIFO of upcoming turns.

    Pushing onto a full queue hands back the same queue, so the length can
    never exceed ``capacity``.
    """

    items: Tuple[Direction, ...] = ()
    capacity: int = 2

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    @property
    def head(self) -> Optional[Direction]:
        return self.items[0] if self.items else None

    @property
    def tail(self) -> Optional[Direction]:
        return self.items[-1] if self.items else None

    def push(self, direction: Direction) -> "DirectionQueue":
        if self.is_full:
            return self
        return DirectionQueue(self.items + (direction,), self.capacity)

    def pop(self) -> Tuple[Direction, "DirectionQueue"]:
        """Remove the oldest direction. Raises IndexError when empty."""
        if not self.items:
            raise IndexError("pop from empty DirectionQueue")
        return self.items[0], DirectionQueue(self.items[1:], self.capacity)

    def cleared(self) -> "DirectionQueue":
        return DirectionQueue((), self.capacity)


@dataclass(frozen=True)
class GameState:
    """One immutable snapshot of the game."""

    snake: Tuple[Position, ...]
    food: Optional[Position]
    direction: Direction = Direction.RIGHT
    queue: DirectionQueue = field(default_factory=DirectionQueue)
    score: int = 0
    high_score: int = 0
    speed: Optional[int] = None     # None means rules.initial_speed
    game_over: bool = False
    paused: bool = False
    just_ate_food: bool = False
    flash_effect: bool = False
    rules: GameRules = field(default_factory=GameRules)

    def __post_init__(self):
        if self.speed is None:
            object.__setattr__(self, "speed", self.rules.initial_speed)

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def last_pending_direction(self) -> Direction:
        """Direction the snake will be heading once the queue drains."""
        tail = self.queue.tail
        return self.direction if tail is None else tail

    @property
    def is_running(self) -> bool:
        return not self.game_over and not self.paused

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the snapshot as a plain dictionary for rendering or replays.

        Returns:
            Dictionary containing the full game state
        """
        return {
            "snake": [p.to_dict() for p in self.snake],
            "food": self.food.to_dict() if self.food is not None else None,
            "direction": int(self.direction),
            "queue": [int(d) for d in self.queue],
            "score": self.score,
            "high_score": self.high_score,
            "speed": self.speed,
            "game_over": self.game_over,
            "paused": self.paused,
            "just_ate_food": self.just_ate_food,
            "flash_effect": self.flash_effect,
            "width": self.rules.grid_size,
            "height": self.rules.grid_size,
        }


def random_free_position(
    rng: np.random.Generator,
    grid_size: int,
    occupied: Iterable[Position],
) -> Optional[Position]:
    """
    Pick a cell uniformly at random among the cells not in ``occupied``.

    Rejection-samples first; after ``grid_size ** 2`` misses the board is
    nearly full, so the remaining free cells are listed and one is chosen.

    Args:
        rng: Source of randomness (seed it for reproducible games)
        grid_size: Width and height of the square board
        occupied: Cells the result must avoid

    Returns:
        A free Position, or None if every cell is occupied
    """
    taken: Set[Position] = set(occupied)
    total_cells = grid_size * grid_size
    if len(taken) >= total_cells:
        return None

    for _ in range(total_cells):
        x, y = rng.integers(0, grid_size, size=2)
        candidate = Position(int(x), int(y))
        if candidate not in taken:
            return candidate

    free = [
        Position(x, y)
        for x in range(grid_size)
        for y in range(grid_size)
        if Position(x, y) not in taken
    ]
    logger.debug("Food placement fell back to scanning %d free cells", len(free))
    return free[int(rng.integers(0, len(free)))]


def initialize(
    rules: GameRules,
    store: HighScoreStore,
    rng: np.random.Generator,
) -> GameState:
    """
    Create a fresh game: one segment at the center heading right.

    The high score is the only thing read from outside; the store falls back
    to 0 when nothing valid is saved.
    """
    start = rules.center
    return GameState(
        snake=(start,),
        food=random_free_position(rng, rules.grid_size, (start,)),
        direction=Direction.RIGHT,
        queue=DirectionQueue((), rules.queue_capacity),
        score=0,
        high_score=store.get(),
        speed=rules.initial_speed,
        rules=rules,
    )

"""
Snake Transition Engine - Pure game rules without timing or rendering.

Each handler takes the current GameState and returns the next one. When an
event changes nothing, the very same object is returned, so callers can use
``new is old`` to mean "nothing happened".
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, Optional

import numpy as np

from .state import (
    Direction,
    GameRules,
    GameState,
    initialize,
    random_free_position,
)
from .storage import HighScoreStore, InMemoryHighScoreStore

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Kinds of events the engine understands."""
    INTENT = "intent"
    TICK = "tick"
    RESET_EFFECTS = "reset_effects"
    RESTART = "restart"
    TOGGLE_PAUSE = "toggle_pause"


@dataclass(frozen=True)
class Event:
    """A single event; ``direction`` is only set for INTENT."""
    kind: EventType
    direction: Optional[Direction] = None

    @classmethod
    def intent(cls, direction: Direction) -> "Event":
        return cls(EventType.INTENT, Direction(direction))

    @classmethod
    def tick(cls) -> "Event":
        return cls(EventType.TICK)

    @classmethod
    def reset_effects(cls) -> "Event":
        return cls(EventType.RESET_EFFECTS)

    @classmethod
    def restart(cls) -> "Event":
        return cls(EventType.RESTART)

    @classmethod
    def toggle_pause(cls) -> "Event":
        return cls(EventType.TOGGLE_PAUSE)

    def to_token(self) -> str:
        """Compact text form used in replay files, e.g. ``intent:UP``."""
        if self.kind is EventType.INTENT:
            return f"{self.kind.value}:{self.direction.name}"
        return self.kind.value

    @classmethod
    def from_token(cls, token: str) -> "Event":
        """
        Parse the text form produced by to_token().

        Raises:
            ValueError: If the token names no known event or direction
        """
        name, _, arg = token.partition(":")
        try:
            kind = EventType(name)
        except ValueError:
            raise ValueError(f"Unknown event: {token!r}") from None
        if kind is EventType.INTENT:
            if arg not in Direction.__members__:
                raise ValueError(f"Unknown direction in event: {token!r}")
            return cls.intent(Direction[arg])
        return cls(kind)


class TransitionEngine:
    """
    Applies events to game states.

    The engine holds no game state of its own. Its only collaborators are
    the random generator used to place food and the high score store that
    new records are written to.
    """

    def __init__(
        self,
        store: Optional[HighScoreStore] = None,
        rng: Optional[np.random.Generator] = None,
        rules: Optional[GameRules] = None,
    ):
        """
        Initialize the engine.

        Args:
            store: High score storage (defaults to an in-memory store)
            rng: Food placement randomness (defaults to an unseeded generator)
            rules: Board and pacing constants for new games
        """
        self.store = store if store is not None else InMemoryHighScoreStore()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.rules = rules or GameRules()

    def initialize(self) -> GameState:
        """Create the state a new process starts from."""
        return initialize(self.rules, self.store, self.rng)

    def apply(self, state: GameState, event: Event) -> GameState:
        """Dispatch one event to its handler."""
        kind = event.kind
        if kind is EventType.INTENT:
            return self.intent(state, event.direction)
        if kind is EventType.TICK:
            return self.tick(state)
        if kind is EventType.RESET_EFFECTS:
            return self.reset_effects(state)
        if kind is EventType.RESTART:
            return self.restart(state)
        if kind is EventType.TOGGLE_PAUSE:
            return self.toggle_pause(state)
        logger.debug("Ignoring unknown event %r", event)
        return state

    def apply_all(self, state: GameState, events: Iterable[Event]) -> Iterator[GameState]:
        """Apply events in order, yielding the state after each one."""
        for event in events:
            state = self.apply(state, event)
            yield state

    def intent(self, state: GameState, direction: Direction) -> GameState:
        """
        Queue a turn for an upcoming tick.

        Reversals of the last pending direction, duplicates of it and pushes
        onto a full queue are all ignored.
        """
        if state.game_over:
            return state

        direction = Direction(direction)
        last = state.last_pending_direction
        if direction.is_reversal_of(last) or direction == last:
            return state
        if state.queue.is_full:
            return state

        return replace(state, queue=state.queue.push(direction))

    def tick(self, state: GameState) -> GameState:
        """Advance the snake one cell."""
        if state.game_over or state.paused:
            return state

        # Resolve this tick's direction from the queue
        direction = state.direction
        queue = state.queue
        if queue.head is not None:
            if queue.head.is_reversal_of(state.direction):
                # A queued reversal is stale; drop everything queued after it too
                queue = queue.cleared()
            else:
                direction, queue = queue.pop()

        new_head = state.head.moved(direction)

        if not new_head.in_bounds(state.rules.grid_size):
            logger.debug("Wall collision at (%d, %d)", new_head.x, new_head.y)
            return self._end_game(state)

        # The tail moves out of the way this tick, so it is not an obstacle.
        # A one-segment snake has no tail distinct from its head.
        body = state.snake[:-1] if len(state.snake) > 1 else state.snake
        if new_head in body:
            logger.debug("Self collision at (%d, %d)", new_head.x, new_head.y)
            return self._end_game(state)

        snake = (new_head,) + state.snake
        food = state.food
        score = state.score
        high_score = state.high_score
        speed = state.speed
        ate_food = new_head == state.food

        if ate_food:
            score += 1
            if score > high_score:
                high_score = score
                self.store.set(high_score)
            speed = max(state.rules.min_speed, speed - state.rules.speed_increment)
            food = random_free_position(self.rng, state.rules.grid_size, snake)
        else:
            snake = snake[:-1]

        return replace(
            state,
            snake=snake,
            food=food,
            direction=direction,
            queue=queue,
            score=score,
            high_score=high_score,
            speed=speed,
            just_ate_food=ate_food,
            flash_effect=ate_food,
        )

    def reset_effects(self, state: GameState) -> GameState:
        """Clear the transient visual flags."""
        if not state.just_ate_food and not state.flash_effect:
            return state
        return replace(state, just_ate_food=False, flash_effect=False)

    def restart(self, state: GameState) -> GameState:
        """Start over, keeping the high score reached so far."""
        fresh = initialize(state.rules, self.store, self.rng)
        return replace(fresh, high_score=state.high_score)

    def toggle_pause(self, state: GameState) -> GameState:
        """Pause or resume. A finished game can only be restarted."""
        if state.game_over:
            return state
        return replace(state, paused=not state.paused)

    def _end_game(self, state: GameState) -> GameState:
        logger.debug("Game over with score %d", state.score)
        return replace(state, game_over=True, flash_effect=True)

"""
Input Adapter - Turns pygame keyboard, mouse and touch input into game events.

Controls:
    Arrow Keys or WASD: Turn
    Space / P: Pause or resume (restart after game over)
    Enter: Restart after game over
    Swipe (touch or mouse drag): Turn
"""
from typing import Dict, Optional, Tuple

import pygame

from ..core.engine import Event
from ..core.state import Direction, GameState

MIN_SWIPE_DISTANCE = 30


def direction_keys() -> Dict[int, Direction]:
    """Map of pygame key codes to directions."""
    return {
        pygame.K_UP: Direction.UP,
        pygame.K_w: Direction.UP,
        pygame.K_DOWN: Direction.DOWN,
        pygame.K_s: Direction.DOWN,
        pygame.K_LEFT: Direction.LEFT,
        pygame.K_a: Direction.LEFT,
        pygame.K_RIGHT: Direction.RIGHT,
        pygame.K_d: Direction.RIGHT,
    }


def translate_key(key: int, state: GameState) -> Optional[Event]:
    """
    Translate a key press into an event for the given state.

    Args:
        key: pygame key code
        state: Current snapshot (decides pause vs. restart, and gating)

    Returns:
        The event to dispatch, or None if the key does nothing right now
    """
    if key in (pygame.K_SPACE, pygame.K_p):
        return Event.restart() if state.game_over else Event.toggle_pause()

    if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
        return Event.restart() if state.game_over else None

    direction = direction_keys().get(key)
    if direction is None or not state.is_running:
        return None
    return Event.intent(direction)


def classify_swipe(
    start: Tuple[float, float],
    end: Tuple[float, float],
    min_distance: float = MIN_SWIPE_DISTANCE,
) -> Optional[Direction]:
    """
    Classify a swipe by its dominant axis.

    Args:
        start: (x, y) where the gesture began, in pixels
        end: (x, y) where it ended, in pixels
        min_distance: The longer axis must travel strictly further than this

    Returns:
        The swipe direction, or None for a tap or short drag
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    abs_dx, abs_dy = abs(dx), abs(dy)

    if max(abs_dx, abs_dy) <= min_distance:
        return None
    if abs_dx > abs_dy:
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class InputAdapter:
    """
    Routes pygame events to a GameSession.

    Direction changes are suppressed while paused or after game over; the
    pause and restart keys always go through.
    """

    def __init__(
        self,
        session,
        window_size: Tuple[int, int] = (800, 800),
        min_swipe_distance: float = MIN_SWIPE_DISTANCE,
    ):
        """
        Initialize the adapter.

        Args:
            session: GameSession to dispatch into
            window_size: Window size, used to scale normalized touch coordinates
            min_swipe_distance: Minimum swipe length in pixels
        """
        self.session = session
        self.window_size = window_size
        self.min_swipe_distance = min_swipe_distance
        self._swipe_start: Optional[Tuple[float, float]] = None

    def handle_event(self, event) -> Optional[Event]:
        """
        Handle one pygame event.

        Returns:
            The game event that was dispatched, if any
        """
        if event.type == pygame.KEYDOWN:
            game_event = translate_key(event.key, self.session.state)
            return self._dispatch(game_event)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._swipe_start = tuple(event.pos)
            return None
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            return self._finish_swipe(tuple(event.pos))

        if event.type == pygame.FINGERDOWN:
            self._swipe_start = self._touch_to_pixels(event)
            return None
        if event.type == pygame.FINGERUP:
            return self._finish_swipe(self._touch_to_pixels(event))

        return None

    def _touch_to_pixels(self, event) -> Tuple[float, float]:
        # Finger events carry coordinates normalized to 0..1
        width, height = self.window_size
        return (event.x * width, event.y * height)

    def _finish_swipe(self, end: Tuple[float, float]) -> Optional[Event]:
        start, self._swipe_start = self._swipe_start, None
        if start is None or not self.session.state.is_running:
            return None

        direction = classify_swipe(start, end, self.min_swipe_distance)
        if direction is None:
            return None
        return self._dispatch(Event.intent(direction))

    def _dispatch(self, game_event: Optional[Event]) -> Optional[Event]:
        if game_event is not None:
            self.session.dispatch(game_event)
        return game_event

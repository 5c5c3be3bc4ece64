"""
Pytest configuration and fixtures for Neon Snake tests.

This module sets up pygame mocking so the renderer, input adapter and
session driver can be tested without a display or a real pygame install.
Modules that import pygame must be imported inside tests, after the mock
is in place.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from neon_snake.core.engine import TransitionEngine
from neon_snake.core.state import Direction, DirectionQueue, GameRules, GameState, Position
from neon_snake.core.storage import InMemoryHighScoreStore


def create_mock_pygame():
    """Create a mock of the parts of pygame the game uses."""
    mock_pygame = MagicMock()

    mock_pygame.init.return_value = (6, 0)
    mock_pygame.quit.return_value = None

    # Display
    mock_surface = MagicMock()
    mock_surface.get_width.return_value = 600
    mock_surface.get_height.return_value = 660
    mock_pygame.display.set_mode.return_value = mock_surface
    mock_pygame.Surface.return_value = mock_surface

    # Fonts
    mock_font = MagicMock()
    mock_font.render.return_value = MagicMock()
    mock_pygame.font.Font.return_value = mock_font

    # Events
    mock_pygame.event.get.return_value = []
    mock_pygame.event.peek.return_value = False

    # Constants
    mock_pygame.QUIT = 256
    mock_pygame.KEYDOWN = 768
    mock_pygame.KEYUP = 769
    mock_pygame.MOUSEBUTTONDOWN = 1025
    mock_pygame.MOUSEBUTTONUP = 1026
    mock_pygame.FINGERDOWN = 1792
    mock_pygame.FINGERUP = 1793
    mock_pygame.SRCALPHA = 65536
    mock_pygame.K_ESCAPE = 27
    mock_pygame.K_RETURN = 13
    mock_pygame.K_KP_ENTER = 1073741912
    mock_pygame.K_SPACE = 32
    mock_pygame.K_UP = 273
    mock_pygame.K_DOWN = 274
    mock_pygame.K_LEFT = 276
    mock_pygame.K_RIGHT = 275
    mock_pygame.K_w = 119
    mock_pygame.K_a = 97
    mock_pygame.K_s = 115
    mock_pygame.K_d = 100
    mock_pygame.K_p = 112
    mock_pygame.K_r = 114

    # Time
    mock_clock = MagicMock()
    mock_clock.tick.return_value = 16
    mock_pygame.time.Clock.return_value = mock_clock
    mock_pygame.time.get_ticks.return_value = 0

    # Rect
    mock_pygame.Rect = MagicMock(side_effect=lambda *args: MagicMock(
        x=args[0] if args else 0,
        y=args[1] if len(args) > 1 else 0,
        width=args[2] if len(args) > 2 else 0,
        height=args[3] if len(args) > 3 else 0,
    ))

    return mock_pygame


@pytest.fixture(scope="session", autouse=True)
def mock_pygame_module():
    """
    Session-scoped fixture that mocks pygame before any game module import.
    """
    mock_pygame = create_mock_pygame()

    original_pygame = sys.modules.get('pygame')
    sys.modules['pygame'] = mock_pygame

    yield mock_pygame

    if original_pygame:
        sys.modules['pygame'] = original_pygame
    else:
        del sys.modules['pygame']


@pytest.fixture
def mock_screen(mock_pygame_module):
    """Provide a mock pygame screen surface."""
    screen = MagicMock()
    screen.get_width.return_value = 600
    screen.get_height.return_value = 660
    return screen


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def rules():
    return GameRules()


@pytest.fixture
def store():
    return InMemoryHighScoreStore()


@pytest.fixture
def engine(store, rules):
    """Engine with a fixed seed so food placement is repeatable."""
    return TransitionEngine(store=store, rng=np.random.default_rng(1234), rules=rules)


@pytest.fixture
def make_state(rules):
    """
    Build a GameState from plain tuples.

    Usage:
        state = make_state([(5, 5), (4, 5)], food=(9, 9), direction=Direction.UP)
    """
    def _make(snake, food=(0, 0), direction=Direction.RIGHT, queue=(), **kwargs):
        kwargs.setdefault("speed", rules.initial_speed)
        return GameState(
            snake=tuple(Position(x, y) for x, y in snake),
            food=Position(*food) if food is not None else None,
            direction=direction,
            queue=DirectionQueue(tuple(queue), rules.queue_capacity),
            rules=rules,
            **kwargs
        )
    return _make

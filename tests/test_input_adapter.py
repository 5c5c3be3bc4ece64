"""
Tests for translating keyboard and swipe input into game events.
"""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from neon_snake.core.engine import Event, EventType
from neon_snake.core.state import Direction


def key_event(pygame, key):
    return MagicMock(type=pygame.KEYDOWN, key=key)


class TestTranslateKey:
    """Tests for translate_key."""

    @pytest.mark.parametrize("key_name,direction", [
        ("K_UP", Direction.UP),
        ("K_w", Direction.UP),
        ("K_DOWN", Direction.DOWN),
        ("K_s", Direction.DOWN),
        ("K_LEFT", Direction.LEFT),
        ("K_a", Direction.LEFT),
        ("K_RIGHT", Direction.RIGHT),
        ("K_d", Direction.RIGHT),
    ])
    def test_direction_keys(self, mock_pygame_module, make_state, key_name, direction):
        """Test arrows and WASD map to intents."""
        from neon_snake.game.input_adapter import translate_key

        state = make_state([(5, 5)])
        key = getattr(mock_pygame_module, key_name)

        assert translate_key(key, state) == Event.intent(direction)

    def test_direction_suppressed_while_paused_or_over(self, mock_pygame_module, make_state):
        """Test turns are not sent to a paused or finished game."""
        from neon_snake.game.input_adapter import translate_key

        paused = make_state([(5, 5)], paused=True)
        over = make_state([(5, 5)], game_over=True)

        assert translate_key(mock_pygame_module.K_UP, paused) is None
        assert translate_key(mock_pygame_module.K_UP, over) is None

    @pytest.mark.parametrize("key_name", ["K_SPACE", "K_p"])
    def test_pause_keys(self, mock_pygame_module, make_state, key_name):
        """Test space and P pause a running game and restart a finished one."""
        from neon_snake.game.input_adapter import translate_key

        key = getattr(mock_pygame_module, key_name)

        assert translate_key(key, make_state([(5, 5)])).kind is EventType.TOGGLE_PAUSE
        assert translate_key(key, make_state([(5, 5)], paused=True)).kind is EventType.TOGGLE_PAUSE
        assert translate_key(key, make_state([(5, 5)], game_over=True)).kind is EventType.RESTART

    def test_enter_only_restarts_after_game_over(self, mock_pygame_module, make_state):
        """Test Enter is ignored during play."""
        from neon_snake.game.input_adapter import translate_key

        enter = mock_pygame_module.K_RETURN

        assert translate_key(enter, make_state([(5, 5)])) is None
        assert translate_key(enter, make_state([(5, 5)], game_over=True)).kind is EventType.RESTART

    def test_other_keys_ignored(self, mock_pygame_module, make_state):
        from neon_snake.game.input_adapter import translate_key

        assert translate_key(mock_pygame_module.K_r, make_state([(5, 5)])) is None


class TestClassifySwipe:
    """Tests for classify_swipe."""

    @pytest.mark.parametrize("end,expected", [
        ((150, 110), Direction.RIGHT),
        ((50, 90), Direction.LEFT),
        ((110, 160), Direction.DOWN),
        ((95, 40), Direction.UP),
    ])
    def test_dominant_axis(self, mock_pygame_module, end, expected):
        """Test the longer axis decides the direction."""
        from neon_snake.game.input_adapter import classify_swipe

        assert classify_swipe((100, 100), end) == expected

    def test_short_swipe_ignored(self, mock_pygame_module):
        """Test movement at or below the threshold is a tap."""
        from neon_snake.game.input_adapter import classify_swipe

        assert classify_swipe((100, 100), (130, 100)) is None
        assert classify_swipe((100, 100), (131, 100)) == Direction.RIGHT

    def test_diagonal_tie_goes_vertical(self, mock_pygame_module):
        from neon_snake.game.input_adapter import classify_swipe

        assert classify_swipe((0, 0), (50, 50)) == Direction.DOWN


class TestInputAdapter:
    """Tests for routing pygame events into a session."""

    @pytest.fixture
    def adapter(self, mock_pygame_module, engine, fake_clock):
        from neon_snake.game.input_adapter import InputAdapter
        from neon_snake.game.session import GameSession

        session = GameSession(engine, clock=fake_clock)
        return InputAdapter(session, window_size=(600, 600))

    def test_key_dispatches_into_session(self, adapter, mock_pygame_module):
        """Test a key press reaches the session."""
        sent = adapter.handle_event(key_event(mock_pygame_module, mock_pygame_module.K_UP))

        assert sent == Event.intent(Direction.UP)
        assert list(adapter.session.state.queue) == [Direction.UP]

    def test_mouse_drag_swipe(self, adapter, mock_pygame_module):
        """Test a left-button drag works as a swipe."""
        pg = mock_pygame_module
        adapter.handle_event(MagicMock(type=pg.MOUSEBUTTONDOWN, button=1, pos=(300, 300)))
        sent = adapter.handle_event(MagicMock(type=pg.MOUSEBUTTONUP, button=1, pos=(300, 200)))

        assert sent == Event.intent(Direction.UP)

    def test_finger_swipe_uses_normalized_coordinates(self, adapter, mock_pygame_module):
        """Test touch coordinates are scaled to the window before classifying."""
        pg = mock_pygame_module
        adapter.handle_event(MagicMock(type=pg.FINGERDOWN, x=0.5, y=0.5))
        sent = adapter.handle_event(MagicMock(type=pg.FINGERUP, x=0.5, y=0.6))

        assert sent == Event.intent(Direction.DOWN)

    def test_tiny_finger_movement_ignored(self, adapter, mock_pygame_module):
        pg = mock_pygame_module
        adapter.handle_event(MagicMock(type=pg.FINGERDOWN, x=0.5, y=0.5))

        assert adapter.handle_event(MagicMock(type=pg.FINGERUP, x=0.52, y=0.5)) is None

    def test_swipe_ignored_while_paused(self, adapter, mock_pygame_module):
        """Test swipes are dropped while the game is paused."""
        pg = mock_pygame_module
        adapter.session.state = replace(adapter.session.state, paused=True)
        adapter.handle_event(MagicMock(type=pg.MOUSEBUTTONDOWN, button=1, pos=(300, 300)))

        assert adapter.handle_event(MagicMock(type=pg.MOUSEBUTTONUP, button=1, pos=(300, 100))) is None
        assert len(adapter.session.state.queue) == 0

    def test_swipe_end_without_start_ignored(self, adapter, mock_pygame_module):
        pg = mock_pygame_module

        assert adapter.handle_event(MagicMock(type=pg.MOUSEBUTTONUP, button=1, pos=(0, 0))) is None

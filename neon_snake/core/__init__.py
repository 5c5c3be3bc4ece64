"""
Core game model for Neon Snake.

Provides the immutable state snapshots, the transition engine that advances
them, and the high score storage interface the engine writes through.
"""

from .state import Direction, Position, DirectionQueue, GameRules, GameState, initialize
from .engine import Event, EventType, TransitionEngine
from .storage import HighScoreStore, InMemoryHighScoreStore, FileHighScoreStore

__all__ = [
    'Direction',
    'Position',
    'DirectionQueue',
    'GameRules',
    'GameState',
    'initialize',
    'Event',
    'EventType',
    'TransitionEngine',
    'HighScoreStore',
    'InMemoryHighScoreStore',
    'FileHighScoreStore',
]

"""
Host-side pieces around the core engine: the timed session driver, input
translation, pygame rendering and replays.
"""

from .session import GameSession, IntervalTimer, OneShotTimer
from .replay import ReplayData, ReplayManager, ReplayRecorder, make_engine, replay_events

__all__ = [
    'GameSession',
    'IntervalTimer',
    'OneShotTimer',
    'ReplayData',
    'ReplayManager',
    'ReplayRecorder',
    'make_engine',
    'replay_events',
]

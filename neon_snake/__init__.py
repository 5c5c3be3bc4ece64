# Neon Snake Source Package
"""
Neon Snake - Deterministic grid snake engine with a pygame front end.

Modules:
- core: Immutable game state, transition engine and high score storage
- game: Timed session driver, input adapter, renderer and replays
- utils: Configuration and logging
"""

__version__ = "1.0.0"

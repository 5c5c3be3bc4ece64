#!/usr/bin/env python3
"""
Human Play Mode - Play Neon Snake.

Controls:
    Arrow Keys or WASD: Move the snake
    Space / P: Pause and resume (restart after game over)
    Enter: Restart after game over
    Swipe or mouse drag: Move the snake
    ESC: Quit
"""
import sys
import argparse
import random
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import numpy as np
import pygame

from neon_snake.core.engine import TransitionEngine
from neon_snake.core.storage import FileHighScoreStore
from neon_snake.game.input_adapter import InputAdapter
from neon_snake.game.renderer import StandaloneRenderer
from neon_snake.game.replay import ReplayManager, ReplayRecorder
from neon_snake.game.session import GameSession
from neon_snake.utils.config_loader import load_config
from neon_snake.utils.log import setup_logging


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Play Neon Snake")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file (default: config/default.yaml)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for food placement (default: random)"
    )
    parser.add_argument(
        "--record",
        action="store_true",
        help="Save a replay of the session each time a game ends"
    )

    return parser.parse_args()


def main():
    """Main entry point for human play mode."""
    args = parse_args()
    config = load_config(args.config)
    setup_logging(config.logging)

    rules = config.game.to_rules()
    store = FileHighScoreStore(config.storage.high_score_path)
    seed = args.seed if args.seed is not None else random.randrange(2 ** 32)

    engine = TransitionEngine(store=store, rng=np.random.default_rng(seed), rules=rules)

    record = args.record or config.replay.enabled
    recorder = ReplayRecorder(seed, store.get(), rules) if record else None
    replay_manager = (
        ReplayManager(config.replay.save_dir, config.replay.max_replays) if record else None
    )

    renderer = StandaloneRenderer(
        grid_size=rules.grid_size,
        cell_size=config.visualization.cell_size,
        title="Neon Snake"
    )
    session = GameSession(
        engine,
        effect_duration=config.effects.duration_ms,
        recorder=recorder
    )
    adapter = InputAdapter(
        session,
        window_size=(renderer.window_width, renderer.window_height),
        min_swipe_distance=config.visualization.min_swipe_distance
    )

    was_over = False

    def on_state(state):
        nonlocal was_over
        # The crash flash clearing produces a second game-over snapshot
        if state.game_over and not was_over and replay_manager is not None:
            path = replay_manager.save_replay(recorder.to_replay(score=state.score))
            print(f"[Replay] Saved {path}")
        was_over = state.game_over

    session.add_listener(on_state)

    print("\n" + "=" * 50)
    print("Neon Snake")
    print("=" * 50)
    print("Controls:")
    print("  Arrow Keys / WASD / Swipe: Move")
    print("  Space / P: Pause")
    print("  Enter: Restart after game over")
    print("  ESC: Quit")
    print(f"  Seed: {seed}")
    print("=" * 50 + "\n")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            else:
                adapter.handle_event(event)

        session.update()
        renderer.render_frame(session.state.to_dict(), fps=config.visualization.render_fps)

    session.close()
    renderer.close()
    print(f"\nFinal High Score: {session.state.high_score}")


if __name__ == "__main__":
    main()

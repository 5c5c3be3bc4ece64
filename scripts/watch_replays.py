#!/usr/bin/env python3
"""
Watch Replays - Re-run saved games from their seed and event log.

Usage:
    python scripts/watch_replays.py              # Watch the best replay
    python scripts/watch_replays.py --list       # List available replays
    python scripts/watch_replays.py --replay F   # Watch a specific file
"""
import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pygame

from neon_snake.game.renderer import StandaloneRenderer
from neon_snake.game.replay import ReplayManager, replay_events
from neon_snake.utils.config_loader import load_config
from neon_snake.utils.log import setup_logging


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Watch saved replays")

    parser.add_argument(
        "--list",
        action="store_true",
        help="List available replays and exit"
    )
    parser.add_argument(
        "--replay",
        type=str,
        default=None,
        help="Path to specific replay file"
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=15,
        help="Playback speed in frames per second (default: 15)"
    )

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()
    config = load_config()
    setup_logging(config.logging)

    manager = ReplayManager(config.replay.save_dir, config.replay.max_replays)

    if args.list:
        for path in manager.list_replays():
            replay = manager.load_replay(path)
            print(f"  score {replay.score:4d}  events {replay.duration_events:6d}  {path}")
        return

    path = args.replay or manager.get_best_replay()
    if path is None:
        print("[Replay] No replays found")
        return

    try:
        replay = manager.load_replay(path)
    except FileNotFoundError:
        print(f"[Replay] File not found: {path}")
        return

    grid_size = replay.rules.get("grid_size", config.game.grid_size)
    renderer = StandaloneRenderer(
        grid_size=grid_size,
        cell_size=config.visualization.cell_size,
        title=f"Neon Snake Replay - Score {replay.score}"
    )

    previous = None
    for state in replay_events(replay):
        if pygame.event.peek(pygame.QUIT):
            break
        # Only ticks and restarts move the board; skip frames that look the same
        if previous is not None and state.snake == previous.snake and state.game_over == previous.game_over:
            previous = state
            continue
        renderer.render_frame(state.to_dict(), fps=args.speed)
        previous = state

    renderer.close()
    print(f"[Replay] Finished {path}")


if __name__ == "__main__":
    main()

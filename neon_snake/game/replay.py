"""
Replays - Record and re-run games from their event log.

The engine is deterministic apart from food placement, and food placement
draws from a seeded generator. A replay therefore only needs the seed, the
starting high score, the rules and the ordered events; every frame can be
rebuilt from those.
"""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import numpy as np

from ..core.engine import Event, TransitionEngine
from ..core.state import GameRules, GameState
from ..core.storage import InMemoryHighScoreStore

logger = logging.getLogger(__name__)


@dataclass
class ReplayData:
    """Data for a single recorded game."""
    seed: int
    high_score: int
    rules: Dict[str, int]
    events: List[str] = field(default_factory=list)
    score: int = 0
    timestamp: str = ""

    @property
    def duration_events(self) -> int:
        return len(self.events)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "seed": self.seed,
            "high_score": self.high_score,
            "rules": self.rules,
            "events": self.events,
            "score": self.score,
            "timestamp": self.timestamp,
            "duration_events": self.duration_events,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReplayData":
        """Create from dictionary."""
        return cls(
            seed=data["seed"],
            high_score=data.get("high_score", 0),
            rules=data.get("rules", {}),
            events=list(data["events"]),
            score=data.get("score", 0),
            timestamp=data.get("timestamp", ""),
        )


class ReplayRecorder:
    """
    Collects events as a session dispatches them.

    Pass one to GameSession(recorder=...) together with an engine built by
    make_engine() from the same seed.
    """

    def __init__(self, seed: int, high_score: int = 0, rules: Optional[GameRules] = None):
        self.seed = seed
        self.high_score = high_score
        self.rules = rules or GameRules()
        self.events: List[Event] = []

    def record(self, event: Event):
        self.events.append(event)

    def to_replay(self, score: int = 0) -> ReplayData:
        return ReplayData(
            seed=self.seed,
            high_score=self.high_score,
            rules=self.rules.to_dict(),
            events=[e.to_token() for e in self.events],
            score=score,
            timestamp=datetime.now().strftime("%Y%m%d_%H%M%S"),
        )


def make_engine(seed: int, high_score: int = 0, rules: Optional[GameRules] = None) -> TransitionEngine:
    """Build an engine whose food sequence is fixed by ``seed``."""
    return TransitionEngine(
        store=InMemoryHighScoreStore(high_score),
        rng=np.random.default_rng(seed),
        rules=rules,
    )


def replay_events(replay: ReplayData) -> Iterator[GameState]:
    """
    Re-run a recorded game.

    Yields the initial state and then the state after each event. Running
    the same replay twice yields equal snapshots.

    Raises:
        ValueError: If an event token cannot be parsed
    """
    rules = GameRules.from_dict(replay.rules)
    engine = make_engine(replay.seed, replay.high_score, rules)
    state = engine.initialize()
    yield state
    yield from engine.apply_all(state, (Event.from_token(t) for t in replay.events))


class ReplayManager:
    """
    Manages saving and loading replays.

    Replays are saved as JSON files; only the best ``max_replays`` are kept.
    """

    def __init__(self, save_dir: str = "replays", max_replays: int = 10):
        """
        Initialize the replay manager.

        Args:
            save_dir: Directory to save replays
            max_replays: Maximum number of replays to keep (keeps highest scores)
        """
        self.save_dir = Path(save_dir)
        self.save_dir.mkdir(parents=True, exist_ok=True)
        self.max_replays = max_replays

    def save_replay(self, replay: ReplayData) -> str:
        """
        Save a replay.

        Returns:
            Path to saved file
        """
        timestamp = replay.timestamp or datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.save_dir / f"replay_score{replay.score}_{timestamp}.json"

        # Two games can end within the same second
        counter = 1
        while filepath.exists():
            filepath = self.save_dir / f"replay_score{replay.score}_{timestamp}_{counter}.json"
            counter += 1

        with open(filepath, "w") as f:
            json.dump(replay.to_dict(), f)
        logger.info("Saved replay %s (%d events)", filepath.name, replay.duration_events)

        self._cleanup_old_replays()
        return str(filepath)

    def _cleanup_old_replays(self):
        """Remove lowest-scoring replays if we exceed max_replays."""
        replay_files = list(self.save_dir.glob("replay_*.json"))

        if len(replay_files) <= self.max_replays:
            return

        # Filenames look like replay_score{N}_{timestamp}.json
        scored_files = []
        for path in replay_files:
            score = float("inf")
            for part in path.stem.split("_"):
                if part.startswith("score"):
                    try:
                        score = int(part[5:])
                    except ValueError:
                        pass
                    break
            scored_files.append((score, path.name, path))

        scored_files.sort(key=lambda item: (item[0], item[1]))
        files_to_delete = len(scored_files) - self.max_replays

        for score, _, path in scored_files[:files_to_delete]:
            logger.info("Removing old replay: score %s", score)
            path.unlink()

    def load_replay(self, filepath: str) -> ReplayData:
        """Load a replay from disk."""
        with open(filepath, "r") as f:
            data = json.load(f)
        return ReplayData.from_dict(data)

    def list_replays(self) -> List[str]:
        """List all saved replays."""
        return sorted(
            [str(p) for p in self.save_dir.glob("replay_*.json")],
            reverse=True
        )

    def get_best_replay(self) -> Optional[str]:
        """Get the replay with highest score."""
        best_score = -1
        best_path = None

        for path in self.list_replays():
            replay = self.load_replay(path)
            if replay.score > best_score:
                best_score = replay.score
                best_path = path

        return best_path

"""
High score persistence.

The engine only ever needs one value, so stores expose a get/set pair and
are injected wherever the high score is read or written.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class HighScoreStore(ABC):
    """
    Abstract base class for high score storage.

    Implementations must never raise from get(): an absent or malformed
    value reads as 0.
    """

    @abstractmethod
    def get(self) -> int:
        """
        Read the saved high score.

        Returns:
            The stored non-negative score, or 0 if none is available
        """
        pass

    @abstractmethod
    def set(self, value: int) -> None:
        """
        Save a new high score. Best effort.

        Args:
            value: The new high score
        """
        pass


def parse_high_score(raw) -> int:
    """Parse stored text into a score, treating anything invalid as 0."""
    if raw is None:
        return 0
    try:
        value = int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring malformed high score %r", raw)
        return 0
    return value if value >= 0 else 0


class InMemoryHighScoreStore(HighScoreStore):
    """Keeps the high score in memory. Used by tests and replays."""

    def __init__(self, value: int = 0):
        self.value = parse_high_score(value)
        self.writes = 0

    def get(self) -> int:
        return self.value

    def set(self, value: int) -> None:
        self.value = value
        self.writes += 1


class FileHighScoreStore(HighScoreStore):
    """
    Stores the high score as text in a single file.

    The file plays the role of one key in a key-value store: its whole
    content is the integer score.
    """

    def __init__(self, path: Union[str, Path] = "data/high_score.txt"):
        """
        Initialize the store.

        Args:
            path: File holding the score (created on first write)
        """
        self.path = Path(path)

    def get(self) -> int:
        if not self.path.exists():
            logger.debug("No high score file at %s, starting from 0", self.path)
            return 0
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0
        return parse_high_score(raw)

    def set(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(int(value)), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            return
        logger.debug("Saved high score %d to %s", value, self.path)

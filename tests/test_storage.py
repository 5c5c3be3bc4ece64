"""
Tests for high score storage.
"""

import pytest

from neon_snake.core.storage import FileHighScoreStore, InMemoryHighScoreStore, parse_high_score


class TestParseHighScore:
    """Tests for parsing stored text."""

    @pytest.mark.parametrize("raw,expected", [
        ("12", 12),
        (" 7\n", 7),
        (None, 0),
        ("", 0),
        ("abc", 0),
        ("-4", 0),
        ("3.5", 0),
    ])
    def test_parse(self, raw, expected):
        """Test valid values parse and anything else reads as 0."""
        assert parse_high_score(raw) == expected


class TestInMemoryStore:
    """Tests for InMemoryHighScoreStore."""

    def test_round_trip_and_write_count(self):
        store = InMemoryHighScoreStore()

        assert store.get() == 0
        store.set(5)
        assert store.get() == 5
        assert store.writes == 1


class TestFileStore:
    """Tests for FileHighScoreStore."""

    def test_missing_file_reads_zero(self, tmp_path):
        """Test a first run starts from 0."""
        store = FileHighScoreStore(tmp_path / "high_score.txt")

        assert store.get() == 0

    def test_write_then_read(self, tmp_path):
        """Test the score is stored as plain text."""
        path = tmp_path / "nested" / "high_score.txt"
        store = FileHighScoreStore(path)

        store.set(17)

        assert path.read_text() == "17"
        assert FileHighScoreStore(path).get() == 17

    def test_malformed_file_reads_zero(self, tmp_path):
        """Test garbage in the file degrades to 0."""
        path = tmp_path / "high_score.txt"
        path.write_text("not a number")

        assert FileHighScoreStore(path).get() == 0

    def test_undecodable_bytes_read_zero(self, tmp_path):
        """Test a file that is not valid UTF-8 degrades to 0."""
        path = tmp_path / "high_score.txt"
        path.write_bytes(b"\xff\xfe\x00garbage")

        assert FileHighScoreStore(path).get() == 0

    def test_unreadable_path_reads_zero(self, tmp_path):
        """Test a directory in place of the file degrades to 0."""
        path = tmp_path / "high_score.txt"
        path.mkdir()

        assert FileHighScoreStore(path).get() == 0

    def test_write_failure_is_swallowed(self, tmp_path):
        """Test a failed save does not raise."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = FileHighScoreStore(blocker / "high_score.txt")

        store.set(3)

        assert store.get() == 0

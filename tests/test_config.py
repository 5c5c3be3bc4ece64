"""
Tests for configuration loading and logging setup.
"""

import logging

import pytest
import yaml

from neon_snake.core.state import GameRules
from neon_snake.utils.config_loader import Config, config_from_dict, load_config, save_config
from neon_snake.utils.log import setup_logging


class TestConfigLoader:
    """Tests for YAML configuration."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test a path that does not exist gives the default config."""
        config = load_config(str(tmp_path / "nope.yaml"))

        assert config == Config()
        assert config.game.to_rules() == GameRules()

    def test_partial_file_overrides_only_given_keys(self, tmp_path):
        """Test unspecified settings keep their defaults and unknown keys are ignored."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "game": {"grid_size": 15, "min_speed": 60, "wrap_around": True},
            "effects": {"duration_ms": 300},
            "storage": {"high_score_path": "scores/best.txt"},
        }))

        config = load_config(str(path))

        assert config.game.grid_size == 15
        assert config.game.min_speed == 60
        assert config.game.initial_speed == 200
        assert config.effects.duration_ms == 300
        assert config.storage.high_score_path == "scores/best.txt"
        assert config.replay.enabled is False

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(str(path)) == Config()

    def test_scalar_section_raises(self):
        """Test a section that is not a mapping is reported by name."""
        with pytest.raises(ValueError, match="game"):
            config_from_dict({"game": 5})

    def test_invalid_rules_raise(self):
        """Test impossible pacing is rejected when building rules."""
        config = config_from_dict({"game": {"initial_speed": 50, "min_speed": 80}})

        with pytest.raises(ValueError):
            config.game.to_rules()

    def test_save_and_reload(self, tmp_path):
        config = config_from_dict({"visualization": {"cell_size": 32}})
        path = tmp_path / "saved.yaml"

        save_config(config, str(path))

        assert load_config(str(path)) == config

    def test_shipped_default_config_loads(self):
        """Test config/default.yaml matches the built-in defaults."""
        from pathlib import Path

        path = Path(__file__).parent.parent / "config" / "default.yaml"

        assert load_config(str(path)) == Config()


class TestLogging:
    """Tests for setup_logging."""

    def test_level_and_file(self, tmp_path):
        from neon_snake.utils.config_loader import LoggingConfig

        log_file = tmp_path / "logs" / "snake.log"
        setup_logging(LoggingConfig(level="debug", log_file=str(log_file)))

        logging.getLogger("neon_snake.test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.DEBUG
        assert "hello" in log_file.read_text()

        setup_logging(LoggingConfig(level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

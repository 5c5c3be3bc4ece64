"""
Configuration Loader - Load and validate configuration from YAML.

Looks for config/default.yaml relative to the working directory or the
project root. Missing files and missing keys fall back to the dataclass
defaults; unknown keys are ignored.
"""
import logging
import yaml
from pathlib import Path
from typing import Optional, Any
from dataclasses import asdict, dataclass, field

from ..core.state import GameRules

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Board and pacing settings."""
    grid_size: int = 20
    initial_speed: int = 200
    speed_increment: int = 5
    min_speed: int = 80
    queue_capacity: int = 2

    def to_rules(self) -> GameRules:
        """Build validated GameRules. Raises ValueError on bad values."""
        return GameRules(
            grid_size=self.grid_size,
            initial_speed=self.initial_speed,
            speed_increment=self.speed_increment,
            min_speed=self.min_speed,
            queue_capacity=self.queue_capacity,
        )


@dataclass
class EffectsConfig:
    """Transient visual effect settings."""
    duration_ms: int = 150


@dataclass
class StorageConfig:
    """Where the high score is kept."""
    high_score_path: str = "data/high_score.txt"


@dataclass
class VisualizationConfig:
    """Window settings."""
    cell_size: int = 25
    render_fps: int = 60
    min_swipe_distance: int = 30


@dataclass
class ReplayConfig:
    """Replay system settings."""
    enabled: bool = False
    save_dir: str = "replays"
    max_replays: int = 10


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Complete application configuration."""
    game: GameConfig = field(default_factory=GameConfig)
    effects: EffectsConfig = field(default_factory=EffectsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    replay: ReplayConfig = field(default_factory=ReplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    'game': GameConfig,
    'effects': EffectsConfig,
    'storage': StorageConfig,
    'visualization': VisualizationConfig,
    'replay': ReplayConfig,
    'logging': LoggingConfig,
}


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """Convert a dictionary to a dataclass instance."""
    if not data:
        return cls()

    # Get the fields that the dataclass expects
    field_names = {f.name for f in cls.__dataclass_fields__.values()}

    # Filter to only include valid fields
    filtered_data = {k: v for k, v in data.items() if k in field_names}

    return cls(**filtered_data)


def _find_config_file() -> Optional[Path]:
    """Find config/default.yaml in the usual places."""
    possible_paths = [
        Path("config") / "default.yaml",
        Path(__file__).parent.parent.parent / "config" / "default.yaml",
    ]

    for path in possible_paths:
        if path.exists():
            return path
    return None


def config_from_dict(data: Optional[dict]) -> Config:
    """Build a Config from already-parsed YAML data."""
    config = Config()
    if not data:
        return config

    for name, cls in _SECTIONS.items():
        if name in data:
            if data[name] is not None and not isinstance(data[name], dict):
                raise ValueError(
                    f"Config section '{name}' must be a mapping, got {type(data[name]).__name__}"
                )
            setattr(config, name, _dict_to_dataclass(data[name], cls))

    return config


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file (defaults to config/default.yaml)

    Returns:
        Config object with all settings
    """
    path = Path(config_path) if config_path is not None else _find_config_file()

    if path is None or not path.exists():
        logger.info("No config file found, using defaults")
        return Config()

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    logger.debug("Loaded config from %s", path)
    return config_from_dict(data)


def save_config(config: Config, config_path: str):
    """
    Save configuration to a YAML file.

    Args:
        config: Config object to save
        config_path: Path to save to
    """
    data = asdict(config)

    with open(config_path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

"""
Logging setup driven by LoggingConfig.
"""
import logging
from pathlib import Path

from .config_loader import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(config: LoggingConfig) -> logging.Logger:
    """
    Configure the root logger from config.

    Args:
        config: Level name and optional log file

    Returns:
        The package logger
    """
    level = getattr(logging, str(config.level).upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    return logging.getLogger("neon_snake")

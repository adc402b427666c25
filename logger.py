"""Logging configuration for catsync.

Sets up logging to both file (with date-based naming) and console.
"""

import logging
from datetime import date
from config import Config


def resolve_level(level) -> int:
    """Turn a configured level name (or number) into a logging level.

    Raises:
        ValueError: If the level isn't a known logging level.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level in config: {level!r}")
    return resolved


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.

    Raises:
        ValueError: If config.log_level isn't a known logging level.
    """
    level = resolve_level(config.log_level)

    # Create log directory if it doesn't exist
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("catsync")
    logger.setLevel(level)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(levelname)s - %(message)s")

    # File handler - logs to catsync-{date}.log
    log_filename = f"catsync-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(config.log_dir / log_filename)
    file_handler.setLevel(level)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The catsync logger instance.
    """
    return logging.getLogger("catsync")

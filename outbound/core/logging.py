"""
Centralized logging configuration for the outbound HTTP client.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from outbound.core import config

# httpx and httpcore log every request at INFO/DEBUG; outbound logs its own summary
WIRE_LOGGERS = ("httpx", "httpcore")


def setup_logging(log_level: Optional[str] = None, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the "outbound" logger.

    The client itself only emits log records; applications embedding it call
    this once at startup. Calling it again only changes the level.

    Args:
        log_level: Logging level name (defaults to LOG_LEVEL from the environment)
        log_file: Optional log file path

    Returns:
        The "outbound" logger

    Raises:
        ValueError: If log_level is not a known level name
    """
    level_name = (log_level or config.LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger("outbound")
    logger.setLevel(level)

    # wire-level chatter only when explicitly debugging
    for name in WIRE_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    if name and name.startswith("outbound."):
        return logging.getLogger(name)
    if name:
        return logging.getLogger(f"outbound.{name}")
    return logging.getLogger("outbound")

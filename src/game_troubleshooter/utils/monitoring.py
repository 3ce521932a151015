"""
Centralized logging configuration for the game troubleshooter.

This module provides a configured logger that can be easily imported
and used throughout the application.

Usage:
    from game_troubleshooter.utils.monitoring import get_logger

    logger = get_logger(__name__)
    logger.info("This is an info message")
    logger.error("This is an error message")
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union


# ============================================================================
# Configuration
# ============================================================================

DEFAULT_LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ============================================================================
# Logger Setup
# ============================================================================

def resolve_level(log_level: Union[int, str]) -> int:
    """
    Convert a level name such as "debug" or "WARNING" to its numeric value.

    Raises:
        ValueError: If the name is not a known logging level
    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: '{log_level}'")
    return level


def setup_logging(
    log_level: Union[int, str] = DEFAULT_LOG_LEVEL,
    log_file: Optional[Path] = None,
    console: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure the root logger with console and/or file handlers.

    Args:
        log_level: Logging level (e.g., logging.INFO, "debug")
        log_file: Optional path to log file. If None, only console logging is used.
        console: Whether to enable console logging (default: True)
        stream: Console stream (default: stderr, so stdout stays the user transcript)
    """
    level = resolve_level(log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    # Console handler
    if console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Application started")
    """
    return logging.getLogger(name)

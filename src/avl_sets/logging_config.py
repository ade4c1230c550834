"""Centralized logging configuration for the avl-sets project."""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "AVL_SETS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV}={name!r} is not a valid logging level")
    return level


def setup_logging(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler_type: str = "stream"
) -> logging.Logger:
    """
    Set up centralized logging configuration for the project.

    Args:
        level: Logging level (default: taken from ``AVL_SETS_LOG_LEVEL``,
            falling back to WARNING)
        format_string: Custom format string (optional)
        handler_type: Type of handler - "stream" or "none"

    Returns:
        Configured logger instance
    """
    if format_string is None:
        format_string = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

    logger = logging.getLogger("avl_sets")

    # Avoid duplicate configuration
    if logger.hasHandlers():
        if level is not None:
            logger.setLevel(level)
        return logger

    if level is None:
        level = _level_from_env()

    formatter = logging.Formatter(format_string)

    if handler_type == "stream":
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
    else:
        logger.addHandler(logging.NullHandler())

    # Set level and prevent propagation to root logger
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Short module name, e.g. ``"factory"``

    Returns:
        Logger instance named ``avl_sets.<name>``
    """
    if not logging.getLogger("avl_sets").hasHandlers():
        setup_logging()

    return logging.getLogger(f"avl_sets.{name}")


def get_test_logger(name: str) -> logging.Logger:
    """
    Get a logger for tests with appropriate configuration.

    Args:
        name: Test module name

    Returns:
        Logger instance for tests
    """
    logger = logging.getLogger(f"Tests.{name}")

    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())
        logger.propagate = False

    return logger

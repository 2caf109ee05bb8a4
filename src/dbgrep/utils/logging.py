"""Logging helpers for dbgrep.

All diagnostics go to stderr so that the report on stdout stays
machine-parseable.
"""

from __future__ import annotations

import logging
import sys

_LOGGER_NAME = "dbgrep"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_logging(level: str = "INFO") -> None:
    """Configure the package logger to write to stderr.

    Calling it again replaces the previous handler, so the level can be
    changed between runs (e.g. in tests).

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level.upper())

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

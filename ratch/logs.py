"""Logger setup for the interactive session.

The terminal is in raw alternate-screen mode while the loop runs, so records
never go to stdout/stderr; with ``--debug`` they go to a file under the
platform log directory, otherwise they are dropped.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOGGER_NAME = "ratch"
LOG_LEVEL_ENV_VAR = "RATCH_LOG_LEVEL"
LOG_FILENAME = "ratch.log"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def default_log_path() -> Path:
    """Return the debug log file location."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def setup_logger(debug: bool, log_path: Path | None = None) -> logging.Logger:
    """Configure the ``ratch`` logger once and return it.

    Debug sessions write to ``log_path`` (default: platform log dir); the level
    comes from ``RATCH_LOG_LEVEL`` and defaults to ``DEBUG``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger
    logger.propagate = False

    if not debug:
        logger.addHandler(logging.NullHandler())
        return logger

    target = default_log_path() if log_path is None else log_path
    target.parent.mkdir(parents=True, exist_ok=True)
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "DEBUG").strip().upper()
    if not isinstance(logging.getLevelName(level_name), int):
        level_name = "DEBUG"
    logger.setLevel(level_name)
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def reset_logger() -> None:
    """Detach and close handlers so a later ``setup_logger`` call reconfigures."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

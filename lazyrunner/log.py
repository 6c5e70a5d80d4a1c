"""Logging setup.

The browser owns the terminal, so records go to a file or nowhere.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazyrunner"
LOG_FILENAME = "lazyrunner.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def default_log_dir() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False))


def configure_logging(level: str | None = None, log_dir: Path | None = None) -> Path | None:
    """Attach a handler to the ``lazyrunner`` logger.

    Logging stays off (``NullHandler``) unless a level or directory is given.
    With only a level, the per-user log directory is used; with only a
    directory, the level defaults to ``INFO``. Returns the log file path, if any.
    """
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if level is None and log_dir is None:
        logger.addHandler(logging.NullHandler())
        return None

    level_value = getattr(logging, (level or "info").strip().upper(), logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO
    target_dir = log_dir if log_dir is not None else default_log_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / LOG_FILENAME

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level_value)
    logger.propagate = False
    return log_path

from __future__ import annotations

"""Centralized logging utilities for UDBuildings.

Every entry point (the store, the CLI) asks this helper for its logger so the
format and rotating file behavior stay consistent. Library modules log through
``logging.getLogger(__name__)`` and propagate into the ``udbuildings`` logger
configured here.
"""

import logging
import logging.handlers
import pathlib
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"
MAX_LOG_BYTES = 5_000_000
LOG_BACKUPS = 5

# one configured logger per name; later calls ignore their options
_LOGGER_CACHE = {}


def _file_handler(log_dir: str, name: str, level: int) -> logging.Handler:
    directory = pathlib.Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    fh = logging.handlers.RotatingFileHandler(
        directory / f"{name}.log",
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    return fh


def _console_handler() -> logging.Handler:
    ch = logging.StreamHandler()
    ch.setLevel(logging.WARNING)
    ch.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return ch


def get_logger(
    name: str = "udbuildings",
    log_dir: Optional[str] = None,
    level: str = "INFO",
) -> logging.Logger:
    """Return the store's :class:`logging.Logger`, configuring it on first use.

    Parameters
    ----------
    name:
        Logger name; the log file is ``{log_dir}/{name}.log``.
    log_dir:
        Directory for the rotating log file (default ``logs``).
    level:
        Level name from ``Settings.log_level``; unknown names fall back to INFO.

    The console only shows WARNING and above (destructive upgrades, seeding
    failures) so CLI output stays readable.
    """
    cached = _LOGGER_CACHE.get(name)
    if cached is not None:
        return cached

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    if not logger.handlers:
        logger.addHandler(_file_handler(log_dir or "logs", name, numeric_level))
        logger.addHandler(_console_handler())

    _LOGGER_CACHE[name] = logger
    return logger

"""Rotating file logger in the platform log directory."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "todotxt_cli"
LOG_FILE = "todotxt.log"
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_log_path() -> Path:
    return Path(user_log_dir(APP_NAME)) / LOG_FILE


def get_logger() -> logging.Logger:
    """Return the ``todotxt_cli`` logger, configuring it on first use."""
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers):
        log_path = get_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)

    _logger = logger
    return _logger


def reset_logger() -> None:
    """Detach and close the handlers so the next call reconfigures."""
    global _logger
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    _logger = None

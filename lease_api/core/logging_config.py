"""Logging setup for the lease API (stdlib ``logging``)."""
from __future__ import annotations

import logging

LOGGER_NAME = "lease_api"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Safe to call more than once: the handler is only installed the first time,
    later calls just adjust the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    if not any(getattr(h, "_lease_api_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._lease_api_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger

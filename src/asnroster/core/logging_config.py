"""Logging configuration for the roster engine.

Modules log through ``logging.getLogger(__name__)``; this only wires the
root ``asnroster`` logger to a stream handler at the configured level.
"""

from __future__ import annotations

import logging

from asnroster.core.config import AppSettings

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER = "asnroster"


def configure_logging(settings: AppSettings | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again only updates the level, so repeated calls never
    duplicate handlers.
    """
    if settings is None:
        settings = AppSettings()

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(settings.log_level.upper())

    if not any(getattr(h, "_asnroster", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._asnroster = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger

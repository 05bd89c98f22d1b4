"""Logging configuration helpers for the practice application."""

from __future__ import annotations

import logging
from logging import Logger
import os

LOG_LEVEL_ENV_VAR = "DGCA_PRACTICE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: int | str | None = None) -> Logger:
    """Configure root logging once and return the application logger.

    ``level`` wins over the ``DGCA_PRACTICE_LOG_LEVEL`` environment variable;
    INFO is used when neither is set.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger = logging.getLogger("dgca_practice")
    logger.setLevel(level)
    return logger

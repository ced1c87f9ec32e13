"""Centralized logging configuration for the command line runner."""

from __future__ import annotations

import logging
import os

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV_VAR = "MARBLE_GA_LOG_LEVEL"


def configure_logging(*, level: str | None = None) -> logging.Logger:
    """Configure application logging.

    Args:
        level: Optional explicit log level. Falls back to ``MARBLE_GA_LOG_LEVEL``
            env var or INFO when not provided.

    Returns:
        The package logger (``marble_ga``).
    """

    raw_level = level if level is not None else os.getenv(LOG_LEVEL_ENV_VAR)
    resolved_level = (raw_level or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)

    app_logger = logging.getLogger("marble_ga")
    app_logger.setLevel(resolved_level)
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger

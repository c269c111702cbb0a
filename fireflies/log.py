"""Console logging for the renderer.

Every module grabs its logger with ``get_logger(__name__)``; the launcher calls
``configure_logging`` once to attach a console handler to the package logger.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "fireflies"
_FORMAT = "%(levelname)-8s [%(name)s] %(message)s"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a logger under the package namespace."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a console handler to the package logger (once)."""
    logger = logging.getLogger(ROOT_LOGGER)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    # Prevent duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger

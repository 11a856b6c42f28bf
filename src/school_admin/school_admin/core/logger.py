"""Centralized logging.

Every module asks for its logger through ``get_logger(__name__)`` so that the
format and the stdout handler are configured in one place.
"""

from __future__ import annotations

import logging
import sys

_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def get_logger(name: str, level: int | str = logging.INFO) -> logging.Logger:
    """Return a logger writing to stdout with the project-wide format."""
    logger = logging.getLogger(name)

    # Avoid stacking handlers when a module is imported more than once.
    if not logger.handlers:
        logger.setLevel(level)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    return logger


def set_level(level: int | str) -> None:
    """Apply ``level`` to every logger of this package."""
    package = __name__.rsplit(".", 2)[0]
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.startswith(package):
            logger.setLevel(level)

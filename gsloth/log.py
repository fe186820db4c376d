"""Logging setup for the ``gsloth`` logger tree."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "gsloth"
DEBUG_LOG_FILE = "gaunt-sloth.log"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send ``gsloth`` records to stderr: DEBUG when verbose, WARNING otherwise."""
    logger = logging.getLogger(LOGGER_NAME)
    # Replace rather than reuse, so the handler writes to the current stderr.
    for old in [h for h in logger.handlers if type(h) is logging.StreamHandler]:
        logger.removeHandler(old)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if verbose:
        logger.setLevel(logging.DEBUG)


def init_debug_logging(path: Path) -> logging.Handler:
    """Attach a file handler writing every ``gsloth`` record to ``path``."""
    logger = logging.getLogger(LOGGER_NAME)
    target = str(path.resolve())
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return handler
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler

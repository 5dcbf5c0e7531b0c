"""Shared logger for the bookstore service modules."""

import logging
import sys

from config import LOG_LEVEL

LOGGER_NAME = "bookstore_service"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _build_logger() -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))
    return log


logger = _build_logger()

"""Logging setup shared by all modules."""

import logging
import sys
from typing import Optional

from ..config.settings import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with a single stderr handler.

    Calling this twice for the same name does not add a second handler.

    Args:
        name: Logger name, usually __name__
        level: Level name; defaults to Config.LOG_LEVEL

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel((level or Config.LOG_LEVEL).upper())
    return logger

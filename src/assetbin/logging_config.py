"""
Logging setup for the command line entry point.

Library modules only create loggers with logging.getLogger(__name__); handlers
are installed here, once, by whoever owns the process.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stderr handler on the assetbin logger"""
    level_name = (level or get_settings().log_level).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        raise ValueError(f"unknown log level: {level_name}")

    logger = logging.getLogger("assetbin")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(numeric)

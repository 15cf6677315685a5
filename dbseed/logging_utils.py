"""Process-level logging setup."""

import os
import sys
from typing import Optional

from loguru import logger

from .config import LOG_LEVEL, LOG_LEVEL_ENV, LOG_FORMAT

_CONFIGURED_LEVEL: Optional[str] = None


def configure_logging(level: Optional[str] = None, verbose: bool = False) -> str:
    """Send log records to stderr at the given level, once per level.

    The level comes from the argument, then the environment, then the
    default. verbose forces DEBUG. Returns the effective level.
    """
    global _CONFIGURED_LEVEL

    if verbose:
        level = 'DEBUG'
    elif level is None:
        level = os.getenv(LOG_LEVEL_ENV, LOG_LEVEL)
    level = level.upper()

    if level == _CONFIGURED_LEVEL:
        return level

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED_LEVEL = level
    return level

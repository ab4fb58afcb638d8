"""
Logging setup shared by all modules.
"""

import logging
import sys

from dayplan.core.config import get_settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a module logger with a single stream handler attached.

    Args:
        name: Logger name, usually the caller's __name__

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(get_settings().LOG_LEVEL)
        logger.propagate = False
    return logger

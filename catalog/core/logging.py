"""Logging setup shared by the web app and the helper scripts."""

import logging
import sys
from typing import Optional

from catalog.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the ``catalog`` logger once and return it.

    Args:
        level: log level name, defaults to ``settings.LOG_LEVEL``

    Returns:
        logging.Logger: the package root logger
    """
    logger = logging.getLogger("catalog")
    logger.setLevel(level or settings.LOG_LEVEL)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        )
        logger.addHandler(console_handler)

    return logger

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send cerviscreen log records to stdout at the given level."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("cerviscreen")
    logger.handlers = [handler]
    logger.setLevel(level.upper())
    logger.propagate = False

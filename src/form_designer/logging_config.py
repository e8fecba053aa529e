"""Logging setup shared by the designer session, stores and HTTP app"""

import logging
import sys
from typing import Optional

from form_designer.config import config

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"

# Libraries that are chatty at INFO and only interesting when debugging
NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


class InfoFilter(logging.Filter):
    """Let through only records below WARNING (DEBUG and INFO)"""

    def filter(self, record):
        return record.levelno < logging.WARNING


def setup_logging(log_level: Optional[str] = None):
    """
    Send DEBUG/INFO records to stdout and WARNING/ERROR to stderr.

    Args:
        log_level: Level name overriding the LOG_LEVEL setting from config
    """
    level_name = (log_level or config.get("log_level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(InfoFilter())
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Calling setup twice must not duplicate output
    root_logger.handlers.clear()
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(stderr_handler)

    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module name.

    Args:
        name: Usually __name__ from the calling module
    """
    return logging.getLogger(name)

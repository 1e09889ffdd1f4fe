"""
Package logging setup

All loggers hang off the `pathplan` logger; call setup_logging() once at start-up.
"""

import logging
from typing import Optional

from pathplan.core.config import logging_config

ROOT_LOGGER_NAME = "pathplan"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, (level or logging_config.pathplan_log_level).upper(), logging.INFO))

    # Avoid duplicate console handlers
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(logging_config.pathplan_log_format))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    base = logging.getLogger(ROOT_LOGGER_NAME)
    if not name:
        return base
    if name.startswith(ROOT_LOGGER_NAME + "."):
        name = name[len(ROOT_LOGGER_NAME) + 1:]
    return base.getChild(name)

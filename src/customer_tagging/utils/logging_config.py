"""Structured logger setup shared across the tagging services."""

import logging
from typing import Optional

from pythonjsonlogger import jsonlogger

from customer_tagging.config.settings import TaggingSettings


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Configure a JSON logger once and reuse it."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        "%(levelname)s %(name)s %(message)s %(asctime)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel((level or TaggingSettings.from_environment().log_level).upper())
    logger.propagate = False
    return logger

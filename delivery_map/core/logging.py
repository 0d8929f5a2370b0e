"""Logging setup."""

import logging

from delivery_map.core.config import settings

LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Apply configured log level to the root logger once."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

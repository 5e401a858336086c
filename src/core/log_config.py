"""Logging setup for the application. Modules log through `logging.getLogger(__name__)`."""

import logging
from typing import Optional

from src.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: Optional[str | int] = None) -> None:
    """
    Log to stderr through the root logger.

    basicConfig leaves the handlers alone once the root logger has any, so calling this again only changes the level.
    """
    logging.basicConfig(format=LOG_FORMAT, handlers=[logging.StreamHandler()])
    logging.getLogger().setLevel(get_settings().LOG_LEVEL if level is None else level)

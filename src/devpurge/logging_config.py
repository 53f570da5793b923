"""Logging setup for devpurge."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "devpurge"


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Configure the devpurge logger to write through rich on stderr."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger

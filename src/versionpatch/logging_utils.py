"""Logging setup for versionpatch."""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "versionpatch"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger or one of its children."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Attach a single RichHandler to the package logger.

    Calling this again only updates the level.
    """
    logger = get_logger()
    if verbose:
        level = logging.DEBUG
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handler = next((h for h in logger.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            show_time=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.setLevel(level)
    handler.setLevel(level)
    return logger

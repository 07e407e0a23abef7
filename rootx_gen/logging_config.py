"""Logging setup shared by all rootx_gen modules."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "rootx_gen"


def setup_logging(level: int = logging.WARNING, console: Console | None = None) -> None:
    """Configure the package logger to write through rich on stderr.

    Args:
        level: Minimum level to emit.
        console: Console to log to; a stderr console is created if omitted.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    return logging.getLogger(name)

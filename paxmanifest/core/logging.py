"""
Logging setup.

Module loggers come from ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to route them through a rich console handler.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "paxmanifest"


def setup_logging(level: str | int = "INFO", console: Console | None = None) -> logging.Logger:
    """
    Configure the package logger with a rich handler.

    Calling this again replaces the previous handler instead of stacking
    another one.

    Args:
        level: Logging level name or number.
        console: Optional rich console to log to (defaults to stderr).

    Returns:
        The configured package root logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module."""
    return logging.getLogger(name)

"""Console logging setup for the command line entry point."""

from __future__ import annotations

import logging
import sys

from colorlog import ColoredFormatter

LOGGER_NAME = 'calendar_mirror'

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def setup_logging(level: str = 'INFO', stream=None) -> logging.Logger:
    """
    Attach a colorized console handler to the package logger.

    Safe to call more than once: an existing handler installed here is
    replaced instead of duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        if getattr(handler, '_calendar_mirror', False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ColoredFormatter(
        "%(log_color)s%(levelname)-8s%(reset)s %(message)s",
        log_colors=LOG_COLORS,
    ))
    handler._calendar_mirror = True
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger

"""Logging to STDERR, every line prefixed with the program name."""

from __future__ import annotations
import logging
import sys

from . import APP_NAME


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        fmt = logging.Formatter(f"{APP_NAME}: %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger

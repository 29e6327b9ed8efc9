"""Process-wide logging setup."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_ROOT = "ask_bayes"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level.

    Args:
        verbose: Log at DEBUG instead of WARNING.

    Returns:
        The package root logger.
    """
    logger = logging.getLogger(_ROOT)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

"""Logging configuration for the inventory CLI."""

from __future__ import annotations

import logging

LOGGER_NAME = "ims"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a console handler to the ``ims`` logger.

    Safe to call more than once: handlers are only added the first time,
    later calls just update the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger

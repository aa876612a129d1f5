"""Logging configuration for the MyWallet application."""

from __future__ import annotations

import logging
import sys


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure the ``mywallet`` logger once; later calls only change the level."""
    logger = logging.getLogger("mywallet")

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def get_logger(name: str = "mywallet") -> logging.Logger:
    return logging.getLogger(name)

"""Logging configuration for tree-reorder."""

import sys
from typing import TextIO

from loguru import logger

from tree_reorder.config import LOG_FORMAT


def configure_logging(*, verbose: bool = False, sink: TextIO | None = None) -> None:
    """Route loguru output to stderr (or ``sink``) at INFO, or DEBUG when verbose.

    Projection and rejection decisions are only visible at DEBUG.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sink if sink is not None else sys.stderr, level=level, format=LOG_FORMAT)

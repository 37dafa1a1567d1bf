"""
Exception types and logging setup for trifold.

User-input problems (bad command lines, rejected shears, unknown cells) are
never exceptions: they are dropped and logged at DEBUG. The exceptions here
mark broken invariants in a collaborator and are meant to propagate.
"""
from __future__ import annotations
import logging
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("trifold")


class TrifoldError(Exception):
    """Base exception for trifold."""


class BoardInvariantError(TrifoldError):
    """The cell map lost key uniqueness or has no cells at all."""


class FrameMissingError(TrifoldError):
    """Hit-testing was asked for without a pointer position or display scale."""


def configure_logging(level: Union[int, str] = logging.WARNING, stream: Optional[object] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {level!r}")
    logger.setLevel(level)

    # Prevent duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger

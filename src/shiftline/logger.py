"""Logging configuration for Shiftline with semantic verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels between the standard ones
MOVES_LEVEL = 25  # Between INFO (20) and WARNING (30) - verbosity 1
CHECKS_LEVEL = 15  # Between DEBUG (10) and INFO (20) - verbosity 2

logging.addLevelName(MOVES_LEVEL, "MOVES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0  # Only errors
VERBOSITY_MOVES = 1  # Show accepted moves and rejections
VERBOSITY_CHECKS = 2  # Show every overlap/push decision
VERBOSITY_DEBUG = 3  # Full debug output


class ShiftlineLogger(logging.Logger):
    """Logger with semantic verbosity methods.

    - moves(): verbosity level 1 - cascade outcomes
    - checks(): verbosity level 2 - per-task sweep decisions
    - debug(): verbosity level 3 - coordinate and label details
    """

    def moves(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log cascade outcomes (verbosity level 1)."""
        if self.isEnabledFor(MOVES_LEVEL):
            self._log(MOVES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log sweep checks (verbosity level 2)."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> ShiftlineLogger:
    """Get the shiftline logger instance (singleton).

    Use setup_logger() to configure it before first use.
    """
    logging.setLoggerClass(ShiftlineLogger)
    logger = logging.getLogger("shiftline")
    assert isinstance(logger, ShiftlineLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the shiftline logger with a verbosity level.

    Can be called multiple times to reconfigure the logger.

    Args:
        verbosity: 0=silent (errors only), 1=moves, 2=checks, 3=debug
        stream: Optional output stream (defaults to sys.stderr, useful for testing)
    """
    logger = get_logger()
    logger.handlers.clear()

    level_map = {
        0: logging.ERROR,
        1: MOVES_LEVEL,
        2: CHECKS_LEVEL,
        3: logging.DEBUG,
    }
    logger.setLevel(level_map.get(verbosity, logging.ERROR))

    output_stream = stream if stream is not None else sys.stderr

    handler = logging.StreamHandler(output_stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Reset the logger to clean state between tests."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def checks_enabled() -> bool:
    """True at verbosity 2 and above, where the cascade sweep reports every task."""
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    """True at verbosity 3."""
    return get_logger().isEnabledFor(logging.DEBUG)

"""Run logger construction. Verbosity lives on the returned logger, not in module state."""

from __future__ import annotations

import logging
import sys
from typing import TextIO


def make_logger(verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Non-propagating run logger, one per verbosity. DEBUG when verbose, else INFO.

    Calling again replaces the logger's handler, so repeated runs don't accumulate handlers.
    Pass the result as logger= to toolchain and dispatch functions.
    """
    logger = logging.getLogger("gocross.run.verbose" if verbose else "gocross.run.quiet")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    fmt = "verbose: %(message)s" if verbose else "%(message)s"
    handler.setFormatter(_LevelFormatter(fmt))
    logger.addHandler(handler)
    return logger


class _LevelFormatter(logging.Formatter):
    """Debug lines get the format prefix; everything else is printed as-is."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno > logging.DEBUG:
            return record.getMessage()
        return super().format(record)

"""Logging configuration driven by the command-line verbosity counters."""

from __future__ import annotations

import logging
import time

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class _Formatter(logging.Formatter):
    converter = time.gmtime


def log_level(verbose: int, debug: int, trace: int) -> int:
    """Pick the logging level from the -v, -d and -t counters."""
    if (verbose, debug, trace) == (0, 0, 0):
        return logging.ERROR
    if debug == 1 and trace == 0:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    if trace == 1:
        return TRACE
    return logging.WARNING


def init_logger(verbose: int, debug: int, trace: int) -> None:
    """Configure the root logger with UTC timestamps to the millisecond."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        _Formatter(
            "[%(asctime)s.%(msecs)03dZ %(levelname)s %(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logging.basicConfig(
        level=log_level(verbose, debug, trace), handlers=[handler], force=True
    )
"""Logging setup for command-line use.

The package disables its own loguru records at import time; front ends call
:func:`configure_logging` to turn them on.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

PACKAGE_NAME = "civilsuite"


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Enable engine logging with a stderr sink and an optional file sink.

    Parameters
    ----------
    verbose : bool
        Log at DEBUG instead of INFO on the console.
    log_file : Path, optional
        When given, also write DEBUG records to this file (rotated at 5 MB).
    """
    logger.remove()
    logger.enable(PACKAGE_NAME)
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> | {name}:{function} - {message}",
    )
    if log_file is not None:
        logger.add(
            str(log_file),
            level="DEBUG",
            rotation="5 MB",
            retention=10,
            backtrace=False,
            diagnose=False,
        )

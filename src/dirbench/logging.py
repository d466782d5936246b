"""Logging setup for dirbench.

Console output is controlled by the verbose/quiet flags; an optional
log file always receives DEBUG records.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "dirbench"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(levelname)-8s %(message)s"


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure and return the root dirbench logger.

    Args:
        verbose: If True, log DEBUG records to the console.
        quiet: If True, only log WARNING and above to the console.
            Ignored if *verbose* is True.
        log_file: If provided, also log everything at DEBUG to this path.

    Returns:
        The configured ``dirbench`` logger.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces handlers instead of stacking them.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    if verbose:
        console.setLevel(logging.DEBUG)
    elif quiet:
        console.setLevel(logging.WARNING)
    else:
        console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(fh)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger, e.g. ``get_logger("bench")`` -> ``dirbench.bench``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")

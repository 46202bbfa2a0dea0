"""Logging configuration for hxd.

This module provides logging setup using the Rich library. Log records go
to standard error so that standard output carries nothing but the dump.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Module-level logger instance for hxd
_logger: Optional[logging.Logger] = None

LOG_FORMAT = "%(message)s"
DATE_FORMAT = "[%X]"


def setup_logging(verbose: bool = False, level: Optional[str] = None) -> logging.Logger:
    """Configure Python logging with Rich handler.

    Args:
        verbose: If True, set log level to DEBUG regardless of ``level``.
        level: Name of the log level to use when not verbose (for example
            ``"info"``). Defaults to WARNING.

    Returns:
        A configured logger instance for use throughout the application.

    Example:
        >>> logger = setup_logging(verbose=True)
        >>> logger.debug("Resolved window 0x10..0x40")
    """
    global _logger

    if verbose:
        log_level = logging.DEBUG
    elif level:
        log_level = logging.getLevelName(level.upper())
    else:
        log_level = logging.WARNING

    rich_handler = RichHandler(
        level=log_level,
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=True,
        rich_tracebacks=True,
        markup=False,
    )
    rich_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger("hxd")
    logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.addHandler(rich_handler)
    logger.propagate = False

    _logger = logger

    return logger


def get_logger() -> logging.Logger:
    """Get the hxd logger instance.

    Returns the previously configured logger, or sets up a default
    logger if setup_logging() has not been called.
    """
    global _logger

    if _logger is None:
        _logger = setup_logging(verbose=False)

    return _logger

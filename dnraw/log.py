# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Logging setup

Library modules log through loggers under the "dnraw" namespace and
never configure handlers themselves; only the command-line entry point
calls setup_logger.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Optional


LOGGER_NAME = "dnraw"

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a named child of it."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logger(level: str = "info", show_level: bool = True) -> logging.Logger:
    """
    Send package log records to the console.

    Args:
        level: One of debug, info, warn, error
        show_level: Prefix each line with [LEVEL]

    Returns:
        The configured package logger
    """
    log = get_logger()
    log.setLevel(LEVELS.get(level.lower(), logging.INFO))
    handler = logging.StreamHandler()
    fmt = "[%(levelname)s] %(message)s" if show_level else "%(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    log.handlers.clear()
    log.addHandler(handler)
    log.propagate = False
    return log

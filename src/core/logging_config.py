"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Events go to stderr so command output on stdout stays parseable.
"""

from __future__ import annotations

import sys
from typing import Any

import structlog

_CONFIGURED = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    global _CONFIGURED
    if not _CONFIGURED:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
            cache_logger_on_first_use=True,
        )
        _CONFIGURED = True
    return structlog.get_logger(name)

"""Logging utilities for xsum.

This package provides structured logging with:
- Colored console output with ANSI color codes
- Optional file rotation using RotatingFileHandler
- Async-safe logging via QueueHandler/QueueListener
- Hierarchical logger naming (e.g., xsum.parser, xsum.verifier)

xsum is a library: importing it attaches only a NullHandler. Applications
that want xsum's log output call setup_logging() once, or configure the
``xsum`` logger themselves.

Architecture:
    Application → QueueHandler → Queue → QueueListener Thread
                                              ↓
                                    Console + File Handlers

Usage:
    >>> from xsum.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Hashing %s", path)  # Use %-style formatting

Environment Variables:
    XSUM_LOG_DIR: Override the log file directory
"""

from xsum.exceptions import ConfigurationError
from xsum.logger.config import (
    update_logger_from_config as _update_config,
)
from xsum.logger.formatters import HybridConsoleFormatter
from xsum.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from xsum.logger.state import _state, get_state

__all__ = [
    "ConfigurationError",
    "HybridConsoleFormatter",
    "_state",  # For testing only
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config() -> None:
    """Apply settings file log levels to the active handlers."""
    _update_config(get_state())

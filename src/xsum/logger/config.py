"""Configuration loading and updating for the logging system."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from xsum.config import SettingsManager, default_config_dir
from xsum.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    LOG_FILE_NAME,
)
from xsum.exceptions import ConfigurationError

if TYPE_CHECKING:
    from xsum.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load bootstrap console level, file level, and log file path.

    Environment Variable Override:
        XSUM_LOG_DIR: Overrides the log directory. Used by the test suite
        to keep test logs out of the user's config directory.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(ENV_LOG_DIR)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = default_config_dir() / "logs" / LOG_FILE_NAME

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def update_logger_from_config(
    state: "_LoggerState", config_dir: Path | None = None
) -> None:
    """Apply settings file log levels to the active handlers.

    Only updates handler levels, never adds or removes handlers. A broken
    settings file leaves the bootstrap levels in place.

    Args:
        state: Logger state object (from logger.state module)
        config_dir: Settings directory override

    """
    try:
        settings = SettingsManager(config_dir).load()
    except ConfigurationError as e:
        logging.getLogger(__name__).warning(
            "Keeping default log levels: %s", e
        )
        return

    console_level = getattr(logging, settings.console_log_level)
    file_level = getattr(logging, settings.log_level)

    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if isinstance(handler, RotatingFileHandler):
                handler.setLevel(file_level)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)

    state.config_applied = True

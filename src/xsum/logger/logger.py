"""Main logger module providing public API functions.

- setup_logging(): Configure handlers with the QueueHandler architecture
- get_logger(): Get a logger in the ``xsum`` hierarchy
- flush_all_handlers(): Ensure all pending log records are written
- clear_logger_state(): Clear global logger state for testing
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from xsum.constants import LOGGER_ROOT_NAME
from xsum.logger.config import load_log_settings
from xsum.logger.handlers import setup_root_logger
from xsum.logger.state import get_state

# Library default: records go nowhere until the host calls setup_logging()
logging.getLogger(LOGGER_ROOT_NAME).addHandler(logging.NullHandler())


def flush_all_handlers() -> None:
    """Flush all handlers in the QueueListener to ensure writes complete.

    Waits (up to 5 seconds) for the queue to drain, then flushes each
    handler. Safe to call from any thread.
    """
    state = get_state()
    if state.queue_listener is not None and state.log_queue is not None:
        # QueueListener doesn't use task_done(), so poll the queue
        timeout = 5.0
        start_time = time.time()
        while not state.log_queue.empty():
            if time.time() - start_time > timeout:
                break
            time.sleep(0.01)

        time.sleep(0.1)

        for handler in state.queue_listener.handlers:
            with contextlib.suppress(OSError, ValueError):
                handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = LOGGER_ROOT_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = False,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Configure xsum logging with the async-safe QueueHandler architecture.

    The root ``xsum`` logger is initialized exactly once; later calls
    just return the requested logger.

    Handler Configuration (via QueueListener):
        - Console Handler: StreamHandler with hybrid colored output
        - File Handler: RotatingFileHandler (optional)

    Args:
        name: Logger name to return
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level ("DEBUG", "INFO")
        log_file: Path to log file (default: ~/.config/xsum/logs/xsum.log)
        enable_file_logging: Whether to attach the file handler

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(name: str = LOGGER_ROOT_NAME) -> logging.Logger:
    """Get a logger in the xsum hierarchy.

    Always use ``logger = get_logger(__name__)`` and %-style formatting in
    log calls. Handlers are only ever attached to the root ``xsum`` logger
    by setup_logging(); child loggers propagate to it.

    Args:
        name: Logger name, typically __name__

    Returns:
        Logger instance (singleton per name via logging.getLogger)

    """
    return logging.getLogger(name)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the QueueListener, closes the handlers set up by setup_logging()
    and resets all state flags.

    Warning:
        Intended for tests only.

    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            for handler in state.queue_listener.handlers:
                handler.close()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False
        state.config_applied = False

        root_logger = logging.getLogger(LOGGER_ROOT_NAME)
        for handler in root_logger.handlers[:]:
            handler.close()
            root_logger.removeHandler(handler)
        root_logger.addHandler(logging.NullHandler())
        root_logger.propagate = True

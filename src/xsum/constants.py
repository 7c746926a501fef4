"""Centralized constants module for xsum.

This module serves as the single source of truth for all shared constants
across the xsum codebase. Constants are organized by logical categories
and use typing.Final annotations to ensure immutability.

Usage:
    from xsum.constants import DEFAULT_CHUNK_SIZE
"""

from typing import Final

# =============================================================================
# Digest File Constants
# =============================================================================

# One digest line: hex digest, a single space, mode marker, filename
DIGEST_LINE_PATTERN: Final[str] = r"^([0-9a-fA-F]+) ([ *])(.+)$"

# Lines are separated by runs of CR/LF characters
DIGEST_LINE_SEPARATOR: Final[str] = r"[\r\n]+"

BINARY_MARKER: Final[str] = "*"
TEXT_MARKER: Final[str] = " "

# Written ahead of the first line by some Windows tools
BYTE_ORDER_MARK: Final[str] = "\ufeff"

DEFAULT_DIGEST_ENCODING: Final[str] = "utf-8"

# =============================================================================
# Hashing Constants
# =============================================================================

# Bytes read from disk per chunk while hashing
DEFAULT_CHUNK_SIZE: Final[int] = 64 * 1024

# 0 means one task per target with no upper bound
DEFAULT_MAX_CONCURRENT: Final[int] = 0

# "auto" normalizes CRLF in text mode only where the platform does
NEWLINE_MODE_AUTO: Final[str] = "auto"
NEWLINE_MODES: Final[tuple[str, ...]] = ("auto", "true", "false")

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_FILE_NAME: Final[str] = "settings.conf"
CONFIG_DIR_NAME: Final[str] = ".config"
DEFAULT_CONFIG_SUBDIR: Final[str] = "xsum"

ENV_CONFIG_DIR: Final[str] = "XSUM_CONFIG_DIR"
ENV_LOG_DIR: Final[str] = "XSUM_LOG_DIR"

SECTION_DEFAULT: Final[str] = "DEFAULT"

KEY_CHUNK_SIZE: Final[str] = "chunk_size"
KEY_MAX_CONCURRENT: Final[str] = "max_concurrent"
KEY_ENCODING: Final[str] = "encoding"
KEY_NORMALIZE_NEWLINES: Final[str] = "normalize_newlines"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

VALID_LOG_LEVELS: Final[tuple[str, ...]] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)

# =============================================================================
# Logging Constants
# =============================================================================

LOGGER_ROOT_NAME: Final[str] = "xsum"
LOG_FILE_NAME: Final[str] = "xsum.log"

LOG_BACKUP_COUNT: Final[int] = 3
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

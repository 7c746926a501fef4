"""INI settings for xsum.

Settings live in ``~/.config/xsum/settings.conf`` (or in the directory named
by ``XSUM_CONFIG_DIR``). Every key is optional and falls back to its
default. xsum never writes this file.

Example::

    [DEFAULT]
    chunk_size = 65536      # bytes read per chunk while hashing
    max_concurrent = 8      # 0 = no limit
    encoding = utf-8        # digest file text encoding
    normalize_newlines = auto
    log_level = INFO
    console_log_level = WARNING
"""

from __future__ import annotations

import codecs
import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from xsum.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_DIGEST_ENCODING,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CONCURRENT,
    ENV_CONFIG_DIR,
    KEY_CHUNK_SIZE,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_ENCODING,
    KEY_LOG_LEVEL,
    KEY_MAX_CONCURRENT,
    KEY_NORMALIZE_NEWLINES,
    NEWLINE_MODE_AUTO,
    NEWLINE_MODES,
    SECTION_DEFAULT,
    VALID_LOG_LEVELS,
)
from xsum.exceptions import ConfigurationError

# Plain logging here: the logger package reads settings from this module
logger = logging.getLogger(__name__)


def default_config_dir() -> Path:
    """Return the settings directory, honouring XSUM_CONFIG_DIR."""
    env_dir = os.getenv(ENV_CONFIG_DIR)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR


@dataclass(slots=True, frozen=True)
class VerifierSettings:
    """Tunables for digest verification.

    Attributes:
        chunk_size: Bytes read per chunk while hashing
        max_concurrent: Upper bound on simultaneous file verifications,
            0 for no limit
        encoding: Text encoding of digest files
        normalize_newlines: CRLF handling for text-mode entries; None
            follows the platform
        log_level: File log level
        console_log_level: Console log level

    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    encoding: str = DEFAULT_DIGEST_ENCODING
    normalize_newlines: bool | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    console_log_level: str = DEFAULT_CONSOLE_LOG_LEVEL


class SettingsManager:
    """Loads VerifierSettings from the INI settings file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize settings manager.

        Args:
            config_dir: Settings directory (defaults to default_config_dir())

        """
        self.config_dir = config_dir or default_config_dir()
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def _read_parser(self) -> configparser.ConfigParser:
        config = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )
        if self.settings_file.exists():
            try:
                config.read(self.settings_file, encoding="utf-8")
            except configparser.Error as e:
                msg = f"Invalid settings file {self.settings_file}: {e}"
                raise ConfigurationError(msg) from e
            logger.debug("Loaded settings from %s", self.settings_file)
        else:
            logger.debug(
                "No settings file at %s, using defaults", self.settings_file
            )
        return config

    def load(self) -> VerifierSettings:
        """Load settings, falling back to defaults for missing keys.

        Returns:
            Validated settings

        Raises:
            ConfigurationError: If a value is invalid

        """
        section = self._read_parser()[SECTION_DEFAULT]

        return VerifierSettings(
            chunk_size=_parse_int(
                KEY_CHUNK_SIZE,
                section.get(KEY_CHUNK_SIZE, str(DEFAULT_CHUNK_SIZE)),
                minimum=1,
            ),
            max_concurrent=_parse_int(
                KEY_MAX_CONCURRENT,
                section.get(KEY_MAX_CONCURRENT, str(DEFAULT_MAX_CONCURRENT)),
                minimum=0,
            ),
            encoding=_parse_encoding(
                section.get(KEY_ENCODING, DEFAULT_DIGEST_ENCODING)
            ),
            normalize_newlines=_parse_newline_mode(
                section.get(KEY_NORMALIZE_NEWLINES, NEWLINE_MODE_AUTO)
            ),
            log_level=_parse_level(
                KEY_LOG_LEVEL,
                section.get(KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            ),
            console_log_level=_parse_level(
                KEY_CONSOLE_LOG_LEVEL,
                section.get(KEY_CONSOLE_LOG_LEVEL, DEFAULT_CONSOLE_LOG_LEVEL),
            ),
        )


def _parse_int(key: str, value: str, minimum: int) -> int:
    try:
        number = int(value.strip())
    except ValueError as e:
        msg = f"{key} must be an integer, got '{value}'"
        raise ConfigurationError(msg) from e
    if number < minimum:
        msg = f"{key} must be >= {minimum}, got {number}"
        raise ConfigurationError(msg)
    return number


def _parse_encoding(value: str) -> str:
    encoding = value.strip()
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        msg = f"{KEY_ENCODING} '{encoding}' is not a known text encoding"
        raise ConfigurationError(msg) from e
    return encoding


def _parse_newline_mode(value: str) -> bool | None:
    mode = value.strip().lower()
    if mode not in NEWLINE_MODES:
        msg = (
            f"{KEY_NORMALIZE_NEWLINES} must be one of "
            f"{', '.join(NEWLINE_MODES)}, got '{value}'"
        )
        raise ConfigurationError(msg)
    if mode == NEWLINE_MODE_AUTO:
        return None
    return mode == "true"


def _parse_level(key: str, value: str) -> str:
    level = value.strip().upper()
    if level not in VALID_LOG_LEVELS:
        msg = f"{key} must be one of {', '.join(VALID_LOG_LEVELS)}"
        raise ConfigurationError(msg)
    return level


def load_settings(config_dir: Path | None = None) -> VerifierSettings:
    """Load settings from the default (or given) settings directory."""
    return SettingsManager(config_dir).load()

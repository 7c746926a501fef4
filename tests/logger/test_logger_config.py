"""Tests for logger configuration module."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from pytest import MonkeyPatch

from xsum.logger import clear_logger_state, get_state, setup_logging
from xsum.logger.config import load_log_settings, update_logger_from_config


@pytest.fixture
def clean_logger_state():
    clear_logger_state()
    yield
    clear_logger_state()


def test_load_log_settings_with_env_var(monkeypatch: MonkeyPatch) -> None:
    """Test load_log_settings returns test dir when env var is set."""
    test_log_dir = "/tmp/pytest-test-logs"
    monkeypatch.setenv("XSUM_LOG_DIR", test_log_dir)

    console_level, file_level, log_path = load_log_settings()

    assert console_level == "WARNING"
    assert file_level == "INFO"
    assert log_path == Path(test_log_dir) / "xsum.log"


def test_load_log_settings_without_env_var(monkeypatch: MonkeyPatch) -> None:
    """Test load_log_settings falls back to the settings directory."""
    monkeypatch.delenv("XSUM_LOG_DIR", raising=False)
    monkeypatch.setenv("XSUM_CONFIG_DIR", "/tmp/xsum-config")

    _, _, log_path = load_log_settings()

    assert log_path == Path("/tmp/xsum-config") / "logs" / "xsum.log"


def test_load_log_settings_with_tilde_in_env_var(
    monkeypatch: MonkeyPatch,
) -> None:
    """Test load_log_settings expands tilde in XSUM_LOG_DIR."""
    monkeypatch.setenv("XSUM_LOG_DIR", "~/custom-logs")

    _, _, log_path = load_log_settings()

    assert log_path == Path.home() / "custom-logs" / "xsum.log"
    assert "~" not in str(log_path)


@pytest.mark.usefixtures("clean_logger_state")
def test_update_logger_from_config(tmp_path: Path) -> None:
    """Settings file levels are applied to the running handlers."""
    (tmp_path / "settings.conf").write_text(
        "[DEFAULT]\nlog_level = DEBUG\nconsole_log_level = ERROR\n"
    )
    setup_logging(log_file=tmp_path / "xsum.log", enable_file_logging=True)
    state = get_state()

    update_logger_from_config(state, config_dir=tmp_path)

    assert state.config_applied is True
    levels = {
        type(handler): handler.level
        for handler in state.queue_listener.handlers
    }
    assert levels[RotatingFileHandler] == logging.DEBUG
    assert levels[logging.StreamHandler] == logging.ERROR


@pytest.mark.usefixtures("clean_logger_state")
def test_update_logger_from_invalid_config(tmp_path: Path) -> None:
    """A broken settings file keeps bootstrap levels."""
    (tmp_path / "settings.conf").write_text("[DEFAULT]\nlog_level = LOUD\n")
    setup_logging(console_level="INFO")
    state = get_state()

    update_logger_from_config(state, config_dir=tmp_path)

    assert state.config_applied is False
    (handler,) = state.queue_listener.handlers
    assert handler.level == logging.INFO

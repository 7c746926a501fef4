"""Pytest configuration and fixtures for xsum tests."""

import hashlib
import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolate_user_dirs(tmp_path_factory, monkeypatch):
    """Keep settings and logs out of the real user config directory."""
    base = tmp_path_factory.mktemp("xsum-home")
    monkeypatch.setenv("XSUM_CONFIG_DIR", str(base / "config"))
    monkeypatch.setenv("XSUM_LOG_DIR", str(base / "logs"))


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for xsum loggers during tests.

    This allows pytest's caplog fixture to capture logs even after
    setup_logging() turned propagation off on the root xsum logger.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("xsum"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logging.getLogger(name).propagate = propagate_value


@pytest.fixture
def sha256():
    """Return a helper computing the sha256 hex digest of bytes."""

    def _digest(data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()

    return _digest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a directory with one binary and one text file.

    Layout:
        file1.bin  raw bytes including CRLF and NUL
        file2.txt  plain text
    """
    (tmp_path / "file1.bin").write_bytes(b"\x00\x01binary\r\ncontent\xff")
    (tmp_path / "file2.txt").write_bytes(b"hello\nworld\n")
    return tmp_path


@pytest.fixture
def digest_file(sample_tree: Path, sha256) -> Path:
    """Write a SHA256SUMS file matching sample_tree."""
    bin_digest = sha256((sample_tree / "file1.bin").read_bytes())
    txt_digest = sha256((sample_tree / "file2.txt").read_bytes())
    path = sample_tree / "SHA256SUMS"
    path.write_text(
        f"{bin_digest} *file1.bin\n{txt_digest}  file2.txt\n",
        encoding="utf-8",
    )
    return path

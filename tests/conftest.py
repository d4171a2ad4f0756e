"""Shared fixtures for tests."""
import io
import logging

import pytest

import src.logging_conf as logging_conf


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging after each test."""
    package = logging.getLogger(logging_conf.PACKAGE_LOGGER)
    level = package.level
    yield
    package.setLevel(level)
    if logging_conf._handler is not None:
        logging.getLogger().removeHandler(logging_conf._handler)
        logging_conf._handler = None


@pytest.fixture
def stdout_buffer(monkeypatch):
    """Capture binary stdout written by the sinks."""
    buffer = io.BytesIO()
    monkeypatch.setattr("src.store.sinks._stdout", lambda: buffer)
    return buffer


@pytest.fixture
def stdin_bytes(monkeypatch):
    """Replace stdin with the given bytes."""

    def _set(data: bytes) -> None:
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))

    return _set

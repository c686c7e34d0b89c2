"""Shared fixtures for the wami test suite.

Projects are written into tmp_path; nothing touches a real checkout.
"""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep WAMI_* variables and a stray .env out of every test."""
    for var in ("WAMI_DEBUG", "WAMI_SCAN_DEPTH", "WAMI_IGNORED_DIRS"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo configure_structlog() so a test's stderr stream does not leak."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)

"""Shared test configuration and pytest markers."""

import os

import pytest

# Settings are read at import time; keep tests offline and unthrottled
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("GEMINI_API_KEY", "")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "api: exercises the HTTP surface through TestClient"
    )


@pytest.fixture(autouse=True)
def _reset_sessions():
    """Start every test with an empty session store."""
    from services.session_store import get_store

    get_store().clear()
    yield
    get_store().clear()

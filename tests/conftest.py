"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For the in-memory database and seed data, see tests/__init__.py
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as using the in-memory database (deselect with '-m \"not db\"')"
    )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """
    Keep tests independent of the developer's environment.

    Clears the cached app config and the env overrides it reads.
    """
    from web.backend.config import get_config

    for var in ("DATABASE_URL", "WEB_HOST", "WEB_PORT", "SKILLMATCH_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()

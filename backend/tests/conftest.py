"""Root conftest — shared test configuration."""

import os

import pytest

from cleanflow.config import get_settings

# Tests never pick up a developer's CLEANFLOW_* environment
for key in list(os.environ):
    if key.startswith("CLEANFLOW_"):
        del os.environ[key]


@pytest.fixture(autouse=True)
def fresh_settings():
    """get_settings() is lru_cached: reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

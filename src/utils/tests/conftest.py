"""
Shared fixtures for utils tests.
"""

import os

import pytest

from utils.pytest_utils import InMemoryRedis


def pytest_configure(config):
    """Pytest hook to configure test environment before any tests run."""
    os.environ["ENVIRONMENT"] = "test"


@pytest.fixture
def in_memory_redis():
    return InMemoryRedis()


@pytest.fixture
def cache_enabled(monkeypatch):
    """Turn the module-level test kill switch off for one test."""
    monkeypatch.setattr("utils.redis_cache.DISABLE_CACHE", False)

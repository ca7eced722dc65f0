"""
Shared fixtures for picker field and selector modal tests.
"""

import json
import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

YOUTUBE_FIXTURES_DIR = Path(__file__).parents[2] / "api" / "youtube" / "tests" / "fixtures"

CHANNEL_ID = "UCabcdefghijklmnopqrstuv"


def pytest_configure(config):
    """Pytest hook to configure test environment before any tests run."""
    os.environ["ENVIRONMENT"] = "test"


def load_youtube_fixture(filename: str) -> dict:
    with open(YOUTUBE_FIXTURES_DIR / filename) as f:
        return json.load(f)


@pytest.fixture
def videos():
    items = load_youtube_fixture("videos_list.json")["items"]
    for item in items:
        item["isShort"] = item["id"].startswith("shrt")
    return items


@pytest.fixture
def playlists():
    return load_youtube_fixture("playlists_list.json")["items"]


@pytest.fixture
def mock_wrapper():
    """Wrapper double whose list_* coroutines the tests program per call."""
    wrapper = MagicMock()
    wrapper.list_videos = AsyncMock()
    wrapper.list_shorts = AsyncMock()
    wrapper.list_playlists = AsyncMock()
    return wrapper


@pytest.fixture
def saved_values():
    """Records every value a field writes back to the CMS."""
    return []

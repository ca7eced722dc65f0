"""
Shared fixtures and utilities for YouTube picker tests.

Fixtures under fixtures/ mirror real YouTube Data API v3 responses for a
small channel (UCabcdefghijklmnopqrstuv) with two regular videos and one Short.
"""

import json
import os
from pathlib import Path
from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

# Load fixtures from JSON files
FIXTURES_DIR = Path(__file__).parent / "fixtures"

CHANNEL_ID = "UCabcdefghijklmnopqrstuv"
SHORTS_PLAYLIST_ID = "UUSHabcdefghijklmnopqrstuv"


def pytest_configure(config):
    """Pytest hook to configure test environment before any tests run."""
    os.environ["ENVIRONMENT"] = "test"


def load_fixture(filename: str) -> dict:
    """Load a fixture from JSON file.

    Args:
        filename: Name of the fixture file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If fixture file doesn't exist
    """
    fixture_path = FIXTURES_DIR / filename
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture file not found: {fixture_path}")

    with open(fixture_path) as f:
        return json.load(f)


def make_http_error(status: int, message: str = "", reason: str | None = None) -> HttpError:
    """Build an HttpError shaped like the ones googleapiclient raises."""
    body = {"error": {"code": status, "message": message}}
    if reason:
        body["error"]["errors"] = [{"message": message, "domain": "youtube", "reason": reason}]
    return HttpError(httplib2.Response({"status": status}), json.dumps(body).encode("utf-8"))


@pytest.fixture
def mock_youtube_api_key():
    """Mock YouTube API key."""
    return "test_youtube_api_key_12345"


@pytest.fixture
def mock_youtube_client():
    """Mock YouTube API client.

    Each resource method (search, videos, playlists, playlistItems) returns the
    same child mock on every call, so tests set
    ``client.search.return_value.list.return_value.execute.return_value``.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture
def youtube_service(mock_youtube_api_key, mock_youtube_client):
    """YouTubeService wired to the mock client."""
    from api.youtube.core import YouTubeService

    service = YouTubeService(mock_youtube_api_key)
    service._youtube = mock_youtube_client
    return service

"""
Unit tests for the YouTube picker HTTP handlers.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from api.youtube.handlers import API_KEY_HEADER, YouTubeHandler
from api.youtube.models import YouTubePlaylistsResponse, YouTubeVideosResponse
from api.youtube.tests.conftest import CHANNEL_ID

pytestmark = pytest.mark.unit


def make_request(args=None, api_key="key"):
    req = MagicMock()
    req.args = dict(args or {})
    req.headers = {API_KEY_HEADER: api_key} if api_key else {}
    return req


def body(response):
    return json.loads(response.get_data(as_text=True))


@pytest.fixture
def mock_wrapper():
    wrapper = MagicMock()
    wrapper.list_videos = AsyncMock(
        return_value=YouTubeVideosResponse(
            videos=[{"id": "vid00000001", "isShort": False}],
            page_info={"totalResults": 120, "resultsPerPage": 25},
            next_page_token="CAMQAA",
        )
    )
    wrapper.list_shorts = AsyncMock(
        return_value=YouTubeVideosResponse(
            videos=[{"id": "shrt0000001", "isShort": True}], content_filter="shorts"
        )
    )
    wrapper.list_playlists = AsyncMock(
        return_value=YouTubePlaylistsResponse(playlists=[{"id": "PLx"}], next_page_token="CAIQAA")
    )
    return wrapper


@pytest.fixture
def handler(mock_wrapper):
    return YouTubeHandler(wrapper=mock_wrapper)


class TestGetVideos:
    @pytest.mark.asyncio
    async def test_success(self, handler, mock_wrapper):
        req = make_request(
            {
                "channelId": CHANNEL_ID,
                "search": "treehouse",
                "maxResults": "12",
                "pageToken": "T1",
                "order": "viewCount",
                "contentFilter": "videos",
            }
        )

        response = await handler.get_videos(req)

        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/json"
        assert body(response) == {
            "videos": [{"id": "vid00000001", "isShort": False}],
            "pageInfo": {"totalResults": 120, "resultsPerPage": 25},
            "nextPageToken": "CAMQAA",
            "prevPageToken": None,
        }
        mock_wrapper.list_videos.assert_awaited_once_with(
            api_key="key",
            channel_id=CHANNEL_ID,
            search="treehouse",
            max_results=12,
            page_token="T1",
            order="viewCount",
            content_filter="videos",
        )

    @pytest.mark.asyncio
    async def test_defaults(self, handler, mock_wrapper):
        await handler.get_videos(make_request())

        mock_wrapper.list_videos.assert_awaited_once_with(
            api_key="key",
            channel_id=None,
            search="",
            max_results=25,
            page_token="",
            order="date",
            content_filter="all",
        )

    @pytest.mark.asyncio
    async def test_missing_api_key(self, handler, mock_wrapper):
        response = await handler.get_videos(make_request(api_key=None))

        assert response.status_code == 400
        assert body(response) == {"error": "YouTube API key is required"}
        mock_wrapper.list_videos.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_integer_max_results(self, handler):
        response = await handler.get_videos(make_request({"maxResults": "lots"}))

        assert response.status_code == 400
        assert body(response)["error"] == "Invalid parameters"

    @pytest.mark.asyncio
    async def test_upstream_error_status(self, handler, mock_wrapper):
        mock_wrapper.list_videos.return_value = YouTubeVideosResponse(
            error="The request cannot be completed.", details="quotaExceeded", status_code=403
        )

        response = await handler.get_videos(make_request())

        assert response.status_code == 403
        assert body(response) == {
            "error": "The request cannot be completed.",
            "details": "quotaExceeded",
        }

    @pytest.mark.asyncio
    async def test_unexpected_error(self, handler, mock_wrapper):
        mock_wrapper.list_videos.side_effect = RuntimeError("boom")

        response = await handler.get_videos(make_request())

        assert response.status_code == 500
        assert body(response) == {"error": "Failed to fetch YouTube videos"}


class TestGetShorts:
    @pytest.mark.asyncio
    async def test_success(self, handler, mock_wrapper):
        response = await handler.get_shorts(make_request({"channelId": CHANNEL_ID}))

        assert response.status_code == 200
        assert body(response)["videos"] == [{"id": "shrt0000001", "isShort": True}]
        mock_wrapper.list_shorts.assert_awaited_once_with(
            api_key="key", channel_id=CHANNEL_ID, search="", max_results=25, page_token=""
        )

    @pytest.mark.asyncio
    async def test_requires_channel(self, handler, mock_wrapper):
        response = await handler.get_shorts(make_request())

        assert response.status_code == 400
        assert body(response) == {"error": "channelId parameter is required"}
        mock_wrapper.list_shorts.assert_not_called()


class TestGetPlaylists:
    @pytest.mark.asyncio
    async def test_success(self, handler, mock_wrapper):
        response = await handler.get_playlists(make_request({"search": "tools"}))

        assert response.status_code == 200
        assert body(response)["playlists"] == [{"id": "PLx"}]
        assert body(response)["nextPageToken"] == "CAIQAA"

    @pytest.mark.asyncio
    async def test_unexpected_error(self, handler, mock_wrapper):
        mock_wrapper.list_playlists.side_effect = RuntimeError("boom")

        response = await handler.get_playlists(make_request())

        assert response.status_code == 500
        assert body(response) == {"error": "Failed to fetch YouTube playlists"}


def test_register_functions(handler):
    functions = handler.register_functions()

    assert set(functions) == {"youtube_videos", "youtube_shorts", "youtube_playlists"}
    assert all(callable(function) for function in functions.values())

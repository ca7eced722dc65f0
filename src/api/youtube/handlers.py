"""
YouTube picker Firebase Functions
HTTP endpoints the field UI calls to browse videos, Shorts and playlists.

Every request carries the app install's API key in the ``x-youtube-api-key``
header. Query parameters use the field UI's camelCase names.
"""

import asyncio
import json
from typing import Any

from firebase_functions import https_fn

from api.youtube.models import DEFAULT_MAX_RESULTS, YouTubePageResponse
from api.youtube.wrappers import youtube_wrapper
from utils.get_logger import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "x-youtube-api-key"
JSON_HEADERS = {"Content-Type": "application/json"}


def json_response(body: dict[str, Any], status: int = 200) -> https_fn.Response:
    return https_fn.Response(json.dumps(body), status=status, headers=JSON_HEADERS)


def parse_max_results(req: https_fn.Request) -> int:
    raw = req.args.get("maxResults") or str(DEFAULT_MAX_RESULTS)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"maxResults must be an integer, got {raw!r}")


class YouTubeHandler:
    """Class containing all YouTube picker Firebase Functions."""

    def __init__(self, wrapper=youtube_wrapper):
        self.wrapper = wrapper

    def _respond(self, result: YouTubePageResponse, label: str) -> https_fn.Response:
        if result.error:
            logger.error(f"{label} failed ({result.status_code}): {result.error}")
        return json_response(result.api_payload(), status=result.status_code)

    async def get_videos(self, req: https_fn.Request) -> https_fn.Response:
        """
        Browse or search videos.

        Query Parameters:
        - channelId: restrict to a channel
        - search: free-text query
        - maxResults: 1-50 (default 25)
        - pageToken: cursor from a previous response
        - order: date (default), rating, relevance, title, viewCount
        - contentFilter: all (default), videos, shorts

        Returns:
            JSON with videos, pageInfo, nextPageToken, prevPageToken
        """
        api_key = req.headers.get(API_KEY_HEADER)
        if not api_key:
            return json_response({"error": "YouTube API key is required"}, status=400)

        try:
            result = await self.wrapper.list_videos(
                api_key=api_key,
                channel_id=req.args.get("channelId") or None,
                search=req.args.get("search") or "",
                max_results=parse_max_results(req),
                page_token=req.args.get("pageToken") or "",
                order=req.args.get("order") or "date",
                content_filter=req.args.get("contentFilter") or "all",
            )
            return self._respond(result, "get_videos")

        except ValueError as e:
            logger.error(f"Parameter validation error: {e}")
            return json_response({"error": "Invalid parameters", "message": str(e)}, status=400)

        except Exception as e:
            logger.error(f"Unexpected error in get_videos: {e}")
            return json_response({"error": "Failed to fetch YouTube videos"}, status=500)

    async def get_shorts(self, req: https_fn.Request) -> https_fn.Response:
        """
        Page through a channel's Shorts.

        Query Parameters:
        - channelId: required, a UC... channel ID
        - search: optional filter on title/description of the fetched page
        - maxResults, pageToken: as for get_videos
        """
        api_key = req.headers.get(API_KEY_HEADER)
        if not api_key:
            return json_response({"error": "YouTube API key is required"}, status=400)

        channel_id = req.args.get("channelId")
        if not channel_id:
            return json_response({"error": "channelId parameter is required"}, status=400)

        try:
            result = await self.wrapper.list_shorts(
                api_key=api_key,
                channel_id=channel_id,
                search=req.args.get("search") or "",
                max_results=parse_max_results(req),
                page_token=req.args.get("pageToken") or "",
            )
            return self._respond(result, "get_shorts")

        except ValueError as e:
            logger.error(f"Parameter validation error: {e}")
            return json_response({"error": "Invalid parameters", "message": str(e)}, status=400)

        except Exception as e:
            logger.error(f"Unexpected error in get_shorts: {e}")
            return json_response({"error": "Failed to fetch YouTube videos"}, status=500)

    async def get_playlists(self, req: https_fn.Request) -> https_fn.Response:
        """
        Browse a channel's playlists or search playlists.

        Query Parameters:
        - channelId, search, maxResults, pageToken: as for get_videos

        Returns:
            JSON with playlists, pageInfo, nextPageToken, prevPageToken
        """
        api_key = req.headers.get(API_KEY_HEADER)
        if not api_key:
            return json_response({"error": "YouTube API key is required"}, status=400)

        try:
            result = await self.wrapper.list_playlists(
                api_key=api_key,
                channel_id=req.args.get("channelId") or None,
                search=req.args.get("search") or "",
                max_results=parse_max_results(req),
                page_token=req.args.get("pageToken") or "",
            )
            return self._respond(result, "get_playlists")

        except ValueError as e:
            logger.error(f"Parameter validation error: {e}")
            return json_response({"error": "Invalid parameters", "message": str(e)}, status=400)

        except Exception as e:
            logger.error(f"Unexpected error in get_playlists: {e}")
            return json_response({"error": "Failed to fetch YouTube playlists"}, status=500)

    def register_functions(self) -> dict[str, Any]:
        """Wrap each handler as a Firebase HTTP function."""

        @https_fn.on_request()
        def youtube_videos(req: https_fn.Request) -> https_fn.Response:
            return asyncio.run(self.get_videos(req))

        @https_fn.on_request()
        def youtube_shorts(req: https_fn.Request) -> https_fn.Response:
            return asyncio.run(self.get_shorts(req))

        @https_fn.on_request()
        def youtube_playlists(req: https_fn.Request) -> https_fn.Response:
            return asyncio.run(self.get_playlists(req))

        return {
            "youtube_videos": youtube_videos,
            "youtube_shorts": youtube_shorts,
            "youtube_playlists": youtube_playlists,
        }


# Create YouTube handler instance
youtube_handler = YouTubeHandler()

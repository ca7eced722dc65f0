"""
YouTube Async Wrappers - cached entry points used by handlers and selector modals.

A YouTubeService is created per call because the API key belongs to the
caller. Results are cached briefly so repeated page flips and re-renders do
not spend another 100-unit search.
"""

import os

from api.youtube.core import YouTubeService
from api.youtube.models import (
    DEFAULT_MAX_RESULTS,
    YouTubePlaylistsResponse,
    YouTubeVideosResponse,
)
from utils.get_logger import get_logger
from utils.redis_cache import RedisCache

logger = get_logger(__name__)

YouTubeWrapperCache = RedisCache(
    defaultTTL=int(os.getenv("YOUTUBE_CACHE_TTL", 5 * 60)),
    prefix="youtube_picker",
    verbose=False,
    isClassMethod=True,
)


class YouTubeWrapper:
    def __init__(self, service_factory=YouTubeService):
        """service_factory(api_key) builds the per-request service."""
        self.service_factory = service_factory

    @RedisCache.use_cache(YouTubeWrapperCache, prefix="list_videos")
    async def list_videos(
        self,
        api_key: str,
        channel_id: str | None = None,
        search: str = "",
        max_results: int = DEFAULT_MAX_RESULTS,
        page_token: str = "",
        order: str = "date",
        content_filter: str = "all",
    ) -> YouTubeVideosResponse:
        """
        Async wrapper to list videos with Shorts classification.

        Returns:
            YouTubeVideosResponse with status_code set (200 or the error status)
        """
        if not api_key:
            return YouTubeVideosResponse(
                channel_id=channel_id,
                search=search,
                error="YouTube API key is required",
                status_code=400,
            )

        try:
            service = self.service_factory(api_key)
            data = await service.list_videos(
                channel_id=channel_id,
                search=search,
                max_results=max_results,
                page_token=page_token,
                order=order,
                content_filter=content_filter,
            )
            if data.error and data.status_code == 200:
                data.status_code = 500
            return data

        except Exception as e:
            logger.error(f"Error in list_videos: {e}")
            return YouTubeVideosResponse(
                channel_id=channel_id,
                search=search,
                error="Failed to fetch YouTube videos",
                details=str(e),
                status_code=500,
            )

    @RedisCache.use_cache(YouTubeWrapperCache, prefix="list_shorts")
    async def list_shorts(
        self,
        api_key: str,
        channel_id: str | None,
        search: str = "",
        max_results: int = DEFAULT_MAX_RESULTS,
        page_token: str = "",
    ) -> YouTubeVideosResponse:
        """Async wrapper to page a channel's Shorts playlist."""
        if not api_key:
            return YouTubeVideosResponse(
                channel_id=channel_id,
                search=search,
                content_filter="shorts",
                error="YouTube API key is required",
                status_code=400,
            )

        try:
            service = self.service_factory(api_key)
            data = await service.list_shorts(
                channel_id=channel_id,
                search=search,
                max_results=max_results,
                page_token=page_token,
            )
            if data.error and data.status_code == 200:
                data.status_code = 500
            return data

        except Exception as e:
            logger.error(f"Error in list_shorts: {e}")
            return YouTubeVideosResponse(
                channel_id=channel_id,
                search=search,
                content_filter="shorts",
                error="Failed to fetch YouTube videos",
                details=str(e),
                status_code=500,
            )

    @RedisCache.use_cache(YouTubeWrapperCache, prefix="list_playlists")
    async def list_playlists(
        self,
        api_key: str,
        channel_id: str | None = None,
        search: str = "",
        max_results: int = DEFAULT_MAX_RESULTS,
        page_token: str = "",
    ) -> YouTubePlaylistsResponse:
        """Async wrapper to list or search playlists."""
        if not api_key:
            return YouTubePlaylistsResponse(
                channel_id=channel_id,
                search=search,
                error="YouTube API key is required",
                status_code=400,
            )

        try:
            service = self.service_factory(api_key)
            data = await service.list_playlists(
                channel_id=channel_id,
                search=search,
                max_results=max_results,
                page_token=page_token,
            )
            if data.error and data.status_code == 200:
                data.status_code = 500
            return data

        except Exception as e:
            logger.error(f"Error in list_playlists: {e}")
            return YouTubePlaylistsResponse(
                channel_id=channel_id,
                search=search,
                error="Failed to fetch YouTube playlists",
                details=str(e),
                status_code=500,
            )


youtube_wrapper = YouTubeWrapper()

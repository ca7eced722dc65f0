"""
YouTube Picker Service Package - YouTube Data API backend for the CMS picker fields.

This package provides:
- YouTubeService: Paginated video, Shorts and playlist queries
- ShortsClassifier: Shorts detection via the channel's UUSH playlist
- Models: Pydantic models for responses and stored field values
- Wrappers: Cached async entry points
- Handlers: Firebase HTTP functions
"""

from api.youtube.core import YouTubeService
from api.youtube.handlers import YouTubeHandler, youtube_handler
from api.youtube.models import (
    AppConfiguration,
    SimplifiedPlaylist,
    SimplifiedVideo,
    YouTubePlaylistsResponse,
    YouTubeVideosResponse,
)
from api.youtube.pagination import PageTokenHistory
from api.youtube.shorts import ShortsClassifier, shorts_playlist_id
from api.youtube.wrappers import YouTubeWrapper, youtube_wrapper

__all__ = [
    # Service
    "YouTubeService",
    "ShortsClassifier",
    "shorts_playlist_id",
    "PageTokenHistory",
    # Handlers
    "YouTubeHandler",
    "youtube_handler",
    # Models
    "AppConfiguration",
    "SimplifiedVideo",
    "SimplifiedPlaylist",
    "YouTubeVideosResponse",
    "YouTubePlaylistsResponse",
    # Wrappers
    "YouTubeWrapper",
    "youtube_wrapper",
]

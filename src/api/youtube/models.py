"""
YouTube Models - Pydantic models for the picker API responses and stored field values.

Upstream resources (videos, playlists) are kept as the raw YouTube Data API
dicts: that raw shape is the "legacy" storage format. The Simplified* models
describe the flattened storage format and serialize with camelCase keys.
"""

from typing import Any, Literal

from pydantic import Field

from utils.pydantic_tools import BaseModelWithMethods, CamelModel

VideoContentFilter = Literal["all", "videos", "shorts"]
VideoOrder = Literal["date", "rating", "relevance", "title", "viewCount"]
DataFormat = Literal["simplified", "legacy"]

VALID_ORDERS: tuple[str, ...] = ("date", "rating", "relevance", "title", "viewCount")
VALID_CONTENT_FILTERS: tuple[str, ...] = ("all", "videos", "shorts")
MAX_RESULTS_LIMIT = 50
DEFAULT_MAX_RESULTS = 25


# -------------------------------
# Query responses
# -------------------------------
class YouTubePageResponse(BaseModelWithMethods):
    """Fields shared by every paged query response."""

    page_info: dict[str, Any] = Field(default_factory=dict)
    next_page_token: str | None = None
    prev_page_token: str | None = None
    channel_id: str | None = None
    search: str = ""
    error: str | None = None
    details: str | None = None
    status_code: int = 200

    def api_payload(self) -> dict[str, Any]:
        """Body returned by the HTTP handlers (camelCase, as the field UI expects)."""
        if self.error:
            payload: dict[str, Any] = {"error": self.error}
            if self.details:
                payload["details"] = self.details
            return payload
        return {
            "pageInfo": self.page_info,
            "nextPageToken": self.next_page_token,
            "prevPageToken": self.prev_page_token,
        }


class YouTubeVideosResponse(YouTubePageResponse):
    """Page of video resources, each stamped with an ``isShort`` flag."""

    videos: list[dict[str, Any]] = Field(default_factory=list)
    content_filter: VideoContentFilter = "all"
    order: str = "date"

    def api_payload(self) -> dict[str, Any]:
        payload = super().api_payload()
        if not self.error:
            payload = {"videos": self.videos, **payload}
        return payload


class YouTubePlaylistsResponse(YouTubePageResponse):
    """Page of playlist resources."""

    playlists: list[dict[str, Any]] = Field(default_factory=list)

    def api_payload(self) -> dict[str, Any]:
        payload = super().api_payload()
        if not self.error:
            payload = {"playlists": self.playlists, **payload}
        return payload


# -------------------------------
# Stored field values
# -------------------------------
class Thumbnails(CamelModel):
    small: str | None = None
    medium: str | None = None
    large: str | None = None


class SimplifiedVideo(CamelModel):
    """Flattened video stored in a CMS field when ``data_format`` is simplified."""

    id: str
    title: str = ""
    description: str = ""
    published_at: str = ""
    duration: str = ""
    duration_formatted: str = ""
    duration_seconds: int = 0
    channel_title: str = ""
    channel_id: str = ""
    view_count: int = 0
    view_count_formatted: str = "0"
    like_count: int = 0
    comment_count: int = 0
    thumbnail_url: str = ""
    thumbnails: Thumbnails = Field(default_factory=Thumbnails)
    embed_url: str = ""
    watch_url: str = ""
    is_short: bool = False
    tags: list[str] | None = None
    selected_at: str | None = None


class SimplifiedPlaylist(CamelModel):
    """Flattened playlist stored in a CMS field when ``data_format`` is simplified."""

    id: str
    title: str = ""
    description: str = ""
    published_at: str = ""
    channel_title: str = ""
    channel_id: str = ""
    video_count: int = 0
    thumbnail_url: str = ""
    thumbnails: Thumbnails = Field(default_factory=Thumbnails)
    playlist_url: str = ""


class SelectedVideo(CamelModel):
    """Legacy multi-video entry: the raw resource plus when it was picked."""

    video: dict[str, Any]
    selected_at: str


class AppConfiguration(CamelModel):
    """App install configuration as saved by the CMS (camelCase keys)."""

    api_key: str = ""
    channel_id: str | None = None
    data_format: DataFormat = "simplified"
    include_tags: bool = True
    include_description: bool = True

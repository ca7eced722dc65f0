"""
YouTube Shorts classification.

The Data API has no "is Short" flag. Every channel has an auto-generated
playlist holding its Shorts whose ID is the channel ID with the ``UC`` prefix
replaced by ``UUSH``; a video is a Short when it is a member of that playlist.

Two lookup strategies are supported:
- ``point``: one playlistItems.list call per video (filtered by videoId).
- ``bulk``: enumerate the whole Shorts playlist once per channel and test
  membership locally. This is the default since a page of 25 search results
  usually spans only a handful of channels.
"""

from collections import defaultdict
from typing import Any, Literal

from googleapiclient.errors import HttpError

from utils.get_logger import get_logger
from utils.redis_cache import RedisCache

logger = get_logger(__name__)

CHANNEL_PREFIX = "UC"
SHORTS_PLAYLIST_PREFIX = "UUSH"
PLAYLIST_PAGE_SIZE = 50
DEFAULT_MAX_PAGES = 20

ShortsStrategy = Literal["bulk", "point"]

# A channel's Shorts change slowly compared to how often editors page through
# results, and each enumerated page costs 1 quota unit.
ShortsCache = RedisCache(
    defaultTTL=60 * 60,
    prefix="youtube_shorts",
    verbose=False,
    isClassMethod=True,
    allow_empty=True,
)


def shorts_playlist_id(channel_id: str | None) -> str | None:
    """Return the Shorts playlist ID for a ``UC`` channel ID, else None."""
    if not channel_id or not channel_id.startswith(CHANNEL_PREFIX):
        return None
    return SHORTS_PLAYLIST_PREFIX + channel_id[len(CHANNEL_PREFIX) :]


def is_not_found(error: HttpError) -> bool:
    return getattr(error.resp, "status", None) == 404


def video_channel_id(video: dict[str, Any]) -> str | None:
    return (video.get("snippet") or {}).get("channelId")


class ShortsClassifier:
    """Decides Shorts membership for video resources using a YouTube client."""

    def __init__(self, youtube, max_pages: int = DEFAULT_MAX_PAGES):
        self.youtube = youtube
        self.max_pages = max_pages
        self._channel_shorts: dict[str, set[str]] = {}

    def is_short(self, video_id: str, channel_id: str | None) -> bool:
        """Point lookup: is *video_id* in its channel's Shorts playlist?"""
        playlist_id = shorts_playlist_id(channel_id)
        if not playlist_id or not video_id:
            return False

        try:
            response = (
                self.youtube.playlistItems()
                .list(part="id", playlistId=playlist_id, videoId=video_id, maxResults=1)
                .execute()
            )
        except HttpError as e:
            if is_not_found(e):
                return False
            raise
        return bool(response.get("items"))

    async def get_channel_short_ids(self, channel_id: str) -> set[str]:
        """Bulk lookup: every video ID in the channel's Shorts playlist."""
        if channel_id in self._channel_shorts:
            return self._channel_shorts[channel_id]

        short_ids = await self._enumerate_shorts_playlist(channel_id, self.max_pages)
        self._channel_shorts[channel_id] = short_ids
        return short_ids

    @RedisCache.use_cache(ShortsCache, prefix="channel_shorts")
    async def _enumerate_shorts_playlist(self, channel_id: str, max_pages: int) -> set[str]:
        playlist_id = shorts_playlist_id(channel_id)
        if not playlist_id:
            return set()

        short_ids: set[str] = set()
        page_token: str | None = None
        pages = 0
        while pages < max_pages:
            params: dict[str, Any] = {
                "part": "contentDetails",
                "playlistId": playlist_id,
                "maxResults": PLAYLIST_PAGE_SIZE,
            }
            if page_token:
                params["pageToken"] = page_token

            try:
                response = self.youtube.playlistItems().list(**params).execute()
            except HttpError as e:
                if is_not_found(e):
                    logger.info(f"Channel {channel_id} has no Shorts playlist")
                    return set()
                raise

            for item in response.get("items", []):
                video_id = (item.get("contentDetails") or {}).get("videoId")
                if video_id:
                    short_ids.add(video_id)

            pages += 1
            page_token = response.get("nextPageToken")
            if not page_token:
                break
        else:
            logger.warning(
                f"Stopped enumerating Shorts for {channel_id} after {max_pages} pages "
                f"({len(short_ids)} Shorts); older Shorts will classify as videos"
            )

        logger.info(f"Enumerated {len(short_ids)} Shorts for channel {channel_id} ({pages} pages)")
        return short_ids

    async def classify(
        self, videos: list[dict[str, Any]], strategy: ShortsStrategy = "bulk"
    ) -> list[dict[str, Any]]:
        """
        Stamp ``isShort`` onto each video resource in place.

        Args:
            videos: videos.list resources (need ``id`` and ``snippet.channelId``)
            strategy: ``bulk`` (one playlist enumeration per channel) or
                ``point`` (one lookup per video)

        Returns:
            The same list, for chaining
        """
        if strategy == "point":
            for video in videos:
                video["isShort"] = self.is_short(video.get("id", ""), video_channel_id(video))
            return videos

        by_channel: dict[str | None, list[dict[str, Any]]] = defaultdict(list)
        for video in videos:
            by_channel[video_channel_id(video)].append(video)

        for channel_id, channel_videos in by_channel.items():
            short_ids = await self.get_channel_short_ids(channel_id) if channel_id else set()
            for video in channel_videos:
                video["isShort"] = video.get("id") in short_ids

        return videos


def filter_by_content(
    videos: list[dict[str, Any]], content_filter: str
) -> list[dict[str, Any]]:
    """Apply the all / videos / shorts filter to classified videos."""
    if content_filter == "shorts":
        return [video for video in videos if video.get("isShort")]
    if content_filter == "videos":
        return [video for video in videos if not video.get("isShort")]
    return videos

"""
YouTube Core Service - paginated video, playlist and Shorts queries.

Three upstream shapes are reconciled into one paged result:
- search.list returns ids only (``id.videoId`` / ``id.playlistId``) plus tokens
- videos.list / playlists.list return the full resources for those ids
- playlistItems.list (Shorts playlist) returns ``contentDetails.videoId`` plus tokens

Page tokens and pageInfo always come from the call that did the paging, never
from the detail lookup.
"""

import json
from typing import Any

from googleapiclient.errors import HttpError

from api.youtube.auth import Auth
from api.youtube.models import (
    DEFAULT_MAX_RESULTS,
    MAX_RESULTS_LIMIT,
    VALID_CONTENT_FILTERS,
    VALID_ORDERS,
    YouTubePlaylistsResponse,
    YouTubeVideosResponse,
)
from api.youtube.shorts import (
    ShortsClassifier,
    filter_by_content,
    is_not_found,
    shorts_playlist_id,
)
from utils.get_logger import get_logger

logger = get_logger(__name__)

VIDEO_DETAIL_PARTS = "snippet,contentDetails,statistics"
PLAYLIST_DETAIL_PARTS = "snippet,contentDetails"


def parse_http_error(error: HttpError) -> tuple[int, str, str | None]:
    """
    Extract status, message and reason from a googleapiclient HttpError.

    Returns:
        (status_code, message, reason) where reason is ``error.errors[0].reason``
    """
    status = getattr(error.resp, "status", None) or 500
    message = "YouTube API error"
    reason = None
    try:
        content = error.content
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        body = json.loads(content or "{}").get("error", {})
        message = body.get("message") or message
        errors = body.get("errors") or []
        if errors:
            reason = errors[0].get("reason")
    except (ValueError, AttributeError) as e:
        logger.warning(f"Could not parse YouTube error body: {e}")
    return int(status), message, reason


def validate_max_results(max_results: int) -> int:
    if max_results < 1 or max_results > MAX_RESULTS_LIMIT:
        raise ValueError(f"maxResults must be between 1 and {MAX_RESULTS_LIMIT}")
    return max_results


def matches_search(video: dict[str, Any], search: str) -> bool:
    """Case-insensitive substring match on title or description."""
    snippet = video.get("snippet") or {}
    needle = search.lower()
    return needle in (snippet.get("title") or "").lower() or needle in (
        snippet.get("description") or ""
    ).lower()


class YouTubeService(Auth):
    """
    YouTube Data API queries backing the picker fields.

    One instance per request: the API key belongs to the editor's app install.
    """

    def __init__(self, api_key: str | None = None):
        super().__init__(api_key)
        self._classifier: ShortsClassifier | None = None

    @property
    def classifier(self) -> ShortsClassifier:
        if self._classifier is None:
            self._classifier = ShortsClassifier(self.youtube)
        return self._classifier

    def _get_video_details(self, video_ids: list[str]) -> list[dict[str, Any]]:
        """videos.list for up to 50 ids, returned in upstream order."""
        if not video_ids:
            return []
        response = (
            self.youtube.videos().list(part=VIDEO_DETAIL_PARTS, id=",".join(video_ids)).execute()
        )
        return response.get("items", [])

    async def list_videos(
        self,
        channel_id: str | None = None,
        search: str = "",
        max_results: int = DEFAULT_MAX_RESULTS,
        page_token: str = "",
        order: str = "date",
        content_filter: str = "all",
    ) -> YouTubeVideosResponse:
        """
        Search videos, fetch their details and classify Shorts.

        QUOTA: search.list costs 100 units, videos.list 1, and the Shorts
        enumeration 1 per playlist page per channel on a cache miss.

        Args:
            channel_id: Restrict results to this channel
            search: Free-text query (``q``)
            max_results: Page size, 1-50
            page_token: Cursor from a previous response
            order: date, rating, relevance, title or viewCount
            content_filter: all, videos or shorts

        Returns:
            YouTubeVideosResponse with page tokens from the search call
        """
        base = {
            "channel_id": channel_id,
            "search": search,
            "content_filter": content_filter,
            "order": order,
        }
        try:
            validate_max_results(max_results)
            if order not in VALID_ORDERS:
                raise ValueError(f"order must be one of: {', '.join(VALID_ORDERS)}")
            if content_filter not in VALID_CONTENT_FILTERS:
                raise ValueError(
                    f"contentFilter must be one of: {', '.join(VALID_CONTENT_FILTERS)}"
                )
        except ValueError as e:
            return YouTubeVideosResponse(**base, error=str(e), status_code=400)

        if content_filter == "shorts" and channel_id and not search:
            shorts = await self.list_shorts(
                channel_id=channel_id, max_results=max_results, page_token=page_token
            )
            shorts.order = order
            return shorts

        try:
            logger.info(
                f"YouTube search (~101 quota units): q='{search}', channel={channel_id}, "
                f"order={order}, filter={content_filter}, page_token='{page_token}'"
            )

            request_params: dict[str, Any] = {
                "part": "snippet",
                "maxResults": max_results,
                "order": order,
                "type": "video",
                "safeSearch": "none",
            }
            if page_token:
                request_params["pageToken"] = page_token
            if search:
                request_params["q"] = search
            if channel_id:
                request_params["channelId"] = channel_id

            search_response = self.youtube.search().list(**request_params).execute()
            page_info = search_response.get("pageInfo") or {}
            items = search_response.get("items") or []

            if not items:
                return YouTubeVideosResponse(**base, page_info=page_info, next_page_token=None)

            video_ids = [
                item["id"]["videoId"]
                for item in items
                if isinstance(item.get("id"), dict) and item["id"].get("videoId")
            ]
            if not video_ids:
                return YouTubeVideosResponse(
                    **base,
                    page_info=page_info,
                    next_page_token=search_response.get("nextPageToken"),
                )

            videos = self._get_video_details(video_ids)
            await self.classifier.classify(videos)
            filtered = filter_by_content(videos, content_filter)

            if len(filtered) != len(videos):
                logger.info(
                    f"Content filter '{content_filter}' kept "
                    f"{len(filtered)} of {len(videos)} videos"
                )

            return YouTubeVideosResponse(
                **base,
                videos=filtered,
                page_info=page_info,
                next_page_token=search_response.get("nextPageToken"),
                prev_page_token=search_response.get("prevPageToken"),
            )

        except HttpError as e:
            status, message, reason = parse_http_error(e)
            logger.error(f"YouTube API error listing videos: {status} {message} ({reason})")
            return YouTubeVideosResponse(
                **base, error=message, details=reason, status_code=status
            )

        except Exception:
            logger.exception("Unhandled exception listing YouTube videos.")
            return YouTubeVideosResponse(
                **base, error="Failed to fetch YouTube videos", status_code=500
            )

    async def list_shorts(
        self,
        channel_id: str | None,
        search: str = "",
        max_results: int = DEFAULT_MAX_RESULTS,
        page_token: str = "",
    ) -> YouTubeVideosResponse:
        """
        Page through a channel's Shorts playlist directly.

        Every returned video is a Short by construction, so no classification
        round trips are needed. A search term filters the fetched page locally.

        Returns:
            YouTubeVideosResponse with page tokens from playlistItems.list
        """
        base = {"channel_id": channel_id, "search": search, "content_filter": "shorts"}

        playlist_id = shorts_playlist_id(channel_id)
        if not playlist_id:
            return YouTubeVideosResponse(
                **base,
                error="A channel ID starting with 'UC' is required to list Shorts",
                status_code=400,
            )
        try:
            validate_max_results(max_results)
        except ValueError as e:
            return YouTubeVideosResponse(**base, error=str(e), status_code=400)

        try:
            logger.info(f"Listing Shorts playlist {playlist_id}, page_token='{page_token}'")

            request_params: dict[str, Any] = {
                "part": "contentDetails",
                "playlistId": playlist_id,
                "maxResults": max_results,
            }
            if page_token:
                request_params["pageToken"] = page_token

            try:
                items_response = self.youtube.playlistItems().list(**request_params).execute()
            except HttpError as e:
                if is_not_found(e):
                    logger.info(f"Channel {channel_id} has no Shorts playlist")
                    return YouTubeVideosResponse(
                        **base, page_info={"totalResults": 0, "resultsPerPage": max_results}
                    )
                raise

            video_ids = [
                (item.get("contentDetails") or {}).get("videoId")
                for item in items_response.get("items", [])
            ]
            video_ids = [video_id for video_id in video_ids if video_id]

            videos = self._get_video_details(video_ids)
            for video in videos:
                video["isShort"] = True
            if search:
                videos = [video for video in videos if matches_search(video, search)]

            return YouTubeVideosResponse(
                **base,
                videos=videos,
                page_info=items_response.get("pageInfo") or {},
                next_page_token=items_response.get("nextPageToken"),
                prev_page_token=items_response.get("prevPageToken"),
            )

        except HttpError as e:
            status, message, reason = parse_http_error(e)
            logger.error(f"YouTube API error listing Shorts: {status} {message} ({reason})")
            return YouTubeVideosResponse(
                **base, error=message, details=reason, status_code=status
            )

        except Exception:
            logger.exception("Unhandled exception listing YouTube Shorts.")
            return YouTubeVideosResponse(
                **base, error="Failed to fetch YouTube videos", status_code=500
            )

    async def list_playlists(
        self,
        channel_id: str | None = None,
        search: str = "",
        max_results: int = DEFAULT_MAX_RESULTS,
        page_token: str = "",
    ) -> YouTubePlaylistsResponse:
        """
        List playlists for a channel, or search playlists.

        A channel without a search term pages playlists.list directly (1 unit);
        anything else goes through search.list (100 units) plus a detail lookup.
        """
        base = {"channel_id": channel_id, "search": search}
        try:
            validate_max_results(max_results)
        except ValueError as e:
            return YouTubePlaylistsResponse(**base, error=str(e), status_code=400)

        try:
            if channel_id and not search:
                logger.info(f"Listing playlists for channel {channel_id}")
                list_params: dict[str, Any] = {
                    "part": PLAYLIST_DETAIL_PARTS,
                    "channelId": channel_id,
                    "maxResults": max_results,
                }
                if page_token:
                    list_params["pageToken"] = page_token

                response = self.youtube.playlists().list(**list_params).execute()
                return YouTubePlaylistsResponse(
                    **base,
                    playlists=response.get("items") or [],
                    page_info=response.get("pageInfo") or {},
                    next_page_token=response.get("nextPageToken"),
                    prev_page_token=response.get("prevPageToken"),
                )

            logger.info(
                f"Searching playlists (~101 quota units): q='{search}', channel={channel_id}"
            )
            search_params: dict[str, Any] = {
                "part": "snippet",
                "maxResults": max_results,
                "type": "playlist",
            }
            if page_token:
                search_params["pageToken"] = page_token
            if search:
                search_params["q"] = search
            if channel_id:
                search_params["channelId"] = channel_id

            search_response = self.youtube.search().list(**search_params).execute()
            page_info = search_response.get("pageInfo") or {}
            items = search_response.get("items") or []

            if not items:
                return YouTubePlaylistsResponse(**base, page_info=page_info, next_page_token=None)

            playlist_ids = [
                item["id"]["playlistId"]
                for item in items
                if isinstance(item.get("id"), dict) and item["id"].get("playlistId")
            ]
            if not playlist_ids:
                return YouTubePlaylistsResponse(
                    **base,
                    page_info=page_info,
                    next_page_token=search_response.get("nextPageToken"),
                )

            details = (
                self.youtube.playlists()
                .list(part=PLAYLIST_DETAIL_PARTS, id=",".join(playlist_ids))
                .execute()
            )
            return YouTubePlaylistsResponse(
                **base,
                playlists=details.get("items") or [],
                page_info=page_info,
                next_page_token=search_response.get("nextPageToken"),
                prev_page_token=search_response.get("prevPageToken"),
            )

        except HttpError as e:
            status, message, reason = parse_http_error(e)
            logger.error(f"YouTube API error listing playlists: {status} {message} ({reason})")
            return YouTubePlaylistsResponse(
                **base, error=message, details=reason, status_code=status
            )

        except Exception:
            logger.exception("Unhandled exception listing YouTube playlists.")
            return YouTubePlaylistsResponse(
                **base, error="Failed to fetch YouTube playlists", status_code=500
            )

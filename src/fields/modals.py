"""
Selector modal state for the YouTube picker fields.

Each modal keeps its own search / order / filter inputs, page-token history
and selection, and loads pages through the cached YouTube wrapper. Rendering
and the CMS modal lifecycle stay with the caller: ``confirm()`` and
``cancel()`` return the value to hand back to the field's callback.
"""

from abc import ABC, abstractmethod
from typing import Any

from api.youtube.models import (
    VALID_CONTENT_FILTERS,
    VALID_ORDERS,
    YouTubePageResponse,
    YouTubePlaylistsResponse,
    YouTubeVideosResponse,
)
from api.youtube.pagination import PageTokenHistory
from api.youtube.wrappers import youtube_wrapper
from utils.get_logger import get_logger

logger = get_logger(__name__)

MODAL_PAGE_SIZE = 12


class SelectorModal(ABC):
    """Shared search and pagination state."""

    def __init__(
        self,
        api_key: str,
        channel_id: str | None = None,
        wrapper=youtube_wrapper,
        page_size: int = MODAL_PAGE_SIZE,
    ):
        self.api_key = api_key
        self.channel_id = channel_id
        self.wrapper = wrapper
        self.page_size = page_size

        self.search_term = ""
        self.history = PageTokenHistory()
        self.is_loading = False
        self.error: str | None = None
        self.page: YouTubePageResponse | None = None

    @property
    def is_ready(self) -> bool:
        return bool(self.api_key)

    @property
    def next_page_token(self) -> str | None:
        return self.page.next_page_token if self.page else None

    @property
    def page_info(self) -> dict[str, int | bool]:
        return self.history.page_info(self.next_page_token)

    def _reset(self) -> None:
        self.history.reset()
        self.page = None

    def set_search_term(self, search_term: str) -> None:
        if search_term != self.search_term:
            self.search_term = search_term
            self._reset()

    @abstractmethod
    async def _fetch(self, page_token: str, **cache_kwargs: Any) -> YouTubePageResponse:
        """Request one page for *page_token* from the wrapper."""

    async def load(self) -> YouTubePageResponse:
        """Fetch the page the history currently points at."""
        self.is_loading = True
        try:
            result = await self._fetch(self.history.current_token)
        finally:
            self.is_loading = False

        self.error = result.error
        if result.error:
            logger.warning(f"{type(self).__name__} load failed: {result.error}")
        self.page = result
        return result

    async def refetch(self) -> YouTubePageResponse:
        """Reload the current page bypassing the cache."""
        self.is_loading = True
        try:
            result = await self._fetch(self.history.current_token, no_cache=True)
        finally:
            self.is_loading = False
        self.error = result.error
        self.page = result
        return result

    async def next_page(self) -> YouTubePageResponse | None:
        if not self.history.advance(self.next_page_token):
            return None
        return await self.load()

    async def prev_page(self) -> YouTubePageResponse | None:
        if not self.history.back():
            return None
        return await self.load()

    def cancel(self) -> None:
        return None


class VideoSelectorModal(SelectorModal):
    """Pick a single video; supports order and all / videos / shorts filters."""

    def __init__(self, api_key: str, channel_id: str | None = None, **kwargs: Any):
        super().__init__(api_key, channel_id, **kwargs)
        self.order = "date"
        self.content_filter = "all"
        self.selected: dict[str, Any] | None = None

    @property
    def videos(self) -> list[dict[str, Any]]:
        return self.page.videos if isinstance(self.page, YouTubeVideosResponse) else []

    def _reset(self) -> None:
        super()._reset()
        self.selected = None

    def set_order(self, order: str) -> None:
        if order not in VALID_ORDERS:
            raise ValueError(f"order must be one of: {', '.join(VALID_ORDERS)}")
        if order != self.order:
            self.order = order
            self._reset()

    def set_content_filter(self, content_filter: str) -> None:
        if content_filter not in VALID_CONTENT_FILTERS:
            raise ValueError(f"contentFilter must be one of: {', '.join(VALID_CONTENT_FILTERS)}")
        if content_filter != self.content_filter:
            self.content_filter = content_filter
            self._reset()

    async def _fetch(self, page_token: str, **cache_kwargs: Any) -> YouTubeVideosResponse:
        return await self.wrapper.list_videos(
            api_key=self.api_key,
            channel_id=self.channel_id,
            search=self.search_term,
            max_results=self.page_size,
            page_token=page_token,
            order=self.order,
            content_filter=self.content_filter,
            **cache_kwargs,
        )

    def select(self, video: dict[str, Any]) -> None:
        self.selected = video

    def confirm(self) -> dict[str, Any] | None:
        return self.selected


class MultiVideoSelectorModal(VideoSelectorModal):
    """Pick several videos; videos already in the field cannot be picked again."""

    def __init__(
        self,
        api_key: str,
        channel_id: str | None = None,
        selected_video_ids: list[str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(api_key, channel_id, **kwargs)
        self.already_added = set(selected_video_ids or [])
        self.selection: dict[str, dict[str, Any]] = {}

    def _reset(self) -> None:
        # The selection survives paging and new searches
        SelectorModal._reset(self)

    @property
    def selected_count(self) -> int:
        return len(self.selection)

    def is_already_added(self, video: dict[str, Any]) -> bool:
        return video.get("id") in self.already_added

    def toggle(self, video: dict[str, Any]) -> bool:
        """
        Add or remove *video* from the selection.

        Returns:
            True if the video is selected afterwards
        """
        video_id = video.get("id")
        if not video_id or video_id in self.already_added:
            return False
        if video_id in self.selection:
            del self.selection[video_id]
            return False
        self.selection[video_id] = video
        return True

    def clear_selection(self) -> None:
        self.selection = {}

    def confirm(self) -> list[dict[str, Any]]:  # type: ignore[override]
        """Selected videos in the order they were picked."""
        return list(self.selection.values())


class PlaylistSelectorModal(SelectorModal):
    """Pick a single playlist from a channel or a playlist search."""

    def __init__(self, api_key: str, channel_id: str | None = None, **kwargs: Any):
        super().__init__(api_key, channel_id, **kwargs)
        self.selected: dict[str, Any] | None = None

    @property
    def playlists(self) -> list[dict[str, Any]]:
        return self.page.playlists if isinstance(self.page, YouTubePlaylistsResponse) else []

    def _reset(self) -> None:
        super()._reset()
        self.selected = None

    async def _fetch(self, page_token: str, **cache_kwargs: Any) -> YouTubePlaylistsResponse:
        return await self.wrapper.list_playlists(
            api_key=self.api_key,
            channel_id=self.channel_id,
            search=self.search_term,
            max_results=self.page_size,
            page_token=page_token,
            **cache_kwargs,
        )

    def select(self, playlist: dict[str, Any]) -> None:
        self.selected = playlist

    def confirm(self) -> dict[str, Any] | None:
        return self.selected

"""
CMS picker fields.

A field wraps the JSON string stored on the content item. Writes go through
the ``set_field_value`` callable the CMS bridge supplies, in the storage
format the app install is configured for.
"""

import json
from datetime import datetime, timezone
from typing import Any, Callable

from api.youtube.models import AppConfiguration, SelectedVideo
from api.youtube.transform import (
    get_transformation_config,
    load_field_value,
    read_playlist_field,
    read_video_field,
    read_videos_field,
    simplify_playlist,
    simplify_video,
)
from api.youtube.validation import is_valid_playlist, is_valid_video
from api.youtube.wrappers import youtube_wrapper
from fields.modals import MultiVideoSelectorModal, PlaylistSelectorModal, VideoSelectorModal
from utils.get_logger import get_logger

logger = get_logger(__name__)

MISSING_API_KEY = "YouTube API key is required. Please configure the app in the settings."


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PickerField:
    def __init__(
        self,
        field_value: str | None,
        set_field_value: Callable[[str], None],
        app_config: AppConfiguration | dict[str, Any] | None = None,
        wrapper=youtube_wrapper,
    ):
        self.value = field_value or ""
        self.set_field_value = set_field_value
        self.config = get_transformation_config(app_config)
        self.wrapper = wrapper

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @property
    def is_enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def is_legacy(self) -> bool:
        return self.config.data_format == "legacy"

    def _require_api_key(self) -> None:
        if not self.api_key:
            raise ValueError(MISSING_API_KEY)

    def _write(self, value: str) -> None:
        self.value = value
        self.set_field_value(value)


class VideoPickerField(PickerField):
    """Single video field; stores one video or an empty string."""

    @property
    def video(self):
        return read_video_field(self.value)

    def open_selector(self) -> VideoSelectorModal:
        self._require_api_key()
        return VideoSelectorModal(self.api_key, self.config.channel_id, wrapper=self.wrapper)

    def set_video(self, video: dict[str, Any] | None) -> None:
        """Store the video returned by the selector; ``None`` (cancel) is a no-op."""
        if video is None:
            return
        if self.is_legacy:
            self._write(json.dumps(video))
            return
        simplified = simplify_video(
            video,
            include_tags=self.config.include_tags,
            include_description=self.config.include_description,
        )
        self._write(json.dumps(simplified.to_dict()))

    def clear(self) -> None:
        self._write("")


class MultiVideoPickerField(PickerField):
    """Ordered list of videos, each stamped with when it was picked."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.items = self._parse_items(self.value)

    @classmethod
    def _parse_items(cls, field_value: str) -> list[dict[str, Any]]:
        data = load_field_value(field_value)
        if not isinstance(data, list):
            return []

        items = []
        for item in data:
            if not isinstance(item, dict) or not cls.item_id(item):
                logger.warning("Skipping stored video entry without an id")
                continue
            legacy_video = item.get("video")
            if legacy_video is not None and not is_valid_video(legacy_video):
                logger.warning(f"Stored video {cls.item_id(item)} is missing resource fields")
            items.append(item)
        return items

    @staticmethod
    def item_id(item: dict[str, Any]) -> str | None:
        video = item.get("video")
        return video.get("id") if isinstance(video, dict) else item.get("id")

    @property
    def video_ids(self) -> list[str]:
        return [video_id for video_id in map(self.item_id, self.items) if video_id]

    @property
    def videos(self):
        return read_videos_field(json.dumps(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def _save(self) -> None:
        self._write(json.dumps(self.items))

    def _entry(self, video: dict[str, Any], selected_at: str) -> dict[str, Any]:
        if self.is_legacy:
            return SelectedVideo(video=video, selected_at=selected_at).to_dict()
        return simplify_video(
            video,
            include_tags=self.config.include_tags,
            include_description=self.config.include_description,
            selected_at=selected_at,
        ).to_dict()

    def open_selector(self) -> MultiVideoSelectorModal:
        self._require_api_key()
        return MultiVideoSelectorModal(
            self.api_key,
            self.config.channel_id,
            selected_video_ids=self.video_ids,
            wrapper=self.wrapper,
        )

    def add_videos(self, videos: list[dict[str, Any]] | None) -> int:
        """
        Append the videos returned by the selector.

        Videos already in the field are skipped. Returns the number added.
        """
        if not videos:
            return 0

        selected_at = utc_timestamp()
        existing = set(self.video_ids)
        added = 0
        for video in videos:
            video_id = video.get("id")
            if not video_id or video_id in existing:
                continue
            self.items.append(self._entry(video, selected_at))
            existing.add(video_id)
            added += 1

        if added:
            self._save()
        return added

    def remove_video(self, video_id: str) -> bool:
        remaining = [item for item in self.items if self.item_id(item) != video_id]
        if len(remaining) == len(self.items):
            return False
        self.items = remaining
        self._save()
        return True

    def move_video(self, from_index: int, to_index: int) -> None:
        if not 0 <= from_index < len(self.items):
            raise IndexError(f"from_index {from_index} out of range")
        item = self.items.pop(from_index)
        self.items.insert(to_index, item)
        self._save()

    def clear(self) -> None:
        self.items = []
        self._save()


class PlaylistPickerField(PickerField):
    """Single playlist field; stores one playlist or an empty string."""

    @property
    def playlist(self):
        data = load_field_value(self.value)
        if isinstance(data, dict) and data.get("snippet") and not is_valid_playlist(data):
            logger.warning("Stored playlist is missing required fields")
            return None
        return read_playlist_field(self.value)

    def open_selector(self) -> PlaylistSelectorModal:
        self._require_api_key()
        return PlaylistSelectorModal(self.api_key, self.config.channel_id, wrapper=self.wrapper)

    def set_playlist(self, playlist: dict[str, Any] | None) -> None:
        if playlist is None:
            return
        if self.is_legacy:
            self._write(json.dumps(playlist))
            return
        simplified = simplify_playlist(
            playlist, include_description=self.config.include_description
        )
        self._write(json.dumps(simplified.to_dict()))

    def clear(self) -> None:
        self._write("")

"""
Conversions between the stored field formats.

Legacy values are the raw YouTube resources (single video / playlist) or a
list of ``{"video": <resource>, "selectedAt": <iso>}`` entries for multi-video
fields. Simplified values are flattened SimplifiedVideo / SimplifiedPlaylist
dicts. Readers accept both, so fields saved before a format switch keep working.
"""

import json
from typing import Any

from pydantic import ValidationError

from api.youtube.formatting import (
    duration_in_seconds,
    format_count,
    format_duration,
    get_best_thumbnail,
    get_embed_url,
    get_playlist_url,
    get_watch_url,
    parse_count,
)
from api.youtube.models import (
    AppConfiguration,
    SimplifiedPlaylist,
    SimplifiedVideo,
    Thumbnails,
)
from utils.get_logger import get_logger

logger = get_logger(__name__)


def _thumbnails(snippet: dict[str, Any]) -> Thumbnails:
    thumbnails = snippet.get("thumbnails") or {}
    return Thumbnails(
        small=(thumbnails.get("default") or {}).get("url"),
        medium=(thumbnails.get("medium") or {}).get("url"),
        large=(thumbnails.get("high") or {}).get("url"),
    )


def simplify_video(
    video: dict[str, Any],
    include_tags: bool = True,
    include_description: bool = True,
    selected_at: str | None = None,
) -> SimplifiedVideo:
    """Flatten a videos.list resource (optionally stamped with ``isShort``)."""
    snippet = video.get("snippet") or {}
    statistics = video.get("statistics") or {}
    duration = (video.get("contentDetails") or {}).get("duration") or ""
    view_count = statistics.get("viewCount") or "0"
    video_id = video.get("id", "")

    return SimplifiedVideo(
        id=video_id,
        title=snippet.get("title", ""),
        description=(snippet.get("description") or "") if include_description else "",
        published_at=snippet.get("publishedAt", ""),
        duration=duration,
        duration_formatted=format_duration(duration),
        duration_seconds=duration_in_seconds(duration),
        channel_title=snippet.get("channelTitle", ""),
        channel_id=snippet.get("channelId", ""),
        view_count=parse_count(view_count),
        view_count_formatted=format_count(view_count),
        like_count=parse_count(statistics.get("likeCount")),
        comment_count=parse_count(statistics.get("commentCount")),
        thumbnail_url=get_best_thumbnail(snippet.get("thumbnails")),
        thumbnails=_thumbnails(snippet),
        embed_url=get_embed_url(video_id),
        watch_url=get_watch_url(video_id),
        is_short=bool(video.get("isShort", False)),
        tags=snippet.get("tags") if include_tags and snippet.get("tags") else None,
        selected_at=selected_at,
    )


def simplify_playlist(
    playlist: dict[str, Any], include_description: bool = True
) -> SimplifiedPlaylist:
    """Flatten a playlists.list resource."""
    snippet = playlist.get("snippet") or {}
    playlist_id = playlist.get("id", "")

    return SimplifiedPlaylist(
        id=playlist_id,
        title=snippet.get("title", ""),
        description=(snippet.get("description") or "") if include_description else "",
        published_at=snippet.get("publishedAt", ""),
        channel_title=snippet.get("channelTitle", ""),
        channel_id=snippet.get("channelId", ""),
        video_count=(playlist.get("contentDetails") or {}).get("itemCount") or 0,
        thumbnail_url=get_best_thumbnail(snippet.get("thumbnails")),
        thumbnails=_thumbnails(snippet),
        playlist_url=get_playlist_url(playlist_id),
    )


def is_simplified_format(data: Any) -> bool:
    """True when *data* is not in the raw-resource (legacy) shape."""
    if isinstance(data, list):
        if not data:
            return True
        first = data[0] if isinstance(data[0], dict) else {}
        return not (first.get("video") or {}).get("snippet")
    return not (isinstance(data, dict) and data.get("snippet"))


def get_transformation_config(
    app_config: AppConfiguration | dict[str, Any] | None,
) -> AppConfiguration:
    """Resolve storage options from the app install config (simplified by default)."""
    if isinstance(app_config, AppConfiguration):
        return app_config
    try:
        return AppConfiguration.model_validate(app_config or {})
    except ValidationError as e:
        logger.warning(f"Invalid app configuration, using defaults: {e}")
        return AppConfiguration()


def load_field_value(field_value: str | None) -> Any:
    if not field_value:
        return None
    try:
        return json.loads(field_value)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse YouTube field value: {e}")
        return None


# -------------------------------
# Stored legacy value -> simplified
# -------------------------------
def simplify_single_video_field(
    field_value: str, include_tags: bool = True, include_description: bool = True
) -> SimplifiedVideo | None:
    video = load_field_value(field_value)
    if not isinstance(video, dict):
        return None
    return simplify_video(video, include_tags=include_tags, include_description=include_description)


def simplify_multi_video_field(
    field_value: str, include_tags: bool = True, include_description: bool = True
) -> list[SimplifiedVideo]:
    items = load_field_value(field_value)
    if not isinstance(items, list):
        return []
    return [
        simplify_video(
            item.get("video") or {},
            include_tags=include_tags,
            include_description=include_description,
            selected_at=item.get("selectedAt"),
        )
        for item in items
        if isinstance(item, dict)
    ]


def simplify_playlist_field(
    field_value: str, include_description: bool = True
) -> SimplifiedPlaylist | None:
    playlist = load_field_value(field_value)
    if not isinstance(playlist, dict):
        return None
    return simplify_playlist(playlist, include_description=include_description)


# -------------------------------
# Format-agnostic readers
# -------------------------------
def read_video_field(field_value: str | None) -> SimplifiedVideo | None:
    """Read a single-video field value saved in either format."""
    data = load_field_value(field_value)
    if not isinstance(data, dict):
        return None
    if data.get("snippet"):
        return simplify_video(data)
    try:
        return SimplifiedVideo.model_validate(data)
    except ValidationError as e:
        logger.error(f"Stored video does not match the simplified format: {e}")
        return None


def read_videos_field(field_value: str | None) -> list[SimplifiedVideo]:
    """Read a multi-video field value saved in either format."""
    data = load_field_value(field_value)
    if not isinstance(data, list):
        return []

    videos = []
    for item in data:
        if not isinstance(item, dict):
            continue
        video = item.get("video") or item
        if video.get("snippet"):
            videos.append(simplify_video(video, selected_at=item.get("selectedAt")))
            continue
        try:
            videos.append(SimplifiedVideo.model_validate(video))
        except ValidationError as e:
            logger.error(f"Skipping stored video that does not match the simplified format: {e}")
    return videos


def read_playlist_field(field_value: str | None) -> SimplifiedPlaylist | None:
    """Read a playlist field value saved in either format."""
    data = load_field_value(field_value)
    if not isinstance(data, dict):
        return None
    if data.get("snippet"):
        return simplify_playlist(data)
    try:
        return SimplifiedPlaylist.model_validate(data)
    except ValidationError as e:
        logger.error(f"Stored playlist does not match the simplified format: {e}")
        return None

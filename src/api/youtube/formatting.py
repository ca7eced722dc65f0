"""
Display helpers for YouTube data (durations, counts, thumbnails, URLs).
"""

import re
from datetime import datetime, timedelta
from typing import Any

import isodate

THUMBNAIL_QUALITIES = ("maxres", "high", "medium", "default")
EPOCH = datetime(1970, 1, 1)


def _duration_seconds(duration: str) -> int | None:
    try:
        parsed = isodate.parse_duration(duration)
    except (isodate.ISO8601Error, TypeError):
        return None
    if not isinstance(parsed, timedelta):
        # Year/month components need an anchor date
        parsed = parsed.totimedelta(start=EPOCH)
    return int(parsed.total_seconds())


def format_duration(duration: str) -> str:
    """
    Convert an ISO 8601 duration to a clock string.

    PT1H30M15S -> "1:30:15", PT4M5S -> "4:05", P1DT2H3M4S -> "26:03:04".
    Unparseable input is returned as-is.
    """
    total = _duration_seconds(duration)
    if total is None:
        return duration
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def duration_in_seconds(duration: str) -> int:
    total = _duration_seconds(duration)
    return total if total is not None else 0


def parse_count(count: Any) -> int:
    """Leading-integer parse of an API count string; 0 when absent or invalid."""
    match = re.match(r"\s*-?\d+", str(count)) if count is not None else None
    return int(match.group()) if match else 0


def format_count(count: str) -> str:
    """Abbreviate large counts: "1234567" -> "1.2M", "15300" -> "15.3K"."""
    match = re.match(r"\s*-?\d+", str(count))
    if not match:
        return count
    num = int(match.group())
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return count


def format_date(date_string: str) -> str:
    """ISO timestamp to a local date string; unparseable input is returned as-is."""
    try:
        parsed = datetime.fromisoformat(date_string.replace("Z", "+00:00"))
        return parsed.astimezone().strftime("%x")
    except (ValueError, AttributeError):
        return date_string


def get_best_thumbnail(thumbnails: dict[str, Any] | None) -> str:
    """URL of the highest quality thumbnail available, or ""."""
    thumbnails = thumbnails or {}
    for quality in THUMBNAIL_QUALITIES:
        url = (thumbnails.get(quality) or {}).get("url")
        if url:
            return url
    return ""


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def get_embed_url(video_id: str) -> str:
    return f"https://www.youtube.com/embed/{video_id}"


def get_watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def get_playlist_url(playlist_id: str) -> str:
    return f"https://www.youtube.com/playlist?list={playlist_id}"

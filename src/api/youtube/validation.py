"""
Validation and extraction helpers for YouTube IDs, URLs and resources.
"""

import html
import math
import re
from typing import Any

VIDEO_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")
PLAYLIST_ID_RE = re.compile(r"^(PL|UU|LL|RD|OL)[a-zA-Z0-9_-]+$")
CHANNEL_ID_RE = re.compile(r"^UC[a-zA-Z0-9_-]{22}$")

VIDEO_URL_PATTERNS = (
    re.compile(
        r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/)"
        r"([^&\n?#]+)"
    ),
    re.compile(r"youtube\.com/v/([^&\n?#]+)"),
    re.compile(r"youtube\.com/watch\?.*v=([^&\n?#]+)"),
)
PLAYLIST_URL_RE = re.compile(r"[?&]list=([^&\n?#]+)")
CHANNEL_URL_PATTERNS = (
    re.compile(r"youtube\.com/channel/([^/\n?#]+)"),
    re.compile(r"youtube\.com/c/([^/\n?#]+)"),
    re.compile(r"youtube\.com/user/([^/\n?#]+)"),
)

KIDS_FRIENDLY_KEYWORDS = (
    "kids",
    "children",
    "family",
    "educational",
    "learning",
    "cartoon",
    "animation",
    "nursery rhyme",
    "story time",
)
ADULT_KEYWORDS = ("mature", "explicit", "adult", "warning", "18+", "nsfw")


def is_valid_video_id(video_id: str) -> bool:
    return bool(VIDEO_ID_RE.match(video_id or ""))


def is_valid_playlist_id(playlist_id: str) -> bool:
    """Playlist IDs start with PL, UU (uploads, incl. UUSH Shorts), LL, RD or OL."""
    return bool(PLAYLIST_ID_RE.match(playlist_id or ""))


def is_valid_channel_id(channel_id: str) -> bool:
    return bool(CHANNEL_ID_RE.match(channel_id or ""))


def is_valid_video(video: Any) -> bool:
    """Minimal shape check for a stored videos.list resource."""
    if not isinstance(video, dict):
        return False
    snippet = video.get("snippet")
    return (
        isinstance(video.get("id"), str)
        and isinstance(snippet, dict)
        and isinstance(snippet.get("title"), str)
        and bool(snippet.get("thumbnails"))
        and bool(video.get("contentDetails"))
        and bool(video.get("statistics"))
    )


def is_valid_playlist(playlist: Any) -> bool:
    """Minimal shape check for a stored playlists.list resource."""
    if not isinstance(playlist, dict):
        return False
    snippet = playlist.get("snippet")
    content_details = playlist.get("contentDetails")
    return (
        isinstance(playlist.get("id"), str)
        and isinstance(snippet, dict)
        and isinstance(snippet.get("title"), str)
        and bool(snippet.get("thumbnails"))
        and isinstance(content_details, dict)
        and isinstance(content_details.get("itemCount"), int)
    )


def extract_video_id(url: str) -> str | None:
    """Video ID from watch, short link, embed, /v/ or /shorts/ URLs."""
    for pattern in VIDEO_URL_PATTERNS:
        match = pattern.search(url)
        if match and is_valid_video_id(match.group(1)):
            return match.group(1)
    return None


def extract_playlist_id(url: str) -> str | None:
    match = PLAYLIST_URL_RE.search(url)
    if match and is_valid_playlist_id(match.group(1)):
        return match.group(1)
    return None


def extract_channel_id(url: str) -> str | None:
    """Channel ID, custom name or username from a channel URL (not validated)."""
    for pattern in CHANNEL_URL_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def sanitize_html(text: str) -> str:
    """Strip tags and decode entities in a YouTube description."""
    text = html.unescape(re.sub(r"<[^>]*>", "", text))
    return text.replace("\xa0", " ").strip()


def calculate_reading_time(text: str, words_per_minute: int = 200) -> int:
    """Estimated minutes to read *text*."""
    word_count = len(re.split(r"\s+", text))
    return math.ceil(word_count / words_per_minute)


def is_child_friendly(video: dict[str, Any]) -> bool:
    """Keyword heuristic on title and description; not a substitute for madeForKids."""
    snippet = video.get("snippet") or {}
    title = (snippet.get("title") or "").lower()
    description = (snippet.get("description") or "").lower()

    def mentions(keyword: str) -> bool:
        return keyword in title or keyword in description

    has_kids_keywords = any(mentions(keyword) for keyword in KIDS_FRIENDLY_KEYWORDS)
    has_adult_keywords = any(mentions(keyword) for keyword in ADULT_KEYWORDS)
    return has_kids_keywords and not has_adult_keywords

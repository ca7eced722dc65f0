"""
YouTube Auth Service - API key resolution and lazy Data API client.

The picker passes the editor's API key with every request; the SecretParam /
environment fallback only serves scripts and integration tests.
"""

import os

from firebase_functions.params import SecretParam
from googleapiclient.discovery import build

from utils.get_logger import get_logger

logger = get_logger(__name__)

# YouTube API Key secret parameter
YOUTUBE_API_KEY = SecretParam("YOUTUBE_API_KEY")


class Auth:
    """
    Base YouTube service holding the per-request API key and client.
    """

    def __init__(self, api_key: str | None = None):
        """Initialize with the API key supplied by the caller (may be None)."""
        self._youtube_api_key = api_key or None
        self._youtube = None

    @property
    def youtube_api_key(self) -> str:
        """API key for this request, falling back to Firebase secrets then env."""
        if self._youtube_api_key is None:
            try:
                self._youtube_api_key = YOUTUBE_API_KEY.value or None
            except Exception as e:
                logger.warning(f"SecretParam access failed: {e}, falling back to environment")
            if not self._youtube_api_key:
                self._youtube_api_key = os.getenv("YOUTUBE_API_KEY")
            if not self._youtube_api_key:
                raise ValueError("YouTube API key is required")
        return self._youtube_api_key

    @property
    def youtube(self):
        """Lazy-load the YouTube Data API v3 client."""
        if self._youtube is None:
            self._youtube = build(
                "youtube", "v3", developerKey=self.youtube_api_key, cache_discovery=False
            )
        return self._youtube

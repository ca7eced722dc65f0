"""
Firebase Functions entry point for the YouTube picker backend.
"""

from utils.setup_logging import setup_cloud_logging

setup_cloud_logging()

from api.youtube.handlers import youtube_handler  # noqa: E402

_youtube_functions = youtube_handler.register_functions()

youtube_videos = _youtube_functions["youtube_videos"]
youtube_shorts = _youtube_functions["youtube_shorts"]
youtube_playlists = _youtube_functions["youtube_playlists"]

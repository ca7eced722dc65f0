"""
Unit tests for YouTube picker models.
"""

import pytest
from pydantic import ValidationError

from api.youtube.models import (
    AppConfiguration,
    SelectedVideo,
    SimplifiedVideo,
    YouTubePageResponse,
    YouTubePlaylistsResponse,
    YouTubeVideosResponse,
)

pytestmark = pytest.mark.unit


class TestResponsePayloads:
    def test_videos_payload(self):
        response = YouTubeVideosResponse(
            videos=[{"id": "vid00000001", "isShort": False}],
            page_info={"totalResults": 120, "resultsPerPage": 25},
            next_page_token="CAMQAA",
        )

        assert response.api_payload() == {
            "videos": [{"id": "vid00000001", "isShort": False}],
            "pageInfo": {"totalResults": 120, "resultsPerPage": 25},
            "nextPageToken": "CAMQAA",
            "prevPageToken": None,
        }

    def test_playlists_payload(self):
        response = YouTubePlaylistsResponse(playlists=[{"id": "PLx"}])

        payload = response.api_payload()

        assert payload["playlists"] == [{"id": "PLx"}]
        assert payload["nextPageToken"] is None

    def test_error_payload(self):
        response = YouTubeVideosResponse(
            error="The request cannot be completed.", details="quotaExceeded", status_code=403
        )

        assert response.api_payload() == {
            "error": "The request cannot be completed.",
            "details": "quotaExceeded",
        }

    def test_error_payload_without_details(self):
        assert YouTubePageResponse(error="bad", status_code=400).api_payload() == {"error": "bad"}

    def test_content_filter_is_validated(self):
        with pytest.raises(ValidationError):
            YouTubeVideosResponse(content_filter="live")

    def test_defaults(self):
        response = YouTubeVideosResponse()

        assert response.status_code == 200
        assert response.videos == []
        assert response.content_filter == "all"


class TestStoredModels:
    def test_simplified_video_accepts_camel_case(self):
        video = SimplifiedVideo.model_validate(
            {"id": "vid00000001", "durationFormatted": "12:05", "isShort": True}
        )

        assert video.duration_formatted == "12:05"
        assert video.is_short is True

    def test_simplified_video_accepts_field_names(self):
        assert SimplifiedVideo(id="vid00000001", view_count=5).view_count == 5

    def test_simplified_video_requires_id(self):
        with pytest.raises(ValidationError):
            SimplifiedVideo.model_validate({"title": "no id"})

    def test_to_json_uses_aliases_and_drops_none(self):
        json_str = SimplifiedVideo(id="vid00000001").to_json()

        assert '"viewCountFormatted":"0"' in json_str
        assert "tags" not in json_str
        assert "selectedAt" not in json_str

    def test_selected_video(self):
        entry = SelectedVideo(video={"id": "vid00000001"}, selected_at="2024-03-05T10:00:00.000Z")

        assert entry.to_dict() == {
            "video": {"id": "vid00000001"},
            "selectedAt": "2024-03-05T10:00:00.000Z",
        }

    def test_app_configuration_defaults(self):
        config = AppConfiguration()

        assert config.api_key == ""
        assert config.channel_id is None
        assert config.data_format == "simplified"

    def test_app_configuration_rejects_unknown_format(self):
        with pytest.raises(ValidationError):
            AppConfiguration(data_format="xml")

"""
Unit tests for the picker fields.
"""

import json
import re

import pytest

from api.youtube.models import AppConfiguration
from fields.modals import MultiVideoSelectorModal, PlaylistSelectorModal, VideoSelectorModal
from fields.pickers import (
    MultiVideoPickerField,
    PlaylistPickerField,
    VideoPickerField,
    utc_timestamp,
)
from fields.tests.conftest import CHANNEL_ID

pytestmark = pytest.mark.unit

LEGACY = {"apiKey": "key", "channelId": CHANNEL_ID, "dataFormat": "legacy"}
SIMPLIFIED = {"apiKey": "key", "channelId": CHANNEL_ID, "dataFormat": "simplified"}


def test_utc_timestamp_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())


class TestVideoPickerField:
    def test_open_selector(self, saved_values, mock_wrapper):
        field = VideoPickerField("", saved_values.append, SIMPLIFIED, wrapper=mock_wrapper)

        modal = field.open_selector()

        assert isinstance(modal, VideoSelectorModal)
        assert modal.api_key == "key"
        assert modal.channel_id == CHANNEL_ID
        assert modal.wrapper is mock_wrapper

    def test_open_selector_requires_api_key(self, saved_values):
        field = VideoPickerField("", saved_values.append, {"channelId": CHANNEL_ID})

        assert field.is_enabled is False
        with pytest.raises(ValueError, match="YouTube API key is required"):
            field.open_selector()

    def test_set_video_legacy(self, saved_values, videos):
        field = VideoPickerField("", saved_values.append, LEGACY)

        field.set_video(videos[0])

        assert json.loads(saved_values[-1]) == videos[0]
        assert field.video.id == "vid00000001"

    def test_set_video_simplified(self, saved_values, videos):
        config = AppConfiguration(api_key="key", include_tags=False)
        field = VideoPickerField("", saved_values.append, config)

        field.set_video(videos[1])

        stored = json.loads(saved_values[-1])
        assert stored["id"] == "shrt0000001"
        assert stored["isShort"] is True
        assert stored["durationFormatted"] == "0:45"
        assert "tags" not in stored
        assert "snippet" not in stored
        assert field.video.is_short is True

    def test_cancel_keeps_value(self, saved_values, videos):
        field = VideoPickerField(json.dumps(videos[0]), saved_values.append, LEGACY)

        field.set_video(None)

        assert saved_values == []
        assert field.video.id == "vid00000001"

    def test_clear(self, saved_values, videos):
        field = VideoPickerField(json.dumps(videos[0]), saved_values.append, LEGACY)

        field.clear()

        assert saved_values == [""]
        assert field.video is None

    def test_reads_invalid_stored_value(self, saved_values):
        assert VideoPickerField("{oops", saved_values.append).video is None


class TestMultiVideoPickerField:
    def test_add_videos_legacy(self, saved_values, videos):
        field = MultiVideoPickerField("", saved_values.append, LEGACY)

        assert field.add_videos(videos[:2]) == 2

        stored = json.loads(saved_values[-1])
        assert [entry["video"]["id"] for entry in stored] == ["vid00000001", "shrt0000001"]
        assert all(entry["selectedAt"].endswith("Z") for entry in stored)
        assert field.video_ids == ["vid00000001", "shrt0000001"]

    def test_add_videos_simplified(self, saved_values, videos):
        field = MultiVideoPickerField("", saved_values.append, SIMPLIFIED)

        field.add_videos(videos)

        stored = json.loads(saved_values[-1])
        assert [entry["id"] for entry in stored] == ["vid00000001", "shrt0000001", "vid00000002"]
        assert all("selectedAt" in entry for entry in stored)
        assert [video.is_short for video in field.videos] == [False, True, False]

    def test_add_skips_duplicates(self, saved_values, videos):
        field = MultiVideoPickerField("", saved_values.append, LEGACY)
        field.add_videos([videos[0]])

        assert field.add_videos([videos[0], videos[2]]) == 1
        assert field.video_ids == ["vid00000001", "vid00000002"]

    def test_add_nothing(self, saved_values):
        field = MultiVideoPickerField("", saved_values.append, LEGACY)

        assert field.add_videos(None) == 0
        assert field.add_videos([]) == 0
        assert saved_values == []

    def test_open_selector_passes_existing_ids(self, saved_values, videos, mock_wrapper):
        field = MultiVideoPickerField("", saved_values.append, LEGACY, wrapper=mock_wrapper)
        field.add_videos([videos[0]])

        modal = field.open_selector()

        assert isinstance(modal, MultiVideoSelectorModal)
        assert modal.already_added == {"vid00000001"}
        assert modal.toggle(videos[0]) is False

    def test_remove(self, saved_values, videos):
        field = MultiVideoPickerField("", saved_values.append, SIMPLIFIED)
        field.add_videos(videos)

        assert field.remove_video("shrt0000001") is True
        assert field.video_ids == ["vid00000001", "vid00000002"]
        assert field.remove_video("missing0000") is False

    def test_move(self, saved_values, videos):
        field = MultiVideoPickerField("", saved_values.append, LEGACY)
        field.add_videos(videos)

        field.move_video(2, 0)

        assert field.video_ids == ["vid00000002", "vid00000001", "shrt0000001"]
        stored = json.loads(saved_values[-1])
        assert stored[0]["video"]["id"] == "vid00000002"

    def test_move_out_of_range(self, saved_values):
        field = MultiVideoPickerField("", saved_values.append, LEGACY)

        with pytest.raises(IndexError):
            field.move_video(0, 1)

    def test_clear(self, saved_values, videos):
        field = MultiVideoPickerField("", saved_values.append, LEGACY)
        field.add_videos(videos)

        field.clear()

        assert saved_values[-1] == "[]"
        assert len(field) == 0

    def test_loads_existing_value_and_skips_entries_without_id(self, saved_values, videos):
        field_value = json.dumps(
            [
                {"video": videos[0], "selectedAt": "2024-03-05T10:00:00.000Z"},
                {"video": {"snippet": {"title": "no id"}}, "selectedAt": "2024-03-05T10:01Z"},
                "garbage",
            ]
        )

        field = MultiVideoPickerField(field_value, saved_values.append, LEGACY)

        assert field.video_ids == ["vid00000001"]
        assert field.videos[0].selected_at == "2024-03-05T10:00:00.000Z"

    def test_partial_legacy_entry_survives_add(self, saved_values, videos):
        partial = {key: value for key, value in videos[0].items() if key != "statistics"}
        field_value = json.dumps([{"video": partial, "selectedAt": "2024-03-05T10:00:00.000Z"}])
        field = MultiVideoPickerField(field_value, saved_values.append, LEGACY)

        field.add_videos([videos[2]])

        stored = json.loads(saved_values[-1])
        assert [entry["video"]["id"] for entry in stored] == ["vid00000001", "vid00000002"]
        assert stored[0]["video"] == partial
        assert field.videos[0].view_count == 0

    def test_keeps_legacy_entries_after_switching_format(self, saved_values, videos):
        field_value = json.dumps([{"video": videos[0], "selectedAt": "2024-03-05T10:00:00.000Z"}])
        field = MultiVideoPickerField(field_value, saved_values.append, SIMPLIFIED)

        field.add_videos([videos[2]])

        stored = json.loads(saved_values[-1])
        assert stored[0]["video"]["id"] == "vid00000001"
        assert stored[1]["id"] == "vid00000002"
        assert [video.id for video in field.videos] == ["vid00000001", "vid00000002"]


class TestPlaylistPickerField:
    def test_open_selector(self, saved_values, mock_wrapper):
        field = PlaylistPickerField("", saved_values.append, SIMPLIFIED, wrapper=mock_wrapper)

        modal = field.open_selector()

        assert isinstance(modal, PlaylistSelectorModal)
        assert modal.channel_id == CHANNEL_ID

    def test_open_selector_requires_api_key(self, saved_values):
        with pytest.raises(ValueError, match="YouTube API key is required"):
            PlaylistPickerField("", saved_values.append).open_selector()

    def test_set_playlist_legacy(self, saved_values, playlists):
        field = PlaylistPickerField("", saved_values.append, LEGACY)

        field.set_playlist(playlists[0])

        assert json.loads(saved_values[-1]) == playlists[0]
        assert field.playlist.video_count == 14

    def test_set_playlist_simplified(self, saved_values, playlists):
        field = PlaylistPickerField("", saved_values.append, SIMPLIFIED)

        field.set_playlist(playlists[1])

        stored = json.loads(saved_values[-1])
        assert stored["id"] == "PLbackyard0000000000000000000002"
        assert stored["videoCount"] == 6
        assert field.playlist.title == "Tool Reviews"

    def test_clear(self, saved_values, playlists):
        field = PlaylistPickerField(json.dumps(playlists[0]), saved_values.append, LEGACY)

        field.clear()

        assert saved_values == [""]
        assert field.playlist is None

    def test_malformed_stored_playlist(self, saved_values, playlists):
        broken = dict(playlists[0], contentDetails={})

        assert PlaylistPickerField(json.dumps(broken), saved_values.append).playlist is None

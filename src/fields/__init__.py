"""
Picker fields and their selector modals.
"""

from fields.modals import (
    MultiVideoSelectorModal,
    PlaylistSelectorModal,
    SelectorModal,
    VideoSelectorModal,
)
from fields.pickers import MultiVideoPickerField, PlaylistPickerField, VideoPickerField

__all__ = [
    "SelectorModal",
    "VideoSelectorModal",
    "MultiVideoSelectorModal",
    "PlaylistSelectorModal",
    "VideoPickerField",
    "MultiVideoPickerField",
    "PlaylistPickerField",
]

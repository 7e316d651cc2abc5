"""Domain models shared across the transcoder."""

from tvt.domain.enums import CodecKind, CodecSource, Preset
from tvt.domain.models import (
    AudioExtractionParameters,
    AudioStream,
    CustomParameters,
    MediaInfo,
    VideoStream,
)

__all__ = [
    "AudioExtractionParameters",
    "AudioStream",
    "CodecKind",
    "CodecSource",
    "CustomParameters",
    "MediaInfo",
    "Preset",
    "VideoStream",
]

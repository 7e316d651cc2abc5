"""Enumerations used by the domain model."""

from enum import Enum


class CodecKind(Enum):
    """Stream kind a codec name is validated against."""

    VIDEO = "video"
    AUDIO = "audio"


class Preset(Enum):
    """Speed/quality tier for conversion and audio extraction."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def names(cls) -> list[str]:
        return [p.value for p in cls]


class CodecSource(Enum):
    """Where an effective codec came from."""

    COPY = "copy"  # stream copy, no encoder
    CUSTOM = "custom"  # named by the caller
    DEFAULT = "default"  # container default

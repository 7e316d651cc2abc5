"""Security policy: the closed sets and limits every validator checks against.

A SecurityPolicy is a frozen value. Build it once (usually from config via
from_config) and pass it explicitly to each validator and to the command
builder; there is no module-level mutable policy.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tvt.config.models import SecurityConfig

# Characters that could end an argument, start a substitution or a new
# command if a value ever reached a shell.
PARAMETER_DENIED_CHARACTERS: frozenset[str] = frozenset(
    {
        ";",
        "&",
        "|",
        "`",
        "$",
        "(",
        ")",
        "{",
        "}",
        "[",
        "]",
        "<",
        ">",
        "\\",
        '"',
        "'",
        "\n",
        "\r",
        "\t",
    }
)

# Paths are checked against the same set; control characters are rejected
# separately.
PATH_DENIED_CHARACTERS: frozenset[str] = PARAMETER_DENIED_CHARACTERS

VIDEO_CODECS: frozenset[str] = frozenset(
    {"libx264", "libx265", "libvpx-vp9", "libvpx", "copy"}
)

AUDIO_CODECS: frozenset[str] = frozenset(
    {"aac", "libopus", "libmp3lame", "libvorbis", "flac", "pcm_s16le", "copy"}
)

# Output file extensions accepted for any operation.
FILE_FORMATS: frozenset[str] = frozenset(
    {"mp4", "avi", "mkv", "webm", "mov", "mp3", "wav", "aac", "flac", "ogg", "m4a"}
)

SAMPLE_RATES: frozenset[str] = frozenset(
    {"8000", "11025", "16000", "22050", "44100", "48000", "88200", "96000"}
)

CHANNEL_COUNTS: frozenset[str] = frozenset({"1", "2", "6", "8"})

DEFAULT_MAX_PATH_LENGTH = 255
DEFAULT_MAX_PARAMETER_LENGTH = 50


@dataclass(frozen=True)
class SecurityPolicy:
    """Whitelists and limits for validating untrusted input."""

    allowed_video_codecs: frozenset[str] = VIDEO_CODECS
    allowed_audio_codecs: frozenset[str] = AUDIO_CODECS
    allowed_formats: frozenset[str] = FILE_FORMATS
    allowed_sample_rates: frozenset[str] = SAMPLE_RATES
    allowed_channel_counts: frozenset[str] = CHANNEL_COUNTS
    denied_characters: frozenset[str] = PARAMETER_DENIED_CHARACTERS
    path_denied_characters: frozenset[str] = PATH_DENIED_CHARACTERS
    max_path_length: int = DEFAULT_MAX_PATH_LENGTH
    max_parameter_length: int = DEFAULT_MAX_PARAMETER_LENGTH
    # Resolution and frame-rate bounds (8K, 120 fps)
    max_width: int = 7680
    max_height: int = 4320
    max_framerate: float = 120.0

    def __post_init__(self) -> None:
        if self.max_path_length < 1:
            raise ValueError("max_path_length must be positive")
        if self.max_parameter_length < 1:
            raise ValueError("max_parameter_length must be positive")

    @classmethod
    def from_config(cls, config: SecurityConfig) -> SecurityPolicy:
        """Build a policy with the numeric limits taken from configuration.

        Whitelists are not configurable.
        """
        return replace(
            DEFAULT_POLICY,
            max_path_length=config.max_path_length,
            max_parameter_length=config.max_parameter_length,
        )


DEFAULT_POLICY = SecurityPolicy()

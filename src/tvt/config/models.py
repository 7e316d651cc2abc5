"""Configuration data models.

Each section of the TOML config file maps to one dataclass. Values are
checked in __post_init__ so an invalid file fails at load time rather than
mid-operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from tvt.domain.enums import Preset

VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
VALID_LOG_FORMATS = frozenset({"text", "json"})


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass
class LoggingConfig:
    """Log level, destination, format and file rotation."""

    level: str = "warning"
    file: Path | None = None  # stderr when unset
    format: str = "text"  # or "json"
    include_stderr: bool = False  # stderr as well as the file
    max_bytes: int = 10_485_760
    backup_count: int = 5

    def __post_init__(self) -> None:
        if self.level.lower() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.lower() not in VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(VALID_LOG_FORMATS)}, "
                f"got {self.format}"
            )
        if self.max_bytes < 0 or self.backup_count < 0:
            raise ValueError("max_bytes and backup_count must not be negative")


@dataclass
class TranscodeConfig:
    """Defaults for conversion and extraction."""

    default_preset: str = Preset.MEDIUM.value
    default_audio_quality: str = Preset.MEDIUM.value

    # Deadline for a single ffmpeg run in seconds (None = no limit)
    timeout_seconds: float | None = None

    # Seconds between ffmpeg stats lines when tracking progress
    stats_period: float = 0.2

    probe_timeout_seconds: float = 60.0

    def __post_init__(self) -> None:
        for name in ("default_preset", "default_audio_quality"):
            value = getattr(self, name)
            if value not in Preset.names():
                raise ValueError(
                    f"{name} must be one of {Preset.names()}, got {value}"
                )
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.stats_period <= 0:
            raise ValueError("stats_period must be positive")
        if self.probe_timeout_seconds <= 0:
            raise ValueError("probe_timeout_seconds must be positive")


@dataclass
class SecurityConfig:
    """Overrides for the numeric validation limits.

    The codec and format whitelists are fixed and cannot be configured.
    """

    max_path_length: int = 255
    max_parameter_length: int = 50

    def __post_init__(self) -> None:
        if self.max_path_length < 1 or self.max_parameter_length < 1:
            raise ValueError("length limits must be positive")


@dataclass
class TranscoderConfig:
    """Complete configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    transcode: TranscodeConfig = field(default_factory=TranscodeConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)

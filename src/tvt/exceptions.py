"""Exception hierarchy for the transcoder.

Every failure surfaced by an operation derives from TranscoderError so the
CLI can map it to an exit code in one place:

- ValidationError: an untrusted value failed a whitelist or grammar check.
- ProbeError: ffprobe could not be run or its report could not be parsed.
- BuildError: a value failed the defensive re-check inside the builder.
- ExecutionError: ffmpeg could not be started, failed, or was stopped.
- ConfigError: the configuration file or environment is invalid.
"""

from __future__ import annotations

from enum import Enum


class ValidationReason(Enum):
    """Why a value was rejected by a validator."""

    TOO_LONG = "too_long"
    INVALID_CHARACTER = "invalid_character"
    NOT_ALLOWED = "not_allowed"
    INVALID_FORMAT = "invalid_format"
    OUT_OF_RANGE = "out_of_range"
    TRAVERSAL = "traversal"


class ProbeFailure(Enum):
    """Why media analysis failed."""

    NOT_FOUND = "not_found"
    PROBER_MISSING = "prober_missing"
    NON_ZERO_EXIT = "non_zero_exit"
    UNPARSEABLE = "unparseable"
    TIMED_OUT = "timed_out"


class TranscoderError(Exception):
    """Base class for all transcoder errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(TranscoderError):
    """An untrusted value was rejected before any process was spawned."""

    def __init__(
        self,
        message: str,
        reason: ValidationReason,
        field: str | None = None,
    ) -> None:
        self.reason = reason
        self.field = field
        super().__init__(message)

    def with_field(self, field: str) -> ValidationError:
        """Return a copy of this error attributed to a named field."""
        return ValidationError(f"invalid {field}: {self.message}", self.reason, field)


class ProbeError(TranscoderError):
    """Media analysis failed; no partial MediaInfo is ever returned."""

    def __init__(self, message: str, reason: ProbeFailure) -> None:
        self.reason = reason
        super().__init__(message)


class BuildError(TranscoderError):
    """A value failed the command builder's defensive re-validation."""


class ExecutionError(TranscoderError):
    """The encoder could not be started, exited non-zero, or was stopped."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        diagnostics: list[str] | None = None,
    ) -> None:
        self.returncode = returncode
        self.diagnostics = diagnostics or []
        super().__init__(message)


class ToolNotAvailableError(TranscoderError):
    """A required external program could not be located."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(
            f"{tool} is not installed or not in PATH. Install ffmpeg, or set "
            f"TVT_{tool.upper()}_PATH / [tools] {tool} in the config file."
        )


class NoAudioStreamError(TranscoderError):
    """Audio extraction was requested from a file without audio."""


class ConfigError(TranscoderError):
    """The configuration file or an override holds an invalid value."""

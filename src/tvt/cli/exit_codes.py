"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (parameters, paths, config)
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
    50-59: Analysis errors
"""

from enum import IntEnum

from tvt.exceptions import (
    BuildError,
    ConfigError,
    ExecutionError,
    NoAudioStreamError,
    ProbeError,
    ProbeFailure,
    ToolNotAvailableError,
    TranscoderError,
    ValidationError,
)


class ExitCode(IntEnum):
    """Exit codes for tvt commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2

    # Validation errors (10-19)
    VALIDATION_ERROR = 10
    CONFIG_ERROR = 11

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20
    OUTPUT_EXISTS = 21
    NO_AUDIO_STREAM = 22

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    OPERATION_FAILED = 40
    OPERATION_STOPPED = 41
    BUILD_ERROR = 42

    # Analysis errors (50-59)
    ANALYSIS_ERROR = 50
    PARSE_ERROR = 51


_PROBE_EXIT_CODES = {
    ProbeFailure.NOT_FOUND: ExitCode.TARGET_NOT_FOUND,
    ProbeFailure.PROBER_MISSING: ExitCode.TOOL_NOT_AVAILABLE,
    ProbeFailure.UNPARSEABLE: ExitCode.PARSE_ERROR,
    ProbeFailure.NON_ZERO_EXIT: ExitCode.ANALYSIS_ERROR,
    ProbeFailure.TIMED_OUT: ExitCode.ANALYSIS_ERROR,
}


def exit_code_for(error: TranscoderError) -> ExitCode:
    """Map an operation error to its process exit code."""
    if isinstance(error, ValidationError):
        return ExitCode.VALIDATION_ERROR
    if isinstance(error, ConfigError):
        return ExitCode.CONFIG_ERROR
    if isinstance(error, ProbeError):
        return _PROBE_EXIT_CODES[error.reason]
    if isinstance(error, NoAudioStreamError):
        return ExitCode.NO_AUDIO_STREAM
    if isinstance(error, ToolNotAvailableError):
        return ExitCode.TOOL_NOT_AVAILABLE
    if isinstance(error, BuildError):
        return ExitCode.BUILD_ERROR
    if isinstance(error, ExecutionError):
        if error.returncode == -1:
            return ExitCode.OPERATION_STOPPED
        if isinstance(error.__cause__, ToolNotAvailableError):
            return ExitCode.TOOL_NOT_AVAILABLE
        return ExitCode.OPERATION_FAILED
    return ExitCode.GENERAL_ERROR

"""Validators for untrusted transcoding parameters and file paths.

Every check is a pure function of its input and the SecurityPolicy it is
given. A check returns None when the value is acceptable and raises
ValidationError (with a ValidationReason) otherwise. Checks never touch the
filesystem and never spawn processes.
"""

from __future__ import annotations

import os
import posixpath
import re
from pathlib import PurePath

from tvt.domain.enums import CodecKind, Preset
from tvt.domain.models import AudioExtractionParameters, CustomParameters
from tvt.exceptions import ValidationError, ValidationReason
from tvt.security.policy import SecurityPolicy

_BITRATE_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?[kKmM]?")
_RESOLUTION_PATTERN = re.compile(r"([0-9]+)x([0-9]+)")
_FRAMERATE_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


def _check_characters(value: str, denied: frozenset[str]) -> None:
    for char in value:
        if char in denied:
            raise ValidationError(
                f"contains forbidden character {char!r}",
                ValidationReason.INVALID_CHARACTER,
            )


def _check_length(value: str, limit: int, what: str) -> None:
    if len(value) > limit:
        raise ValidationError(
            f"{what} exceeds {limit} characters", ValidationReason.TOO_LONG
        )


def validate_codec(policy: SecurityPolicy, value: str, kind: CodecKind) -> None:
    """Check a codec name against the whitelist for its stream kind.

    Matching is exact and case-sensitive; "LIBX264" is not "libx264".

    Raises:
        ValidationError: TOO_LONG, INVALID_CHARACTER or NOT_ALLOWED.
    """
    _check_length(value, policy.max_parameter_length, "codec")
    _check_characters(value, policy.denied_characters)

    allowed = (
        policy.allowed_video_codecs
        if kind is CodecKind.VIDEO
        else policy.allowed_audio_codecs
    )
    if value not in allowed:
        raise ValidationError(
            f"{kind.value} codec {value!r} is not allowed "
            f"(allowed: {', '.join(sorted(allowed))})",
            ValidationReason.NOT_ALLOWED,
        )


def validate_bitrate(policy: SecurityPolicy, value: str) -> None:
    """Check a bitrate such as "2M", "128k" or "1.5M".

    The empty string is accepted and means "unspecified".
    """
    if not value:
        return
    _check_length(value, policy.max_parameter_length, "bitrate")
    _check_characters(value, policy.denied_characters)
    if not _BITRATE_PATTERN.fullmatch(value):
        raise ValidationError(
            f"bitrate {value!r} must be a number with optional k/M suffix",
            ValidationReason.INVALID_FORMAT,
        )


def validate_resolution(policy: SecurityPolicy, value: str) -> None:
    """Check a WIDTHxHEIGHT resolution within the policy's bounds."""
    if not value:
        return
    _check_length(value, policy.max_parameter_length, "resolution")
    _check_characters(value, policy.denied_characters)

    match = _RESOLUTION_PATTERN.fullmatch(value)
    if not match:
        raise ValidationError(
            f"resolution {value!r} must look like 1920x1080",
            ValidationReason.INVALID_FORMAT,
        )
    width, height = int(match.group(1)), int(match.group(2))
    if not 1 <= width <= policy.max_width:
        raise ValidationError(
            f"width {width} out of range 1-{policy.max_width}",
            ValidationReason.OUT_OF_RANGE,
        )
    if not 1 <= height <= policy.max_height:
        raise ValidationError(
            f"height {height} out of range 1-{policy.max_height}",
            ValidationReason.OUT_OF_RANGE,
        )


def validate_framerate(policy: SecurityPolicy, value: str) -> None:
    """Check a frame rate such as "30" or "29.97"; must be in (0, max]."""
    if not value:
        return
    _check_length(value, policy.max_parameter_length, "framerate")
    _check_characters(value, policy.denied_characters)
    if not _FRAMERATE_PATTERN.fullmatch(value):
        raise ValidationError(
            f"framerate {value!r} must be a positive number",
            ValidationReason.INVALID_FORMAT,
        )
    fps = float(value)
    if not 0 < fps <= policy.max_framerate:
        raise ValidationError(
            f"framerate {value} out of range (0, {policy.max_framerate:g}]",
            ValidationReason.OUT_OF_RANGE,
        )


def validate_sample_rate(policy: SecurityPolicy, value: str) -> None:
    if not value:
        return
    _check_length(value, policy.max_parameter_length, "sample rate")
    if value not in policy.allowed_sample_rates:
        raise ValidationError(
            f"sample rate {value!r} is not allowed",
            ValidationReason.NOT_ALLOWED,
        )


def validate_channels(policy: SecurityPolicy, value: str) -> None:
    if not value:
        return
    _check_length(value, policy.max_parameter_length, "channel count")
    if value not in policy.allowed_channel_counts:
        raise ValidationError(
            f"channel count {value!r} is not allowed",
            ValidationReason.NOT_ALLOWED,
        )


def validate_preset(value: str) -> Preset:
    """Resolve a preset name, raising ValidationError for unknown names."""
    try:
        return Preset(value)
    except ValueError:
        raise ValidationError(
            f"preset {value!r} is not one of {', '.join(Preset.names())}",
            ValidationReason.NOT_ALLOWED,
        ) from None


def validate_file_path(policy: SecurityPolicy, path: str | os.PathLike[str]) -> None:
    """Check that a path is short, clean and free of traversal.

    The path is normalized lexically before the ".." check, so "a/../b" is
    accepted while "../b" and "a/../../b" are not. A leading "-" is rejected
    so the path can never be read as an ffmpeg option.

    Raises:
        ValidationError: TOO_LONG, INVALID_CHARACTER, INVALID_FORMAT or
            TRAVERSAL.
    """
    value = os.fspath(path)
    if not value:
        raise ValidationError("file path is empty", ValidationReason.INVALID_FORMAT)
    _check_length(value, policy.max_path_length, "file path")

    for char in value:
        if ord(char) < 0x20 or ord(char) == 0x7F:
            raise ValidationError(
                "file path contains a control character",
                ValidationReason.INVALID_CHARACTER,
            )
    _check_characters(value, policy.path_denied_characters)

    if value.startswith("-"):
        raise ValidationError(
            "file path must not start with '-'",
            ValidationReason.INVALID_CHARACTER,
        )

    normalized = posixpath.normpath(value.replace(os.sep, "/"))
    if ".." in normalized.split("/"):
        raise ValidationError(
            f"file path {value!r} escapes its directory",
            ValidationReason.TRAVERSAL,
        )


def validate_file_format(policy: SecurityPolicy, path: str | os.PathLike[str]) -> None:
    """Check that a file's extension is an allowed container or audio format."""
    suffix = PurePath(os.fspath(path)).suffix.lstrip(".").lower()
    if not suffix:
        raise ValidationError(
            f"{os.fspath(path)!r} has no file extension",
            ValidationReason.INVALID_FORMAT,
        )
    if suffix not in policy.allowed_formats:
        raise ValidationError(
            f"file format {suffix!r} is not allowed "
            f"(allowed: {', '.join(sorted(policy.allowed_formats))})",
            ValidationReason.NOT_ALLOWED,
        )


def validate_custom_parameters(
    policy: SecurityPolicy, params: CustomParameters
) -> None:
    """Validate every specified field of a CustomParameters independently.

    The first failing field is reported with its name attached.
    """
    checks = {
        "video_codec": lambda v: validate_codec(policy, v, CodecKind.VIDEO),
        "audio_codec": lambda v: validate_codec(policy, v, CodecKind.AUDIO),
        "video_bitrate": lambda v: validate_bitrate(policy, v),
        "audio_bitrate": lambda v: validate_bitrate(policy, v),
        "resolution": lambda v: validate_resolution(policy, v),
        "framerate": lambda v: validate_framerate(policy, v),
    }
    for name, value in params.specified().items():
        try:
            checks[name](value)
        except ValidationError as e:
            raise e.with_field(name.replace("_", " ")) from None


def validate_extraction_parameters(
    policy: SecurityPolicy, params: AudioExtractionParameters
) -> None:
    """Validate the optional overrides of an audio extraction request."""
    checks = {
        "codec": lambda v: validate_codec(policy, v, CodecKind.AUDIO),
        "bitrate": lambda v: validate_bitrate(policy, v),
        "sample_rate": lambda v: validate_sample_rate(policy, v),
        "channels": lambda v: validate_channels(policy, v),
    }
    for name in checks:
        value = getattr(params, name)
        if not value:
            continue
        try:
            checks[name](value)
        except ValidationError as e:
            raise e.with_field(name.replace("_", " ")) from None

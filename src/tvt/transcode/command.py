"""FFmpeg argument construction.

Builds ordered argument vectors (never shell strings) for conversion and
audio extraction. The ffmpeg binary itself is not part of the vector; the
executor prepends it. Every value is re-validated immediately before it is
appended, so a plan that bypassed upstream validation still cannot place an
unchecked string into the command.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from tvt.domain.enums import CodecKind
from tvt.exceptions import BuildError, ValidationError
from tvt.security.policy import SecurityPolicy
from tvt.security.validation import (
    validate_bitrate,
    validate_channels,
    validate_codec,
    validate_file_path,
    validate_framerate,
    validate_resolution,
    validate_sample_rate,
)
from tvt.transcode.types import ConvertPlan, ExtractPlan

logger = logging.getLogger(__name__)

_COMPRESSION_LEVEL_PATTERN = re.compile(r"[0-9]|1[0-2]")


def _checked(what: str, value: str, check: Callable[[str], None]) -> str:
    try:
        check(value)
    except ValidationError as e:
        logger.error("Refusing to build command: %s %r failed re-check", what, value)
        raise BuildError(f"{what} failed validation: {e.message}") from e
    return value


def _path(policy: SecurityPolicy, what: str, path: Path) -> str:
    return _checked(what, str(path), lambda v: validate_file_path(policy, v))


def build_convert_args(plan: ConvertPlan, policy: SecurityPolicy) -> list[str]:
    """Build ffmpeg arguments for a container conversion.

    Layout: -i IN, -c:v CODEC [-b:v RATE], -c:a CODEC [-b:a RATE],
    [-s WxH], [-r FPS], -y OUT. Bitrates are only emitted for streams that
    are re-encoded.

    Raises:
        BuildError: If any value fails its re-check.
    """
    args = ["-i", _path(policy, "input path", plan.input_path)]

    video_codec = _checked(
        "video codec",
        plan.video_codec,
        lambda v: validate_codec(policy, v, CodecKind.VIDEO),
    )
    args.extend(["-c:v", video_codec])
    if video_codec != "copy" and plan.video_bitrate:
        args.extend(
            [
                "-b:v",
                _checked(
                    "video bitrate",
                    plan.video_bitrate,
                    lambda v: validate_bitrate(policy, v),
                ),
            ]
        )

    audio_codec = _checked(
        "audio codec",
        plan.audio_codec,
        lambda v: validate_codec(policy, v, CodecKind.AUDIO),
    )
    args.extend(["-c:a", audio_codec])
    if audio_codec != "copy" and plan.audio_bitrate:
        args.extend(
            [
                "-b:a",
                _checked(
                    "audio bitrate",
                    plan.audio_bitrate,
                    lambda v: validate_bitrate(policy, v),
                ),
            ]
        )

    if plan.resolution:
        args.extend(
            [
                "-s",
                _checked(
                    "resolution",
                    plan.resolution,
                    lambda v: validate_resolution(policy, v),
                ),
            ]
        )
    if plan.framerate:
        args.extend(
            [
                "-r",
                _checked(
                    "framerate",
                    plan.framerate,
                    lambda v: validate_framerate(policy, v),
                ),
            ]
        )

    args.extend(["-y", _path(policy, "output path", plan.output_path)])
    logger.debug("Built conversion arguments: %s", args)
    return args


def _check_compression_level(value: str) -> None:
    if not _COMPRESSION_LEVEL_PATTERN.fullmatch(value):
        raise BuildError(f"compression level {value!r} must be 0-12")


def build_extract_args(plan: ExtractPlan, policy: SecurityPolicy) -> list[str]:
    """Build ffmpeg arguments for audio extraction.

    Layout: -i IN -vn -c:a CODEC [-b:a RATE] [-ar HZ] [-ac N]
    [-compression_level L] -y OUT.

    Raises:
        BuildError: If any value fails its re-check.
    """
    args = ["-i", _path(policy, "input path", plan.input_path), "-vn"]
    args.extend(
        [
            "-c:a",
            _checked(
                "audio codec",
                plan.codec,
                lambda v: validate_codec(policy, v, CodecKind.AUDIO),
            ),
        ]
    )
    if plan.bitrate:
        args.extend(
            [
                "-b:a",
                _checked(
                    "bitrate", plan.bitrate, lambda v: validate_bitrate(policy, v)
                ),
            ]
        )
    if plan.sample_rate:
        args.extend(
            [
                "-ar",
                _checked(
                    "sample rate",
                    plan.sample_rate,
                    lambda v: validate_sample_rate(policy, v),
                ),
            ]
        )
    if plan.channels:
        args.extend(
            [
                "-ac",
                _checked(
                    "channels", plan.channels, lambda v: validate_channels(policy, v)
                ),
            ]
        )
    if plan.compression_level:
        _check_compression_level(plan.compression_level)
        args.extend(["-compression_level", plan.compression_level])

    args.extend(["-y", _path(policy, "output path", plan.output_path)])
    logger.debug("Built extraction arguments: %s", args)
    return args

"""Codec selection for container conversion.

Decides between stream copy and re-encoding and resolves the effective
encoders. Everything here is a pure function of the probed MediaInfo and
the caller's already-validated parameters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from tvt.core.codecs import (
    PRESET_BITRATES,
    get_container_defaults,
    is_copy_compatible,
)
from tvt.domain.enums import CodecSource, Preset
from tvt.domain.models import CustomParameters, MediaInfo
from tvt.transcode.types import ConvertPlan

logger = logging.getLogger(__name__)

COPY = "copy"


class SelectionReason(Enum):
    """Why a particular codec selection was made."""

    CUSTOM_CODECS = "custom_codecs"
    CUSTOM_PARAMETERS = "custom_parameters"
    STREAM_COPY = "stream_copy"
    PRESET_REQUESTED = "preset_requested"
    MISSING_STREAMS = "missing_streams"
    INCOMPATIBLE_CODECS = "incompatible_codecs"


@dataclass(frozen=True)
class CodecSelection:
    """Effective encoders for a conversion."""

    video_codec: str
    audio_codec: str
    stream_copy: bool
    video_source: CodecSource
    audio_source: CodecSource
    reason: SelectionReason


def container_from_path(path: Path | str) -> str:
    """Lowercased extension of a path without the dot ("" if none)."""
    return Path(path).suffix.lstrip(".").lower()


def _copy_blocker(info: MediaInfo, container: str) -> SelectionReason | None:
    if not info.video_streams or not info.audio_streams:
        return SelectionReason.MISSING_STREAMS
    if not is_copy_compatible(
        info.video_streams[0].codec, info.audio_streams[0].codec, container
    ):
        return SelectionReason.INCOMPATIBLE_CODECS
    return None


def select_codecs(
    info: MediaInfo,
    container: str,
    params: CustomParameters,
    preset_explicit: bool = False,
) -> CodecSelection:
    """Choose the effective video and audio encoders.

    Rules, in order:
    1. Both codecs given: use them as-is, no stream copy.
    2. Any custom parameter given: fill missing codecs with the container
       defaults, no stream copy.
    3. Otherwise stream copy when the input has video and audio whose first
       streams fit the container and no preset was explicitly requested;
       else the container defaults.

    Args:
        info: Probed description of the input.
        container: Target container extension (e.g., "mp4").
        params: Validated custom parameters.
        preset_explicit: True if the caller chose the preset.

    Returns:
        CodecSelection with codec sources and the reason for the choice.
    """
    defaults = get_container_defaults(container)

    if params.video_codec and params.audio_codec:
        return CodecSelection(
            video_codec=params.video_codec,
            audio_codec=params.audio_codec,
            stream_copy=False,
            video_source=CodecSource.CUSTOM,
            audio_source=CodecSource.CUSTOM,
            reason=SelectionReason.CUSTOM_CODECS,
        )

    if params.is_set():
        return CodecSelection(
            video_codec=params.video_codec or defaults.video,
            audio_codec=params.audio_codec or defaults.audio,
            stream_copy=False,
            video_source=(
                CodecSource.CUSTOM if params.video_codec else CodecSource.DEFAULT
            ),
            audio_source=(
                CodecSource.CUSTOM if params.audio_codec else CodecSource.DEFAULT
            ),
            reason=SelectionReason.CUSTOM_PARAMETERS,
        )

    blocker = _copy_blocker(info, container)
    if blocker is None and not preset_explicit:
        logger.debug("Input codecs fit %s; using stream copy", container)
        return CodecSelection(
            video_codec=COPY,
            audio_codec=COPY,
            stream_copy=True,
            video_source=CodecSource.COPY,
            audio_source=CodecSource.COPY,
            reason=SelectionReason.STREAM_COPY,
        )

    reason = blocker or SelectionReason.PRESET_REQUESTED
    logger.debug("Re-encoding to %s (%s)", container, reason.value)
    return CodecSelection(
        video_codec=defaults.video,
        audio_codec=defaults.audio,
        stream_copy=False,
        video_source=CodecSource.DEFAULT,
        audio_source=CodecSource.DEFAULT,
        reason=reason,
    )


def resolve_bitrates(
    selection: CodecSelection, preset: Preset, params: CustomParameters
) -> tuple[str | None, str | None]:
    """Decide the video and audio bitrates to request.

    A custom bitrate always wins. Otherwise the preset tier's bitrate is
    used for a codec that came from the container default; custom codecs
    are used bare. Stream-copied streams never get a bitrate.

    Returns:
        (video_bitrate, audio_bitrate); None means no bitrate flag.
    """
    tier = PRESET_BITRATES[preset]

    def pick(
        codec: str, source: CodecSource, custom: str | None, preset_value: str
    ) -> str | None:
        if codec == COPY:
            return None
        if custom:
            return custom
        if source is CodecSource.DEFAULT:
            return preset_value
        return None

    return (
        pick(
            selection.video_codec,
            selection.video_source,
            params.video_bitrate,
            tier.video,
        ),
        pick(
            selection.audio_codec,
            selection.audio_source,
            params.audio_bitrate,
            tier.audio,
        ),
    )


def plan_conversion(
    input_path: Path,
    output_path: Path,
    info: MediaInfo,
    params: CustomParameters,
    preset: Preset,
    preset_explicit: bool = False,
) -> tuple[CodecSelection, ConvertPlan]:
    """Combine codec selection and bitrate resolution into a ConvertPlan."""
    selection = select_codecs(
        info, container_from_path(output_path), params, preset_explicit
    )
    video_bitrate, audio_bitrate = resolve_bitrates(selection, preset, params)
    plan = ConvertPlan(
        input_path=input_path,
        output_path=output_path,
        video_codec=selection.video_codec,
        audio_codec=selection.audio_codec,
        video_bitrate=video_bitrate,
        audio_bitrate=audio_bitrate,
        resolution=params.resolution or None,
        framerate=params.framerate or None,
    )
    return selection, plan

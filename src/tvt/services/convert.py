"""Container conversion operation.

Validate -> probe -> select codecs -> build arguments -> run ffmpeg.
Nothing is spawned until every caller-supplied value has been validated.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from tvt.core.codecs import VIDEO_CONTAINERS
from tvt.domain.enums import Preset
from tvt.domain.models import CustomParameters, MediaInfo
from tvt.exceptions import ValidationError
from tvt.executor.progress import ProgressRenderer
from tvt.executor.runner import FFmpegRunner, RunMode, RunResult
from tvt.introspector.interface import MediaProbe
from tvt.logging.context import operation_context
from tvt.security.policy import SecurityPolicy
from tvt.security.validation import validate_custom_parameters
from tvt.services.common import validate_io_paths
from tvt.tools.ffmpeg_progress import ProgressSnapshot
from tvt.transcode.command import build_convert_args
from tvt.transcode.decisions import CodecSelection, plan_conversion
from tvt.transcode.types import ConvertPlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertRequest:
    """A caller's conversion request; every string in it is untrusted."""

    input_path: Path
    output_path: Path
    preset: Preset = Preset.MEDIUM
    preset_explicit: bool = False
    params: CustomParameters = field(default_factory=CustomParameters)


@dataclass(frozen=True)
class ConvertResult:
    media_info: MediaInfo
    selection: CodecSelection
    plan: ConvertPlan
    args: list[str]
    run: RunResult | None = None  # None for a dry run


def prepare_conversion(
    request: ConvertRequest, policy: SecurityPolicy, probe: MediaProbe
) -> tuple[MediaInfo, CodecSelection, ConvertPlan, list[str]]:
    """Validate, probe and build; everything short of running ffmpeg."""
    try:
        validate_io_paths(
            policy, request.input_path, request.output_path, VIDEO_CONTAINERS
        )
        validate_custom_parameters(policy, request.params)
    except ValidationError as e:
        logger.warning("Rejected conversion request: %s", e)
        raise

    info = probe.analyze_media(request.input_path)
    selection, plan = plan_conversion(
        request.input_path,
        request.output_path,
        info,
        request.params,
        request.preset,
        request.preset_explicit,
    )
    args = build_convert_args(plan, policy)
    logger.info(
        "Converting %s -> %s (video=%s, audio=%s, copy=%s)",
        request.input_path,
        request.output_path,
        selection.video_codec,
        selection.audio_codec,
        selection.stream_copy,
    )
    return info, selection, plan, args


def convert_video(
    request: ConvertRequest,
    *,
    policy: SecurityPolicy,
    probe: MediaProbe,
    runner: FFmpegRunner,
    mode: RunMode = RunMode.TRACKED,
    renderer: ProgressRenderer | None = None,
    on_progress: Callable[[ProgressSnapshot], None] | None = None,
    cancel: threading.Event | None = None,
    dry_run: bool = False,
) -> ConvertResult:
    """Convert a media file to another container.

    Args:
        request: Paths, preset and custom parameters.
        policy: Validation policy.
        probe: Media analysis implementation.
        runner: Executes the built ffmpeg command.
        mode: TRACKED (progress) or PASS_THROUGH (raw ffmpeg output).
        renderer: Progress bar for tracked mode.
        on_progress: Progress callback for tracked mode.
        cancel: Event that stops the run when set.
        dry_run: Build the command without running it.

    Returns:
        ConvertResult with the selection and argument vector.

    Raises:
        ValidationError: A path or parameter was rejected.
        ProbeError: The input could not be analyzed.
        BuildError: A value failed the builder's re-check.
        ExecutionError: ffmpeg failed, timed out or was cancelled.
    """
    with operation_context("convert", request.input_path):
        info, selection, plan, args = prepare_conversion(request, policy, probe)
        if dry_run:
            return ConvertResult(info, selection, plan, args)

        run = runner.run(
            args,
            mode,
            total_seconds=info.duration_seconds,
            renderer=renderer,
            on_progress=on_progress,
            cancel=cancel,
        )
        logger.info("Conversion finished in %.1fs", run.elapsed_seconds)
        return ConvertResult(info, selection, plan, args, run)

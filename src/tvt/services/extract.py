"""Audio extraction operation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from tvt.core.codecs import AUDIO_FORMATS
from tvt.domain.enums import Preset
from tvt.domain.models import AudioExtractionParameters, MediaInfo
from tvt.exceptions import NoAudioStreamError, ValidationError
from tvt.executor.progress import ProgressRenderer
from tvt.executor.runner import FFmpegRunner, RunMode, RunResult
from tvt.introspector.interface import MediaProbe
from tvt.logging.context import operation_context
from tvt.security.policy import SecurityPolicy
from tvt.security.validation import validate_extraction_parameters
from tvt.services.common import validate_io_paths
from tvt.tools.ffmpeg_progress import ProgressSnapshot
from tvt.transcode.audio import plan_extraction
from tvt.transcode.command import build_extract_args
from tvt.transcode.types import ExtractPlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractRequest:
    input_path: Path
    output_path: Path
    quality: Preset = Preset.MEDIUM
    params: AudioExtractionParameters = field(
        default_factory=AudioExtractionParameters
    )


@dataclass(frozen=True)
class ExtractResult:
    media_info: MediaInfo
    plan: ExtractPlan
    args: list[str]
    run: RunResult | None = None


def prepare_extraction(
    request: ExtractRequest, policy: SecurityPolicy, probe: MediaProbe
) -> tuple[MediaInfo, ExtractPlan, list[str]]:
    try:
        validate_io_paths(
            policy, request.input_path, request.output_path, AUDIO_FORMATS
        )
        validate_extraction_parameters(policy, request.params)
    except ValidationError as e:
        logger.warning("Rejected extraction request: %s", e)
        raise

    info = probe.analyze_media(request.input_path)
    if not info.has_audio:
        raise NoAudioStreamError(
            f"No audio streams found in input file: {request.input_path}"
        )

    plan = plan_extraction(
        request.input_path, request.output_path, request.params, request.quality
    )
    args = build_extract_args(plan, policy)
    logger.info(
        "Extracting audio %s -> %s (codec=%s, bitrate=%s)",
        request.input_path,
        request.output_path,
        plan.codec,
        plan.bitrate or "n/a",
    )
    return info, plan, args


def extract_audio(
    request: ExtractRequest,
    *,
    policy: SecurityPolicy,
    probe: MediaProbe,
    runner: FFmpegRunner,
    mode: RunMode = RunMode.TRACKED,
    renderer: ProgressRenderer | None = None,
    on_progress: Callable[[ProgressSnapshot], None] | None = None,
    cancel: threading.Event | None = None,
    dry_run: bool = False,
) -> ExtractResult:
    """Extract the audio of a media file into an audio-only file.

    Raises:
        ValidationError: A path or parameter was rejected.
        ProbeError: The input could not be analyzed.
        NoAudioStreamError: The input has no audio stream.
        BuildError: A value failed the builder's re-check.
        ExecutionError: ffmpeg failed, timed out or was cancelled.
    """
    with operation_context("extract", request.input_path):
        info, plan, args = prepare_extraction(request, policy, probe)
        if dry_run:
            return ExtractResult(info, plan, args)

        run = runner.run(
            args,
            mode,
            total_seconds=info.duration_seconds,
            renderer=renderer,
            on_progress=on_progress,
            cancel=cancel,
        )
        logger.info("Extraction finished in %.1fs", run.elapsed_seconds)
        return ExtractResult(info, plan, args, run)

"""Codec decisions and ffmpeg argument construction."""

from tvt.transcode.audio import plan_extraction, select_audio_codec
from tvt.transcode.command import build_convert_args, build_extract_args
from tvt.transcode.decisions import (
    CodecSelection,
    SelectionReason,
    plan_conversion,
    resolve_bitrates,
    select_codecs,
)
from tvt.transcode.types import ConvertPlan, ExtractPlan

__all__ = [
    "CodecSelection",
    "ConvertPlan",
    "ExtractPlan",
    "SelectionReason",
    "build_convert_args",
    "build_extract_args",
    "plan_conversion",
    "plan_extraction",
    "resolve_bitrates",
    "select_audio_codec",
    "select_codecs",
]

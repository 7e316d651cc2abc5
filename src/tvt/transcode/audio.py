"""Audio extraction decisions.

Chooses the encoder from the output extension (unless the caller named
one) and applies the quality tier.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tvt.core.codecs import (
    AUDIO_EXTENSION_CODECS,
    AUDIO_QUALITY_BITRATES,
    FLAC_COMPRESSION_LEVELS,
    LOSSLESS_AUDIO_CODECS,
)
from tvt.domain.enums import Preset
from tvt.domain.models import AudioExtractionParameters
from tvt.exceptions import ValidationError, ValidationReason
from tvt.transcode.types import ExtractPlan

logger = logging.getLogger(__name__)


def select_audio_codec(output_path: Path, custom_codec: str | None = None) -> str:
    """Return the encoder for an audio output file.

    Args:
        output_path: Target file; its extension picks the default encoder.
        custom_codec: Caller-chosen encoder, already validated.

    Raises:
        ValidationError: If no custom codec is given and the extension is
            not a supported audio format.
    """
    if custom_codec:
        return custom_codec
    ext = Path(output_path).suffix.lstrip(".").lower()
    try:
        return AUDIO_EXTENSION_CODECS[ext]
    except KeyError:
        raise ValidationError(
            f"unsupported audio output format: {ext or '(none)'}",
            ValidationReason.NOT_ALLOWED,
            field="output",
        ) from None


def plan_extraction(
    input_path: Path,
    output_path: Path,
    params: AudioExtractionParameters,
    quality: Preset = Preset.MEDIUM,
) -> ExtractPlan:
    """Resolve the encoder, bitrate and FLAC level for an extraction.

    Lossless encoders (flac, pcm_s16le) never get a bitrate; any requested
    bitrate is dropped for them.
    """
    codec = select_audio_codec(output_path, params.codec)

    bitrate: str | None = params.bitrate or AUDIO_QUALITY_BITRATES[quality]
    if codec in LOSSLESS_AUDIO_CODECS:
        if params.bitrate:
            logger.info(
                "Ignoring bitrate %s for lossless codec %s", params.bitrate, codec
            )
        bitrate = None

    return ExtractPlan(
        input_path=input_path,
        output_path=output_path,
        codec=codec,
        bitrate=bitrate,
        sample_rate=params.sample_rate or None,
        channels=params.channels or None,
        compression_level=(
            FLAC_COMPRESSION_LEVELS[quality] if codec == "flac" else None
        ),
    )

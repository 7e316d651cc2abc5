"""Pydantic models for the subset of ffprobe's JSON report we consume.

Unknown keys are ignored. Numeric fields are lenient: ffprobe reports most
numbers as strings and uses "N/A" when a value is unknown, both of which
become 0 here. The top-level "format" and "streams" keys are required.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _lenient_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    text = str(value).strip()
    try:
        parsed = int(text)
    except ValueError:
        try:
            parsed = int(float(text))
        except (ValueError, OverflowError):
            return 0
    return max(parsed, 0)


def _lenient_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        parsed = float(str(value))
    except ValueError:
        return 0.0
    if not math.isfinite(parsed) or parsed < 0:
        return 0.0
    return parsed


class FFprobeTags(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    language: str = ""


class FFprobeStream(BaseModel):
    """One entry of the report's "streams" array."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    index: int = 0
    codec_type: str = ""
    codec_name: str = ""
    width: int = 0
    height: int = 0
    r_frame_rate: str = ""
    pix_fmt: str = ""
    bit_rate: int = 0
    sample_rate: int = 0
    channels: int = 0
    tags: FFprobeTags = FFprobeTags()

    @field_validator(
        "index",
        "width",
        "height",
        "bit_rate",
        "sample_rate",
        "channels",
        mode="before",
    )
    @classmethod
    def coerce_int(cls, v: Any) -> int:
        return _lenient_int(v)

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v: Any) -> Any:
        return v if v is not None else {}


class FFprobeFormat(BaseModel):
    """The report's "format" object."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    format_name: str = ""
    duration: float = 0.0
    size: int = 0
    bit_rate: int = 0

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, v: Any) -> float:
        return _lenient_float(v)

    @field_validator("size", "bit_rate", mode="before")
    @classmethod
    def coerce_int(cls, v: Any) -> int:
        return _lenient_int(v)


class FFprobeReport(BaseModel):
    """Top-level ffprobe output for -show_format -show_streams."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    format: FFprobeFormat
    streams: list[FFprobeStream]

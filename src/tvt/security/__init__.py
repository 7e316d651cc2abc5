"""Input validation for every untrusted value that can reach ffmpeg.

- SecurityPolicy: immutable whitelists and limits, passed into each check
- validate_*: pure checks that raise ValidationError on rejection
"""

from tvt.security.policy import (
    DEFAULT_POLICY,
    PARAMETER_DENIED_CHARACTERS,
    PATH_DENIED_CHARACTERS,
    SecurityPolicy,
)
from tvt.security.validation import (
    validate_bitrate,
    validate_channels,
    validate_codec,
    validate_custom_parameters,
    validate_extraction_parameters,
    validate_file_format,
    validate_file_path,
    validate_framerate,
    validate_preset,
    validate_resolution,
    validate_sample_rate,
)

__all__ = [
    "DEFAULT_POLICY",
    "PARAMETER_DENIED_CHARACTERS",
    "PATH_DENIED_CHARACTERS",
    "SecurityPolicy",
    "validate_bitrate",
    "validate_channels",
    "validate_codec",
    "validate_custom_parameters",
    "validate_extraction_parameters",
    "validate_file_format",
    "validate_file_path",
    "validate_framerate",
    "validate_preset",
    "validate_resolution",
    "validate_sample_rate",
]

"""Validation shared by the operations."""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

from tvt.exceptions import ValidationError, ValidationReason
from tvt.security.policy import SecurityPolicy
from tvt.security.validation import validate_file_format, validate_file_path

logger = logging.getLogger(__name__)


def validate_input_path(policy: SecurityPolicy, path: Path) -> None:
    try:
        validate_file_path(policy, path)
    except ValidationError as e:
        raise e.with_field("input path") from None


def validate_io_paths(
    policy: SecurityPolicy,
    input_path: Path,
    output_path: Path,
    output_formats: Collection[str],
) -> None:
    """Validate an input/output pair for an operation.

    Both paths must pass the path check, the output extension must be an
    allowed format and one the operation can produce, and the output must
    not be the input file.

    Raises:
        ValidationError: With field "input path" or "output path".
    """
    validate_input_path(policy, input_path)
    try:
        validate_file_path(policy, output_path)
        validate_file_format(policy, output_path)
    except ValidationError as e:
        raise e.with_field("output path") from None

    ext = output_path.suffix.lstrip(".").lower()
    if ext not in output_formats:
        raise ValidationError(
            f"invalid output path: this operation cannot produce {ext!r} files "
            f"(supported: {', '.join(sorted(output_formats))})",
            ValidationReason.NOT_ALLOWED,
            field="output path",
        )

    if input_path.resolve() == output_path.resolve():
        raise ValidationError(
            "invalid output path: output must differ from the input file",
            ValidationReason.INVALID_FORMAT,
            field="output path",
        )

"""Media inspection operation."""

from __future__ import annotations

import logging
from pathlib import Path

from tvt.domain.models import MediaInfo
from tvt.exceptions import ValidationError
from tvt.introspector.interface import MediaProbe
from tvt.logging.context import operation_context
from tvt.security.policy import SecurityPolicy
from tvt.services.common import validate_input_path

logger = logging.getLogger(__name__)


def inspect_media(path: Path, policy: SecurityPolicy, probe: MediaProbe) -> MediaInfo:
    """Validate a path and describe the media file it names.

    Raises:
        ValidationError: If the path fails validation.
        ProbeError: If the file is missing or cannot be analyzed.
    """
    with operation_context("info", path):
        try:
            validate_input_path(policy, path)
        except ValidationError as e:
            logger.warning("Rejected input: %s", e)
            raise
        return probe.analyze_media(path)

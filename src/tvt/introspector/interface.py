"""MediaProbe interface for media metadata extraction."""

from pathlib import Path
from typing import Protocol

from tvt.domain.models import MediaInfo


class MediaProbe(Protocol):
    """Protocol for media analysis implementations.

    The services depend on this protocol rather than on ffprobe directly,
    so tests can supply a canned MediaInfo.
    """

    def analyze_media(self, path: Path) -> MediaInfo:
        """Describe a media file's container and streams.

        Args:
            path: Path to an existing media file.

        Returns:
            MediaInfo for the file.

        Raises:
            ProbeError: If the file is missing or cannot be analyzed.
        """
        ...

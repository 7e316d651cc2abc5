"""Locate ffmpeg and ffprobe and read their versions.

A configured path (from the config file or TVT_*_PATH) is preferred; PATH
is searched otherwise.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess  # nosec B404 - needed for TimeoutExpired
from dataclasses import dataclass
from pathlib import Path

from tvt.core.subprocess_utils import run_command
from tvt.exceptions import ToolNotAvailableError

logger = logging.getLogger(__name__)

# Timeout for "-version" calls
DETECTION_TIMEOUT = 10

SUPPORTED_TOOLS = ("ffmpeg", "ffprobe")

_VERSION_PATTERN = re.compile(r"^\S+\s+version\s+(\S+)", re.MULTILINE)


@dataclass(frozen=True)
class ToolInfo:
    """Detection result for one external tool."""

    name: str
    path: Path | None = None
    version: str | None = None

    @property
    def is_available(self) -> bool:
        return self.path is not None

    @property
    def version_tuple(self) -> tuple[int, ...] | None:
        return parse_version_string(self.version or "")


def parse_version_string(version_str: str) -> tuple[int, ...] | None:
    """Parse a version string into a comparable tuple.

    Handles:
    - "6.1.1" -> (6, 1, 1)
    - "n6.1.1" -> (6, 1, 1)  (ffmpeg nightlies)
    - "6.1.1-0ubuntu1" -> (6, 1, 1)

    Returns:
        Tuple of version components, or None if parsing fails.
    """
    if not version_str:
        return None

    match = re.match(r"(\d+(?:\.\d+)*)", version_str.lstrip("nv"))
    if not match:
        return None
    return tuple(int(p) for p in match.group(1).split("."))


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)
    return None


def require_tool(name: str, configured_path: Path | None = None) -> Path:
    """Get path to a required tool.

    Raises:
        ToolNotAvailableError: If the tool cannot be found.
    """
    path = find_tool(name, configured_path)
    if path is None:
        raise ToolNotAvailableError(name)
    return path


def detect_tool(name: str, configured_path: Path | None = None) -> ToolInfo:
    """Find a tool and read its version banner.

    A tool that is found but fails to report a version is still returned as
    available, with version None.
    """
    path = find_tool(name, configured_path)
    if path is None:
        return ToolInfo(name=name)

    try:
        stdout, stderr, rc = run_command(
            [path, "-version"], timeout=DETECTION_TIMEOUT
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Could not run %s -version: %s", path, e)
        return ToolInfo(name=name, path=path)

    if rc != 0:
        logger.warning("%s -version exited with %d: %s", path, rc, stderr.strip())
        return ToolInfo(name=name, path=path)

    match = _VERSION_PATTERN.search(stdout)
    return ToolInfo(name=name, path=path, version=match.group(1) if match else None)

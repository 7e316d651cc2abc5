"""Short-lived external tool calls.

Probing and version checks run through run_command(); long-running encodes
go through tvt.executor, which streams diagnostics instead of capturing
them.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - ffprobe/ffmpeg are external programs
import time
from collections.abc import Sequence
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0


class CommandOutput(NamedTuple):
    """Captured result of a finished command; unpacks as (out, err, rc)."""

    stdout: str
    stderr: str
    returncode: int


def _summary(argv: list[str], limit: int = 3) -> str:
    head = " ".join(argv[:limit])
    return head + " ..." if len(argv) > limit else head


def run_command(
    args: Sequence[str | Path], timeout: float = DEFAULT_TIMEOUT
) -> CommandOutput:
    """Run a program with an argument vector and capture its output.

    No shell is involved and stdin is closed. Output is decoded as text with
    undecodable bytes replaced.

    Raises:
        subprocess.TimeoutExpired: The deadline passed; subprocess.run has
            already killed the child.
        OSError: The program could not be started.
    """
    argv = [str(arg) for arg in args]
    tool = Path(argv[0]).name if argv else "?"
    logger.debug("Running %s", " ".join(argv), extra={"tool": tool})

    started = time.monotonic()
    try:
        completed = subprocess.run(  # nosec B603 - argument vector, no shell
            argv,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "%s gave no answer within %ss: %s",
            tool,
            timeout,
            _summary(argv),
            extra={"tool": tool, "timeout_seconds": timeout},
        )
        raise

    output = CommandOutput(
        completed.stdout or "", completed.stderr or "", completed.returncode
    )
    logger.debug(
        "%s exited with %d",
        tool,
        output.returncode,
        extra={
            "tool": tool,
            "returncode": output.returncode,
            "elapsed_seconds": round(time.monotonic() - started, 3),
        },
    )
    return output

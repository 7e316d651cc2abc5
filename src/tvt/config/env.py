"""Typed access to TVT_* environment variables.

Tests hand EnvReader a plain mapping instead of touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "TVT_"


class EnvReader:
    """Read prefixed environment variables with conversion.

    Names are given without the prefix. Unset and empty variables read as
    None; a value that fails conversion is logged and also reads as None.

    Example:
        reader = EnvReader(env={"TVT_TIMEOUT": "600"})
        reader.number("TIMEOUT")  # 600.0
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX
    ) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ
        self._prefix = prefix

    def variable(self, name: str) -> str:
        """Full variable name for name ("TIMEOUT" -> "TVT_TIMEOUT")."""
        return f"{self._prefix}{name}"

    def text(self, name: str) -> str | None:
        value = self._env.get(self.variable(name), "").strip()
        return value or None

    def number(self, name: str) -> float | None:
        value = self.text(name)
        if value is None:
            return None
        try:
            return float(value)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a number", self.variable(name), value)
            return None

    def path(self, name: str, must_exist: bool = True) -> Path | None:
        """Read a path, expanding "~".

        With must_exist, a path that is not on disk is logged and ignored so
        that PATH lookup can take over.
        """
        value = self.text(name)
        if value is None:
            return None
        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Ignoring %s: %s does not exist", self.variable(name), value
            )
            return None
        return path

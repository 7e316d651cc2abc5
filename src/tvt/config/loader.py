"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (TVT_*)
3. Config file (~/.tvt/config.toml)
4. Default values

Environment variables:
- TVT_CONFIG_PATH: Path to config file (overrides default location)
- TVT_FFMPEG_PATH: Path to ffmpeg executable
- TVT_FFPROBE_PATH: Path to ffprobe executable
- TVT_LOG_LEVEL: debug, info, warning or error
- TVT_LOG_FILE: Path to a log file
- TVT_TIMEOUT: Deadline in seconds for a single ffmpeg run
- TVT_DEFAULT_PRESET: low, medium or high
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from tvt.config.env import EnvReader
from tvt.config.models import (
    LoggingConfig,
    SecurityConfig,
    ToolPathsConfig,
    TranscodeConfig,
    TranscoderConfig,
)
from tvt.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".tvt"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# Known keys per section; anything else in the file is ignored with a warning
_SECTIONS: dict[str, type] = {
    "tools": ToolPathsConfig,
    "logging": LoggingConfig,
    "transcode": TranscodeConfig,
    "security": SecurityConfig,
}
_PATH_KEYS = {("tools", "ffmpeg"), ("tools", "ffprobe"), ("logging", "file")}

# Cache for loaded config files (path -> (parsed dict, mtime))
_config_cache: dict[Path, tuple[dict[str, Any], float]] = {}
_config_cache_lock = threading.Lock()


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Config file location, overridable with TVT_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    env_path = reader.path("CONFIG_PATH", must_exist=False)
    return env_path if env_path is not None else DEFAULT_CONFIG_FILE


def load_config_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Results are cached and reloaded when the file's mtime changes. Use
    clear_config_cache() to force a reload.

    Args:
        path: Config file path.
        strict: If True, raise ConfigError when the file cannot be parsed.
            If False, log a warning and use defaults.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.
    """
    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        return {}

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        try:
            with path.open("rb") as f:
                result = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            if strict:
                raise ConfigError(f"Cannot read config file {path}: {e}") from e
            logger.warning("Ignoring unreadable config file %s: %s", path, e)
            result = {}

        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def _file_values(data: dict[str, Any]) -> dict[str, dict[str, Any]]:
    values: dict[str, dict[str, Any]] = {name: {} for name in _SECTIONS}
    for section, content in data.items():
        if section not in _SECTIONS:
            logger.warning("Unknown config section [%s] ignored", section)
            continue
        if not isinstance(content, dict):
            logger.warning("Config section [%s] is not a table; ignored", section)
            continue
        known = _SECTIONS[section].__dataclass_fields__
        for key, value in content.items():
            if key not in known:
                logger.warning("Unknown config key %s.%s ignored", section, key)
                continue
            if (section, key) in _PATH_KEYS and isinstance(value, str):
                value = Path(value).expanduser()
            values[section][key] = value
    return values


def _env_values(reader: EnvReader) -> dict[str, dict[str, Any]]:
    candidates = {
        "tools": {
            "ffmpeg": reader.path("FFMPEG_PATH"),
            "ffprobe": reader.path("FFPROBE_PATH"),
        },
        "logging": {
            "level": reader.text("LOG_LEVEL"),
            "file": reader.path("LOG_FILE", must_exist=False),
        },
        "transcode": {
            "timeout_seconds": reader.number("TIMEOUT"),
            "default_preset": reader.text("DEFAULT_PRESET"),
        },
    }
    return {
        section: {k: v for k, v in entries.items() if v is not None}
        for section, entries in candidates.items()
    }


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    timeout_seconds: float | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> TranscoderConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides TVT_CONFIG_PATH).
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.
        log_level: CLI override for the log level.
        log_file: CLI override for the log file.
        log_format: CLI override for the log format ("text" or "json").
        timeout_seconds: CLI override for the ffmpeg deadline.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, an unparseable config file raises ConfigError.

    Returns:
        TranscoderConfig with merged configuration.

    Raises:
        ConfigError: If a merged value is invalid (bad level, preset, ...).
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)

    merged = _file_values(load_config_file(path, strict=strict))
    for section, entries in _env_values(reader).items():
        merged[section].update(entries)

    cli = {
        "tools": {"ffmpeg": ffmpeg_path, "ffprobe": ffprobe_path},
        "logging": {"level": log_level, "file": log_file, "format": log_format},
        "transcode": {"timeout_seconds": timeout_seconds},
    }
    for section, entries in cli.items():
        merged[section].update({k: v for k, v in entries.items() if v is not None})

    try:
        return TranscoderConfig(
            tools=ToolPathsConfig(**merged["tools"]),
            logging=LoggingConfig(**merged["logging"]),
            transcode=TranscodeConfig(**merged["transcode"]),
            security=SecurityConfig(**merged["security"]),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

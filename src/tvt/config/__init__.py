"""Configuration: defaults, TOML file, environment and CLI overrides."""

from tvt.config.env import EnvReader
from tvt.config.loader import (
    DEFAULT_CONFIG_FILE,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from tvt.config.models import (
    LoggingConfig,
    SecurityConfig,
    ToolPathsConfig,
    TranscodeConfig,
    TranscoderConfig,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "EnvReader",
    "LoggingConfig",
    "SecurityConfig",
    "ToolPathsConfig",
    "TranscodeConfig",
    "TranscoderConfig",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]

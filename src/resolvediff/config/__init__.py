"""
resolvediff.config - Configuration loading and defaults
"""

from resolvediff.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG
from resolvediff.config.loader import (
    ConfigError,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
]

"""
resolvediff.config.loader - Find, parse and merge .resolvediff.toml files.

Resolution order (later wins):
1. DEFAULT_CONFIG
2. .resolvediff.toml (explicit path, or found by walking up from cwd)
3. RESOLVEDIFF_<SECTION>_<KEY> environment variables
"""

from __future__ import annotations

import copy
import json
import os
import sys
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from resolvediff.config.defaults import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    ENV_PREFIX,
    OUTPUT_FORMATS,
)


class ConfigError(ValueError):
    """A configuration file could not be parsed."""


def parse_toml(text: str, source: str = "<string>") -> dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        return tomlkit.parse(text).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e


def find_config_file(start: Path | None = None) -> Path | None:
    """Search ``start`` and its parents for a config file.

    Args:
        start: Directory to start from (default: cwd).

    Returns:
        Path to the config file, or None if there is none.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(defaults: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``user`` over ``defaults`` without mutating either."""
    merged = copy.deepcopy(defaults)
    for key, value in user.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment value as JSON, boolean, integer or string."""
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.strip().startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    try:
        return int(value)
    except ValueError:
        return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply RESOLVEDIFF_<SECTION>_<KEY> variables to ``config`` in place.

    The first segment after the prefix names the section; the rest is
    the key, so RESOLVEDIFF_DIFF_MAX_DEPTH sets ``diff.max_depth``.
    """
    for env_name, raw in os.environ.items():
        if not env_name.startswith(ENV_PREFIX):
            continue
        section, _, key = env_name[len(ENV_PREFIX) :].lower().partition("_")
        if not section or not key:
            continue
        config.setdefault(section, {})[key] = _try_parse_env_value(raw)
    return config


def validate_config(config: dict[str, Any]) -> list[str]:
    """Return a list of problems with a merged configuration."""
    errors = []
    diff_cfg = config.get("diff", {})
    output_cfg = config.get("output", {})

    modified = diff_cfg.get("modified", [])
    if not isinstance(modified, list) or not all(isinstance(m, str) for m in modified):
        errors.append("diff.modified must be a list of package names")
    if not isinstance(diff_cfg.get("scheme", ""), str) or not diff_cfg.get("scheme"):
        errors.append("diff.scheme must be a non-empty string")
    max_depth = diff_cfg.get("max_depth", 0)
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        errors.append("diff.max_depth must be a non-negative integer")
    if output_cfg.get("format", "text") not in OUTPUT_FORMATS:
        errors.append(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, "
            f"got {output_cfg.get('format')!r}"
        )
    return errors


def load_config(path: Path) -> dict[str, Any]:
    """Load a config file and merge it over the defaults.

    Environment overrides are not applied; see get_config().

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    text = Path(path).read_text(encoding="utf-8")
    return merge_configs(DEFAULT_CONFIG, parse_toml(text, str(path)))


def get_config(
    config_path: Path | None = None,
    start_path: Path | None = None,
    quiet: bool = False,
) -> dict[str, Any]:
    """Build the effective configuration.

    Args:
        config_path: Explicit config file; skips discovery when given.
        start_path: Directory to start discovery from (default: cwd).
        quiet: Suppress the notice about which file was used.

    Returns:
        Merged configuration dict.

    Raises:
        ConfigError: If the file is invalid or the merged values are.
    """
    path = config_path or find_config_file(start_path)
    if path is not None:
        if not quiet:
            print(f"Using config: {path}", file=sys.stderr)
        config = load_config(path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    config = _apply_env_overrides(config)
    errors = validate_config(config)
    if errors:
        raise ConfigError("; ".join(errors))
    return config

"""
resolvediff.commands.config_cmd - Inspect the effective configuration.
"""

from __future__ import annotations

import argparse
import json
import sys

import tomlkit

from resolvediff.config import find_config_file, get_config


def run(args: argparse.Namespace) -> int:
    """Run the config command.

    Subcommands:
    - show: Print the merged configuration (TOML, or JSON with --json)
    - path: Print the config file location
    """
    action = getattr(args, "config_action", None)
    if action == "show":
        return cmd_show(args)
    elif action == "path":
        return cmd_path(args)
    else:
        print("Usage: resolvediff config <show|path>", file=sys.stderr)
        return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Print the effective configuration."""
    config = get_config(getattr(args, "config", None), quiet=True)
    if getattr(args, "json", False):
        print(json.dumps(config, indent=2))
    else:
        print(tomlkit.dumps(config), end="")
    return 0


def cmd_path(args: argparse.Namespace) -> int:
    """Print where the configuration is read from."""
    path = getattr(args, "config", None) or find_config_file()
    if path is None:
        if not getattr(args, "quiet", False):
            print("No .resolvediff.toml found (using defaults)", file=sys.stderr)
        return 1
    print(path)
    return 0

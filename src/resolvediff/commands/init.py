"""
resolvediff.commands.init - Create a starter .resolvediff.toml.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import tomlkit

from resolvediff.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG


def generate_config() -> str:
    """Return the text of a commented default configuration file."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("resolvediff configuration"))
    doc.add(tomlkit.nl())

    diff_table = tomlkit.table()
    diff_table.add(tomlkit.comment("Workspace members always treated as modified"))
    diff_table.add("modified", tomlkit.array())
    diff_table.add(tomlkit.comment("URL prefix of members on the local filesystem"))
    diff_table.add("scheme", DEFAULT_CONFIG["diff"]["scheme"])
    diff_table.add(tomlkit.comment("Maximum edges followed from a root (0 = unlimited)"))
    diff_table.add("max_depth", DEFAULT_CONFIG["diff"]["max_depth"])
    diff_table.add("strict", DEFAULT_CONFIG["diff"]["strict"])
    doc.add("diff", diff_table)

    output_table = tomlkit.table()
    output_table.add(tomlkit.comment("text, json, markdown or csv"))
    output_table.add("format", DEFAULT_CONFIG["output"]["format"])
    output_table.add("paths", DEFAULT_CONFIG["output"]["paths"])
    doc.add("output", output_table)

    return tomlkit.dumps(doc)


def run(args: argparse.Namespace) -> int:
    """Write .resolvediff.toml in the current directory."""
    target = Path.cwd() / CONFIG_FILE_NAME
    if target.exists() and not getattr(args, "force", False):
        print(f"{target} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    target.write_text(generate_config(), encoding="utf-8")
    if not getattr(args, "quiet", False):
        print(f"Created {target}")
    return 0

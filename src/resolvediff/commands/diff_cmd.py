"""
resolvediff.commands.diff_cmd - Compare two resolve snapshots.

Loads the old and new ``cargo metadata`` documents, runs the divergence
engine and prints one trail per line followed by the affected members.
"""

from __future__ import annotations

import argparse
import json
import sys

from resolvediff.graph.diff import DiffResult, diff
from resolvediff.graph.deserializer import MetadataFile
from resolvediff.graph.roots import forced_from_names


def run(args: argparse.Namespace) -> int:
    """Run the diff command.

    Returns:
        0 on success; 1 when --exit-code is given and divergences exist.
    """
    from resolvediff.config import get_config

    max_depth = getattr(args, "max_depth", None)
    if max_depth is not None and max_depth < 0:
        print("Error: --max-depth must be 0 or greater", file=sys.stderr)
        return 1

    verbose = getattr(args, "verbose", False)
    quiet = getattr(args, "quiet", False)
    config = get_config(getattr(args, "config", None), quiet=not verbose)
    diff_cfg = config["diff"]
    output_cfg = config["output"]

    old_source = MetadataFile(args.old)
    new_source = MetadataFile(args.new)
    old = old_source.load()
    new = new_source.load()
    if verbose:
        print(f"Loaded {len(old)} nodes from {old_source.describe()}", file=sys.stderr)
        print(f"Loaded {len(new)} nodes from {new_source.describe()}", file=sys.stderr)

    if getattr(args, "strict", False) or diff_cfg["strict"]:
        old.validate()
        new.validate()

    names = list(diff_cfg["modified"])
    for name in getattr(args, "modified", None) or []:
        if name not in names:
            names.append(name)
    forced = forced_from_names(old, names)

    if max_depth is None:
        max_depth = diff_cfg["max_depth"]

    result = diff(
        old,
        new,
        forced,
        scheme=diff_cfg["scheme"],
        max_depth=max_depth or None,
    )

    if verbose:
        for root in result.roots():
            count = sum(1 for trail in result.trails if trail.root == root)
            print(f"{root}: {count} trail(s)", file=sys.stderr)

    output_format = "json" if getattr(args, "json", False) else None
    output_format = output_format or getattr(args, "format", None) or output_cfg["format"]
    include_paths = output_cfg["paths"] and not getattr(args, "no_paths", False)

    if not quiet or output_format != "text":
        rendered = _render(result, output_format, include_paths)
        if rendered:
            print(rendered)
        elif not quiet:
            print("No dependency changes", file=sys.stderr)

    if getattr(args, "exit_code", False) and not result.is_empty:
        return 1
    return 0


def _render(result: DiffResult, output_format: str, include_paths: bool) -> str:
    """Render a DiffResult in the requested format."""
    from resolvediff.graph.serialize import serialize_result, to_csv, to_markdown, to_text

    if output_format == "json":
        data = serialize_result(result)
        if not include_paths:
            data.pop("affected_paths")
        return json.dumps(data, indent=2)
    if output_format == "markdown":
        return to_markdown(result) if result.trails else ""
    if output_format == "csv":
        return to_csv(result)
    return to_text(result, include_paths=include_paths)

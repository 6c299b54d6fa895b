"""Diff Serialization - Export DiffResult to various formats.

This module provides functions to serialize a DiffResult and its trails
to JSON-compatible dicts, plain text, markdown, and CSV.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from resolvediff.graph.diff import DiffResult
    from resolvediff.graph.tracer import Trail

TRAIL_SEPARATOR = " -> "


def format_trail(trail: Trail) -> str:
    """Render a trail on one line, e.g. ``"foo 1.2.0 -> bar 0.9.1"``."""
    return TRAIL_SEPARATOR.join(str(step) for step in trail.steps)


def serialize_trail(trail: Trail) -> dict[str, Any]:
    """Serialize a Trail to a JSON-compatible dict."""
    return {
        "root": str(trail.root),
        "kind": trail.kind.value,
        "steps": [{"name": step.name, "version": step.version} for step in trail.steps],
    }


def serialize_result(result: DiffResult) -> dict[str, Any]:
    """Serialize a DiffResult to a JSON-compatible dict.

    Args:
        result: The diff outcome to serialize.

    Returns:
        Dict with trails, affected paths, and metadata.
    """
    return {
        "trails": [serialize_trail(trail) for trail in result.trails],
        "affected_paths": sorted(str(path) for path in result.affected_paths),
        "metadata": {
            "trail_count": len(result.trails),
            "root_count": len(result.roots()),
        },
    }


def to_text(result: DiffResult, include_paths: bool = True) -> str:
    """One trail per line, then the affected member directories."""
    lines = [format_trail(trail) for trail in result.trails]
    if include_paths and result.affected_paths:
        lines.append("")
        lines.append("Affected workspace members:")
        for path in sorted(result.affected_paths):
            lines.append(f"  {path}")
    return "\n".join(lines)


def to_markdown(result: DiffResult) -> str:
    """Generate a markdown table of the trails.

    Args:
        result: The diff outcome to render.

    Returns:
        Markdown string.
    """
    lines = [
        "# Dependency Divergence",
        "",
        "| Root | Trail | Kind |",
        "|------|-------|------|",
    ]

    for trail in result.trails:
        lines.append(f"| {trail.root} | {format_trail(trail)} | {trail.kind.value} |")

    if result.affected_paths:
        lines.append("")
        lines.append("## Affected Members")
        lines.append("")
        for path in sorted(result.affected_paths):
            lines.append(f"- `{path}`")

    lines.append("")
    return "\n".join(lines)


def to_csv(result: DiffResult) -> str:
    """Generate a CSV export of the trails."""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL)

    writer.writerow(["root", "kind", "trail"])
    for trail in result.trails:
        writer.writerow([str(trail.root), trail.kind.value, format_trail(trail)])

    return output.getvalue()


__all__ = [
    "TRAIL_SEPARATOR",
    "format_trail",
    "serialize_trail",
    "serialize_result",
    "to_text",
    "to_markdown",
    "to_csv",
]

"""
resolvediff - Find where two resolved dependency graphs diverge

Given an old and a new resolve of the same workspace, resolvediff reports,
for every workspace member, the trail from that member down to the first
package whose dependencies differ, and the directories of the members
that are affected.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("resolvediff")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from resolvediff.graph import (
    BareNodeId,
    DiffError,
    DiffResult,
    FullNodeId,
    Snapshot,
    Trail,
    WorkspaceRoot,
    diff,
    forced_from_names,
    load_snapshot,
)

__all__ = [
    "__version__",
    "BareNodeId",
    "FullNodeId",
    "Snapshot",
    "WorkspaceRoot",
    "Trail",
    "DiffResult",
    "DiffError",
    "diff",
    "forced_from_names",
    "load_snapshot",
]

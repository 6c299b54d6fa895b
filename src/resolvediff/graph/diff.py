"""Graph diff - Compare two resolve snapshots root by root.

Usage:
    old = load_snapshot("before.json")
    new = load_snapshot("after.json")
    result = diff(old, new, forced_from_names(old, ["cargo"]))
    for trail in result:
        print(trail)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Iterator

from resolvediff.graph.deserializer import LOCAL_SCHEME
from resolvediff.graph.ids import BareNodeId
from resolvediff.graph.paths import resolve_paths
from resolvediff.graph.roots import check_forced, resolve_roots
from resolvediff.graph.snapshot import Snapshot
from resolvediff.graph.tracer import Trail, trace


@dataclass(frozen=True)
class DiffResult:
    """Outcome of comparing two snapshots.

    Attributes:
        trails: One trail per divergence, grouped by root in root order.
        affected_paths: Directories of the workspace roots that start a trail.
    """

    trails: tuple[Trail, ...] = ()
    affected_paths: frozenset[Path] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        """True if the two snapshots agree for every root."""
        return not self.trails

    def roots(self) -> list[BareNodeId]:
        """Return the roots implicated by at least one trail, sorted."""
        return sorted({trail.root for trail in self.trails})

    def __iter__(self) -> Iterator[Trail]:
        return iter(self.trails)

    def __len__(self) -> int:
        return len(self.trails)


def diff(
    old: Snapshot,
    new: Snapshot,
    forced: AbstractSet[BareNodeId] = frozenset(),
    *,
    scheme: str = LOCAL_SCHEME,
    max_depth: int | None = None,
) -> DiffResult:
    """Report where each workspace root's dependency closure diverges.

    Neither snapshot is modified. All roots are located before any tracing
    starts, so a missing root aborts the diff without a partial result.

    Args:
        old: Snapshot before the update; declares the workspace roots.
        new: Snapshot after the update.
        forced: (name, version) of members to treat as modified.
        scheme: URL prefix of local member sources.
        max_depth: Optional cap on edges followed from each root.

    Returns:
        DiffResult with the trails and the affected member directories.

    Raises:
        DiffError: Any failure from root, trail or path resolution.
    """
    check_forced(old, forced)
    root_ids = resolve_roots(old)

    trails: list[Trail] = []
    for root_id in root_ids:
        trails.extend(trace(root_id, old, new, forced, max_depth=max_depth))

    affected = resolve_paths(trails, old, scheme)
    return DiffResult(trails=tuple(trails), affected_paths=affected)


__all__ = ["DiffResult", "diff"]

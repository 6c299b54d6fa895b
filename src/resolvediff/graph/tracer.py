"""Divergence tracing - Walk a root in both snapshots and find where they split.

Starting at a workspace root, each node is compared between the old and
the new snapshot. Every node reached must exist in the old snapshot.

1. If the node is forced-modified, or missing from the new snapshot, the
   trail ends here and nothing below it is examined.
2. If its dependency edges differ, one trail is emitted per removed or
   added edge and the walk stops below this node. No trail is longer
   than ``max_depth`` edges.
3. Otherwise the walk continues into every dependency.

The walk uses an explicit stack so that deep graphs do not run into the
interpreter's recursion limit. Trails come out in the same order a
recursive pre-order walk would produce them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Iterator

from resolvediff.graph.errors import DependencyCycleError, TraversalDepthError
from resolvediff.graph.ids import BareNodeId, FullNodeId
from resolvediff.graph.snapshot import Snapshot


class DivergenceKind(Enum):
    """Why a trail stops where it does."""

    FORCED = "forced"
    REMOVED_NODE = "removed-node"
    REMOVED_EDGE = "removed-edge"
    ADDED_EDGE = "added-edge"


@dataclass(frozen=True)
class Trail:
    """Path from a workspace root to the first point of divergence.

    Attributes:
        steps: (name, version) of each package along the path, root first.
        kind: Why the trail ends at its last step. Not part of equality.
    """

    steps: tuple[BareNodeId, ...]
    kind: DivergenceKind = field(default=DivergenceKind.FORCED, compare=False)

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError("A trail needs at least one step")

    @property
    def root(self) -> BareNodeId:
        """The workspace root the trail starts at."""
        return self.steps[0]

    @property
    def divergence(self) -> BareNodeId:
        """The package where the divergence was detected."""
        return self.steps[-1]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[BareNodeId]:
        return iter(self.steps)

    def __str__(self) -> str:
        return " -> ".join(str(step) for step in self.steps)


# (node id, trail so far, full ids on the current path)
_Frame = tuple[FullNodeId, tuple[BareNodeId, ...], tuple[FullNodeId, ...]]


def trace(
    root_id: FullNodeId,
    old: Snapshot,
    new: Snapshot,
    forced: AbstractSet[BareNodeId] = frozenset(),
    max_depth: int | None = None,
) -> list[Trail]:
    """Find every divergence reachable from one root.

    Args:
        root_id: Full id of the workspace root in ``old``.
        old: Snapshot before the update.
        new: Snapshot after the update.
        forced: Members treated as modified regardless of the graphs.
        max_depth: Maximum number of edges to follow from the root, or None.

    Returns:
        Trails in traversal order. Identical subtrees contribute nothing.

    Raises:
        MalformedSnapshotError: If a traversed id is missing from ``old``.
        DependencyCycleError: If a node is reached again below itself.
        TraversalDepthError: If ``max_depth`` is exceeded.
    """
    trails: list[Trail] = []
    stack: list[_Frame] = [(root_id, (root_id.bare,), (root_id,))]

    while stack:
        node_id, steps, ancestry = stack.pop()

        if max_depth is not None and len(steps) - 1 > max_depth:
            raise TraversalDepthError(steps, max_depth)

        # Raises on a dangling edge in the old graph.
        old_deps = old.dependencies_of(node_id)

        if node_id.bare in forced:
            trails.append(Trail(steps, DivergenceKind.FORCED))
            continue
        if node_id not in new:
            trails.append(Trail(steps, DivergenceKind.REMOVED_NODE))
            continue

        new_deps = new.dependencies_of(node_id)
        removed = sorted(old_deps - new_deps)
        added = sorted(new_deps - old_deps)
        if (removed or added) and max_depth is not None and len(steps) > max_depth:
            raise TraversalDepthError(steps + ((removed or added)[0].bare,), max_depth)

        for dep in removed:
            trails.append(Trail(steps + (dep.bare,), DivergenceKind.REMOVED_EDGE))
        for dep in added:
            trails.append(Trail(steps + (dep.bare,), DivergenceKind.ADDED_EDGE))
        if removed or added:
            continue

        children: list[_Frame] = []
        for dep in sorted(old_deps):
            if dep in ancestry:
                start = ancestry.index(dep)
                raise DependencyCycleError([n.bare for n in ancestry[start:]] + [dep.bare])
            children.append((dep, steps + (dep.bare,), ancestry + (dep,)))
        # Reversed so the first dependency is popped first.
        stack.extend(reversed(children))

    return trails


__all__ = ["DivergenceKind", "Trail", "trace"]

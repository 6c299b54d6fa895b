"""Root resolution - Locate workspace roots in the old resolve graph."""

from __future__ import annotations

from typing import AbstractSet, Iterable

from resolvediff.graph.errors import MissingRootError
from resolvediff.graph.ids import BareNodeId, FullNodeId
from resolvediff.graph.snapshot import Snapshot


def resolve_roots(old: Snapshot) -> list[FullNodeId]:
    """Find the node id of every workspace root in the old snapshot.

    Roots are matched by (name, version). If more than one node shares that
    pair, the node whose source equals the root's declared source wins;
    without such a node every candidate is kept.

    Args:
        old: The snapshot the roots are declared in.

    Returns:
        Sorted list of root node ids.

    Raises:
        MissingRootError: If any declared root has no node. Raised before
            any root is returned.
    """
    root_ids: set[FullNodeId] = set()
    for root in old.workspace_roots:
        candidates = old.find_by_bare(root.bare)
        if not candidates:
            raise MissingRootError(root.name, root.version)
        exact = [node for node in candidates if node.id.source == root.source]
        for node in exact or candidates:
            root_ids.add(node.id)
    return sorted(root_ids)


def forced_from_names(old: Snapshot, names: Iterable[str]) -> frozenset[BareNodeId]:
    """Turn workspace member names into a forced-modified set.

    Args:
        old: Snapshot declaring the workspace members.
        names: Member package names the caller considers modified.

    Returns:
        The (name, version) of each named member.

    Raises:
        MissingRootError: If a name is not a workspace member.
    """
    forced = set()
    for name in names:
        root = old.find_root(name)
        if root is None:
            raise MissingRootError(name)
        forced.add(root.bare)
    return frozenset(forced)


def check_forced(old: Snapshot, forced: AbstractSet[BareNodeId]) -> None:
    """Verify every forced entry names a workspace root of ``old``.

    Raises:
        MissingRootError: For the first entry that is not a root.
    """
    declared = {root.bare for root in old.workspace_roots}
    for bare in sorted(forced):
        if bare not in declared:
            raise MissingRootError(bare.name, bare.version)


__all__ = ["resolve_roots", "forced_from_names", "check_forced"]

"""Snapshot - An immutable, fully-resolved dependency graph.

This module provides the data structures the diff engine reads from:
- Node: One resolved package and the ids it depends on
- WorkspaceRoot: A workspace member declared by the snapshot
- Snapshot: Read-only node map plus the workspace roots
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from resolvediff.graph.errors import MalformedSnapshotError
from resolvediff.graph.ids import BareNodeId, FullNodeId


@dataclass(frozen=True)
class Node:
    """A resolved package instance and its dependency edges."""

    id: FullNodeId
    dependencies: frozenset[FullNodeId] = field(default_factory=frozenset)

    def iter_dependencies(self) -> Iterator[FullNodeId]:
        """Iterate over dependency ids in sorted order."""
        yield from sorted(self.dependencies)


@dataclass(frozen=True)
class WorkspaceRoot:
    """A workspace member as declared by the snapshot.

    Attributes:
        name: Package name of the member.
        version: Version of the member.
        source: Source URL, normally "path+file:///abs/dir" for members.
    """

    name: str
    version: str
    source: str | None = None

    @property
    def bare(self) -> BareNodeId:
        """The (name, version) identity of this root."""
        return BareNodeId(self.name, self.version)

    @property
    def node_id(self) -> FullNodeId:
        """The full id this root is expected to have in the node map."""
        return FullNodeId(self.name, self.version, self.source)

    def __str__(self) -> str:
        return f"{self.name} {self.version}"


class Snapshot:
    """One resolved dependency graph, read-only for its whole lifetime.

    Example:
        >>> a = FullNodeId("a", "1.0.0", "path+file:///ws/a")
        >>> b = FullNodeId("b", "0.1.0", "registry+https://example.com/index")
        >>> snap = Snapshot.from_nodes(
        ...     {a: [b], b: []},
        ...     [WorkspaceRoot("a", "1.0.0", "path+file:///ws/a")],
        ... )
        >>> len(snap)
        2
    """

    def __init__(
        self,
        nodes: Mapping[FullNodeId, Node],
        workspace_roots: Iterable[WorkspaceRoot],
    ) -> None:
        self._nodes: Mapping[FullNodeId, Node] = MappingProxyType(dict(nodes))
        self._roots: tuple[WorkspaceRoot, ...] = tuple(workspace_roots)
        self._by_bare: dict[BareNodeId, list[Node]] = {}
        for node_id in sorted(self._nodes):
            self._by_bare.setdefault(node_id.bare, []).append(self._nodes[node_id])

    @classmethod
    def from_nodes(
        cls,
        edges: Mapping[FullNodeId, Iterable[FullNodeId]],
        workspace_roots: Iterable[WorkspaceRoot],
    ) -> Snapshot:
        """Build a snapshot from an adjacency mapping.

        Args:
            edges: Node id -> ids of the packages it depends on.
            workspace_roots: Declared workspace members.

        Returns:
            A new Snapshot.
        """
        nodes = {
            node_id: Node(id=node_id, dependencies=frozenset(deps))
            for node_id, deps in edges.items()
        }
        return cls(nodes, workspace_roots)

    @property
    def nodes(self) -> Mapping[FullNodeId, Node]:
        """Read-only view of the node map."""
        return self._nodes

    @property
    def workspace_roots(self) -> tuple[WorkspaceRoot, ...]:
        return self._roots

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get(self, node_id: FullNodeId) -> Node | None:
        """Return the node for an id, or None if this snapshot lacks it."""
        return self._nodes.get(node_id)

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate over all nodes in id order."""
        for node_id in sorted(self._nodes):
            yield self._nodes[node_id]

    def dependencies_of(self, node_id: FullNodeId) -> frozenset[FullNodeId]:
        """Return the dependency ids of a node that must exist.

        Raises:
            MalformedSnapshotError: If the node is not in this snapshot.
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise MalformedSnapshotError(f"Node `{node_id}` not found in resolve graph")
        return node.dependencies

    def find_by_bare(self, bare: BareNodeId) -> list[Node]:
        """Find all nodes whose (name, version) equals ``bare``."""
        return list(self._by_bare.get(bare, ()))

    def find_root(self, name: str) -> WorkspaceRoot | None:
        """Find the first workspace root with the given package name."""
        for root in self._roots:
            if root.name == name:
                return root
        return None

    def validate(self) -> None:
        """Check that every edge points at a node in this snapshot.

        Raises:
            MalformedSnapshotError: On the first dangling edge found.
        """
        for node in self.iter_nodes():
            for dep in node.iter_dependencies():
                if dep not in self._nodes:
                    raise MalformedSnapshotError(
                        f"Node `{node.id}` depends on `{dep}`, which is not in the resolve graph"
                    )

    def __repr__(self) -> str:
        return f"Snapshot(nodes={len(self._nodes)}, workspace_roots={len(self._roots)})"


__all__ = ["Node", "WorkspaceRoot", "Snapshot"]

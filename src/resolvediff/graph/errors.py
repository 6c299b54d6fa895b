"""Errors raised while comparing two dependency graph snapshots.

Every error is fatal for the diff that raised it: no partial result is
returned and nothing is retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from resolvediff.graph.ids import BareNodeId


class DiffError(Exception):
    """Base class for all graph diff failures."""


class MissingRootError(DiffError):
    """A workspace root has no corresponding node in the old snapshot."""

    def __init__(self, root_name: str, version: str | None = None) -> None:
        self.root_name = root_name
        self.version = version
        if version is None:
            message = f"Could not find `{root_name}` in workspace members"
        else:
            message = f"Workspace root `{root_name} {version}` not found in resolve graph"
        super().__init__(message)


class MissingPathMappingError(DiffError):
    """A trail starts at a name that is not a workspace root."""

    def __init__(self, root_name: str) -> None:
        self.root_name = root_name
        super().__init__(f"Did not find root `{root_name}` in workspace")


class MalformedSnapshotError(DiffError):
    """A snapshot is internally inconsistent or cannot be parsed."""


class SnapshotLoadError(MalformedSnapshotError):
    """A snapshot file could not be read or decoded."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to load snapshot from {path}: {detail}")


class UnsupportedSourceError(DiffError):
    """A workspace root is not declared with a local path source."""

    def __init__(self, root_name: str, source: str | None, scheme: str) -> None:
        self.root_name = root_name
        self.source = source
        self.scheme = scheme
        super().__init__(
            f"Workspace root `{root_name}` has source {source!r}, expected a `{scheme}` URL"
        )


class DependencyCycleError(DiffError):
    """A node was reached again from inside its own dependency chain."""

    def __init__(self, cycle: Sequence[BareNodeId]) -> None:
        self.cycle = list(cycle)
        path = " -> ".join(str(step) for step in self.cycle)
        super().__init__(f"Dependency cycle detected: {path}")


class TraversalDepthError(DiffError):
    """A trail grew past the configured maximum depth."""

    def __init__(self, trail: Sequence[BareNodeId], limit: int) -> None:
        self.trail = list(trail)
        self.limit = limit
        super().__init__(
            f"Traversal exceeded max depth {limit} at `{self.trail[-1]}`"
            if self.trail
            else f"Traversal exceeded max depth {limit}"
        )


__all__ = [
    "DiffError",
    "MissingRootError",
    "MissingPathMappingError",
    "MalformedSnapshotError",
    "SnapshotLoadError",
    "UnsupportedSourceError",
    "DependencyCycleError",
    "TraversalDepthError",
]

"""Graph module - Resolve snapshots and the divergence engine.

Exports:
- BareNodeId / FullNodeId: Package identifiers without / with source
- Node, WorkspaceRoot, Snapshot: Immutable resolve graph
- SnapshotSource, MetadataFile, load_snapshot: Snapshot acquisition seam
- Trail, DivergenceKind: One root-to-divergence path
- DiffResult, diff: The top-level comparison
- DiffError and subclasses: Error taxonomy
"""

from resolvediff.graph.deserializer import (
    MetadataFile,
    SnapshotSource,
    load_snapshot,
    snapshot_from_metadata,
)
from resolvediff.graph.diff import DiffResult, diff
from resolvediff.graph.errors import (
    DependencyCycleError,
    DiffError,
    MalformedSnapshotError,
    MissingPathMappingError,
    MissingRootError,
    SnapshotLoadError,
    TraversalDepthError,
    UnsupportedSourceError,
)
from resolvediff.graph.ids import BareNodeId, FullNodeId, strip_source
from resolvediff.graph.roots import forced_from_names, resolve_roots
from resolvediff.graph.snapshot import Node, Snapshot, WorkspaceRoot
from resolvediff.graph.tracer import DivergenceKind, Trail, trace

__all__ = [
    "BareNodeId",
    "FullNodeId",
    "strip_source",
    "Node",
    "WorkspaceRoot",
    "Snapshot",
    "SnapshotSource",
    "MetadataFile",
    "load_snapshot",
    "snapshot_from_metadata",
    "resolve_roots",
    "forced_from_names",
    "DivergenceKind",
    "Trail",
    "trace",
    "DiffResult",
    "diff",
    "DiffError",
    "MissingRootError",
    "MissingPathMappingError",
    "MalformedSnapshotError",
    "SnapshotLoadError",
    "UnsupportedSourceError",
    "DependencyCycleError",
    "TraversalDepthError",
]

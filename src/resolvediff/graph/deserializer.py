"""Snapshot deserialization - Build Snapshots from package metadata.

The diff engine never acquires snapshots itself. Callers hand it
Snapshots built by a SnapshotSource; this module provides the source for
the JSON document printed by ``cargo metadata --format-version 1``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path, PurePosixPath
from typing import Any, Protocol, runtime_checkable

from resolvediff.graph.errors import MalformedSnapshotError, SnapshotLoadError
from resolvediff.graph.ids import FullNodeId
from resolvediff.graph.snapshot import Node, Snapshot, WorkspaceRoot

LOCAL_SCHEME = "path+file://"


@runtime_checkable
class SnapshotSource(Protocol):
    """Protocol for anything that can produce a Snapshot."""

    def load(self) -> Snapshot:
        """Produce the snapshot.

        Raises:
            MalformedSnapshotError: If the data does not describe a resolve graph.
        """
        ...

    def describe(self) -> str:
        """Short human-readable description of where the snapshot comes from."""
        ...


def _package_node_id(package: dict[str, Any]) -> FullNodeId:
    """Compute the full id of a package record.

    Registry and git packages carry their source; path packages have
    ``source: null`` and the location is recovered from the package id or,
    failing that, from the manifest path.
    """
    try:
        name = package["name"]
        version = package["version"]
        raw_id = package["id"]
    except KeyError as e:
        raise MalformedSnapshotError(f"Package record is missing field {e}") from None

    source = package.get("source")
    if source is None:
        try:
            source = FullNodeId.parse(raw_id).source
        except MalformedSnapshotError:
            source = None
    if source is None and package.get("manifest_path"):
        manifest_dir = PurePosixPath(package["manifest_path"]).parent
        source = f"{LOCAL_SCHEME}{manifest_dir}"
    return FullNodeId(name=name, version=version, source=source)


def snapshot_from_metadata(data: dict[str, Any]) -> Snapshot:
    """Build a Snapshot from a decoded ``cargo metadata`` document.

    Args:
        data: The decoded JSON object.

    Returns:
        Snapshot with one node per resolve entry.

    Raises:
        MalformedSnapshotError: If the resolve graph is missing or refers
            to packages that are not listed.
    """
    if not isinstance(data, dict):
        raise MalformedSnapshotError("Metadata document must be a JSON object")

    resolve = data.get("resolve")
    if not resolve or "nodes" not in resolve:
        raise MalformedSnapshotError(
            "Metadata has no resolve graph (was it generated with --no-deps?)"
        )

    # Package id string -> canonical FullNodeId
    ids: dict[str, FullNodeId] = {}
    for package in data.get("packages", []):
        ids[package.get("id", "")] = _package_node_id(package)

    def lookup(raw_id: str) -> FullNodeId:
        node_id = ids.get(raw_id)
        if node_id is None:
            raise MalformedSnapshotError(f"Package id `{raw_id}` is not listed in packages")
        return node_id

    nodes: dict[FullNodeId, Node] = {}
    for entry in resolve["nodes"]:
        node_id = lookup(entry.get("id", ""))
        deps = frozenset(lookup(dep) for dep in entry.get("dependencies", []))
        nodes[node_id] = Node(id=node_id, dependencies=deps)

    roots = []
    for member in data.get("workspace_members", []):
        member_id = lookup(member)
        roots.append(
            WorkspaceRoot(name=member_id.name, version=member_id.version, source=member_id.source)
        )

    return Snapshot(nodes, roots)


class MetadataFile:
    """SnapshotSource reading a ``cargo metadata`` JSON file.

    A path of ``-`` reads the document from stdin.
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the source.

        Args:
            path: Path to the JSON file, or "-" for stdin.
        """
        self.path = str(path)

    def describe(self) -> str:
        return "<stdin>" if self.path == "-" else self.path

    def _read(self) -> str:
        try:
            if self.path == "-":
                return sys.stdin.read()
            return Path(self.path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            detail = f"invalid UTF-8 ({e.reason} at byte {e.start})"
            raise SnapshotLoadError(self.describe(), detail) from e
        except OSError as e:
            raise SnapshotLoadError(self.describe(), e.strerror or str(e)) from e

    def load(self) -> Snapshot:
        text = self._read()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnapshotLoadError(self.describe(), f"invalid JSON ({e})") from e
        try:
            return snapshot_from_metadata(data)
        except SnapshotLoadError:
            raise
        except MalformedSnapshotError as e:
            raise SnapshotLoadError(self.describe(), str(e)) from e


def load_snapshot(path: Path | str) -> Snapshot:
    """Load a Snapshot from a ``cargo metadata`` JSON file."""
    return MetadataFile(path).load()


__all__ = [
    "LOCAL_SCHEME",
    "SnapshotSource",
    "MetadataFile",
    "snapshot_from_metadata",
    "load_snapshot",
]

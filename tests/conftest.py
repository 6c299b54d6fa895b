"""Pytest fixtures for resolvediff tests."""

import json

import pytest

REGISTRY = "registry+https://github.com/rust-lang/crates.io-index"
WORKSPACE = "/ws"


class SnapshotBuilder:
    """Build small Snapshots by hand.

    Packages must be added bottom-up: a package's dependencies are
    passed as the ids returned by earlier calls.
    """

    def __init__(self, workspace=WORKSPACE):
        self.workspace = workspace
        self._edges = {}
        self._roots = []

    def member(self, name, version="0.1.0", deps=()):
        """Add a workspace member living at <workspace>/<name>."""
        from resolvediff.graph import FullNodeId, WorkspaceRoot

        source = f"path+file://{self.workspace}/{name}"
        node_id = FullNodeId(name, version, source)
        self._edges[node_id] = list(deps)
        self._roots.append(WorkspaceRoot(name, version, source))
        return node_id

    def package(self, name, version="1.0.0", deps=(), source=REGISTRY):
        """Add a registry package."""
        from resolvediff.graph import FullNodeId

        node_id = FullNodeId(name, version, source)
        self._edges[node_id] = list(deps)
        return node_id

    def edges(self, node_id, deps):
        """Replace the dependencies of an already added node."""
        self._edges[node_id] = list(deps)

    def drop(self, node_id):
        """Remove a node without touching edges that point at it."""
        del self._edges[node_id]

    def build(self):
        from resolvediff.graph import Snapshot

        return Snapshot.from_nodes(self._edges, self._roots)


@pytest.fixture
def builder():
    """Fresh SnapshotBuilder factory; call it to get a new builder."""
    return SnapshotBuilder


@pytest.fixture
def bare():
    """Shorthand for BareNodeId."""
    from resolvediff.graph import BareNodeId

    return BareNodeId


def _package_record(name, version, source, workspace):
    if source is None:
        pkg_id = f"{name} {version} (path+file://{workspace}/{name})"
        manifest = f"{workspace}/{name}/Cargo.toml"
    else:
        pkg_id = f"{name} {version} ({source})"
        manifest = f"/home/.cargo/registry/src/{name}-{version}/Cargo.toml"
    return {
        "id": pkg_id,
        "name": name,
        "version": version,
        "source": source,
        "manifest_path": manifest,
    }


def make_metadata(members, packages=(), workspace=WORKSPACE):
    """Build a ``cargo metadata`` document.

    Args:
        members: {(name, version): [dep (name, version), ...]} workspace members.
        packages: {(name, version): [dep (name, version), ...]} registry packages.
    """
    packages = dict(packages)
    records = {}
    for (name, version) in members:
        records[(name, version)] = _package_record(name, version, None, workspace)
    for (name, version) in packages:
        records[(name, version)] = _package_record(name, version, REGISTRY, workspace)

    nodes = []
    for key, deps in list(members.items()) + list(packages.items()):
        nodes.append(
            {
                "id": records[key]["id"],
                "dependencies": [records[dep]["id"] for dep in deps],
            }
        )

    return {
        "packages": list(records.values()),
        "workspace_members": [records[key]["id"] for key in members],
        "resolve": {"nodes": nodes, "root": None},
        "workspace_root": workspace,
        "version": 1,
    }


@pytest.fixture
def metadata():
    """Factory for ``cargo metadata`` documents."""
    return make_metadata


@pytest.fixture
def write_metadata(tmp_path):
    """Write a metadata document to tmp_path and return its path."""

    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def bump_pair(write_metadata):
    """Old/new metadata files where `app`'s dependency `log` was bumped.

    old: app 0.1.0 -> log 0.4.0, util 0.1.0
    new: app 0.1.0 -> log 0.4.1, util 0.1.0
    """
    old = make_metadata(
        {("app", "0.1.0"): [("log", "0.4.0")], ("util", "0.1.0"): []},
        {("log", "0.4.0"): []},
    )
    new = make_metadata(
        {("app", "0.1.0"): [("log", "0.4.1")], ("util", "0.1.0"): []},
        {("log", "0.4.1"): []},
    )
    return write_metadata("old.json", old), write_metadata("new.json", new)

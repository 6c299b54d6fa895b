"""Tests for graph/diff.py - comparing whole snapshots."""

from pathlib import Path

import pytest


def _steps(result):
    return [[str(step) for step in trail] for trail in result.trails]


class TestDiffProperties:
    """End-to-end properties of diff()."""

    def test_identity(self, builder):
        """diff(S, S, {}) is empty for any snapshot."""
        from resolvediff.graph import diff

        b = builder()
        log = b.package("log")
        util = b.member("util", deps=[log])
        b.member("app", deps=[util, log])
        snap = b.build()

        result = diff(snap, snap)

        assert result.trails == ()
        assert result.affected_paths == frozenset()
        assert result.is_empty

    def test_forced_root_minimal(self, builder, bare):
        """Forcing one unchanged root yields exactly that root's trail."""
        from resolvediff.graph import diff

        b = builder()
        b.member("app", deps=[b.package("log")])
        b.member("util")
        snap = b.build()

        result = diff(snap, snap, {bare("util", "0.1.0")})

        assert _steps(result) == [["util 0.1.0"]]
        assert result.affected_paths == frozenset([Path("/ws/util")])

    def test_single_added_dependency(self, builder):
        from resolvediff.graph import diff

        old_b = builder()
        old_b.member("app", deps=[old_b.package("b")])

        new_b = builder()
        new_b.member("app", deps=[new_b.package("b"), new_b.package("c")])

        result = diff(old_b.build(), new_b.build())

        assert _steps(result) == [["app 0.1.0", "c 1.0.0"]]
        assert result.affected_paths == frozenset([Path("/ws/app")])

    def test_single_removed_dependency(self, builder):
        from resolvediff.graph import diff

        old_b = builder()
        old_b.member("app", deps=[old_b.package("b"), old_b.package("c")])

        new_b = builder()
        new_b.member("app", deps=[new_b.package("b")])

        result = diff(old_b.build(), new_b.build())

        assert _steps(result) == [["app 0.1.0", "c 1.0.0"]]

    def test_multiple_independent_roots(self, builder):
        from resolvediff.graph import diff

        old_b = builder()
        old_b.member("app", deps=[old_b.package("x", "1.0.0")])
        old_b.member("tool", deps=[old_b.package("y", "1.0.0")])

        new_b = builder()
        new_b.member("app", deps=[new_b.package("x", "1.1.0")])
        new_b.member("tool", deps=[new_b.package("y", "1.1.0")])

        result = diff(old_b.build(), new_b.build())

        roots = {trail.root.name for trail in result}
        assert roots == {"app", "tool"}
        assert len(result) == 4
        assert result.affected_paths == frozenset([Path("/ws/app"), Path("/ws/tool")])

    def test_node_removed_entirely(self, builder):
        """Root A depends on X; the new graph has no X at all."""
        from resolvediff.graph import diff

        old_b = builder()
        x = old_b.package("x")
        old_b.member("app", deps=[x])

        new_b = builder()
        new_b.member("app")

        result = diff(old_b.build(), new_b.build())

        assert _steps(result) == [["app 0.1.0", "x 1.0.0"]]

    def test_node_removed_with_dangling_edge(self, builder):
        """X is still listed by A in the new graph but its node is gone."""
        from resolvediff.graph import DivergenceKind, diff

        old_b = builder()
        x = old_b.package("x")
        old_b.member("app", deps=[x])

        new_b = builder()
        x_new = new_b.package("x")
        new_b.member("app", deps=[x_new])
        new_b.drop(x_new)

        result = diff(old_b.build(), new_b.build())

        assert _steps(result) == [["app 0.1.0", "x 1.0.0"]]
        assert result.trails[0].kind is DivergenceKind.REMOVED_NODE

    def test_trails_start_at_roots(self, builder):
        """Every trail begins with a workspace root's (name, version)."""
        from resolvediff.graph import diff

        old_b = builder()
        c = old_b.package("c", "1.0.0")
        old_b.member("app", deps=[old_b.package("b", deps=[c])])
        old_b.member("util", "0.2.0", deps=[c])

        new_b = builder()
        c2 = new_b.package("c", "2.0.0")
        new_b.member("app", deps=[new_b.package("b", deps=[c2])])
        new_b.member("util", "0.2.0", deps=[c2])
        old = old_b.build()

        result = diff(old, new_b.build())

        root_ids = {root.bare for root in old.workspace_roots}
        assert result.trails
        assert all(trail.root in root_ids for trail in result)
        assert [str(r) for r in result.roots()] == ["app 0.1.0", "util 0.2.0"]


class TestDiffErrors:
    """Failure modes of diff()."""

    def test_missing_root(self, builder):
        from resolvediff.graph import MissingRootError, diff

        b = builder()
        b.member("app")
        ghost = b.member("ghost")
        b.drop(ghost)
        snap = b.build()

        with pytest.raises(MissingRootError):
            diff(snap, snap)

    def test_forced_must_be_root(self, builder, bare):
        from resolvediff.graph import MissingRootError, diff

        b = builder()
        b.member("app")
        snap = b.build()

        with pytest.raises(MissingRootError, match="nope 1.0.0"):
            diff(snap, snap, {bare("nope", "1.0.0")})

    def test_cycle(self, builder):
        from resolvediff.graph import DependencyCycleError, diff

        b = builder()
        other = b.package("other")
        app = b.member("app", deps=[other])
        b.edges(other, [app])
        snap = b.build()

        with pytest.raises(DependencyCycleError):
            diff(snap, snap)

    def test_dangling_edge_in_old(self, builder):
        """An edge to a node the old graph lacks fails even against itself."""
        from resolvediff.graph import MalformedSnapshotError, diff

        b = builder()
        x = b.package("x")
        b.member("app", deps=[x])
        b.drop(x)
        snap = b.build()

        with pytest.raises(MalformedSnapshotError, match="x 1.0.0"):
            diff(snap, snap)

    def test_all_errors_share_base(self):
        from resolvediff.graph import errors

        for name in errors.__all__:
            assert issubclass(getattr(errors, name), errors.DiffError)


class TestDiffResult:
    """Tests for the DiffResult container."""

    def test_empty_default(self):
        from resolvediff.graph import DiffResult

        result = DiffResult()

        assert result.is_empty
        assert len(result) == 0
        assert list(result) == []
        assert result.roots() == []

    def test_with_metadata_files(self, bump_pair):
        """Snapshots loaded from cargo metadata files diff as expected."""
        from resolvediff.graph import diff, load_snapshot

        old_path, new_path = bump_pair

        result = diff(load_snapshot(old_path), load_snapshot(new_path))

        assert _steps(result) == [
            ["app 0.1.0", "log 0.4.0"],
            ["app 0.1.0", "log 0.4.1"],
        ]
        assert result.affected_paths == frozenset([Path("/ws/app")])

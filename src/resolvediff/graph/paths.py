"""Path resolution - Map trails back to workspace member directories."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from urllib.parse import unquote

from resolvediff.graph.deserializer import LOCAL_SCHEME
from resolvediff.graph.errors import MissingPathMappingError, UnsupportedSourceError
from resolvediff.graph.snapshot import Snapshot
from resolvediff.graph.tracer import Trail


def source_to_path(source: str, scheme: str = LOCAL_SCHEME) -> Path | None:
    """Strip a local source URL down to a filesystem path.

    Returns:
        The path, or None if ``source`` does not use ``scheme``.
    """
    if not source.startswith(scheme):
        return None
    return Path(unquote(source[len(scheme) :]))


def resolve_paths(
    trails: Iterable[Trail],
    old: Snapshot,
    scheme: str = LOCAL_SCHEME,
) -> frozenset[Path]:
    """Collect the directories of every workspace root that starts a trail.

    Args:
        trails: Trails produced by the tracer.
        old: Snapshot declaring the workspace roots.
        scheme: URL prefix marking a local path source.

    Returns:
        Set of member directories.

    Raises:
        MissingPathMappingError: If a trail's root name is not a workspace root.
        UnsupportedSourceError: If the root's source is not a local path.
    """
    paths: set[Path] = set()
    seen: set[str] = set()
    for trail in trails:
        name = trail.root.name
        if name in seen:
            continue
        seen.add(name)
        root = old.find_root(name)
        if root is None:
            raise MissingPathMappingError(name)
        path = source_to_path(root.source, scheme) if root.source else None
        if path is None:
            raise UnsupportedSourceError(name, root.source, scheme)
        paths.add(path)
    return frozenset(paths)


__all__ = ["source_to_path", "resolve_paths"]

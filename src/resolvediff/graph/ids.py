"""Package identifiers used by resolve graph snapshots.

There are two identifier types:

- FullNodeId: (name, version, source) - the key for graph lookups
- BareNodeId: (name, version) - used for forced-member matching and display

Converting between them only goes one way, through strip_source().
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from urllib.parse import urlparse

from resolvediff.graph.errors import MalformedSnapshotError

# "serde 1.0.130 (registry+https://github.com/rust-lang/crates.io-index)"
_LEGACY_ID = re.compile(r"^(?P<name>\S+) (?P<version>\S+)(?: \((?P<source>.+)\))?$")


@total_ordering
@dataclass(frozen=True)
class BareNodeId:
    """A package identity with the source dropped."""

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name} {self.version}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BareNodeId):
            return NotImplemented
        return (self.name, self.version) < (other.name, other.version)


@total_ordering
@dataclass(frozen=True)
class FullNodeId:
    """A resolved package instance, unique within one snapshot.

    Attributes:
        name: Package name.
        version: Resolved version string.
        source: Source URL (e.g. "registry+https://...", "path+file:///abs/dir"),
            or None when the snapshot did not record one.
    """

    name: str
    version: str
    source: str | None = None

    @property
    def bare(self) -> BareNodeId:
        """Project this id down to (name, version)."""
        return BareNodeId(self.name, self.version)

    def _sort_key(self) -> tuple[str, str, str]:
        return (self.name, self.version, self.source or "")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FullNodeId):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        if self.source is None:
            return f"{self.name} {self.version}"
        return f"{self.name} {self.version} ({self.source})"

    @classmethod
    def parse(cls, text: str) -> FullNodeId:
        """Parse a Cargo package id.

        Accepts the legacy spelling ``"name version (source)"`` and the
        package-id-spec spelling ``"source#name@version"`` (or
        ``"source#version"``, where the name is the last URL path segment).

        Raises:
            MalformedSnapshotError: If the text matches neither spelling.
        """
        text = text.strip()
        if "#" in text and not text.endswith(")"):
            source, _, fragment = text.rpartition("#")
            if "@" in fragment:
                name, _, version = fragment.partition("@")
            else:
                version = fragment
                name = urlparse(source).path.rstrip("/").rsplit("/", 1)[-1]
            if source and name and version:
                return cls(name=name, version=version, source=source)
            raise MalformedSnapshotError(f"Unrecognized package id: {text!r}")

        match = _LEGACY_ID.match(text)
        if not match:
            raise MalformedSnapshotError(f"Unrecognized package id: {text!r}")
        return cls(
            name=match.group("name"),
            version=match.group("version"),
            source=match.group("source"),
        )


def strip_source(node_id: FullNodeId) -> BareNodeId:
    """Return the (name, version) projection of a full node id."""
    return node_id.bare


__all__ = ["BareNodeId", "FullNodeId", "strip_source"]

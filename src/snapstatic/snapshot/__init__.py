"""Snapshot building — walk, compile, and publish the in-memory index.

    walker.walk()        root -> candidates
    compiler.compile_*() candidate -> (path, entry)
    index.SnapshotStore  owns the active Snapshot, serializes rebuilds
"""

from snapstatic.snapshot.compiler import ContentEntry, Entry, RedirectEntry, Representations
from snapstatic.snapshot.index import Snapshot, SnapshotStore, build_snapshot

__all__ = [
    "ContentEntry",
    "Entry",
    "RedirectEntry",
    "Representations",
    "Snapshot",
    "SnapshotStore",
    "build_snapshot",
]

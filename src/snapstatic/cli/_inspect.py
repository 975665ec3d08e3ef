"""``snapstatic inspect`` — build one snapshot and print what it holds."""

import argparse
import sys

import anyio

from snapstatic.config import HandlerConfig
from snapstatic.errors import ConfigurationError, SyncError
from snapstatic.snapshot.compiler import ContentEntry
from snapstatic.snapshot.index import Snapshot, SnapshotStore


def format_snapshot(snapshot: Snapshot) -> list[str]:
    """One line per entry, sorted by path.

    Content entries: ``path  etag  identity [gzip br]``.
    Redirect entries: ``path  -> location``.
    """
    lines = []
    for path in snapshot.paths():
        entry = snapshot[path]
        if isinstance(entry, ContentEntry):
            reps = entry.representations
            sizes = [str(len(reps.identity))]
            if reps.gzip is not None and reps.br is not None:
                sizes += [f"gzip={len(reps.gzip)}", f"br={len(reps.br)}"]
            lines.append(f"{path or '(root)'}  {entry.etag}  {' '.join(sizes)}")
        else:
            lines.append(f"{path or '(root)'}  -> {entry.location}")
    return lines


def run_inspect(args: argparse.Namespace) -> None:
    try:
        config = HandlerConfig(
            root=args.root, prefix=args.prefix, disallow_shared_cache=args.private
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    store = SnapshotStore(config)
    try:
        snapshot = anyio.run(store.sync)
    except SyncError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    for line in format_snapshot(snapshot):
        print(line)

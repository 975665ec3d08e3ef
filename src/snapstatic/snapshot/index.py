"""Snapshot index and the synchronization protocol.

A ``Snapshot`` is the complete, immutable path -> entry mapping produced
by one walk+compile pass. ``SnapshotStore`` owns the single reference to
the active snapshot and replaces it wholesale on each successful sync:

    build new snapshot off to the side  ->  one attribute assignment

Readers grab ``store.current`` once per request and keep using that
generation, so they see either the old or the new snapshot, never a mix.

Rebuilds are serialized behind one lock. A sync requested while another
is running waits for a fresh rebuild, and every request that queued up
during one rebuild is satisfied by the next single rebuild.
"""

import logging
import time
import zlib
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

import anyio
import brotli

from snapstatic.config import HandlerConfig
from snapstatic.errors import SyncError
from snapstatic.snapshot.compiler import (
    ContentEntry,
    Entry,
    compile_directory,
    compile_file,
    merge_headers,
)
from snapstatic.snapshot.walker import Candidate, DirectoryCandidate, walk

logger = logging.getLogger("snapstatic.snapshot")

# Worker threads used for hashing and compression during one rebuild.
DEFAULT_COMPILE_CONCURRENCY = 4

_BUILD_ERRORS = (OSError, zlib.error, brotli.error)


class Snapshot(Mapping[str, Entry]):
    """Read-only mapping from public path to entry.

    Never mutated after construction; a rebuild produces a new one.
    """

    __slots__ = ("_entries", "generation")

    def __init__(self, entries: Mapping[str, Entry] | None = None, generation: int = 0) -> None:
        self._entries: Mapping[str, Entry] = MappingProxyType(dict(entries or {}))
        self.generation = generation

    def __getitem__(self, path: str) -> Entry:
        return self._entries[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Snapshot(generation={self.generation}, entries={len(self)})"

    def paths(self) -> list[str]:
        """All public paths in sorted order."""
        return sorted(self._entries)


EMPTY_SNAPSHOT = Snapshot()


async def build_snapshot(
    config: HandlerConfig,
    *,
    generation: int = 0,
    limiter: anyio.CapacityLimiter | None = None,
) -> Snapshot:
    """Walk ``config.root`` and compile every candidate into a new snapshot.

    Raises ``OSError`` (possibly inside an ``ExceptionGroup``) if any
    directory or file cannot be read; nothing is returned in that case.
    """
    root = Path(config.root)
    candidates = await walk(root, config.file_types)
    default_headers = merge_headers(config.security_headers.header_items())
    limiter = limiter or anyio.CapacityLimiter(DEFAULT_COMPILE_CONCURRENCY)
    entries: dict[str, Entry] = {}

    async def compile_one(candidate: Candidate) -> None:
        if isinstance(candidate, DirectoryCandidate):
            path, entry = compile_directory(candidate, prefix=config.prefix, root=root)
        else:
            path, entry = await compile_file(
                candidate,
                prefix=config.prefix,
                root=root,
                default_headers=default_headers,
                disallow_shared_cache=config.disallow_shared_cache,
                limiter=limiter,
            )
        entries[path] = entry

    async with anyio.create_task_group() as tg:
        for candidate in candidates:
            tg.start_soon(compile_one, candidate)

    return Snapshot({path: entries[path] for path in sorted(entries)}, generation)


def log_report(snapshot: Snapshot) -> None:
    """Log one line per content entry: path, brotli size, identity size."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    for path in snapshot.paths():
        entry = snapshot[path]
        if not isinstance(entry, ContentEntry):
            continue
        reps = entry.representations
        if reps.br is not None:
            logger.debug("%s %d %d", path, len(reps.br), len(reps.identity))
        else:
            logger.debug("%s %d", path, len(reps.identity))


def _leaf(exc: BaseException) -> BaseException:
    while isinstance(exc, BaseExceptionGroup) and exc.exceptions:
        exc = exc.exceptions[0]
    return exc


class SnapshotStore:
    """Owns the active snapshot reference and serializes rebuilds.

    Usage::

        store = SnapshotStore(HandlerConfig(root="public"))
        await store.sync()           # before serving
        entry = store.current.get("/app.js")
    """

    __slots__ = (
        "_completed",
        "_concurrency",
        "_config",
        "_current",
        "_finished",
        "_limiter",
        "_lock",
        "_requested",
    )

    def __init__(
        self, config: HandlerConfig, *, concurrency: int = DEFAULT_COMPILE_CONCURRENCY
    ) -> None:
        self._config = config
        self._current: Snapshot | None = None
        self._concurrency = concurrency
        # Created on first sync so the store can be built outside an event loop.
        self._lock: anyio.Lock | None = None
        self._limiter: anyio.CapacityLimiter | None = None
        # Tickets: every sync() call takes one; a rebuild covers all
        # tickets issued before it started.
        self._requested = 0
        self._completed = 0
        self._finished = False

    @property
    def config(self) -> HandlerConfig:
        return self._config

    @property
    def ready(self) -> bool:
        """True once a sync has succeeded."""
        return self._current is not None

    @property
    def attempted(self) -> bool:
        """True once a sync has succeeded or failed with ``SyncError``."""
        return self._finished

    @property
    def current(self) -> Snapshot:
        """The active snapshot (empty until the first successful sync)."""
        return self._current if self._current is not None else EMPTY_SNAPSHOT

    async def sync(self) -> Snapshot:
        """Rebuild the snapshot and make it active.

        Returns the snapshot that satisfied this request. Raises
        ``SyncError`` if the rebuild fails; the previous snapshot
        stays active.
        """
        if self._lock is None:
            self._lock = anyio.Lock()
            self._limiter = anyio.CapacityLimiter(self._concurrency)
        self._requested += 1
        ticket = self._requested
        async with self._lock:
            if self._completed >= ticket:
                return self.current
            covered = self._requested
            # A cancelled rebuild leaves the store unattempted.
            try:
                snapshot = await self._rebuild()
            except SyncError:
                self._finished = True
                raise
            self._finished = True
            self._current = snapshot
            self._completed = covered
            return snapshot

    async def _rebuild(self) -> Snapshot:
        root = str(self._config.root)
        generation = self.current.generation + 1
        logger.debug("Rebuilding snapshot %d from %s", generation, root)
        started = time.perf_counter()
        try:
            snapshot = await build_snapshot(
                self._config, generation=generation, limiter=self._limiter
            )
        except _BUILD_ERRORS as exc:
            raise SyncError(root, str(exc)) from exc
        except BaseExceptionGroup as group:
            matched, rest = group.split(_BUILD_ERRORS)
            if rest is not None or matched is None:
                raise
            raise SyncError(root, str(_leaf(matched))) from group

        log_report(snapshot)
        identity = compressed = 0
        for entry in snapshot.values():
            if isinstance(entry, ContentEntry):
                identity += len(entry.representations.identity)
                compressed += len(entry.representations.br or b"")
        logger.info(
            "Snapshot %d of %s ready: %d entries, %d bytes identity, %d bytes brotli, %.3fs",
            generation,
            root,
            len(snapshot),
            identity,
            compressed,
            time.perf_counter() - started,
        )
        return snapshot

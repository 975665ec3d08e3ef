"""Resource compiler — turn walk candidates into immutable snapshot entries.

For each recognized file:

1. Read the whole file.
2. Compute the validator: SHA-256 of the bytes, base64url, no padding.
3. If the type is compressible, build gzip (level 9) and brotli
   (quality 11, text or generic mode) representations.
4. Merge headers: default bundle < type headers < ``ETag``, then
   rewrite ``public`` to ``private`` in ``Cache-Control`` when shared
   caching is disallowed.

Hashing and compression are CPU-bound, so they run in worker threads
(bounded by a capacity limiter) instead of on the event loop.

Directories become redirect entries whose ``Location`` is the public
path with a trailing slash.
"""

import base64
import gzip
import hashlib
import re
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import TypeAlias

import anyio
import anyio.to_thread
import brotli

from snapstatic.file_types import FileType
from snapstatic.snapshot.walker import DirectoryCandidate, FileCandidate

INDEX_FILE = "index.html"

_DUPLICATE_SLASHES = re.compile(r"/{2,}")
_PUBLIC = re.compile(r"\bpublic\b")


@dataclass(frozen=True, slots=True)
class Representations:
    """Every encoding of one resource's bytes.

    ``gzip`` and ``br`` are either both present (compressible type)
    or both ``None``.
    """

    identity: bytes
    gzip: bytes | None = None
    br: bytes | None = None

    @property
    def compressed(self) -> bool:
        return self.gzip is not None or self.br is not None

    def get(self, encoding: str) -> bytes:
        """Bytes for ``"identity"``, ``"gzip"`` or ``"br"``."""
        if encoding == "identity":
            return self.identity
        data = self.gzip if encoding == "gzip" else self.br if encoding == "br" else None
        if data is None:
            msg = f"No {encoding!r} representation"
            raise KeyError(msg)
        return data


@dataclass(frozen=True, slots=True)
class ContentEntry:
    """A file served with status 200."""

    headers: tuple[tuple[str, str], ...]
    representations: Representations
    etag: str


@dataclass(frozen=True, slots=True)
class RedirectEntry:
    """A bare directory path, answered with 301 to its slash form."""

    location: str

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return (("Location", self.location),)


Entry: TypeAlias = ContentEntry | RedirectEntry


def compute_etag(data: bytes) -> str:
    """Strong validator: unpadded base64url SHA-256 digest of *data*."""
    digest = hashlib.sha256(data).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def compress_gzip(data: bytes) -> bytes:
    # mtime=0 keeps output identical across rebuilds.
    return gzip.compress(data, compresslevel=9, mtime=0)


def compress_brotli(data: bytes, *, text: bool = False) -> bytes:
    return brotli.compress(
        data,
        mode=brotli.MODE_TEXT if text else brotli.MODE_GENERIC,
        quality=11,
    )


def privatize(cache_control: str) -> str:
    """Rewrite every ``public`` directive to ``private``, leave the rest alone."""
    return _PUBLIC.sub("private", cache_control)


def public_path(prefix: str, root: Path, path: Path) -> str:
    """Public URL path for *path* under *root*, without index stripping."""
    relative = path.relative_to(root).as_posix()
    if relative == ".":
        return prefix
    return f"{prefix}/{relative}"


def content_path(prefix: str, root: Path, path: Path) -> str:
    """Public path of a file; ``.../index.html`` maps to its directory's slash path."""
    url = public_path(prefix, root, path)
    if path.name == INDEX_FILE:
        return url.removesuffix(INDEX_FILE)
    return url


def merge_headers(*layers: tuple[tuple[str, str], ...]) -> tuple[tuple[str, str], ...]:
    """Shallow, case-insensitive merge; later layers win, first position is kept."""
    merged: dict[str, tuple[str, str]] = {}
    for layer in layers:
        for name, value in layer:
            key = name.lower()
            original = merged[key][0] if key in merged else name
            merged[key] = (original, value)
    return tuple(merged.values())


def compile_directory(
    candidate: DirectoryCandidate, *, prefix: str, root: Path
) -> tuple[str, RedirectEntry]:
    path = public_path(prefix, root, candidate.path)
    location = _DUPLICATE_SLASHES.sub("/", f"{path}/")
    return path, RedirectEntry(location)


def _encode(data: bytes, file_type: FileType) -> tuple[str, Representations]:
    """Validator plus representations; runs in a worker thread."""
    etag = compute_etag(data)
    if not file_type.compress:
        return etag, Representations(identity=data)
    return etag, Representations(
        identity=data,
        gzip=compress_gzip(data),
        br=compress_brotli(data, text=file_type.text),
    )


async def compile_file(
    candidate: FileCandidate,
    *,
    prefix: str,
    root: Path,
    default_headers: tuple[tuple[str, str], ...],
    disallow_shared_cache: bool,
    limiter: anyio.CapacityLimiter | None = None,
) -> tuple[str, ContentEntry]:
    """Read, hash, compress, and assemble headers for one file.

    Raises ``OSError`` if the file cannot be read.
    """
    data = await anyio.Path(candidate.path).read_bytes()
    etag, representations = await anyio.to_thread.run_sync(
        partial(_encode, data, candidate.file_type), limiter=limiter
    )
    headers = merge_headers(
        default_headers,
        candidate.file_type.header_items(),
        (("ETag", etag),),
    )
    if disallow_shared_cache:
        headers = tuple(
            (name, privatize(value)) if name.lower() == "cache-control" else (name, value)
            for name, value in headers
        )
    path = content_path(prefix, root, candidate.path)
    return path, ContentEntry(headers, representations, etag)

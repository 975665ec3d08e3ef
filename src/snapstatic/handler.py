"""Static handler — match a request against the snapshot, then respond.

Two phases, so a dispatcher can try several handlers in order without
shared state:

``match()`` (synchronous, pure lookup)
    returns ``None``, a ``RebuildMatch``, or a ``ResourceMatch``.

``respond()`` (async, drives the response)
    1. rebuild match -> sync, then 200 (or 500 with the error text)
    2. method other than GET/HEAD -> 405
    3. headers = default bundle overridden by the entry's headers
    4. redirect entry -> 301
    5. ``If-None-Match`` equal to the validator -> 304
    6. negotiate ``Accept-Encoding`` (compressed entries only)
    7. 200 with the chosen bytes (GET) or no body (HEAD)

Only step 1 waits on anything.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from snapstatic._internal.asgi import Send
from snapstatic.config import HandlerConfig
from snapstatic.errors import SnapshotNotReady, SyncError
from snapstatic.http.request import Request
from snapstatic.http.response import Response
from snapstatic.negotiation import best_encoding, uri_path
from snapstatic.server.sender import send_response
from snapstatic.snapshot.compiler import ContentEntry, Entry, RedirectEntry, merge_headers
from snapstatic.snapshot.index import Snapshot, SnapshotStore

logger = logging.getLogger("snapstatic.server")

LOOPBACK_ADDRESSES = frozenset({"127.0.0.1", "::1", "::ffff:127.0.0.1"})

# Sent with every non-rebuild response; entry headers override these.
BASE_HEADERS: tuple[tuple[str, str], ...] = (("Vary", "Accept-Encoding"),)

_ALLOWED_METHODS = frozenset({"GET", "HEAD"})


def is_loopback(address: str | None) -> bool:
    """True for the IPv4/IPv6 loopback addresses."""
    return address in LOOPBACK_ADDRESSES


@dataclass(frozen=True, slots=True)
class ResourceMatch:
    """The request path is in the snapshot."""

    entry: Entry
    request: Request
    send: Send


@dataclass(frozen=True, slots=True)
class RebuildMatch:
    """A loopback caller asked for a rebuild."""

    request: Request
    send: Send


Match: TypeAlias = ResourceMatch | RebuildMatch


class StaticHandler:
    """Serve a directory tree from an in-memory snapshot.

    Usage::

        handler = StaticHandler(HandlerConfig(root="public", prefix="/docs"))
        await handler.sync()

        match = handler.match(request, send, address=client_host)
        if match is None:
            ...  # try the next handler, or 404
        else:
            await handler.respond(match)
    """

    __slots__ = ("config", "store")

    def __init__(self, config: HandlerConfig | None = None, **options: object) -> None:
        if config is None:
            config = HandlerConfig(**options)  # type: ignore[arg-type]
        elif options:
            msg = "Pass either a HandlerConfig or keyword options, not both"
            raise TypeError(msg)
        self.config = config
        self.store = SnapshotStore(config)

    def __repr__(self) -> str:
        return f"StaticHandler(root={str(self.config.root)!r}, prefix={self.config.prefix!r})"

    @property
    def root(self) -> Path:
        return Path(self.config.root)

    @property
    def snapshot(self) -> Snapshot:
        """The snapshot currently serving requests."""
        return self.store.current

    async def sync(self) -> Snapshot:
        """Rebuild the snapshot; raises ``SyncError`` on failure."""
        return await self.store.sync()

    # -- Phase 1 --

    def match(
        self,
        request: Request,
        send: Send,
        hostname: str | None = None,
        address: str | None = None,
    ) -> Match | None:
        """Look the request up in the active snapshot.

        *hostname* is accepted for dispatchers that route on it; matching
        itself only depends on the path and, for the rebuild path, on
        *address* being loopback. Raises ``SnapshotNotReady`` before the
        first sync has been attempted.
        """
        if not self.store.ready and not self.store.attempted:
            raise SnapshotNotReady(f"{self!r} has not been synced")
        path = uri_path(request.target)
        entry = self.store.current.get(path)
        if entry is not None:
            return ResourceMatch(entry, request, send)
        if path == self.config.sync_path and is_loopback(address):
            return RebuildMatch(request, send)
        return None

    # -- Phase 2 --

    async def respond(self, match: Match) -> None:
        """Send the complete response for *match*."""
        if isinstance(match, RebuildMatch):
            await send_response(await self._rebuild(), match.send)
            return
        response, include_body = self.render(match.entry, match.request)
        await send_response(response, match.send, include_body=include_body)

    async def _rebuild(self) -> Response:
        logger.info("Rebuild requested for %s", self.config.sync_path)
        try:
            await self.sync()
        except SyncError as exc:
            logger.exception("Rebuild of %s failed", self.config.root)
            return Response(
                body=str(exc).encode("utf-8"),
                status=500,
                headers=(("Content-Type", "text/plain; charset=utf-8"),),
            )
        return Response(status=200)

    def render(self, entry: Entry, request: Request) -> tuple[Response, bool]:
        """Build the response for a resource match.

        Returns the response and whether its body should be sent.
        """
        method = request.method.upper()
        if method not in _ALLOWED_METHODS:
            logger.debug("Rejected %s %s", method, request.target)
            return Response(status=405), False

        headers = merge_headers(BASE_HEADERS, entry.headers)

        if isinstance(entry, RedirectEntry):
            return Response(status=301, headers=headers), False

        etag = request.headers.get("if-none-match")
        if etag and etag == entry.etag:
            return Response(status=304, headers=headers), False

        return self._negotiate(entry, request, headers), method == "GET"

    def _negotiate(
        self,
        entry: ContentEntry,
        request: Request,
        headers: tuple[tuple[str, str], ...],
    ) -> Response:
        reps = entry.representations
        encoding = "identity"
        if reps.compressed:
            encoding = best_encoding(
                request.headers.get("accept-encoding"),
                has_br=reps.br is not None,
                has_gzip=reps.gzip is not None,
            )
        body = reps.get(encoding)
        response = Response(body=body, status=200, headers=headers)
        if encoding != "identity":
            response = response.with_header("Content-Encoding", encoding)
        return response.with_header("Content-Length", str(len(body)))

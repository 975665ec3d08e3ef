"""Immutable HTTP request.

Only what matching needs: method, raw target, headers, and the caller's
address. Static serving never reads a request body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from snapstatic.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``target`` is the request target as sent by the client: the raw
    path plus the query string, possibly with a fragment.
    """

    method: str
    target: str
    headers: Headers
    client: tuple[str, int] | None = None

    @property
    def client_address(self) -> str | None:
        """The caller's network address, if the server reported one."""
        return self.client[0] if self.client else None

    @property
    def hostname(self) -> str | None:
        """The Host header without its port."""
        host = self.headers.get("host")
        if not host:
            return None
        if host.startswith("["):
            return host[1 : host.find("]")] if "]" in host else host
        return host.rsplit(":", 1)[0] if host.count(":") == 1 else host

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        raw_path = scope.get("raw_path")
        target = raw_path.decode("latin-1") if raw_path else scope["path"]
        query = scope.get("query_string", b"")
        if query:
            target = f"{target}?{query.decode('latin-1')}"
        client = scope.get("client")
        return cls(
            method=scope["method"],
            target=target,
            headers=Headers(tuple(scope.get("headers", ()))),
            client=tuple(client) if client else None,
        )

"""Snapstatic — serve a static directory tree from an in-memory snapshot.

Every recognized file under the root is loaded once, given a strong
content-derived ``ETag``, and pre-compressed with gzip and brotli.
Requests are answered straight from memory; ``<prefix>/sync`` from a
loopback address rebuilds the snapshot and swaps it in atomically.

Basic usage::

    from snapstatic import StaticApp

    app = StaticApp()
    app.mount("public")
    app.mount("public", prefix="/private", disallow_shared_cache=True)

Any ASGI server runs ``app``; the snapshots are built during lifespan
startup.
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FileType",
    "HandlerConfig",
    "Request",
    "Response",
    "SecurityHeadersConfig",
    "SnapstaticError",
    "StaticApp",
    "StaticHandler",
    "SyncError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import snapstatic`` fast (no brotli or anyio import) while
    providing a clean top-level API.
    """
    if name == "StaticApp":
        from snapstatic.app import StaticApp

        return StaticApp

    if name == "StaticHandler":
        from snapstatic.handler import StaticHandler

        return StaticHandler

    if name == "HandlerConfig":
        from snapstatic.config import HandlerConfig

        return HandlerConfig

    if name == "FileType":
        from snapstatic.file_types import FileType

        return FileType

    if name == "SecurityHeadersConfig":
        from snapstatic.security_headers import SecurityHeadersConfig

        return SecurityHeadersConfig

    if name == "Request":
        from snapstatic.http.request import Request

        return Request

    if name == "Response":
        from snapstatic.http.response import Response

        return Response

    if name in ("SnapstaticError", "ConfigurationError", "SyncError"):
        from snapstatic import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

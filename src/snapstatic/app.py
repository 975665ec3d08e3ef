"""ASGI application — chain several static handlers under one server.

Handlers are tried in registration order; the first one whose
``match()`` returns something gets to respond. Nothing matched -> 404.

Every handler is synced during ASGI lifespan startup. A handler whose
first sync fails does not stop the others or the server; it answers
not-found until a later trigger rebuilds it.
"""

import logging

import anyio

from snapstatic._internal.asgi import Receive, Scope, Send
from snapstatic.config import HandlerConfig
from snapstatic.errors import ConfigurationError, SyncError
from snapstatic.handler import StaticHandler
from snapstatic.http.request import Request
from snapstatic.http.response import Response
from snapstatic.server.sender import send_response

logger = logging.getLogger("snapstatic.server")

NOT_FOUND = Response(
    body=b"Not Found",
    status=404,
    headers=(("Content-Type", "text/plain; charset=utf-8"),),
)


def _leaves(exc: BaseException) -> list[BaseException]:
    if isinstance(exc, BaseExceptionGroup):
        return [leaf for inner in exc.exceptions for leaf in _leaves(inner)]
    return [exc]


async def _initial_sync(handler: StaticHandler) -> None:
    try:
        await handler.sync()
    except SyncError:
        logger.exception(
            "Initial sync of %r failed; nothing is served until %s succeeds",
            handler,
            handler.config.sync_path,
        )


class StaticApp:
    """ASGI 3.0 callable serving one or more in-memory static trees.

    Usage::

        app = StaticApp()
        app.mount("public")
        app.mount("public", prefix="/other", disallow_shared_cache=True)

    Or with prebuilt handlers::

        app = StaticApp([StaticHandler(HandlerConfig(root="public"))])
    """

    __slots__ = ("_handlers", "_started")

    def __init__(self, handlers: list[StaticHandler] | None = None) -> None:
        self._handlers: list[StaticHandler] = list(handlers or [])
        self._started = False

    @property
    def handlers(self) -> tuple[StaticHandler, ...]:
        return tuple(self._handlers)

    def add_handler(self, handler: StaticHandler) -> StaticHandler:
        """Register *handler* after the existing ones."""
        if self._started:
            msg = "Cannot add handlers after startup"
            raise ConfigurationError(msg)
        self._handlers.append(handler)
        return handler

    def mount(
        self,
        root: str,
        prefix: str = "",
        *,
        disallow_shared_cache: bool = False,
    ) -> StaticHandler:
        """Create and register a handler for *root* under *prefix*."""
        config = HandlerConfig(
            root=root, prefix=prefix, disallow_shared_cache=disallow_shared_cache
        )
        return self.add_handler(StaticHandler(config))

    async def startup(self) -> None:
        """Sync every handler concurrently.

        A handler whose first sync fails is logged and left empty: it
        answers not-found until a triggered sync succeeds. The other
        handlers are unaffected.
        """
        self._started = True
        async with anyio.create_task_group() as tg:
            for handler in self._handlers:
                tg.start_soon(_initial_sync, handler)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        address = request.client_address
        for handler in self._handlers:
            match = handler.match(request, send, request.hostname, address)
            if match is not None:
                await handler.respond(match)
                return
        await send_response(NOT_FOUND, send, include_body=request.method != "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol: sync on startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup sync failed")
                    detail = "; ".join(str(leaf) for leaf in _leaves(exc))
                    await send({"type": "lifespan.startup.failed", "message": detail})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

"""Action — adapts ``request -> Response | None`` functions to ASGI.

An ``Action`` is an ASGI application, so it can be served directly,
placed at the end of a ``MiddlewareChain``, or handed to any middleware
as its next handler. Each invocation renders the function's result onto
the output sink exactly once.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from weft._internal.asgi import Receive, Scope, Send
from weft._internal.invoke import invoke
from weft.config import ActionConfig
from weft.http.request import Request
from weft.http.response import Response
from weft.http.writer import ResponseWriter
from weft.server.sender import send_empty, send_response

logger = logging.getLogger("weft.server")

HandlerFunc: TypeAlias = Callable[[Request], Response | None | Awaitable[Response | None]]


class Action:
    """ASGI application wrapping a handler function.

    The function may be ``def`` or ``async def``. Returning ``None``
    sends an empty ``200 OK``. Returning anything other than a
    ``Response`` or ``None`` raises ``TypeError``.

    Usage::

        async def hello(request: Request) -> Response:
            return text(200, "hello")

        app = Action(hello)
    """

    __slots__ = ("config", "func")

    def __init__(self, func: HandlerFunc, config: ActionConfig | None = None) -> None:
        self.func = func
        self.config = config or ActionConfig()

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"Action({name})"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        scope_type = scope["type"]
        if scope_type == "lifespan":
            await _acknowledge_lifespan(receive, send)
            return
        if scope_type != "http":
            msg = f"Action cannot serve {scope_type!r} connections"
            raise ValueError(msg)

        request = Request.from_asgi(scope, receive)
        result = await invoke(self.func, request)
        writer = ResponseWriter(send)

        if result is None:
            await send_empty(writer)
            return
        if not isinstance(result, Response):
            msg = (
                f"{self!r} returned {type(result).__name__}; "
                "handler functions must return a Response or None"
            )
            raise TypeError(msg)
        await send_response(result, writer, self.config)


def action(
    func: HandlerFunc | None = None, *, config: ActionConfig | None = None
) -> Action | Callable[[HandlerFunc], Action]:
    """Decorator form of ``Action``.

    Usable bare or with configuration::

        @action
        def index(request): ...

        @action(config=ActionConfig(chunk_size=4096))
        def download(request): ...
    """
    if func is not None:
        return Action(func, config)

    def decorator(f: HandlerFunc) -> Action:
        return Action(f, config)

    return decorator


async def _acknowledge_lifespan(receive: Receive, send: Send) -> None:
    """Answer lifespan startup/shutdown; an Action has nothing to set up."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            logger.debug("lifespan startup")
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            logger.debug("lifespan shutdown")
            await send({"type": "lifespan.shutdown.complete"})
            return

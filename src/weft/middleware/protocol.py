"""Middleware protocol.

A middleware is any callable that takes the next ASGI application and
returns a new one::

    def server_header(app: ASGIApp) -> ASGIApp:
        async def wrapped(scope: Scope, receive: Receive, send: Send) -> None:
            async def send_with_header(message: Message) -> None:
                if message["type"] == "http.response.start":
                    message["headers"] = [*message["headers"], (b"server", b"weft")]
                await send(message)

            await app(scope, receive, send_with_header)

        return wrapped

No base class required. The wrapped app may be awaited zero, one, or
more times; code after the await runs once the downstream handler has
finished writing.
"""

from collections.abc import Callable
from typing import TypeAlias

from weft._internal.asgi import ASGIApp

# Transforms the next handler into a wrapping handler
MiddlewareFunc: TypeAlias = Callable[[ASGIApp], ASGIApp]

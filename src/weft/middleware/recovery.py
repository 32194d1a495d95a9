"""Recovery middleware — turns handler exceptions into a JSON 500.

Only possible while the response has not started. Once the status line
is out, the exception is logged and re-raised for the server to handle
(typically by dropping the connection).
"""

import logging

from weft._internal.asgi import ASGIApp, Message, Receive, Scope, Send
from weft.config import ActionConfig
from weft.http.response import error_json
from weft.http.writer import ResponseWriter
from weft.middleware.protocol import MiddlewareFunc
from weft.server.sender import send_response

recovery_logger = logging.getLogger("weft.recovery")


def recovery(logger: logging.Logger | None = None, *, config: ActionConfig | None = None) -> MiddlewareFunc:
    """Catch ``Exception`` from downstream and answer ``{"error": ...}`` 500."""
    log = logger or recovery_logger
    render_config = config or ActionConfig()

    def middleware(app: ASGIApp) -> ASGIApp:
        async def recovered(scope: Scope, receive: Receive, send: Send) -> None:
            if scope["type"] != "http":
                await app(scope, receive, send)
                return

            started = False

            async def track_start(message: Message) -> None:
                nonlocal started
                if message["type"] == "http.response.start":
                    started = True
                await send(message)

            try:
                await app(scope, receive, track_start)
            except Exception:
                log.exception("unhandled error in %s %s", scope["method"], scope["path"])
                if started:
                    raise
                response = error_json(500, "Internal Server Error")
                await send_response(response, ResponseWriter(send), render_config)

        return recovered

    return middleware

"""Request logging and timing middleware.

Both observe the ``http.response.start`` message on its way out, so they
work with any downstream handler, not only ``Action``. Loggers are
passed in rather than looked up at call time, so tests can capture
output deterministically.
"""

import logging
import time

from weft._internal.asgi import ASGIApp, Message, Receive, Scope, Send
from weft.middleware.protocol import MiddlewareFunc

access_logger = logging.getLogger("weft.access")


def request_logging(logger: logging.Logger | None = None, *, level: int = logging.INFO) -> MiddlewareFunc:
    """Log method, path, status, and duration of every HTTP request.

    The line is emitted after the downstream handler returns, also when
    it raised. A request that never started a response is logged with
    status 0.
    """
    log = logger or access_logger

    def middleware(app: ASGIApp) -> ASGIApp:
        async def logged(scope: Scope, receive: Receive, send: Send) -> None:
            if scope["type"] != "http":
                await app(scope, receive, send)
                return

            status = 0

            async def capture_status(message: Message) -> None:
                nonlocal status
                if message["type"] == "http.response.start":
                    status = message["status"]
                await send(message)

            start = time.perf_counter()
            try:
                await app(scope, receive, capture_status)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                log.log(level, "%s %s %d %.3fms", scope["method"], scope["path"], status, elapsed_ms)

        return logged

    return middleware


def timing_header(name: str = "X-Response-Time") -> MiddlewareFunc:
    """Add the time to first byte as a response header (e.g. ``0.012s``)."""
    header = name.lower().encode("latin-1")

    def middleware(app: ASGIApp) -> ASGIApp:
        async def timed(scope: Scope, receive: Receive, send: Send) -> None:
            if scope["type"] != "http":
                await app(scope, receive, send)
                return

            start = time.perf_counter()

            async def send_with_timing(message: Message) -> None:
                if message["type"] == "http.response.start":
                    elapsed = time.perf_counter() - start
                    message = {
                        **message,
                        "headers": [*message.get("headers", ()), (header, f"{elapsed:.3f}s".encode("latin-1"))],
                    }
                await send(message)

            await app(scope, receive, send_with_timing)

        return timed

    return middleware

"""ResponseWriter — the output sink over an ASGI ``send`` callable.

Headers are collected until ``write_header`` commits the status line as a
single ``http.response.start`` message. After that the status is fixed:
later ``write_header`` calls are logged and ignored, the same way a
transport ignores a second status line on a connection that already sent
one.
"""

import logging

from weft._internal.asgi import Send
from weft.http.headers import MutableHeaders

logger = logging.getLogger("weft.server")


def body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class ResponseWriter:
    """Writable HTTP response for one request.

    Usage::

        writer = ResponseWriter(send)
        writer.headers["Content-Type"] = "text/plain"
        await writer.write_header(201)
        await writer.write(b"created")
        await writer.finish()
    """

    __slots__ = ("_finished", "_send", "_status", "headers")

    def __init__(self, send: Send) -> None:
        self._send = send
        self._status: int | None = None
        self._finished = False
        self.headers = MutableHeaders()

    @property
    def started(self) -> bool:
        """True once the status line has been committed."""
        return self._status is not None

    @property
    def status(self) -> int | None:
        """The committed status code, or ``None`` before ``write_header``."""
        return self._status

    @property
    def finished(self) -> bool:
        return self._finished

    async def write_header(self, status: int) -> None:
        """Commit the status line and the headers collected so far.

        Only the first call has an effect. Header changes made after this
        point are not sent.
        """
        if self._status is not None:
            logger.warning(
                "superfluous write_header(%d): status %d already sent",
                status,
                self._status,
            )
            return
        self._status = status
        await self._send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": self.headers.raw,
            }
        )

    async def write(self, data: bytes) -> None:
        """Send body bytes, committing a 200 status first if needed."""
        if self._status is None:
            await self.write_header(200)
        if self._finished:
            msg = "write() called after finish()"
            raise RuntimeError(msg)
        if not data:
            return
        if not body_allowed(self._status):
            logger.debug("dropping %d body bytes for status %d", len(data), self._status)
            return
        await self._send({"type": "http.response.body", "body": data, "more_body": True})

    async def finish(self) -> None:
        """Close the response body. Idempotent."""
        if self._finished:
            return
        if self._status is None:
            await self.write_header(200)
        self._finished = True
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})

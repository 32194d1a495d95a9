"""Immutable HTTP request.

Frozen metadata with async body access. The request is received data;
handlers read it, they never change it.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

import anyio

from weft._internal.asgi import HTTPScope, Receive, Scope
from weft.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, etc.) is frozen at creation.
    Body is accessed asynchronously via ``.body()``, ``.json()``, ``.text()``.
    ``.is_disconnected()`` exposes the client's cancellation signal.
    """

    method: str
    path: str
    headers: Headers
    query_string: str
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for body bytes and disconnect state
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build a Request from a raw ASGI ``http`` scope."""
        parsed = HTTPScope.from_scope(scope)
        return cls(
            method=parsed.method,
            path=parsed.path,
            headers=Headers(parsed.headers),
            query_string=parsed.query_string.decode("latin-1"),
            http_version=parsed.http_version,
            server=parsed.server,
            client=parsed.client,
            _receive=receive,
        )

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def query(self) -> dict[str, list[str]]:
        """Query string parameters, every value kept per name."""
        return parse_qs(self.query_string, keep_blank_values=True)

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                self._cache["_disconnected"] = True
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON."""
        raw = await self.body()
        return json_module.loads(raw)

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def is_disconnected(self) -> bool:
        """Whether the client has gone away.

        Consumes the body first (it stays available through ``.body()``),
        then polls ``receive`` without waiting: a pending ``http.disconnect``
        is seen, an idle connection is not. Once seen, the answer is cached.
        """
        if "_body" not in self._cache:
            await self.body()
        if self._cache.get("_disconnected"):
            return True
        with anyio.CancelScope() as scope:
            scope.cancel()
            message = await self._receive()
            if message["type"] == "http.disconnect":
                self._cache["_disconnected"] = True
        return bool(self._cache.get("_disconnected"))

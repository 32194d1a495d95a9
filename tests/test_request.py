"""Tests for weft.http.request — frozen Request with async body access."""

import json

import pytest

from weft.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes, disconnect: bool = False):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    if disconnect:
        messages.append({"type": "http.disconnect"})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestMetadata:
    def test_from_asgi(self) -> None:
        scope = _make_scope(
            method="post",
            path="/users/42",
            query_string=b"tab=posts&tab=likes&q=",
            headers=[(b"content-type", b"application/json"), (b"content-length", b"12")],
        )
        request = Request.from_asgi(scope, _make_receive())

        assert request.method == "POST"
        assert request.path == "/users/42"
        assert request.content_type == "application/json"
        assert request.content_length == 12
        assert request.query == {"tab": ["posts", "likes"], "q": [""]}
        assert request.url == "/users/42?tab=posts&tab=likes&q="
        assert request.client == ("127.0.0.1", 54321)

    def test_bad_content_length(self) -> None:
        request = Request.from_asgi(_make_scope(headers=[(b"content-length", b"abc")]), _make_receive())
        assert request.content_length is None

    def test_url_without_query(self) -> None:
        assert Request.from_asgi(_make_scope(path="/a"), _make_receive()).url == "/a"

    def test_frozen(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive())
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]

    def test_rejects_non_http_scope(self) -> None:
        with pytest.raises(ValueError, match="websocket"):
            Request.from_asgi({"type": "websocket", "path": "/"}, _make_receive())


class TestRequestBody:
    @pytest.mark.asyncio
    async def test_body_joins_chunks_and_caches(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive(b"hel", b"lo"))

        assert await request.body() == b"hello"
        assert await request.body() == b"hello"

    @pytest.mark.asyncio
    async def test_json(self) -> None:
        payload = json.dumps({"a": [1, 2]}).encode()
        request = Request.from_asgi(_make_scope(), _make_receive(payload))
        assert await request.json() == {"a": [1, 2]}

    @pytest.mark.asyncio
    async def test_text(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive("héllo".encode()))
        assert await request.text() == "héllo"

    @pytest.mark.asyncio
    async def test_stream_stops_on_disconnect(self) -> None:
        async def receive():
            return {"type": "http.disconnect"}

        request = Request.from_asgi(_make_scope(), receive)
        assert await request.body() == b""
        assert await request.is_disconnected()


class TestDisconnect:
    @pytest.mark.asyncio
    async def test_pending_disconnect_is_seen(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive(b"data", disconnect=True))

        assert await request.is_disconnected()
        assert await request.body() == b"data"

    @pytest.mark.asyncio
    async def test_connected_client(self) -> None:
        messages = iter([{"type": "http.request", "body": b"", "more_body": False}, {"type": "http.request"}])

        async def receive():
            return next(messages)

        request = Request.from_asgi(_make_scope(), receive)
        assert not await request.is_disconnected()

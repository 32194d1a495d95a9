"""Deferred HTTP response and the builder functions that create one.

A ``Response`` describes what to send; nothing is written until the
``Action`` adapter renders it. Builders never do I/O and never raise for
an unencodable payload: they degrade to a 500 error response instead.

Usage::

    from weft.http import response

    def show(request):
        item = lookup(request.path)
        if item is None:
            return response.error_json(404, "no such item")
        return response.json(200, item, {"Cache-Control": "no-store"})
"""

import io
import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import IO, Any, TypeAlias

from anyio.abc import ByteReceiveStream

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

# A blocking binary reader (BytesIO, open file) or an anyio byte stream
Content: TypeAlias = IO[bytes] | ByteReceiveStream


@dataclass(frozen=True, slots=True)
class Response:
    """A fully formed HTTP response that has not been written yet.

    Single use: rendering consumes ``content``. ``headers`` of ``None``
    means the caller supplied none, which is distinct from an empty
    mapping.
    """

    status: int
    content: Content
    content_type: str | None = None
    headers: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if self.headers is not None:
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


def encode_json(value: Any) -> bytes:
    """Encode *value* as compact UTF-8 JSON.

    Raises ``TypeError`` or ``ValueError`` when the value cannot be
    encoded (unsupported type, circular reference, NaN or infinity).
    """
    return json_module.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")


def _message(err: BaseException | str) -> str:
    return err if isinstance(err, str) else str(err)


def error(status: int, err: BaseException | str, headers: Mapping[str, str] | None = None) -> Response:
    """Plain error response whose body is the error's display text."""
    return Response(
        status=status,
        content=io.BytesIO(_message(err).encode("utf-8")),
        headers=headers,
    )


def error_json(status: int, err: BaseException | str, headers: Mapping[str, str] | None = None) -> Response:
    """JSON error response: ``{"error": "<message>"}``.

    If the envelope cannot be encoded, falls back to a plain ``error``
    with status 500 carrying the encoder's exception. *headers* are kept.
    """
    try:
        body = encode_json({"error": _message(err)})
    except (TypeError, ValueError) as exc:
        return error(500, exc, headers)
    return Response(
        status=status,
        content=io.BytesIO(body),
        content_type=JSON_CONTENT_TYPE,
        headers=headers,
    )


def data(status: int, content: bytes, headers: Mapping[str, str] | None = None) -> Response:
    """Raw bytes, no content type."""
    return Response(status=status, content=io.BytesIO(content), headers=headers)


def json(status: int, value: Any, headers: Mapping[str, str] | None = None) -> Response:
    """JSON-encode *value*.

    On encode failure, returns ``error_json(500, exc, headers)``; the
    requested status is discarded, *headers* are kept.
    """
    try:
        body = encode_json(value)
    except (TypeError, ValueError) as exc:
        return error_json(500, exc, headers)
    return Response(
        status=status,
        content=io.BytesIO(body),
        content_type=JSON_CONTENT_TYPE,
        headers=headers,
    )


def text(status: int, body: str, headers: Mapping[str, str] | None = None) -> Response:
    """UTF-8 text with a ``text/plain`` content type."""
    return Response(
        status=status,
        content=io.BytesIO(body.encode("utf-8")),
        content_type=TEXT_CONTENT_TYPE,
        headers=headers,
    )


def with_reader(status: int, reader: Content, headers: Mapping[str, str] | None = None) -> Response:
    """Use *reader* as the body as-is. It is read when the response renders."""
    return Response(status=status, content=reader, headers=headers)


# Longer names for the same builders
data_json = json
data_with_reader = with_reader

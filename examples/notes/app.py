"""Notes — a tiny JSON API behind a middleware chain.

Demonstrates:
- Response builders (json, error_json, None for an empty 200) across GET, POST, PUT and DELETE
- A custom function middleware (API key check that short-circuits)
- Built-in recovery, request logging, and timing middleware
- Extending a shared base chain with ``add`` without touching it

Serve with any ASGI server:
    cd examples/notes && uvicorn app:app
"""

import logging
from itertools import count

from weft import (
    Action,
    MiddlewareChain,
    Request,
    Response,
    error_json,
    json,
    recovery,
    request_logging,
    timing_header,
)
from weft._internal.asgi import ASGIApp, Receive, Scope, Send
from weft.http.headers import Headers

logging.basicConfig(level=logging.INFO)

API_KEY = "s3cret"

_notes: dict[int, dict[str, object]] = {}
_ids = count(1)


# ---------------------------------------------------------------------------
# Function middleware — API key
# ---------------------------------------------------------------------------


def require_api_key(app: ASGIApp) -> ASGIApp:
    """Reject requests without the right X-Api-Key header."""
    denied = Action(lambda request: error_json(401, "missing or invalid API key"))

    async def checked(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and Headers(tuple(scope["headers"])).get("x-api-key") != API_KEY:
            await denied(scope, receive, send)
            return
        await app(scope, receive, send)

    return checked


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------


async def notes(request: Request) -> Response | None:
    if request.method == "GET" and request.path == "/notes":
        return json(200, sorted(_notes.values(), key=lambda n: n["id"]))

    if request.method == "POST" and request.path == "/notes":
        payload = await request.json()
        if not isinstance(payload, dict) or not payload.get("text"):
            return error_json(422, "text is required")
        note = {"id": next(_ids), "text": payload["text"]}
        _notes[note["id"]] = note
        return json(201, note, {"Location": f"/notes/{note['id']}"})

    if request.method == "PUT" and request.path.startswith("/notes/"):
        note_id = request.path.removeprefix("/notes/")
        if not note_id.isdigit() or int(note_id) not in _notes:
            return error_json(404, "no such note")
        payload = await request.json()
        if not isinstance(payload, dict) or not payload.get("text"):
            return error_json(422, "text is required")
        note = _notes[int(note_id)]
        note["text"] = payload["text"]
        return json(200, note)

    if request.method == "DELETE" and request.path.startswith("/notes/"):
        note_id = request.path.removeprefix("/notes/")
        if not note_id.isdigit() or _notes.pop(int(note_id), None) is None:
            return error_json(404, "no such note")
        return None

    if request.path == "/crash":
        raise RuntimeError("simulated failure")

    return error_json(404, "not found")


# ---------------------------------------------------------------------------
# Middleware stack (last entry runs first on request)
# ---------------------------------------------------------------------------

base = MiddlewareChain(recovery(), request_logging())
public = base.add(timing_header())
private = public.add(require_api_key)

app = private.wrap(Action(notes))

"""Weft — response building and middleware composition for ASGI handlers.

Handlers return a deferred ``Response`` (or ``None`` for an empty 200);
``Action`` renders it. Middleware are ``app -> app`` functions stacked by
a ``MiddlewareChain``, last added outermost.

Basic usage::

    from weft import Action, MiddlewareChain, json, recovery, request_logging

    async def index(request):
        return json(200, {"path": request.path})

    app = MiddlewareChain(recovery(), request_logging()).wrap(Action(index))
"""

__version__ = "0.1.0"
__all__ = [
    "Action",
    "ActionConfig",
    "ConfigurationError",
    "MiddlewareChain",
    "MiddlewareFunc",
    "Request",
    "Response",
    "ResponseWriter",
    "WeftError",
    "action",
    "data",
    "data_json",
    "data_with_reader",
    "error",
    "error_json",
    "json",
    "new",
    "recovery",
    "request_logging",
    "text",
    "timing_header",
    "with_reader",
]

_RESPONSE_BUILDERS = frozenset(
    {"Response", "data", "data_json", "data_with_reader", "error", "error_json", "json", "text", "with_reader"}
)
_MIDDLEWARE = frozenset(
    {"MiddlewareChain", "MiddlewareFunc", "new", "recovery", "request_logging", "timing_header"}
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import weft`` fast while providing a clean top-level API.
    """
    if name in ("Action", "action"):
        from weft import adapter as _adapter

        return getattr(_adapter, name)

    if name == "ActionConfig":
        from weft.config import ActionConfig

        return ActionConfig

    if name in ("ConfigurationError", "WeftError"):
        from weft import errors as _errors

        return getattr(_errors, name)

    if name == "Request":
        from weft.http.request import Request

        return Request

    if name == "ResponseWriter":
        from weft.http.writer import ResponseWriter

        return ResponseWriter

    if name in _RESPONSE_BUILDERS:
        from weft.http import response as _response

        return getattr(_response, name)

    if name in _MIDDLEWARE:
        from weft import middleware as _mw

        return getattr(_mw, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

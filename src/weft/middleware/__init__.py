"""Middleware — plain ``app -> app`` functions, composed by MiddlewareChain.

Built-in middleware:
    recovery -- Turn unhandled handler exceptions into a JSON 500
    request_logging -- Log method, path, status, and duration
    timing_header -- Add an X-Response-Time header
"""

from weft.middleware.chain import MiddlewareChain, new
from weft.middleware.protocol import MiddlewareFunc
from weft.middleware.recovery import recovery
from weft.middleware.timing import request_logging, timing_header

__all__ = [
    "MiddlewareChain",
    "MiddlewareFunc",
    "new",
    "recovery",
    "request_logging",
    "timing_header",
]

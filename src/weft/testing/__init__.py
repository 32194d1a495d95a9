"""Test utilities for weft handlers and middleware.

Drives any ASGI application in-process, no sockets involved::

    from weft.testing import TestClient
"""

from weft.testing.client import TestClient, TestResponse

__all__ = ["TestClient", "TestResponse"]

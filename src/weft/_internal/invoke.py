"""Invoke helper — call sync or async handler functions uniformly.

Functions adapted by ``Action`` can be ``def`` or ``async def``. The
sync/async check lives here so the adapter and the chain never repeat it.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        def health(request):
            return text(200, "ok")

        async def profile(request):
            user = await load_user(request)
            return json(200, user)
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result

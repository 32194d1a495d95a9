"""MiddlewareChain — an immutable, ordered stack of middleware.

Entries are folded around a terminal handler so that the LAST entry
becomes the OUTERMOST wrapper: it sees the request first and the
response last. The first entry sits closest to the terminal handler.

A chain never changes after construction. ``add`` returns a new chain
backed by a fresh tuple, so handlers already produced by ``wrap`` and
concurrent ``add`` calls on the same receiver cannot observe each other.
"""

from collections.abc import Iterator

from weft._internal.asgi import ASGIApp
from weft.adapter import Action, HandlerFunc
from weft.errors import ConfigurationError
from weft.middleware.protocol import MiddlewareFunc


def _check_entries(funcs: tuple[MiddlewareFunc, ...]) -> tuple[MiddlewareFunc, ...]:
    for index, func in enumerate(funcs):
        if not callable(func):
            msg = f"Middleware entry {index} is not callable: {func!r}"
            raise ConfigurationError(msg)
    return funcs


class MiddlewareChain:
    """Ordered middleware stack, composed via ``wrap``.

    Usage::

        chain = MiddlewareChain(recovery(), request_logging())
        app = chain.wrap_handler_func(index)
        # request_logging runs first, then recovery, then index
    """

    __slots__ = ("_chain",)

    def __init__(self, *funcs: MiddlewareFunc) -> None:
        self._chain: tuple[MiddlewareFunc, ...] = _check_entries(funcs)

    def __len__(self) -> int:
        return len(self._chain)

    def __iter__(self) -> Iterator[MiddlewareFunc]:
        return iter(self._chain)

    def __repr__(self) -> str:
        names = ", ".join(getattr(f, "__qualname__", repr(f)) for f in self._chain)
        return f"MiddlewareChain({names})"

    def wrap(self, final: ASGIApp) -> ASGIApp:
        """Return *final* wrapped by every middleware in the chain.

        Raises:
            ConfigurationError: If *final* is ``None`` or not callable.
        """
        if final is None:
            msg = "cannot wrap a None handler"
            raise ConfigurationError(msg)
        if not callable(final):
            msg = f"cannot wrap a non-callable handler: {final!r}"
            raise ConfigurationError(msg)
        handler = final
        for func in self._chain:
            handler = func(handler)
        return handler

    def wrap_handler_func(self, final: HandlerFunc) -> ASGIApp:
        """Same as ``wrap`` but takes a ``request -> Response | None`` function."""
        if final is None:
            msg = "cannot wrap a None handler"
            raise ConfigurationError(msg)
        return self.wrap(Action(final))

    def add(self, *funcs: MiddlewareFunc) -> "MiddlewareChain":
        """Return a new chain: this chain's entries followed by *funcs*."""
        return MiddlewareChain(*self._chain, *funcs)


def new(*funcs: MiddlewareFunc) -> MiddlewareChain:
    """Build a chain holding *funcs* in the given order."""
    return MiddlewareChain(*funcs)

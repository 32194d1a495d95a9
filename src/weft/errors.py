"""Weft exception hierarchy.

Shared across the adapter, the writer, and the middleware chain so every
module raises and catches the same types.
"""


class WeftError(Exception):
    """Base for all weft-specific errors."""


class ConfigurationError(WeftError):
    """Raised when a handler or chain is wired up incorrectly.

    Signals a programming error at application wiring time, for example
    wrapping ``None`` as the terminal handler of a chain. Never expected
    while serving requests.
    """

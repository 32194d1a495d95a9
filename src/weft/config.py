"""Adapter configuration.

Read once per ``Action`` at construction; every request it serves renders
with the same chunk size and read strategy.
"""

from dataclasses import dataclass

from weft.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ActionConfig:
    """Rendering configuration for ``Action``. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ActionConfig(chunk_size=16 * 1024, offload_reads=False)
    """

    # Bytes requested from the response content per read
    chunk_size: int = 64 * 1024

    # Run blocking ``read()`` calls on a worker thread (io.BytesIO is always read inline)
    offload_reads: bool = True

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive, got {self.chunk_size}"
            raise ConfigurationError(msg)

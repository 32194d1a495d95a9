"""Case-insensitive HTTP headers.

``Headers`` is the immutable view a ``Request`` exposes over the raw ASGI
header pairs. ``MutableHeaders`` is the set-once-per-name store a
``ResponseWriter`` fills before the status line is committed.
"""

from collections.abc import Iterator, Mapping, MutableMapping


def _key(name: str) -> bytes:
    return name.lower().encode("latin-1")


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns every value sent for a name.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        self._raw = raw

    def __getitem__(self, key: str) -> str:
        wanted = _key(key)
        for name, value in self._raw:
            if name.lower() == wanted:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = _key(key)
        return any(name.lower() == wanted for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"{type(self).__name__}({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        wanted = _key(key)
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == wanted]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Raw header byte pairs, lowercased names, ASGI order."""
        return self._raw


class MutableHeaders(MutableMapping[str, str]):
    """Case-insensitive header store with overwrite semantics.

    Assigning a name that is already present replaces its value, whatever
    the casing of either name. ``raw`` renders lowercased latin-1 pairs
    ready for an ``http.response.start`` message.
    """

    __slots__ = ("_items",)

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._items: dict[bytes, tuple[str, str, bytes]] = {}
        if initial:
            self.update(initial)

    def __getitem__(self, key: str) -> str:
        return self._items[_key(key)][1]

    def __setitem__(self, key: str, value: str) -> None:
        try:
            encoded = value.encode("latin-1")
            lowered = _key(key)
        except UnicodeEncodeError as exc:
            msg = f"header {key!r} is not latin-1 encodable: {exc.reason}"
            raise ValueError(msg) from exc
        self._items[lowered] = (key, value, encoded)

    def __delitem__(self, key: str) -> None:
        del self._items[_key(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _key(key) in self._items

    def __iter__(self) -> Iterator[str]:
        return (name for name, _, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"MutableHeaders({dict(self.items())!r})"

    @property
    def raw(self) -> list[tuple[bytes, bytes]]:
        return [(key, encoded) for key, (_, _, encoded) in self._items.items()]

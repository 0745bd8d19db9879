"""Immutable, case-insensitive request headers.

Decodes the raw ASGI byte pairs once at construction. Repeated headers
keep every value in arrival order.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first value for a name. ``get_joined``
    folds every value into one comma-separated string, which is how
    list-valued headers such as ``Accept-Encoding`` are meant to be
    combined.
    """

    __slots__ = ("_values",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        values: dict[str, list[str]] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
        object.__setattr__(self, "_values", {k: tuple(v) for k, v in values.items()})

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get_joined(self, key: str) -> str | None:
        """Return all values for *key* joined with ``", "``, or ``None``."""
        values = self._values.get(key.lower())
        if not values:
            return None
        return ", ".join(values)

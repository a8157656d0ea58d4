"""Case-insensitive, read-only string-keyed mapping.

Keys keep the spelling of the last write; lookups compare casefolded
keys. Shared by ``RuleMap`` and anything else keyed by field paths.
"""

from collections.abc import Iterable, Iterator, Mapping


class CaseInsensitiveMapping[V](Mapping[str, V]):
    """Immutable mapping with case-insensitive string keys.

    Later pairs overwrite earlier ones whose keys differ only in case::

        m = CaseInsensitiveMapping([("Email", 1), ("email", 2)])
        m["EMAIL"]  # 2
        list(m)     # ["email"]
    """

    __slots__ = ("_data",)

    def __init__(self, items: Mapping[str, V] | Iterable[tuple[str, V]] = ()) -> None:
        pairs = items.items() if isinstance(items, Mapping) else items
        data: dict[str, tuple[str, V]] = {}
        for key, value in pairs:
            data[key.casefold()] = (key, value)
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> V:
        if not isinstance(key, str):
            raise KeyError(key)
        return self._data[key.casefold()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._data

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.values())
        return f"{type(self).__name__}({{{items}}})"

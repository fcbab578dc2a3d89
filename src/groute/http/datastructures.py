"""Read-only multi-valued mappings for request metadata.

``Headers`` wraps the raw ASGI header pairs, ``QueryParams`` the raw
query string. Both behave as ``Mapping[str, str]`` returning the first
value for a key, with ``get_list`` for every value.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class _MultiMapping(Mapping[str, str]):
    """Insertion-ordered ``key -> [values]`` index built once."""

    __slots__ = ("_index",)

    _index: dict[str, list[str]]

    def _build(self, pairs: list[tuple[str, str]]) -> None:
        index: dict[str, list[str]] = {}
        for key, value in pairs:
            index.setdefault(self._normalize(key), []).append(value)
        object.__setattr__(self, "_index", index)

    @staticmethod
    def _normalize(key: str) -> str:
        return key

    def __getitem__(self, key: str) -> str:
        return self._index[self._normalize(key)][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._normalize(key) in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._index.get(self._normalize(key))
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key*, in arrival order."""
        return list(self._index.get(self._normalize(key), ()))


class Headers(_MultiMapping):
    """Case-insensitive request headers.

    Keys are exposed lower-cased. Raw byte pairs stay available through
    ``raw`` for re-sending.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)
        self._build([(name.decode("latin-1"), value.decode("latin-1")) for name, value in raw])

    @staticmethod
    def _normalize(key: str) -> str:
        return key.lower()

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        return self._raw


class QueryParams(_MultiMapping):
    """Parsed query string parameters. Blank values are kept."""

    __slots__ = ("_raw",)

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        self._build(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))

    @property
    def raw(self) -> bytes:
        return self._raw

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return the value as ``int``, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

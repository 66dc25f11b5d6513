"""Ordered multi-valued URL parameters.

``Parameters`` is immutable and implements ``Mapping[str, str]`` and the
``MultiValueMapping`` protocol.  ``ParametersBuilder`` is its mutable
counterpart: ``append`` keeps every value for a name, item assignment
replaces them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import parse_qsl

from perch._internal.multimap import MultiValueMapping
from perch.http.encoding import form_url_encode


class Parameters(Mapping[str, str]):
    """Immutable ordered URL parameters.

    Attributes:
        _data: Field name -> list of values, names in first-seen order.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]

    __slots__ = ("_data",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        data: dict[str, list[str]] = {}
        for name, value in pairs:
            data.setdefault(name, []).append(value)
        self._data = data

    @classmethod
    def parse(cls, query_string: str) -> Parameters:
        """Parse an encoded ``k=v&k2=v2`` query string, keeping blank values."""
        return cls(parse_qsl(query_string, keep_blank_values=True))

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameters):
            return NotImplemented
        return list(self._data.items()) == list(other._data.items())

    def __hash__(self) -> int:
        return hash(tuple(self.pairs()))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.items())
        return f"Parameters({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Yield every ``(name, value)`` pair, values of one name together."""
        for name, values in self._data.items():
            for value in values:
                yield name, value

    def is_empty(self) -> bool:
        return not self._data

    def form_url_encode(self) -> str:
        """Render as an encoded query string (without the leading ``?``)."""
        return form_url_encode(self.pairs())


EMPTY_PARAMETERS = Parameters()


class ParametersBuilder:
    """Mutable, ordered multi-valued parameters.

    Usage::

        builder = ParametersBuilder()
        builder.append("tag", "a")
        builder.append("tag", "b")
        builder["page"] = "2"
        builder.build().form_url_encode()  # "tag=a&tag=b&page=2"
    """

    __slots__ = ("_data",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._data: dict[str, list[str]] = {}
        for name, value in pairs:
            self.append(name, value)

    def append(self, name: str, value: str) -> None:
        """Add *value* after any existing values for *name*."""
        self._data.setdefault(name, []).append(value)

    def append_all(self, other: MultiValueMappingLike) -> None:
        """Append every pair from *other*, keeping its order."""
        for name, value in _pairs_of(other):
            self.append(name, value)

    def __setitem__(self, name: str, value: str) -> None:
        """Replace all values for *name* with the single *value*."""
        self._data[name] = [value]

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ParametersBuilder({self._data!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def pairs(self) -> Iterator[tuple[str, str]]:
        for name, values in self._data.items():
            for value in values:
                yield name, value

    def is_empty(self) -> bool:
        return not self._data

    def clear(self) -> None:
        self._data.clear()

    def build(self) -> Parameters:
        """Snapshot the current contents as immutable ``Parameters``."""
        return Parameters(self.pairs())


type MultiValueMappingLike = MultiValueMapping | Mapping[str, str]


def _pairs_of(source: MultiValueMappingLike) -> Iterator[tuple[str, str]]:
    if isinstance(source, MultiValueMapping):
        yield from source.pairs()
        return
    for name, value in source.items():
        yield name, value

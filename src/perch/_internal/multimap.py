"""MultiValueMapping protocol — shared interface for Parameters and ParametersBuilder.

A structural protocol so the URL model and the encoder can accept any
multi-valued mapping without coupling to the concrete type.
"""

from collections.abc import Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A string mapping where keys can have multiple values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    ``pairs`` yields every ``(name, value)`` in order, names grouped
    by first appearance.
    """

    def __getitem__(self, key: str) -> str: ...
    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get_list(self, key: str) -> list[str]: ...
    def pairs(self) -> Iterator[tuple[str, str]]: ...

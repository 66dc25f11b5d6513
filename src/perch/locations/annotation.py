"""The ``@location`` decorator and its lookup.

A location class is a dataclass tagged with the path template it
renders to::

    @location("/users/{id}/posts")
    @dataclass(frozen=True, slots=True)
    class UserPosts:
        id: int
        page: int = 1
"""

import dataclasses
from collections.abc import Callable

from perch.errors import ConfigurationError

LOCATION_ATTR = "__perch_location__"


def location[T: type](path: str) -> Callable[[T], T]:
    """Tag a dataclass with the path template it is encoded into."""

    def decorator(cls: T) -> T:
        if not isinstance(cls, type) or not dataclasses.is_dataclass(cls):
            name = getattr(cls, "__name__", repr(cls))
            msg = f"@location({path!r}) must decorate a dataclass, got {name}"
            raise ConfigurationError(msg)
        setattr(cls, LOCATION_ATTR, path)
        return cls

    return decorator


def location_of(cls: type) -> str | None:
    """Return the template declared directly on *cls*, or None.

    Only the class's own declaration counts: a subclass of a location
    class that is not itself decorated has no location.
    """
    return vars(cls).get(LOCATION_ATTR)

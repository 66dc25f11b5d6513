"""Template filters that render location values.

Bound to one ``Locations`` registry and registered on a kida
Environment, so templates link to typed locations instead of
hand-written paths::

    <a href="{{ UserPosts(id=user.id) | href }}">Posts</a>
    <link rel="canonical" href="{{ page | absolute_url }}">
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from perch.locations.registry import Locations

if TYPE_CHECKING:
    from kida import Environment


def make_filters(locations: Locations) -> dict[str, Callable[..., Any]]:
    """Build the ``href`` and ``absolute_url`` filters for *locations*."""

    def href(value: Any) -> str:
        """Relative href for a location value.

        Example:
            {{ UserPosts(id=7, page=2) | href }}  → "/users/7/posts?page=2"

        """
        return locations.href(value)

    def absolute_url(value: Any) -> str:
        """Absolute URL for a location value on the configured base URL.

        Example:
            {{ UserPosts(id=7) | absolute_url }}  → "https://example.com/users/7/posts"

        """
        return str(locations.url(value))

    return {
        "absolute_url": absolute_url,
        "href": href,
    }


def register_filters(env: Environment, locations: Locations) -> Environment:
    """Register the location filters on a kida *env*.

    Location filters are added alongside whatever the environment
    already has; a user filter of the same name is replaced.
    """
    env.update_filters(make_filters(locations))
    return env

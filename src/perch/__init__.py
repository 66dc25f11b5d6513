"""Perch — typed locations rendered to URLs.

Declare where a page lives once, as a dataclass, and build links to it
from values instead of string formatting.

Basic usage::

    from dataclasses import dataclass

    from perch import Locations

    locations = Locations()

    @locations.location("/users/{id}/posts")
    @dataclass(frozen=True, slots=True)
    class UserPosts:
        id: int
        page: int = 1

    locations.href(UserPosts(id=7, page=2))  # "/users/7/posts?page=2"

Templates (``pip install perch[templates]``)::

    from perch.templating.filters import register_filters
    register_filters(env, locations)
    # {{ UserPosts(id=7) | href }}
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "ConversionError",
    "ConversionService",
    "LocationError",
    "Locations",
    "LocationsConfig",
    "MissingPathParameterError",
    "MissingPatternError",
    "PerchError",
    "URLBuilder",
    "URLEncoder",
    "UnsupportedOperationError",
    "Url",
    "encode_location",
    "location",
]


# Public name -> (module, attribute)
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ConfigurationError": ("perch.errors", "ConfigurationError"),
    "ConversionError": ("perch.errors", "ConversionError"),
    "ConversionService": ("perch.locations.conversion", "ConversionService"),
    "LocationError": ("perch.errors", "LocationError"),
    "Locations": ("perch.locations.registry", "Locations"),
    "LocationsConfig": ("perch.config", "LocationsConfig"),
    "MissingPathParameterError": ("perch.errors", "MissingPathParameterError"),
    "MissingPatternError": ("perch.errors", "MissingPatternError"),
    "PerchError": ("perch.errors", "PerchError"),
    "URLBuilder": ("perch.http.url", "URLBuilder"),
    "URLEncoder": ("perch.locations.encoder", "URLEncoder"),
    "UnsupportedOperationError": ("perch.errors", "UnsupportedOperationError"),
    "Url": ("perch.http.url", "Url"),
    "encode_location": ("perch.locations.encoder", "encode_location"),
    "location": ("perch.locations.annotation", "location"),
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    target = _LAZY_IMPORTS.get(name)
    if target is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    module_name, attr = target
    return getattr(importlib.import_module(module_name), attr)

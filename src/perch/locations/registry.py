"""Locations registry — the public face of the encoder.

Collects location classes during setup and turns location values into
relative hrefs or absolute URLs::

    locations = Locations(LocationsConfig(base_url="https://example.com"))

    @locations.location("/users/{id}")
    @dataclass(frozen=True, slots=True)
    class User:
        id: int
        tab: str = "profile"

    locations.href(User(id=7))  # "/users/7?tab=profile"
    str(locations.url(User(id=7)))  # "https://example.com/users/7?tab=profile"
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from perch.config import LocationsConfig
from perch.errors import ConfigurationError, MissingPatternError
from perch.http.url import URLBuilder, Url
from perch.locations.annotation import location as tag_location
from perch.locations.conversion import DEFAULT_CONVERSIONS, ConversionService
from perch.locations.descriptor import describe
from perch.locations.encoder import encode_location
from perch.locations.pattern import parse_template

logger = logging.getLogger("perch.locations")


@dataclass(frozen=True, slots=True)
class LocationInfo:
    """Introspection record for one registered location class."""

    cls: type
    template: str
    path_parameters: tuple[str, ...]
    query_parameters: tuple[str, ...]

    @property
    def name(self) -> str:
        return self.cls.__name__


class Locations:
    """Registry of location classes bound to a configuration.

    ``href`` and ``url`` accept any location value, registered or not;
    registration only matters for introspection (``routes``, the CLI).
    """

    __slots__ = ("_base", "_classes", "config", "conversions")

    def __init__(
        self,
        config: LocationsConfig | None = None,
        conversions: ConversionService | None = None,
    ) -> None:
        self.config = config or LocationsConfig()
        self.conversions = conversions or DEFAULT_CONVERSIONS
        self._classes: dict[str, type] = {}
        self._base = URLBuilder(self.config.base_url).build()

    def location[T: type](self, path: str) -> Callable[[T], T]:
        """Decorator: tag a dataclass with *path* and register it."""
        tag = tag_location(path)

        def decorator(cls: T) -> T:
            return self.register(tag(cls))

        return decorator

    def register[T: type](self, cls: T) -> T:
        """Register an already-decorated location class."""
        descriptor = describe(cls)
        if descriptor.location is None:
            msg = f"{cls.__name__} is not a location class; decorate it with @location(...)"
            raise ConfigurationError(msg)
        # Fail at setup time on malformed templates
        parse_template(descriptor.location)

        existing = self._classes.get(cls.__name__)
        if existing is not None and existing is not cls:
            msg = f"A location class named {cls.__name__!r} is already registered"
            raise ConfigurationError(msg)

        self._classes[cls.__name__] = cls
        logger.debug("Registered location %s -> %s", cls.__name__, descriptor.location)
        return cls

    def get(self, name: str) -> type | None:
        """Return the registered class called *name*, or None."""
        return self._classes.get(name)

    @property
    def routes(self) -> list[LocationInfo]:
        """Registered location classes, in registration order."""
        result: list[LocationInfo] = []
        for cls in self._classes.values():
            descriptor = describe(cls)
            template = descriptor.location or ""
            pattern = parse_template(template)
            path_params = tuple(n for n in descriptor.element_names if n in pattern.path_parameter_names)
            query_params = tuple(n for n in descriptor.element_names if n not in pattern.path_parameter_names)
            result.append(
                LocationInfo(
                    cls=cls,
                    template=template,
                    path_parameters=path_params,
                    query_parameters=query_params,
                )
            )
        return result

    def href(self, value: Any) -> str:
        """Relative href (path and query) for a location value."""
        return self._encode(value).full_path

    def url(self, value: Any) -> Url:
        """Absolute URL for a location value, on the configured base URL."""
        encoded = self._encode(value)
        builder = URLBuilder(encoded)
        builder.protocol = self._base.protocol
        builder.host = self._base.host
        builder.port = self._base.specified_port
        builder.user = self._base.user
        builder.password = self._base.password
        builder.encoded_path = _join_paths(self._base.encoded_path, encoded.encoded_path)
        return builder.build()

    def _encode(self, value: Any) -> Url:
        if not describe(type(value)).is_class:
            msg = f"{type(value).__name__} is not a location class"
            raise MissingPatternError(msg)
        url = encode_location(value, self.conversions)
        if self.config.trailing_query and not url.trailing_query:
            builder = URLBuilder(url)
            builder.trailing_query = True
            url = builder.build()
        return url


def _join_paths(base: str, path: str) -> str:
    """Mount *path* under the base URL's path prefix."""
    prefix = base.rstrip("/")
    if not prefix:
        return path
    return f"{prefix}/{path.lstrip('/')}"

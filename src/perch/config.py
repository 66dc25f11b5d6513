"""Locations configuration.

One frozen dataclass holds the settings a ``Locations`` registry reads:
the base URL for absolute links and the empty-query rendering.
"""

from dataclasses import dataclass

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class LocationsConfig:
    """Configuration for a ``Locations`` registry. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LocationsConfig(base_url="https://example.com:8443")
    """

    # Scheme, host and port applied by ``Locations.url()``
    base_url: str = "http://localhost"

    # Render a bare "?" after the path when a location has no query parameters
    trailing_query: bool = False

    def __post_init__(self) -> None:
        if "://" not in self.base_url:
            msg = f"base_url must be an absolute URL with a scheme, got {self.base_url!r}"
            raise ConfigurationError(msg)

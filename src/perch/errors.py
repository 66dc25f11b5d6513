"""Perch exception hierarchy.

Shared across the URL model, the location encoder, the registry and the
CLI so every module raises and catches the same types.
"""

from typing import Any


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a location template or configuration value is invalid.

    Typically raised at import time, when ``@location`` is applied or a
    ``LocationsConfig`` is created.
    """


class LocationError(PerchError):
    """Base for errors raised while encoding a location into a URL."""


class MissingPatternError(LocationError):
    """No location pattern was resolved for the value being encoded.

    Raised when a scalar is written, or ``build()`` is called, before any
    class-shaped structure carrying a location template was visited.
    """

    def __init__(self, detail: str = "No @location annotation found") -> None:
        super().__init__(detail)


class MissingPathParameterError(LocationError):
    """A placeholder in the location template has no value."""

    def __init__(self, name: str, template: str) -> None:
        self.name = name
        self.template = template
        super().__init__(f"Missing path parameter {name!r} for location {template!r}")


class UnsupportedOperationError(LocationError):
    """The encoder was asked for something a URL cannot represent.

    Raised for an explicit ``None`` written as a bare scalar, and for
    values the conversion service cannot turn into strings.
    """


class ConversionError(PerchError):
    """A value could not be converted to or from its string form."""

    def __init__(self, value: Any, target: Any, detail: str = "") -> None:
        self.value = value
        self.target = target
        target_name = getattr(target, "__name__", str(target))
        message = detail or f"Cannot convert {value!r} using {target_name}"
        super().__init__(message)

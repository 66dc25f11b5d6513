"""Encode a location dataclass into a ``Url``.

One ``URLEncoder`` handles one value.  The first class-shaped structure
it sees supplies the location pattern; every scalar written afterwards
lands in the path (when its name is a placeholder of that pattern) or
in the query string (otherwise).

Path parameters overwrite: a placeholder holds a single value.  Query
parameters append: repeated names become repeated query keys.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from perch.errors import MissingPatternError, UnsupportedOperationError
from perch.http.parameters import ParametersBuilder
from perch.http.url import URLBuilder, Url
from perch.locations.conversion import DEFAULT_CONVERSIONS, ConversionService, Converted, NotConvertible
from perch.locations.descriptor import Descriptor, StructureKind, describe_value
from perch.locations.pattern import LocationPattern, build_location_pattern
from perch.locations.serializer import serialize

logger = logging.getLogger("perch.locations")


class URLEncoder:
    """Encoder that accumulates path and query parameters for one value.

    Usage::

        encoder = URLEncoder()
        serialize(encoder, describe(UserPosts), UserPosts(id=7, page=2))
        encoder.build().full_path  # "/users/7/posts?page=2"

    Scalars are routed by the name of the element currently being
    written.  Nested elements set that name for the duration of their
    serialization and restore the previous one afterwards, so sibling
    fields never see a stale name.
    """

    __slots__ = (
        "_conversions",
        "_current_element_name",
        "_path_parameters",
        "_pattern",
        "_query_parameters",
    )

    def __init__(self, conversions: ConversionService | None = None) -> None:
        self._conversions = conversions or DEFAULT_CONVERSIONS
        self._path_parameters = ParametersBuilder()
        self._query_parameters = ParametersBuilder()
        self._pattern: LocationPattern | None = None
        self._current_element_name: str | None = None

    @property
    def pattern(self) -> LocationPattern | None:
        return self._pattern

    # -- Structures --------------------------------------------------------

    def begin_structure(self, descriptor: Descriptor) -> URLEncoder:
        # Nested class-shaped values never replace the root pattern
        if descriptor.kind is StructureKind.CLASS and self._pattern is None:
            self._pattern = build_location_pattern(descriptor)
        return self

    def end_structure(self, descriptor: Descriptor) -> None:
        pass

    # -- Scalars -----------------------------------------------------------

    def encode_boolean(self, value: bool) -> None:
        self.encode_string("true" if value else "false")

    def encode_int(self, value: int) -> None:
        self.encode_string(str(value))

    def encode_float(self, value: float) -> None:
        self.encode_string(str(value))

    def encode_unit(self) -> None:
        self.encode_string("Unit")

    def encode_enum(self, descriptor: Descriptor, value: Enum) -> None:
        self.encode_string(value.name)

    def encode_string(self, value: str) -> None:
        self._put(self._require_element_name(), value)

    def encode_null(self) -> None:
        msg = "Encoding a null value to URL is not supported"
        raise UnsupportedOperationError(msg)

    def encode_not_null_mark(self) -> None:
        msg = "Encoding a primitive to URL is not supported"
        raise UnsupportedOperationError(msg)

    def encode_contextual(self, descriptor: Descriptor, value: Any) -> None:
        name = self._require_element_name()
        match self._conversions.try_to_values(value):
            case Converted(values=values):
                for stringified in values:
                    self._put(name, stringified)
            case NotConvertible(reason=reason):
                msg = f"Cannot encode {descriptor.name} value for {name!r} to URL: {reason}"
                raise UnsupportedOperationError(msg)

    # -- Elements ----------------------------------------------------------

    def encode_boolean_element(self, descriptor: Descriptor, index: int, value: bool) -> None:
        self._encode_element(descriptor, index, "true" if value else "false")

    def encode_int_element(self, descriptor: Descriptor, index: int, value: int) -> None:
        self._encode_element(descriptor, index, str(value))

    def encode_float_element(self, descriptor: Descriptor, index: int, value: float) -> None:
        self._encode_element(descriptor, index, str(value))

    def encode_string_element(self, descriptor: Descriptor, index: int, value: str) -> None:
        self._encode_element(descriptor, index, value)

    def encode_unit_element(self, descriptor: Descriptor, index: int) -> None:
        self._encode_element(descriptor, index, "")

    def encode_enum_element(self, descriptor: Descriptor, index: int, value: Enum) -> None:
        self._encode_element(descriptor, index, value.name)

    def encode_serializable_element(
        self,
        descriptor: Descriptor,
        index: int,
        element_descriptor: Descriptor,
        value: Any,
    ) -> None:
        """Encode a nested value under the element's name.

        A nested dataclass without its own location is first offered to
        the conversion service; if that flattens it, every value is
        written under the outer field's name.  Otherwise the value is
        serialized field by field with this encoder.
        """
        before = self._current_element_name
        name = descriptor.element_name(index) if descriptor.is_class else before

        self._current_element_name = name
        try:
            if name is not None and element_descriptor.is_class and element_descriptor.location is None:
                result = self._conversions.try_to_values(value)
                if isinstance(result, Converted):
                    logger.debug(
                        "Flattened %s into %d value(s) for %r", element_descriptor.name, len(result.values), name
                    )
                    for stringified in result.values:
                        self._put(name, stringified)
                    return
                logger.debug("Encoding %s field by field for %r: %s", element_descriptor.name, name, result.reason)

            serialize(self, element_descriptor, value)
        finally:
            self._current_element_name = before

    def encode_nullable_serializable_element(
        self,
        descriptor: Descriptor,
        index: int,
        element_descriptor: Descriptor,
        value: Any | None,
    ) -> None:
        # Absent optional values are omitted from the URL entirely
        if value is not None:
            self.encode_serializable_element(descriptor, index, element_descriptor, value)

    # -- Result ------------------------------------------------------------

    def build(self) -> Url:
        """Render the accumulated parameters into a ``Url``.

        Raises ``MissingPatternError`` if no location pattern was seen and
        ``MissingPathParameterError`` if a placeholder was never written.
        Scheme, host and port are left at the ``URLBuilder`` defaults.
        """
        pattern = self._pattern
        if pattern is None:
            raise MissingPatternError

        builder = URLBuilder(
            parameters=self._query_parameters,
            encoded_path=pattern.format(self._path_parameters.build()),
        )
        return builder.build()

    # -- Internals ---------------------------------------------------------

    def _require_element_name(self) -> str:
        # A scalar seen before any location-bearing structure has no pattern to land in
        if self._pattern is None:
            raise MissingPatternError
        name = self._current_element_name
        if name is None:
            msg = "Encoding a primitive to URL is not supported"
            raise UnsupportedOperationError(msg)
        return name

    def _encode_element(self, descriptor: Descriptor, index: int, stringified: str) -> None:
        # Collection items inherit the name of the field holding the collection
        if descriptor.is_class:
            name = descriptor.element_name(index)
        else:
            name = self._require_element_name()
        self._put(name, stringified)

    def _put(self, name: str, stringified: str) -> None:
        pattern = self._pattern
        if pattern is None:
            raise MissingPatternError

        if name in pattern.path_parameter_names:
            self._path_parameters[name] = stringified
        else:
            self._query_parameters.append(name, stringified)


def encode_location(value: Any, conversions: ConversionService | None = None) -> Url:
    """Encode one location value into a ``Url`` with a fresh encoder."""
    encoder = URLEncoder(conversions)
    serialize(encoder, describe_value(value), value)
    return encoder.build()

"""Value <-> string-list conversion.

The encoder asks the service to flatten values it cannot serialize
structurally.  ``try_to_values`` returns a result instead of raising so
the caller can branch on ``NotConvertible``; ``to_values`` and
``from_values`` raise ``ConversionError`` for callers that prefer the
exception form.

Usage::

    conversions = ConversionService.with_defaults()
    conversions.register(
        DateRange,
        lambda r: [r.start.isoformat(), r.end.isoformat()],
        lambda values, _: DateRange(date.fromisoformat(values[0]), date.fromisoformat(values[1])),
    )
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import UUID

from perch.errors import ConversionError

type ToValues = Callable[[Any], Iterable[str]]
type FromValues = Callable[[list[str], Any], Any]

_COLLECTION_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)


@dataclass(frozen=True, slots=True)
class Converted:
    """Successful conversion: the string values, in order."""

    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class NotConvertible:
    """The service has no way to turn *value* into strings."""

    value: Any
    reason: str


type ConversionResult = Converted | NotConvertible


@dataclass(frozen=True, slots=True)
class Converter:
    """A registered pair of conversion functions for one type."""

    to_values: ToValues
    from_values: FromValues | None = None


class ConversionService:
    """Registry of converters keyed by type.

    Lookup walks the MRO of the value's type, so a converter for a base
    class also serves its subclasses.  A service with a *parent* falls
    back to the parent's converters.
    """

    __slots__ = ("_converters", "_parent")

    def __init__(self, parent: ConversionService | None = None) -> None:
        self._converters: dict[type, Converter] = {}
        self._parent = parent

    @classmethod
    def with_defaults(cls) -> ConversionService:
        """A new, empty service layered on ``DEFAULT_CONVERSIONS``."""
        return cls(parent=DEFAULT_CONVERSIONS)

    def register(self, target: type, to_values: ToValues, from_values: FromValues | None = None) -> None:
        """Register conversion functions for *target* and its subclasses."""
        self._converters[target] = Converter(to_values=to_values, from_values=from_values)

    def find(self, target: type) -> Converter | None:
        """Return the converter serving *target*, or None."""
        for klass in getattr(target, "__mro__", (target,)):
            converter = self._converters.get(klass)
            if converter is not None:
                return converter
        if self._parent is not None:
            return self._parent.find(target)
        return None

    def try_to_values(self, value: Any) -> ConversionResult:
        """Convert *value* to strings, or report why it cannot be."""
        if value is None:
            return Converted(())

        converter = self.find(type(value))
        if converter is not None:
            try:
                return Converted(tuple(converter.to_values(value)))
            except ConversionError as exc:
                return NotConvertible(value, str(exc))

        if isinstance(value, _COLLECTION_TYPES):
            values: list[str] = []
            for item in value:
                result = self.try_to_values(item)
                if isinstance(result, NotConvertible):
                    return result
                values.extend(result.values)
            return Converted(tuple(values))

        return NotConvertible(value, f"No converter registered for {type(value).__name__}")

    def to_values(self, value: Any) -> list[str]:
        """Convert *value* to strings. Raises ``ConversionError``."""
        match self.try_to_values(value):
            case Converted(values=values):
                return list(values)
            case NotConvertible(reason=reason):
                raise ConversionError(value, type(value), reason)

    def from_values(self, values: list[str], target: Any) -> Any:
        """Rebuild a value of type *target* from its strings. Raises ``ConversionError``."""
        origin = typing.get_origin(target)
        if origin in _COLLECTION_TYPES:
            args = typing.get_args(target)
            item = args[0] if args else str
            return origin(self.from_values([v], item) for v in values)

        converter = self.find(target)
        if converter is None or converter.from_values is None:
            raise ConversionError(values, target, f"No converter registered for {getattr(target, '__name__', target)}")
        try:
            return converter.from_values(values, target)
        except (ValueError, KeyError, IndexError, InvalidOperation) as exc:
            raise ConversionError(values, target) from exc


def _single(values: list[str]) -> str:
    if len(values) != 1:
        msg = f"Expected exactly one value, got {len(values)}"
        raise ValueError(msg)
    return values[0]


def _parse_bool(values: list[str], _target: Any) -> bool:
    return _single(values).lower() in ("true", "1", "yes", "on")


def _default_service() -> ConversionService:
    service = ConversionService()
    service.register(str, lambda v: [v], lambda values, _: _single(values))
    service.register(bool, lambda v: ["true" if v else "false"], _parse_bool)
    service.register(int, lambda v: [str(v)], lambda values, _: int(_single(values)))
    service.register(float, lambda v: [str(v)], lambda values, _: float(_single(values)))
    service.register(Decimal, lambda v: [str(v)], lambda values, _: Decimal(_single(values)))
    service.register(UUID, lambda v: [str(v)], lambda values, _: UUID(_single(values)))
    service.register(Enum, lambda v: [v.name], lambda values, target: target[_single(values)])
    service.register(datetime, lambda v: [v.isoformat()], lambda values, _: datetime.fromisoformat(_single(values)))
    service.register(date, lambda v: [v.isoformat()], lambda values, _: date.fromisoformat(_single(values)))
    return service


DEFAULT_CONVERSIONS = _default_service()

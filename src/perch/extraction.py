"""Typed construction of location dataclasses from string values.

The inverse direction of the encoder, used by the CLI: given a mapping
of names to strings (``id=7 tab=posts``), build the location value by
converting each string to the field's annotated type.

Supported field types: ``str``, ``int``, ``float``, ``bool``, enums,
anything the conversion service can rebuild, and ``X | None`` of those.
Missing keys use the dataclass field default.  Conversion failures keep
the raw string.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Mapping
from typing import Any

from perch.errors import ConversionError
from perch.locations.conversion import DEFAULT_CONVERSIONS, ConversionService


def extract_dataclass[T](
    cls: type[T],
    data: Mapping[str, str | list[str]],
    conversions: ConversionService | None = None,
) -> T:
    """Create a dataclass instance from a mapping of strings.

    For each field in *cls*, looks up the field name in *data*.  If found,
    converts the value(s) to the field's annotated type.  If missing, the
    field's default is used.

    Args:
        cls: A dataclass type to instantiate.
        data: Field name -> string, or list of strings for collection fields.
        conversions: Service used for types beyond the builtins.

    Returns:
        A new instance of *cls* populated from *data*.
    """
    service = conversions or DEFAULT_CONVERSIONS
    hints = typing.get_type_hints(cls)
    kwargs: dict[str, Any] = {}

    for f in dataclasses.fields(cls):
        if f.name not in data:
            continue

        raw = data[f.name]
        values = raw if isinstance(raw, list) else [raw]
        kwargs[f.name] = _convert(values, hints.get(f.name, f.type), service)

    return cls(**kwargs)


def _convert(values: list[str], target_type: Any, service: ConversionService) -> Any:
    """Convert *values* to *target_type*, returning the raw value on failure."""
    target_type = _strip_optional(target_type)
    try:
        return service.from_values(values, target_type)
    except ConversionError:
        return values[0] if len(values) == 1 else values


def _strip_optional(annotation: Any) -> Any:
    args = typing.get_args(annotation)
    if typing.get_origin(annotation) in (typing.Union, types.UnionType) and type(None) in args:
        present = [a for a in args if a is not type(None)]
        if len(present) == 1:
            return present[0]
    return annotation


"""Structural descriptors for location types.

A ``Descriptor`` is the shape of a type as the encoder sees it: its
kind, its ordered element names and element types, and the location
template declared on it.  Descriptors are built once per annotation and
cached; element descriptors are resolved lazily so self-referencing
dataclasses do not recurse at build time.
"""

from __future__ import annotations

import dataclasses
import functools
import types
import typing
from enum import Enum, StrEnum
from typing import Any

from perch.locations.annotation import location_of


class StructureKind(StrEnum):
    """Closed set of shapes a value can have."""

    PRIMITIVE = "primitive"  # bool, int, float, str
    ENUM = "enum"
    CLASS = "class"  # dataclasses
    LIST = "list"  # list, tuple, set, frozenset
    CONTEXTUAL = "contextual"  # anything else, handled by the conversion service


PRIMITIVE_TYPES: tuple[type, ...] = (bool, int, float, str)

_COLLECTION_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)


@dataclasses.dataclass(frozen=True, slots=True)
class Descriptor:
    """The shape of one annotated type.

    ``element_names`` and ``element_types`` are parallel tuples for
    ``CLASS`` descriptors.  A ``LIST`` descriptor has a single element
    type shared by every index.
    """

    name: str
    kind: StructureKind
    python_type: Any
    nullable: bool = False
    element_names: tuple[str, ...] = ()
    element_types: tuple[Any, ...] = ()
    location: str | None = None

    @property
    def is_class(self) -> bool:
        return self.kind is StructureKind.CLASS

    def element_name(self, index: int) -> str:
        if self.kind is StructureKind.LIST:
            return str(index)
        return self.element_names[index]

    def element_descriptor(self, index: int) -> Descriptor:
        if self.kind is StructureKind.LIST:
            return describe(self.element_types[0])
        return describe(self.element_types[index])


@functools.cache
def describe(annotation: Any) -> Descriptor:
    """Build the descriptor for a type annotation.

    ``X | None`` produces the descriptor of ``X`` with ``nullable=True``.
    """
    origin = typing.get_origin(annotation)

    if origin in (types.UnionType, typing.Union):
        args = typing.get_args(annotation)
        present = [arg for arg in args if arg is not type(None)]
        nullable = len(present) != len(args)
        if len(present) == 1:
            return dataclasses.replace(describe(present[0]), nullable=nullable)
        return Descriptor(
            name=repr(annotation),
            kind=StructureKind.CONTEXTUAL,
            python_type=annotation,
            nullable=nullable,
        )

    if origin in _COLLECTION_TYPES:
        args = typing.get_args(annotation)
        item = args[0] if args else Any
        return Descriptor(
            name=f"{origin.__name__}[{getattr(item, '__name__', repr(item))}]",
            kind=StructureKind.LIST,
            python_type=origin,
            element_types=(item,),
        )

    if annotation in _COLLECTION_TYPES:
        return Descriptor(
            name=annotation.__name__,
            kind=StructureKind.LIST,
            python_type=annotation,
            element_types=(Any,),
        )

    if isinstance(annotation, type):
        if issubclass(annotation, Enum):
            return Descriptor(name=annotation.__qualname__, kind=StructureKind.ENUM, python_type=annotation)
        if issubclass(annotation, PRIMITIVE_TYPES):
            return Descriptor(name=annotation.__qualname__, kind=StructureKind.PRIMITIVE, python_type=annotation)
        if dataclasses.is_dataclass(annotation):
            return _describe_dataclass(annotation)

    name = getattr(annotation, "__qualname__", None) or repr(annotation)
    return Descriptor(name=name, kind=StructureKind.CONTEXTUAL, python_type=annotation)


def describe_value(value: Any) -> Descriptor:
    """Descriptor for the runtime type of *value*."""
    return describe(type(value))


def _describe_dataclass(cls: type) -> Descriptor:
    hints = typing.get_type_hints(cls)
    fields = dataclasses.fields(cls)
    return Descriptor(
        name=cls.__qualname__,
        kind=StructureKind.CLASS,
        python_type=cls,
        element_names=tuple(f.name for f in fields),
        element_types=tuple(hints.get(f.name, f.type) for f in fields),
        location=location_of(cls),
    )

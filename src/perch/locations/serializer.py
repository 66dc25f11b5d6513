"""Descriptor-driven serialization.

``serialize`` walks a value by its ``Descriptor`` and reports what it
finds to an ``Encoder``: structures open with ``begin_structure``,
dataclass fields and collection items arrive as indexed ``*_element``
calls, bare scalars as ``encode_*`` calls.  The encoder decides what the
output looks like; this module only decides the order of the calls.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from perch.locations.descriptor import Descriptor, StructureKind


class Encoder(Protocol):
    """Receiver of serialization events.

    Element operations take the *enclosing* descriptor and the element's
    index in it; scalar operations rely on whatever context the encoder
    keeps for the element currently being written.
    """

    def begin_structure(self, descriptor: Descriptor) -> Encoder: ...
    def end_structure(self, descriptor: Descriptor) -> None: ...

    def encode_boolean(self, value: bool) -> None: ...
    def encode_int(self, value: int) -> None: ...
    def encode_float(self, value: float) -> None: ...
    def encode_string(self, value: str) -> None: ...
    def encode_unit(self) -> None: ...
    def encode_enum(self, descriptor: Descriptor, value: Enum) -> None: ...
    def encode_null(self) -> None: ...
    def encode_contextual(self, descriptor: Descriptor, value: Any) -> None: ...

    def encode_boolean_element(self, descriptor: Descriptor, index: int, value: bool) -> None: ...
    def encode_int_element(self, descriptor: Descriptor, index: int, value: int) -> None: ...
    def encode_float_element(self, descriptor: Descriptor, index: int, value: float) -> None: ...
    def encode_string_element(self, descriptor: Descriptor, index: int, value: str) -> None: ...
    def encode_unit_element(self, descriptor: Descriptor, index: int) -> None: ...
    def encode_enum_element(self, descriptor: Descriptor, index: int, value: Enum) -> None: ...

    def encode_serializable_element(
        self,
        descriptor: Descriptor,
        index: int,
        element_descriptor: Descriptor,
        value: Any,
    ) -> None: ...

    def encode_nullable_serializable_element(
        self,
        descriptor: Descriptor,
        index: int,
        element_descriptor: Descriptor,
        value: Any | None,
    ) -> None: ...


def serialize(encoder: Encoder, descriptor: Descriptor, value: Any) -> None:
    """Feed *value*, shaped as *descriptor*, to *encoder*."""
    if value is None:
        encoder.encode_null()
        return

    match descriptor.kind:
        case StructureKind.CLASS:
            composite = encoder.begin_structure(descriptor)
            for index, name in enumerate(descriptor.element_names):
                _serialize_element(composite, descriptor, index, getattr(value, name))
            composite.end_structure(descriptor)
        case StructureKind.LIST:
            composite = encoder.begin_structure(descriptor)
            for index, item in enumerate(value):
                _serialize_element(composite, descriptor, index, item)
            composite.end_structure(descriptor)
        case StructureKind.ENUM:
            encoder.encode_enum(descriptor, value)
        case StructureKind.PRIMITIVE:
            _encode_primitive(encoder, value)
        case StructureKind.CONTEXTUAL:
            encoder.encode_contextual(descriptor, value)


def _serialize_element(encoder: Encoder, descriptor: Descriptor, index: int, value: Any) -> None:
    element = descriptor.element_descriptor(index)

    if element.nullable:
        encoder.encode_nullable_serializable_element(descriptor, index, element, value)
        return

    # None in a non-optional slot is an explicit null, which the encoder rejects
    if value is None:
        encoder.encode_null()
        return

    match element.kind:
        case StructureKind.PRIMITIVE:
            _encode_primitive_element(encoder, descriptor, index, value)
        case StructureKind.ENUM:
            encoder.encode_enum_element(descriptor, index, value)
        case _:
            encoder.encode_serializable_element(descriptor, index, element, value)


def _encode_primitive(encoder: Encoder, value: Any) -> None:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        encoder.encode_boolean(value)
    elif isinstance(value, int):
        encoder.encode_int(value)
    elif isinstance(value, float):
        encoder.encode_float(value)
    else:
        encoder.encode_string(str(value))


def _encode_primitive_element(encoder: Encoder, descriptor: Descriptor, index: int, value: Any) -> None:
    if isinstance(value, bool):
        encoder.encode_boolean_element(descriptor, index, value)
    elif isinstance(value, int):
        encoder.encode_int_element(descriptor, index, value)
    elif isinstance(value, float):
        encoder.encode_float_element(descriptor, index, value)
    else:
        encoder.encode_string_element(descriptor, index, str(value))

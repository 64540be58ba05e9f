"""Closed set of field shapes derived from the IR's isArray/isPrimitive flags."""

from __future__ import annotations

from dataclasses import dataclass

from httpgen.model.ir import Parameter, Property, ReturnType, Service

PRIMITIVES = (
    "string", "integer", "long", "double", "float", "number", "boolean",
    "date", "date-time", "null", "untyped", "file",
)


@dataclass(frozen=True)
class PrimitiveShape:
    primitive: str  # e.g. "integer", "date-time"


@dataclass(frozen=True)
class TypeShape:
    name: str  # referenced Type name


@dataclass(frozen=True)
class EnumShape:
    name: str  # referenced Enum name


@dataclass(frozen=True)
class ArrayShape:
    item: PrimitiveShape | TypeShape | EnumShape


Shape = PrimitiveShape | TypeShape | EnumShape | ArrayShape


def shape_of(service: Service, typed: Parameter | Property | ReturnType) -> Shape:
    """Classify a parameter, property or return type into a Shape."""
    item: PrimitiveShape | TypeShape | EnumShape
    if typed.is_primitive:
        item = PrimitiveShape(typed.type_name)
    elif any(e.name == typed.type_name for e in service.enums):
        item = EnumShape(typed.type_name)
    else:
        item = TypeShape(typed.type_name)

    if typed.is_array:
        return ArrayShape(item)
    return item


def unknown_shape(shape: object) -> TypeError:
    """Error for a value outside the closed set of shapes."""
    return TypeError(f"unknown field shape: {shape!r}")

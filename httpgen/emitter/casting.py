"""Cast rules for each field shape, in both mapping directions.

A rule is a Step: the name of a generated step function, optionally wrapping
another Step. Steps are rendered into the mapper's field tables and, with a
module prefix, into client code that converts request bodies and responses.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from httpgen.emitter.naming import cast_primitive, dump_primitive, map_dto_to, map_to_dto
from httpgen.model.shape import (
    ArrayShape,
    EnumShape,
    PrimitiveShape,
    Shape,
    TypeShape,
    unknown_shape,
)
from httpgen.parser.name_transform import snake

# Primitive -> helper body used in the wire->domain direction. Primitives not
# listed here (string, null, untyped, ...) pass through unchanged.
LOAD_KINDS = {
    "boolean": "boolean",
    "date": "date",
    "date-time": "date_time",
    "double": "float",
    "float": "float",
    "number": "float",
    "integer": "integer",
    "long": "integer",
}

# Only dates need special treatment on the way back to the wire
DUMP_KINDS = {
    "date": "date",
    "date-time": "date_time",
}


@dataclass(frozen=True)
class Step:
    func: str  # generated step function, e.g. "cast_integer" or "each"
    inner: Step | None = None  # argument for combinators (each, nested, using)
    kind: str = ""  # helper body for emitted primitive helpers, e.g. "integer"

    def render(self, prefix: str = "") -> str:
        """Render as a Python expression, qualifying names with prefix."""
        if self.inner is None:
            return prefix + self.func
        return f"{prefix}{self.func}({self.inner.render(prefix)})"

    def walk(self) -> Iterator[Step]:
        yield self
        if self.inner is not None:
            yield from self.inner.walk()


PASSED = Step("passed")


def caster_alias(type_name: str) -> str:
    """Local name a custom caster is imported under in the mapper module."""
    return f"custom_{snake(type_name)}"


def load_step(shape: Shape, casters: dict[str, str]) -> Step:
    """Wire->domain rule for a shape; casters maps type names to custom casters."""
    if isinstance(shape, ArrayShape):
        return Step("each", load_step(shape.item, casters))
    if isinstance(shape, PrimitiveShape):
        if shape.primitive in casters:
            return Step("using", Step(caster_alias(shape.primitive)))
        kind = LOAD_KINDS.get(shape.primitive)
        if kind is None:
            return PASSED
        return Step(cast_primitive(shape.primitive), kind=kind)
    if isinstance(shape, TypeShape):
        if shape.name in casters:
            return Step("using", Step(caster_alias(shape.name)))
        return Step("nested", Step(map_dto_to(shape.name)))
    if isinstance(shape, EnumShape):
        if shape.name in casters:
            return Step("using", Step(caster_alias(shape.name)))
        return Step("nested", Step(map_dto_to(shape.name)))
    raise unknown_shape(shape)


def dump_step(shape: Shape) -> Step:
    """Domain->wire rule for a shape."""
    if isinstance(shape, ArrayShape):
        return Step("each", dump_step(shape.item))
    if isinstance(shape, PrimitiveShape):
        kind = DUMP_KINDS.get(shape.primitive)
        if kind is None:
            return PASSED
        return Step(dump_primitive(shape.primitive), kind=kind)
    if isinstance(shape, TypeShape):
        return Step("nested", Step(map_to_dto(shape.name)))
    if isinstance(shape, EnumShape):
        return Step("nested", Step(map_to_dto(shape.name)))
    raise unknown_shape(shape)


def apply_step(step: Step, value: str, prefix: str = "") -> str:
    """Render code that converts the expression value with step.

    A passthrough is the value itself and a nested mapper is called directly;
    anything else unwraps the step's Cast, which holds the original value
    when the conversion failed.
    """
    if step == PASSED:
        return value
    if step.func == "nested" and step.inner is not None:
        return f"{prefix}{step.inner.func}({value})"
    return f"{step.render(prefix)}({value}).value"

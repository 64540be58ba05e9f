"""Emit the wire<->domain mapper module for a service."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from httpgen.config import GeneratorOptions
from httpgen.emitter.casting import Step, caster_alias, dump_step, load_step
from httpgen.emitter.naming import (
    Artifact,
    cast_dto_to,
    cast_to_dto,
    map_dto_to,
    map_to_dto,
    mapper_filepath,
    mapper_namespace,
    type_class_name,
    types_module,
    warning,
)
from httpgen.model.ir import Enum, Service, Type
from httpgen.model.shape import shape_of
from httpgen.parser.binding_resolver import BindingResolver
from httpgen.parser.name_transform import python_identifier, snake

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


@dataclass
class FieldView:
    """One (attribute, wire key, step) row of a mapper field table."""
    attribute: str  # Python string literal of the domain attribute
    key: str  # Python string literal of the wire key
    rule: Step


@dataclass
class TypeMapperView:
    """Template-friendly view of a Type's pair of mappers."""
    class_name: str
    load: str  # dto_to_<type>
    map_load: str  # map_dto_to_<type>
    dump: str  # <type>_to_dto
    map_dump: str  # map_<type>_to_dto
    load_fields: list[FieldView] = field(default_factory=list)
    dump_fields: list[FieldView] = field(default_factory=list)


@dataclass
class EnumMapperView:
    """Template-friendly view of an Enum's pair of mappers."""
    class_name: str
    values_name: str  # module constant holding the declared members
    values: list[str]  # Python string literals
    load: str
    map_load: str
    dump: str
    map_dump: str


@dataclass
class HelperView:
    """A shared primitive cast helper."""
    name: str  # e.g. "cast_integer", "dump_date_time"
    direction: str  # "load" or "dump"
    kind: str  # helper body, e.g. "integer", "date_time"


@dataclass
class CasterView:
    """Import of a user-supplied caster."""
    module: str
    function: str
    alias: str


def py_str(value: str) -> str:
    """Render a double-quoted Python string literal."""
    return json.dumps(value)


def generate_mapper(
    service: Service,
    options: GeneratorOptions,
    resolver: BindingResolver | None = None,
) -> Artifact:
    """Build the single mapper artifact for a service."""
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )

    type_views = [_type_view(service, t, options.types) for t in service.types]
    enum_views = [_enum_view(e) for e in service.enums]

    steps: list[Step] = []
    for view in type_views:
        steps.extend(f.rule for f in view.load_fields)
        steps.extend(f.rule for f in view.dump_fields)
    steps.extend(_client_steps(service, options.types, resolver))

    helpers = _collect_helpers(steps)
    logger.debug(
        "Mapper for %s: %d types, %d enums, %d primitive helpers",
        service.title, len(type_views), len(enum_views), len(helpers),
    )

    template = env.get_template("mapper.py.j2")
    content = template.render(
        warning=warning(service),
        magic_comments=options.magic_comments,
        title=service.title,
        namespace=".".join(mapper_namespace(service, options)),
        types_module=types_module(service, options),
        casters=_caster_views(options.types),
        types=type_views,
        enums=enum_views,
        helpers=helpers,
    )
    return Artifact(path=mapper_filepath(service, options), contents=content)


def _field(attribute: str, key: str, step: Step) -> FieldView:
    return FieldView(attribute=py_str(attribute), key=py_str(key), rule=step)


def _type_view(service: Service, type_: Type, casters: dict[str, str]) -> TypeMapperView:
    """Convert a Type to its mapper view, one field row per property."""
    view = TypeMapperView(
        class_name=type_class_name(type_.name),
        load=cast_dto_to(type_.name),
        map_load=map_dto_to(type_.name),
        dump=cast_to_dto(type_.name),
        map_dump=map_to_dto(type_.name),
    )
    for prop in type_.properties:
        shape = shape_of(service, prop)
        attribute = python_identifier(prop.name)
        view.load_fields.append(_field(attribute, prop.name, load_step(shape, casters)))
        view.dump_fields.append(_field(attribute, prop.name, dump_step(shape)))
    return view


def _enum_view(enum: Enum) -> EnumMapperView:
    return EnumMapperView(
        class_name=type_class_name(enum.name),
        values_name=f"{snake(enum.name).upper()}_VALUES",
        values=[py_str(v) for v in enum.values],
        load=cast_dto_to(enum.name),
        map_load=map_dto_to(enum.name),
        dump=cast_to_dto(enum.name),
        map_dump=map_to_dto(enum.name),
    )


def _client_steps(
    service: Service,
    casters: dict[str, str],
    resolver: BindingResolver | None,
) -> list[Step]:
    """Steps client code applies to arguments and responses of bound methods."""
    steps: list[Step] = []
    if resolver is None:
        return steps
    for interface in service.interfaces:
        for method in interface.methods:
            if resolver.resolve_operation_binding(method.name) is None:
                continue
            for param in method.parameters:
                if resolver.resolve_parameter_binding(method.name, param.name):
                    steps.append(dump_step(shape_of(service, param)))
            if method.return_type:
                steps.append(load_step(shape_of(service, method.return_type), casters))
    return steps


def _collect_helpers(steps: list[Step]) -> list[HelperView]:
    """Primitive helpers referenced by any step, once each, in first-seen order."""
    helpers: dict[str, HelperView] = {}
    for step in steps:
        for part in step.walk():
            if part.kind and part.func not in helpers:
                direction = "dump" if part.func.startswith("dump_") else "load"
                helpers[part.func] = HelperView(part.func, direction, part.kind)
    return list(helpers.values())


def _caster_views(casters: dict[str, str]) -> list[CasterView]:
    views = []
    for type_name, dotted in casters.items():
        module, _, function = dotted.rpartition(".")
        views.append(CasterView(module=module, function=function, alias=caster_alias(type_name)))
    return views

"""Names shared by the client and mapper emitters.

Both emitters derive module paths and generated function names from here so
that a client can call a mapper function by name without either emitter
knowing about the other.
"""

from __future__ import annotations

from dataclasses import dataclass

from httpgen.config import GeneratorOptions
from httpgen.model.ir import Interface, Service
from httpgen.parser.name_transform import module_path, pascal, python_identifier, snake

GENERATOR_NAME = "httpgen"
GENERATOR_VERSION = "0.1.0"

MAPPER_MODULE = "http_client_helpers"
TYPES_MODULE = "types"


@dataclass(frozen=True)
class Artifact:
    path: tuple[str, ...]  # e.g. ("widget_service", "v1", "widget_http_client.py")
    contents: str


def mapper_namespace(service: Service, options: GeneratorOptions) -> list[str]:
    """Package segments holding the mapper and the domain types module."""
    segments = module_path(options.base_namespace) if options.base_namespace else []
    return [*segments, python_identifier(service.title), f"v{service.major_version}"]


def client_namespace(service: Service, options: GeneratorOptions) -> list[str]:
    """Package segments holding client modules."""
    segments = mapper_namespace(service, options)
    if options.interfaces_module:
        segments.extend(module_path(options.interfaces_module))
    return segments


def types_module(service: Service, options: GeneratorOptions) -> str:
    return ".".join([*mapper_namespace(service, options), TYPES_MODULE])


def mapper_module(service: Service, options: GeneratorOptions) -> str:
    return ".".join([*mapper_namespace(service, options), MAPPER_MODULE])


def mapper_filepath(service: Service, options: GeneratorOptions) -> tuple[str, ...]:
    return (*mapper_namespace(service, options), f"{MAPPER_MODULE}.py")


def client_class_name(interface: Interface) -> str:
    return pascal(f"{interface.name}_http_client")


def client_filepath(
    interface: Interface, service: Service, options: GeneratorOptions,
) -> tuple[str, ...]:
    return (*client_namespace(service, options), f"{snake(client_class_name(interface))}.py")


def type_class_name(name: str) -> str:
    """Domain class name for a Type or Enum, e.g. widget-status -> WidgetStatus."""
    return pascal(name)


# Generated mapper function names. The map_* pair is the public, fail-open
# API; the dto_to_* / *_to_dto pair returns the explicit Cast result.

def map_dto_to(name: str) -> str:
    return f"map_dto_to_{snake(name)}"


def map_to_dto(name: str) -> str:
    return f"map_{snake(name)}_to_dto"


def cast_dto_to(name: str) -> str:
    return f"dto_to_{snake(name)}"


def cast_to_dto(name: str) -> str:
    return f"{snake(name)}_to_dto"


def cast_primitive(primitive: str) -> str:
    return f"cast_{snake(primitive)}"


def dump_primitive(primitive: str) -> str:
    return f"dump_{snake(primitive)}"


def warning(service: Service) -> str:
    """First line of every generated file."""
    source = f" from {service.source_path}" if service.source_path else ""
    return (
        f"# This code was generated by {GENERATOR_NAME}@{GENERATOR_VERSION}{source}."
        " Changes to this file will be overwritten."
    )

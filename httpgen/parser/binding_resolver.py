"""Resolve methods and parameters to their HTTP bindings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from httpgen.model.ir import Service
from httpgen.parser.name_transform import snake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationBinding:
    verb: str  # lowercase HTTP verb, e.g. "get"
    path: str  # path template, e.g. "/widgets/:id"


@dataclass(frozen=True)
class ParameterBinding:
    location: str  # "path", "query", "header" or "body"
    wire_name: str


def _normalize(name: str) -> str:
    """Normalize a name for lookup: GetWidget, getWidget and get_widget collide."""
    return snake(name)


@dataclass
class BindingResolver:
    """Lookup indices for one generation pass.

    Built once per Service by from_service() and passed to every emitter that
    needs HTTP semantics. A new pass over a newly loaded Service builds a new
    resolver; nothing is cached across passes.
    """
    operations: dict[str, OperationBinding] = field(default_factory=dict)
    parameters: dict[tuple[str, str], ParameterBinding] = field(default_factory=dict)

    @classmethod
    def from_service(cls, service: Service) -> BindingResolver:
        resolver = cls()
        for interface in service.interfaces:
            for http_path in interface.http_paths:
                for http_method in http_path.methods:
                    method_key = _normalize(http_method.name)
                    # Later declarations win, as with any plain mapping
                    resolver.operations[method_key] = OperationBinding(
                        verb=http_method.verb.lower(),
                        path=http_path.path,
                    )
                    for http_param in http_method.parameters:
                        key = (method_key, _normalize(http_param.name))
                        resolver.parameters[key] = ParameterBinding(
                            location=http_param.location,
                            wire_name=http_param.wire_name,
                        )
        logger.debug(
            "Indexed %d operation bindings and %d parameter bindings",
            len(resolver.operations), len(resolver.parameters),
        )
        return resolver

    def resolve_operation_binding(self, method_name: str) -> OperationBinding | None:
        """Return the (verb, path) pair for a method, or None if it has none."""
        return self.operations.get(_normalize(method_name))

    def resolve_parameter_binding(
        self, method_name: str, parameter_name: str,
    ) -> ParameterBinding | None:
        """Return the (location, wire name) pair for a parameter, or None."""
        return self.parameters.get((_normalize(method_name), _normalize(parameter_name)))


def resolve_operation_binding(
    resolver: BindingResolver, method_name: str,
) -> OperationBinding | None:
    return resolver.resolve_operation_binding(method_name)


def resolve_parameter_binding(
    resolver: BindingResolver, method_name: str, parameter_name: str,
) -> ParameterBinding | None:
    return resolver.resolve_parameter_binding(method_name, parameter_name)

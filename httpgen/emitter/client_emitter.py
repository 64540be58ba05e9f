"""Emit one HTTP client module per interface."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from httpgen.config import GeneratorOptions
from httpgen.emitter.casting import apply_step, dump_step, load_step
from httpgen.emitter.mapper_emitter import py_str
from httpgen.emitter.naming import (
    Artifact,
    client_class_name,
    client_filepath,
    mapper_module,
    type_class_name,
    types_module,
    warning,
)
from httpgen.model.ir import ApiKeyScheme, Interface, Method, Parameter, Service, is_required
from httpgen.model.shape import (
    ArrayShape,
    EnumShape,
    PrimitiveShape,
    Shape,
    TypeShape,
    shape_of,
    unknown_shape,
)
from httpgen.parser.binding_resolver import BindingResolver, ParameterBinding
from httpgen.parser.name_transform import python_identifier

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# Names the generated method bodies rely on; parameters must not shadow them
_RESERVED_NAMES = {"self", "json", "requests", "urlencode", "helpers", "types"}

_PRIMITIVE_ANNOTATIONS = {
    "string": "str",
    "integer": "int",
    "long": "int",
    "double": "float",
    "float": "float",
    "number": "float",
    "boolean": "bool",
    "date": "date",
    "date-time": "datetime",
    "null": "None",
}

_MAPPER_PREFIX = "helpers."


@dataclass
class ParamView:
    """Template-friendly view of a signature parameter."""
    name: str
    annotation: str
    required: bool

    @property
    def declaration(self) -> str:
        if self.required:
            return f"{self.name}: {self.annotation}"
        return f"{self.name}: {self.annotation} | None = None"


@dataclass
class BodyView:
    param: str
    required: bool
    expression: str  # json.dumps(...) of the wire form


@dataclass
class OperationView:
    """Template-friendly view of one bound method."""
    name: str
    comments: list[str]
    params: list[ParamView]
    returns: str  # return annotation
    verb: str  # Python literal, e.g. "GET"
    uri: str  # f-string body
    query: list[tuple[str, str]]  # (wire name literal, value expression)
    headers: list[tuple[str, str]]
    body: BodyView | None
    result: str  # expression converting the response, "" without a return type


@dataclass
class ClientView:
    class_name: str
    comments: list[str]
    credentials: list[str]
    operations: list[OperationView] = field(default_factory=list)
    names: set[str] = field(default_factory=set)  # annotation imports: date, datetime, Any
    uses_types: bool = False


def generate_clients(
    service: Service,
    options: GeneratorOptions,
    resolver: BindingResolver,
) -> list[Artifact]:
    """Build one client artifact per interface, in declaration order."""
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template("client.py.j2")

    artifacts: list[Artifact] = []
    for interface in service.interfaces:
        view = _client_view(service, interface, options, resolver)
        content = template.render(
            warning=warning(service),
            magic_comments=options.magic_comments,
            file_includes=options.file_includes,
            interface_name=interface.name,
            mapper_module=mapper_module(service, options),
            types_module=types_module(service, options),
            stdlib_imports=_stdlib_imports(view),
            client=view,
        )
        artifacts.append(Artifact(path=client_filepath(interface, service, options), contents=content))
    return artifacts


def _stdlib_imports(view: ClientView) -> list[str]:
    """Standard library imports the rendered client needs, in isort order."""
    imports = []
    if any(op.body or op.result for op in view.operations):
        imports.append("import json")
    dates = sorted(view.names & {"date", "datetime"})
    if dates:
        imports.append(f"from datetime import {', '.join(dates)}")
    if "Any" in view.names:
        imports.append("from typing import Any")
    if any(op.query for op in view.operations):
        imports.append("from urllib.parse import urlencode")
    return imports


def comment_lines(text: str | list[str] | None) -> list[str]:
    """Flatten a description into comment lines."""
    if not text:
        return []
    if isinstance(text, str):
        return text.splitlines()
    lines: list[str] = []
    for chunk in text:
        lines.extend(comment_lines(chunk))
    return lines


def sort_parameters(parameters: list[Parameter]) -> list[Parameter]:
    """Required parameters first, then optional; each group keeps its order."""
    return sorted(parameters, key=lambda p: 0 if is_required(p) else 1)


def credential_names(interface: Interface) -> list[str]:
    """Distinct security scheme names used by any method, first-seen order."""
    names: dict[str, None] = {}
    for method in interface.methods:
        for alternative in method.security:
            for scheme in alternative:
                names.setdefault(python_identifier(scheme.name), None)
    return list(names)


def _safe_param_name(name: str) -> str:
    """Ensure a parameter name doesn't shadow a name the method body uses."""
    ident = python_identifier(name)
    if ident in _RESERVED_NAMES:
        return ident + "_"
    return ident


def _client_view(
    service: Service,
    interface: Interface,
    options: GeneratorOptions,
    resolver: BindingResolver,
) -> ClientView:
    view = ClientView(
        class_name=client_class_name(interface),
        comments=comment_lines(interface.description),
        credentials=credential_names(interface),
    )
    for method in sorted(interface.methods, key=lambda m: m.name):
        op = _operation_view(service, method, options, resolver, view)
        if op is None:
            logger.debug("Skipping %s.%s: no HTTP binding", interface.name, method.name)
            continue
        view.operations.append(op)
    return view


def _annotation(shape: Shape, view: ClientView) -> str:
    """Python annotation for a shape, recording the imports it needs."""
    if isinstance(shape, ArrayShape):
        return f"list[{_annotation(shape.item, view)}]"
    if isinstance(shape, PrimitiveShape):
        annotation = _PRIMITIVE_ANNOTATIONS.get(shape.primitive, "Any")
        if annotation in ("date", "datetime", "Any"):
            view.names.add(annotation)
        return annotation
    if isinstance(shape, (TypeShape, EnumShape)):
        view.uses_types = True
        return f"types.{type_class_name(shape.name)}"
    raise unknown_shape(shape)


def _operation_view(
    service: Service,
    method: Method,
    options: GeneratorOptions,
    resolver: BindingResolver,
    view: ClientView,
) -> OperationView | None:
    """Convert a Method to an OperationView, or None when it has no binding."""
    operation = resolver.resolve_operation_binding(method.name)
    if operation is None:
        return None

    params: list[ParamView] = []
    bound: list[tuple[Parameter, str, ParameterBinding]] = []
    for param in sort_parameters(method.parameters):
        name = _safe_param_name(param.name)
        params.append(ParamView(
            name=name,
            annotation=_annotation(shape_of(service, param), view),
            required=is_required(param),
        ))
        binding = resolver.resolve_parameter_binding(method.name, param.name)
        if binding is None:
            logger.debug("Parameter %s of %s has no HTTP binding", param.name, method.name)
            continue
        bound.append((param, name, binding))

    # Later entries win on duplicate wire names, as in a dict literal
    query: dict[str, str] = {}
    headers: dict[str, str] = {}
    if any(binding.location == "body" for _, _, binding in bound):
        headers[py_str("Content-Type")] = py_str("application/json")
    for alternative in method.security:
        for scheme in alternative:
            if isinstance(scheme, ApiKeyScheme) and scheme.location == "header":
                headers[py_str(scheme.parameter)] = f"self.{python_identifier(scheme.name)}"
            else:
                logger.debug("Unsupported security scheme %s on %s", scheme.name, method.name)

    body: BodyView | None = None
    for param, name, binding in bound:
        if binding.location == "query":
            query[py_str(binding.wire_name)] = text_value(service, param, name, "wire_text")
        elif binding.location == "header":
            headers[py_str(binding.wire_name)] = text_value(service, param, name, "header_text")
        elif binding.location == "body" and body is None:
            wire = apply_step(dump_step(shape_of(service, param)), name, _MAPPER_PREFIX)
            body = BodyView(
                param=name,
                required=is_required(param),
                expression=f"json.dumps({wire})",
            )

    returns = "None"
    result = ""
    if method.return_type:
        shape = shape_of(service, method.return_type)
        returns = _annotation(shape, view)
        result = apply_step(
            load_step(shape, options.types), "json.loads(_response.text)", _MAPPER_PREFIX,
        )

    return OperationView(
        name=_safe_param_name(method.name),
        comments=comment_lines(method.description),
        params=params,
        returns=returns,
        verb=py_str(operation.verb.upper()),
        uri=build_uri(service, operation.path, bound),
        query=list(query.items()),
        headers=list(headers.items()),
        body=body,
        result=result,
    )


def text_value(service: Service, param: Parameter, name: str, helper: str) -> str:
    """Expression rendering a path, query or header argument as wire text.

    The value goes through the domain->wire mapper for its shape first, so
    enums send their value and dates their ISO form. Plain strings are used
    as they are.
    """
    shape = shape_of(service, param)
    if shape == PrimitiveShape("string"):
        return name
    wire = apply_step(dump_step(shape), name, _MAPPER_PREFIX)
    return f"{_MAPPER_PREFIX}{helper}({wire})"


def _placeholder(segment: str) -> str | None:
    """Parameter name of a ':name' or '{name}' path segment."""
    if segment.startswith(":"):
        return segment[1:]
    if segment.startswith("{") and segment.endswith("}"):
        return segment[1:-1]
    return None


def _escape(text: str) -> str:
    """Escape literal text for a double-quoted f-string."""
    return (
        text.replace("\\", "\\\\").replace('"', '\\"')
        .replace("{", "{{").replace("}", "}}")
    )


def build_uri(
    service: Service,
    path: str,
    bound: list[tuple[Parameter, str, ParameterBinding]],
) -> str:
    """Build the f-string body of an operation's URI.

    Placeholder segments bound to a 'path' parameter become that parameter's
    runtime value as wire text. Every other segment, including placeholders
    without a bound path parameter, is kept as literal text.
    """
    path_params = {
        param.name: text_value(service, param, name, "wire_text")
        for param, name, binding in bound
        if binding.location == "path"
    }
    segments = []
    for segment in path.split("/"):
        param_name = _placeholder(segment)
        if param_name is not None and param_name in path_params:
            segments.append("{" + path_params[param_name] + "}")
        else:
            segments.append(_escape(segment))
    return "{self.api_root}/v" + str(service.major_version) + "/".join(segments)

"""Load a service IR document (JSON or YAML) into IR objects."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from httpgen.errors import ServiceLoadError
from httpgen.model.ir import (
    LOCATIONS,
    ApiKeyScheme,
    BasicScheme,
    Enum,
    HttpMethod,
    HttpParameter,
    HttpPath,
    Interface,
    Method,
    OAuth2Scheme,
    Parameter,
    Property,
    ReturnType,
    SecurityScheme,
    Service,
    Type,
)
from httpgen.model.shape import PRIMITIVES
from httpgen.parser.name_transform import snake


def load_service(path: str | Path) -> Service:
    """Parse the IR document at path into a Service."""
    doc_path = Path(path)
    try:
        raw = yaml.safe_load(doc_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ServiceLoadError(f"cannot read service document {doc_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ServiceLoadError(f"invalid service document {doc_path}: {e}") from e

    service = parse_service(raw)
    service.source_path = str(doc_path)
    return service


def parse_service(raw: Any) -> Service:
    """Build a Service from an already-decoded document."""
    doc = _mapping(raw, "service")
    major = _get(doc, "majorVersion", default=1)
    try:
        major_version = int(major)
    except (TypeError, ValueError) as e:
        raise ServiceLoadError(f"majorVersion must be an integer, got {major!r}") from e

    return Service(
        title=_required_str(doc, "title", "service"),
        major_version=major_version,
        interfaces=[_parse_interface(i) for i in _list(doc, "interfaces")],
        types=[_parse_type(t) for t in _list(doc, "types")],
        enums=[_parse_enum(e) for e in _list(doc, "enums")],
    )


def _get(doc: dict, key: str, default: Any = None) -> Any:
    """Look a key up by its camelCase spelling or its snake_case equivalent."""
    if key in doc:
        return doc[key]
    return doc.get(snake(key), default)


def _mapping(raw: Any, what: str) -> dict:
    if not isinstance(raw, dict):
        raise ServiceLoadError(f"{what} must be a mapping, got {type(raw).__name__}")
    return raw


def _list(doc: dict, key: str) -> list:
    value = _get(doc, key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ServiceLoadError(f"{key} must be a list, got {type(value).__name__}")
    return value


def _required_str(doc: dict, key: str, what: str) -> str:
    value = _get(doc, key)
    if not isinstance(value, str) or not value:
        raise ServiceLoadError(f"{what} is missing {key!r}")
    return value


def _parse_interface(raw: Any) -> Interface:
    doc = _mapping(raw, "interface")
    name = _required_str(doc, "name", "interface")
    return Interface(
        name=name,
        methods=[_parse_method(m) for m in _list(doc, "methods")],
        http_paths=[_parse_http_path(p) for p in _list(doc, "httpPaths")],
        description=_get(doc, "description"),
    )


def _parse_method(raw: Any) -> Method:
    doc = _mapping(raw, "method")
    name = _required_str(doc, "name", "method")

    return_type = None
    raw_return = _get(doc, "returnType")
    if raw_return is not None:
        ret = _mapping(raw_return, f"returnType of {name}")
        type_name = _required_str(ret, "typeName", f"returnType of {name}")
        return_type = ReturnType(
            type_name=type_name,
            is_array=bool(_get(ret, "isArray", False)),
            is_primitive=bool(_get(ret, "isPrimitive", type_name in PRIMITIVES)),
        )

    security: list[list[SecurityScheme]] = []
    for alternative in _list(doc, "security"):
        if not isinstance(alternative, list):
            raise ServiceLoadError(f"security of {name} must be a list of lists")
        security.append([_parse_scheme(s) for s in alternative])

    return Method(
        name=name,
        parameters=[_parse_parameter(p) for p in _list(doc, "parameters")],
        return_type=return_type,
        security=security,
        description=_get(doc, "description"),
    )


def _parse_parameter(raw: Any) -> Parameter:
    doc = _mapping(raw, "parameter")
    type_name = _required_str(doc, "typeName", "parameter")
    return Parameter(
        name=_required_str(doc, "name", "parameter"),
        type_name=type_name,
        is_array=bool(_get(doc, "isArray", False)),
        is_primitive=bool(_get(doc, "isPrimitive", type_name in PRIMITIVES)),
        rules=[str(r) for r in _list(doc, "rules")],
        description=_get(doc, "description"),
    )


def _parse_scheme(raw: Any) -> SecurityScheme:
    doc = _mapping(raw, "security scheme")
    kind = _get(doc, "type", "")
    name = _required_str(doc, "name", "security scheme")
    if kind == "apiKey":
        return ApiKeyScheme(
            name=name,
            parameter=_required_str(doc, "parameter", f"apiKey scheme {name}"),
            location=_get(doc, "in", "header"),
        )
    if kind == "basic":
        return BasicScheme(name=name)
    if kind == "oauth2":
        return OAuth2Scheme(name=name)
    raise ServiceLoadError(f"unknown security scheme type {kind!r} for {name}")


def _parse_http_path(raw: Any) -> HttpPath:
    doc = _mapping(raw, "httpPath")
    return HttpPath(
        path=_required_str(doc, "path", "httpPath"),
        methods=[_parse_http_method(m) for m in _list(doc, "methods")],
    )


def _parse_http_method(raw: Any) -> HttpMethod:
    doc = _mapping(raw, "http method")
    name = _required_str(doc, "name", "http method")
    return HttpMethod(
        name=name,
        verb=_required_str(doc, "verb", f"http method {name}"),
        parameters=[_parse_http_parameter(p, name) for p in _list(doc, "parameters")],
    )


def _parse_http_parameter(raw: Any, method_name: str) -> HttpParameter:
    doc = _mapping(raw, f"http parameter of {method_name}")
    name = _required_str(doc, "name", f"http parameter of {method_name}")
    location = _get(doc, "in")
    if location not in LOCATIONS:
        raise ServiceLoadError(
            f"http parameter {name} of {method_name} has invalid location {location!r}",
        )
    return HttpParameter(
        name=name,
        location=location,
        wire_name=_get(doc, "wireName", "") or "",
    )


def _parse_type(raw: Any) -> Type:
    doc = _mapping(raw, "type")
    return Type(
        name=_required_str(doc, "name", "type"),
        properties=[_parse_property(p) for p in _list(doc, "properties")],
        description=_get(doc, "description"),
    )


def _parse_property(raw: Any) -> Property:
    doc = _mapping(raw, "property")
    type_name = _required_str(doc, "typeName", "property")
    return Property(
        name=_required_str(doc, "name", "property"),
        type_name=type_name,
        is_array=bool(_get(doc, "isArray", False)),
        is_primitive=bool(_get(doc, "isPrimitive", type_name in PRIMITIVES)),
        rules=[str(r) for r in _list(doc, "rules")],
        description=_get(doc, "description"),
    )


def _parse_enum(raw: Any) -> Enum:
    doc = _mapping(raw, "enum")
    return Enum(
        name=_required_str(doc, "name", "enum"),
        values=[str(v) for v in _list(doc, "values")],
        description=_get(doc, "description"),
    )

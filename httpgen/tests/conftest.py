"""Shared fixtures: a sample service and helpers to execute generated code."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from datetime import date, datetime
from types import ModuleType

import pytest

from httpgen.emitter.naming import Artifact
from httpgen.model.ir import (
    ApiKeyScheme,
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
    Service,
    Type,
)


# ---------------------------------------------------------------------------
# Domain classes the generated mapper constructs (widget_service.v1.types)
# ---------------------------------------------------------------------------

class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Widget:
    id: str | None = None
    count: int | None = None
    price: float | None = None
    active: bool | None = None
    tags: list[str] | None = None
    color: Color | None = None


@dataclass
class Gadget:
    name: str | None = None
    released: date | None = None
    updated_at: datetime | None = None
    sizes: list[int] | None = None
    widget: Widget | None = None
    widgets: list[Widget] | None = None


@dataclass
class Label:
    text: str | None = None
    visible: bool | None = None


def _required(name: str, type_name: str = "string", **kwargs) -> Parameter:
    return Parameter(name=name, type_name=type_name, rules=["required"], **kwargs)


def _optional(name: str, type_name: str = "string", **kwargs) -> Parameter:
    return Parameter(name=name, type_name=type_name, **kwargs)


def make_service() -> Service:
    """A small service exercising every binding location and shape."""
    api_key = ApiKeyScheme(name="apiKey", parameter="x-api-key", location="header")
    oauth = OAuth2Scheme(name="oauth")

    widget = Interface(
        name="widget",
        description="Widget operations",
        methods=[
            Method(
                name="GetWidget",
                parameters=[_required("id")],
                return_type=ReturnType(type_name="Widget"),
                security=[[api_key], [oauth]],
                description="Fetch one widget",
            ),
            Method(
                name="ListWidgets",
                parameters=[
                    _optional("limit", "integer"),
                    _required("color"),
                    _optional("traceId"),
                ],
                return_type=ReturnType(type_name="Widget", is_array=True),
            ),
            Method(
                name="CreateWidget",
                parameters=[_required("widget", "Widget", is_primitive=False)],
                return_type=ReturnType(type_name="Widget"),
                security=[[api_key]],
            ),
            Method(
                name="UpdateWidget",
                parameters=[
                    _optional("widget", "Widget", is_primitive=False),
                    _required("id"),
                    _optional("unbound"),
                ],
            ),
            Method(name="DeleteWidget", parameters=[_required("id")]),
            Method(name="Unrouted", parameters=[_required("id")]),
        ],
        http_paths=[
            HttpPath(path="/widgets/:id", methods=[
                HttpMethod(name="GetWidget", verb="get", parameters=[
                    HttpParameter(name="id", location="path"),
                ]),
                HttpMethod(name="UpdateWidget", verb="put", parameters=[
                    HttpParameter(name="id", location="path"),
                    HttpParameter(name="widget", location="body"),
                ]),
                HttpMethod(name="DeleteWidget", verb="delete", parameters=[]),
            ]),
            HttpPath(path="/widgets", methods=[
                HttpMethod(name="ListWidgets", verb="get", parameters=[
                    HttpParameter(name="limit", location="query", wire_name="page_size"),
                    HttpParameter(name="color", location="query"),
                    HttpParameter(name="traceId", location="header", wire_name="x-trace-id"),
                ]),
                HttpMethod(name="CreateWidget", verb="post", parameters=[
                    HttpParameter(name="widget", location="body"),
                ]),
            ]),
        ],
    )

    return Service(
        title="widget_service",
        major_version=1,
        interfaces=[widget, Interface(name="gadget")],
        types=[
            Type(name="Widget", properties=[
                Property(name="id", type_name="string"),
                Property(name="count", type_name="integer"),
                Property(name="price", type_name="double"),
                Property(name="active", type_name="boolean"),
                Property(name="tags", type_name="string", is_array=True),
                Property(name="color", type_name="color", is_primitive=False),
            ]),
            Type(name="Gadget", properties=[
                Property(name="name", type_name="string"),
                Property(name="released", type_name="date"),
                Property(name="updatedAt", type_name="date-time"),
                Property(name="sizes", type_name="long", is_array=True),
                Property(name="widget", type_name="Widget", is_primitive=False),
                Property(name="widgets", type_name="Widget", is_primitive=False, is_array=True),
            ]),
            Type(name="Label", properties=[
                Property(name="text", type_name="string"),
                Property(name="visible", type_name="boolean"),
            ]),
        ],
        enums=[Enum(name="color", values=["red", "green"])],
    )


@pytest.fixture
def service() -> Service:
    return make_service()


@pytest.fixture
def install_module(monkeypatch):
    """Register a module (and empty parent packages) in sys.modules for one test."""
    def install(dotted: str, module: ModuleType) -> ModuleType:
        parts = dotted.split(".")
        for i in range(1, len(parts)):
            parent = ".".join(parts[:i])
            if parent not in sys.modules:
                package = ModuleType(parent)
                package.__path__ = []
                monkeypatch.setitem(sys.modules, parent, package)
        monkeypatch.setitem(sys.modules, dotted, module)
        if len(parts) > 1:
            monkeypatch.setattr(sys.modules[".".join(parts[:-1])], parts[-1], module, raising=False)
        return module
    return install


@pytest.fixture
def domain_types(install_module) -> ModuleType:
    """The widget_service.v1.types module generated code imports."""
    module = ModuleType("widget_service.v1.types")
    module.Color = Color
    module.Widget = Widget
    module.Gadget = Gadget
    module.Label = Label
    return install_module("widget_service.v1.types", module)


@pytest.fixture
def load_artifact(install_module):
    """Execute a generated artifact as the module its path names."""
    def load(artifact: Artifact) -> ModuleType:
        dotted = ".".join(artifact.path).removesuffix(".py")
        module = ModuleType(dotted)
        install_module(dotted, module)
        code = compile(artifact.contents, "/".join(artifact.path), "exec")
        exec(code, module.__dict__)
        return module
    return load

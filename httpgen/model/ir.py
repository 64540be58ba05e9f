"""Intermediate representation dataclasses for a service description."""

from __future__ import annotations

from dataclasses import dataclass, field

# Transport locations an HttpParameter can bind to
LOCATIONS = ("path", "query", "header", "body")


@dataclass
class Parameter:
    name: str
    type_name: str
    is_array: bool = False
    is_primitive: bool = True
    rules: list[str] = field(default_factory=list)  # e.g. ["required"]
    description: str | list[str] | None = None


@dataclass
class ReturnType:
    type_name: str
    is_array: bool = False
    is_primitive: bool = False


@dataclass
class ApiKeyScheme:
    name: str  # credential name (e.g. "api_key")
    parameter: str  # header or query parameter name (e.g. "x-api-key")
    location: str  # "header", "query" or "cookie"


@dataclass
class BasicScheme:
    name: str


@dataclass
class OAuth2Scheme:
    name: str


SecurityScheme = ApiKeyScheme | BasicScheme | OAuth2Scheme


@dataclass
class Method:
    name: str  # logical name, e.g. "GetWidget"
    parameters: list[Parameter] = field(default_factory=list)
    return_type: ReturnType | None = None
    # Alternatives (OR) of scheme lists (AND)
    security: list[list[SecurityScheme]] = field(default_factory=list)
    description: str | list[str] | None = None


@dataclass
class HttpParameter:
    name: str  # logical parameter name
    location: str  # one of LOCATIONS
    wire_name: str = ""  # name on the wire; defaults to name

    def __post_init__(self) -> None:
        if not self.wire_name:
            self.wire_name = self.name


@dataclass
class HttpMethod:
    name: str  # logical method name this verb is bound to
    verb: str  # "get", "post", ...
    parameters: list[HttpParameter] = field(default_factory=list)


@dataclass
class HttpPath:
    path: str  # e.g. "/widgets/:id" or "/widgets/{id}"
    methods: list[HttpMethod] = field(default_factory=list)


@dataclass
class Interface:
    name: str
    methods: list[Method] = field(default_factory=list)
    http_paths: list[HttpPath] = field(default_factory=list)
    description: str | list[str] | None = None


@dataclass
class Property:
    name: str
    type_name: str
    is_array: bool = False
    is_primitive: bool = True
    rules: list[str] = field(default_factory=list)
    description: str | list[str] | None = None


@dataclass
class Type:
    name: str
    properties: list[Property] = field(default_factory=list)
    description: str | list[str] | None = None


@dataclass
class Enum:
    name: str
    values: list[str] = field(default_factory=list)
    description: str | list[str] | None = None


@dataclass
class Service:
    title: str
    major_version: int
    interfaces: list[Interface] = field(default_factory=list)
    types: list[Type] = field(default_factory=list)
    enums: list[Enum] = field(default_factory=list)
    source_path: str = ""  # document the IR was loaded from, if any


def is_required(item: Parameter | Property) -> bool:
    """A parameter or property is required when its rules say so."""
    return "required" in item.rules

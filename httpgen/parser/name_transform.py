"""Name transformation utilities for converting logical names to Python names."""

from __future__ import annotations

import keyword
import re

# Boundaries: "getWidget" -> get|Widget, "HTTPClient" -> HTTP|Client, "v2Api" -> v2|Api
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")


def split_words(s: str) -> list[str]:
    """Split a logical name into lowercase words.

    Examples:
        GetWidget -> ['get', 'widget']
        date-time -> ['date', 'time']
        HTTPClient -> ['http', 'client']
        widget_status -> ['widget', 'status']
    """
    words: list[str] = []
    for chunk in _SEPARATOR_RE.split(s):
        if not chunk:
            continue
        words.extend(w.lower() for w in _CAMEL_BOUNDARY_RE.split(chunk) if w)
    return words


def snake(s: str) -> str:
    """Convert any casing to snake_case.

    Examples:
        GetWidget -> get_widget
        apiRoot -> api_root
        x-api-key -> x_api_key
        _carp_status -> carp_status
    """
    return "_".join(split_words(s))


def pascal(s: str) -> str:
    """Convert any casing to PascalCase for class names.

    Examples:
        widget -> Widget
        widget_http_client -> WidgetHttpClient
        date-time -> DateTime
    """
    return "".join(w[0].upper() + w[1:] for w in split_words(s))


def python_identifier(s: str) -> str:
    """Convert a logical name to a snake_case identifier that is not a keyword.

    Examples:
        from -> from_
        2fa -> _2fa
        GetWidget -> get_widget
    """
    name = snake(s) or "_"
    if name[0].isdigit():
        name = "_" + name
    if keyword.iskeyword(name):
        name += "_"
    return name


def module_path(dotted: str) -> list[str]:
    """Split a dotted or '::' namespace into snake_case module segments.

    Acme.Widgets -> ['acme', 'widgets']
    Acme::WidgetStore -> ['acme', 'widget_store']
    """
    parts = re.split(r"::|\.", dotted)
    return [python_identifier(p) for p in parts if p.strip()]

"""Exceptions raised while loading generator inputs."""

from __future__ import annotations


class HttpgenError(Exception):
    """Base class for errors reported to the user."""


class ServiceLoadError(HttpgenError):
    """The service IR document is missing, unreadable or malformed."""


class ConfigError(HttpgenError):
    """The generator options are malformed."""

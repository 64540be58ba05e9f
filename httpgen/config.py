"""Generator options and their loader."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from httpgen.errors import ConfigError

DEFAULT_OUTPUT = Path("generated")

# Option file key -> GeneratorOptions attribute
_KEYS = {
    "magicComments": "magic_comments",
    "fileIncludes": "file_includes",
    "interfacesModule": "interfaces_module",
    "baseNamespace": "base_namespace",
    "output": "output",
    "types": "types",
}


@dataclass
class GeneratorOptions:
    magic_comments: list[str] = field(default_factory=list)
    file_includes: list[str] = field(default_factory=list)  # modules imported by clients
    interfaces_module: str = ""  # dotted sub-namespace for client modules
    base_namespace: str = ""  # dotted prefix for every artifact
    output: Path = DEFAULT_OUTPUT
    # Primitive or type name -> dotted path of a custom wire->domain caster
    types: dict[str, str] = field(default_factory=dict)


def options_from_dict(raw: dict) -> GeneratorOptions:
    """Build GeneratorOptions from a mapping of camelCase or snake_case keys."""
    if not isinstance(raw, dict):
        raise ConfigError(f"options must be a mapping, got {type(raw).__name__}")

    values: dict[str, object] = {}
    for key, value in raw.items():
        attr = _KEYS.get(key) or (key if key in _KEYS.values() else None)
        if attr is None:
            raise ConfigError(f"unknown option: {key!r}")
        values[attr] = value

    for attr in ("magic_comments", "file_includes"):
        if attr in values:
            seq = values[attr] or []
            if not isinstance(seq, list) or not all(isinstance(s, str) for s in seq):
                raise ConfigError(f"{attr} must be a list of strings")
            values[attr] = list(seq)

    for attr in ("interfaces_module", "base_namespace"):
        if attr in values:
            values[attr] = values[attr] or ""
            if not isinstance(values[attr], str):
                raise ConfigError(f"{attr} must be a string")

    if "output" in values:
        values["output"] = Path(values["output"]) if values["output"] else DEFAULT_OUTPUT

    if "types" in values:
        casters = values["types"] or {}
        if not isinstance(casters, dict):
            raise ConfigError("types must map type names to caster paths")
        for name, caster in casters.items():
            if not isinstance(caster, str) or "." not in caster:
                raise ConfigError(
                    f"caster for {name!r} must be a dotted path like 'pkg.module.func'",
                )
        values["types"] = {str(k): v for k, v in casters.items()}

    return GeneratorOptions(**values)


def load_options(path: str | Path | None) -> GeneratorOptions:
    """Load options from a YAML (or JSON) file; None yields the defaults."""
    if path is None:
        return GeneratorOptions()
    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read options file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid options file {config_path}: {e}") from e
    return options_from_dict(raw or {})

"""Generation pass: Service IR + options in, ordered artifacts out."""

from __future__ import annotations

import logging
from pathlib import Path

from httpgen.config import GeneratorOptions
from httpgen.emitter.client_emitter import generate_clients
from httpgen.emitter.mapper_emitter import generate_mapper
from httpgen.emitter.naming import Artifact
from httpgen.model.ir import Service
from httpgen.parser.binding_resolver import BindingResolver

logger = logging.getLogger(__name__)


def generate(service: Service, options: GeneratorOptions | None = None) -> list[Artifact]:
    """Run one generation pass.

    Returns one client artifact per interface, in declaration order, followed
    by the service's single mapper artifact.
    """
    opts = options or GeneratorOptions()
    resolver = BindingResolver.from_service(service)

    artifacts = generate_clients(service, opts, resolver)
    artifacts.append(generate_mapper(service, opts, resolver))

    logger.info(
        "Generated %d artifacts for %s v%d",
        len(artifacts), service.title, service.major_version,
    )
    return artifacts


def write_artifacts(artifacts: list[Artifact], output_dir: str | Path) -> list[Path]:
    """Write artifacts under output_dir, creating folders as needed."""
    out = Path(output_dir)
    written: list[Path] = []
    for artifact in artifacts:
        target = out.joinpath(*artifact.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(artifact.contents, encoding="utf-8")
        logger.debug("Wrote %s", target)
        written.append(target)
    return written

"""Main entry point for the httpgen client and mapper generator."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from httpgen.config import load_options
from httpgen.errors import HttpgenError
from httpgen.generator import generate, write_artifacts
from httpgen.parser.ir_loader import load_service


@click.command()
@click.argument("service_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-c", "--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML file with generator options.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path),
              help="Output root folder (overrides the options file).")
@click.option("-v", "--verbose", is_flag=True, help="Log each generation step.")
def main(service_path: Path, config_path: Path | None, output: Path | None, verbose: bool) -> None:
    """Generate HTTP clients and wire mappers from a service IR document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    click.echo("=== httpgen ===\n")

    try:
        # Stage 1: Load inputs
        click.echo(f"Stage 1: Loading {service_path}...")
        service = load_service(service_path)
        options = load_options(config_path)
        if output is not None:
            options.output = output
        methods = sum(len(i.methods) for i in service.interfaces)
        click.echo(
            f"  Loaded {len(service.interfaces)} interfaces, {methods} methods, "
            f"{len(service.types)} types, {len(service.enums)} enums\n"
        )

        # Stage 2: Generate
        click.echo("Stage 2: Generating clients and mapper...")
        artifacts = generate(service, options)
        click.echo(f"  Generated {len(artifacts)} files\n")

        # Stage 3: Write
        click.echo(f"Stage 3: Writing to {options.output}...")
        for path in write_artifacts(artifacts, options.output):
            click.echo(f"  {path}")
    except HttpgenError as e:
        raise click.ClickException(str(e)) from e

    click.echo("\nDone!")


if __name__ == "__main__":
    main()

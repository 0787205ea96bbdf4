"""CLI entry point for swagger-explorer."""

import json
from pathlib import Path
from typing import Any

import click
import yaml

from swagger_explorer.config import load_config
from swagger_explorer.errors import ExplorerError
from swagger_explorer.generator.swagger import generate_swagger
from swagger_explorer.logging import configure_logging
from swagger_explorer.parser.registry import load_registry
from swagger_explorer.translator.model import DefinitionsBuilder

FORMATS = ["json", "yaml"]


def _dump(document: Any, fmt: str) -> str:
    """Serialize a document as JSON or YAML."""
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, default_flow_style=False, allow_unicode=True)
    return json.dumps(document, indent=2, ensure_ascii=False, default=str) + "\n"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log every translated route and model.")
def main(verbose: bool):
    """Swagger Explorer: generate Swagger docs from service route and model metadata."""
    configure_logging(verbose=verbose)


@main.command()
@click.argument("registry_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory for the generated documents.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML configuration file.")
@click.option("--format", "fmt", default="json", type=click.Choice(FORMATS), help="Output format.")
@click.option("--base-path", default=None, help="Base path of the REST API, e.g. /api.")
@click.option("--api-version", default=None, help="Version reported in every document.")
def gen_doc(registry_path: Path, output: Path, config_path: Path | None, fmt: str, base_path: str | None, api_version: str | None):
    """Generate the resource listing and one API declaration per class."""
    click.echo(f"Loading {registry_path}...")
    try:
        registry = load_registry(registry_path)
        config = load_config(config_path).with_overrides(base_path=base_path, api_version=api_version)
        docs = generate_swagger(registry, config)
    except ExplorerError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Found {len(registry.classes)} classes and {len(registry.routes)} routes.")

    output.mkdir(parents=True, exist_ok=True)
    listing_path = output / f"{config.resource_path}.{fmt}"
    listing_path.write_text(_dump(docs.listing.to_document(), fmt), encoding="utf-8")
    click.echo(f"  Created {listing_path}")

    declarations_dir = output / config.resource_path
    declarations_dir.mkdir(parents=True, exist_ok=True)
    for class_def in registry.classes:
        declaration = docs.declarations[class_def.name]
        file_path = declarations_dir / f"{class_def.resource_path.strip('/').replace('/', '_')}.{fmt}"
        file_path.write_text(_dump(declaration.to_document(), fmt), encoding="utf-8")
        click.echo(f"  Created {file_path}")

    click.echo(f"Generated {len(docs.declarations) + 1} files in {output}")


@main.command()
@click.argument("registry_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the model definitions.")
@click.option("-m", "--model", "model_names", multiple=True, help="Only this model and its relations (repeatable).")
@click.option("--format", "fmt", default="json", type=click.Choice(FORMATS), help="Output format.")
def gen_models(registry_path: Path, output: Path, model_names: tuple[str, ...], fmt: str):
    """Generate model definitions, following relations."""
    click.echo(f"Loading {registry_path}...")
    try:
        registry = load_registry(registry_path)
    except ExplorerError as e:
        raise click.ClickException(str(e)) from e

    names = list(model_names) or list(registry.models)
    unknown = [name for name in names if name not in registry.models]
    if unknown:
        raise click.ClickException(f"Unknown model(s): {', '.join(unknown)}")

    builder = DefinitionsBuilder()
    try:
        for name in names:
            builder.add(registry.models[name])
    except ExplorerError as e:
        raise click.ClickException(str(e)) from e

    definitions = {name: definition.to_document() for name, definition in builder.definitions.items()}
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_dump(definitions, fmt), encoding="utf-8")
    click.echo(f"Wrote {len(definitions)} model definitions to {output}")

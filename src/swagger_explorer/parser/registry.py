"""Service registry file parser.

Loads models, shared classes and routes from a YAML or JSON file:

    models:
      Widget:
        properties: {id: {type: number, id: true, generated: true}}
        relations: {parts: {model: Part}}
    classes:
      - {name: Widget, path: widgets, model: Widget}
    routes:
      - {method: Widget.find, verb: get, path: /widgets}

Relations and classes refer to models by name; names are resolved after
all models are read, so relation graphs may be cyclic.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from swagger_explorer.errors import RegistryError
from swagger_explorer.schema.descriptors import (
    ClassDescriptor,
    ModelDescriptor,
    Relation,
    RouteDescriptor,
    ServiceRegistry,
)


def load_registry(file_path: Path) -> ServiceRegistry:
    """Parse a registry file into a ServiceRegistry."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RegistryError(f"Failed to parse registry: {e}", identifier=file_path.name) from e

    if not isinstance(data, dict):
        raise RegistryError("registry must contain a mapping at the root", identifier=file_path.name)
    return build_registry(data, source=file_path.name)


def build_registry(data: dict[str, Any], source: str = "<registry>") -> ServiceRegistry:
    """Build a ServiceRegistry from already-parsed registry data."""
    try:
        models = _build_models(data.get("models") or {})
        classes = [_build_class(item, models) for item in data.get("classes") or []]
        routes = [RouteDescriptor(**item) for item in data.get("routes") or []]
    except ValidationError as e:
        raise RegistryError(f"Invalid registry metadata: {e}", identifier=source) from e
    return ServiceRegistry(models=models, classes=classes, routes=routes)


def _build_models(raw_models: dict[str, Any]) -> dict[str, ModelDescriptor]:
    models: dict[str, ModelDescriptor] = {}
    relations: dict[str, dict[str, Any]] = {}
    for name, body in raw_models.items():
        body = dict(body or {})
        relations[name] = body.pop("relations", None) or {}
        models[name] = ModelDescriptor(name=name, **body)

    for name, model_relations in relations.items():
        for relation_name, relation in model_relations.items():
            models[name].relations[relation_name] = Relation(
                target=_lookup_model(models, relation.get("model"), f"{name}.{relation_name}"),
                through=_lookup_model(models, relation.get("through"), f"{name}.{relation_name}"),
            )
    return models


def _build_class(item: dict[str, Any], models: dict[str, ModelDescriptor]) -> ClassDescriptor:
    item = dict(item)
    model = _lookup_model(models, item.pop("model", None), item.get("name", "<class>"))
    return ClassDescriptor(model=model, **item)


def _lookup_model(models: dict[str, ModelDescriptor], name: str | None, referrer: str) -> ModelDescriptor | None:
    if name is None:
        return None
    if name not in models:
        raise RegistryError(f"unknown model {name!r}", identifier=referrer)
    return models[name]

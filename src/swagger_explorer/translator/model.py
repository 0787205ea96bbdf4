"""Model descriptor -> Swagger model definition.

Definitions are keyed by model name. A model already present in the map is
never rebuilt, which also stops recursion through cyclic relations.
"""

import copy
import re
from typing import Any

from swagger_explorer.errors import ModelTranslationError, TypeMappingError
from swagger_explorer.logging import get_logger
from swagger_explorer.schema.descriptors import ModelDescriptor
from swagger_explorer.schema.swagger import ModelDefinition
from swagger_explorer.translator.keys import KeyTranslator, translate_data_type_keys
from swagger_explorer.translator.types import to_swagger_data_type

logger = get_logger("translator.model")


def build_definitions(
    model: ModelDescriptor,
    definitions: dict[str, ModelDefinition] | None = None,
    translate_keys: KeyTranslator = translate_data_type_keys,
) -> dict[str, ModelDefinition]:
    """Add the definition of ``model`` and of every related model.

    ``definitions`` is updated in place and returned; a new map is created
    when none is given.
    """
    out = definitions if definitions is not None else {}
    if model.name in out:
        return out

    properties: dict[str, dict[str, Any]] = {}
    required: list[str] = []
    for key, prop in model.properties.items():
        if model.is_hidden(key):
            continue

        try:
            mapped = to_swagger_data_type(prop.to_raw())
        except TypeMappingError as e:
            raise ModelTranslationError(f"property {key!r}: {e.message}", identifier=model.name) from e

        # Generated ids are optional on input.
        if prop.required or (prop.id and not prop.generated):
            required.append(key)

        properties[key] = translate_keys(mapped)

    out[model.name] = ModelDefinition(
        id=model.name,
        properties=properties,
        required=required,
        validations=normalize_validations(model.validations),
    )
    logger.debug("Added model definition %s (%d properties)", model.name, len(properties))

    for relation in model.relations.values():
        if relation.target is not None:
            build_definitions(relation.target, out, translate_keys)
        if relation.through is not None:
            build_definitions(relation.through, out, translate_keys)
    return out


def normalize_validations(validations: dict[str, list[dict[str, Any]]]) -> dict[str, list[dict[str, Any]]]:
    """Deep copy validation rules, replacing compiled regexes with their pattern."""
    return {name: [_serializable(rule) for rule in rules] for name, rules in validations.items()}


def _serializable(value: Any) -> Any:
    if isinstance(value, re.Pattern):
        return _regex_literal(value)
    if isinstance(value, dict):
        return {key: _serializable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serializable(item) for item in value]
    return copy.deepcopy(value)


_REGEX_FLAG_LETTERS = ((re.IGNORECASE, "i"), (re.MULTILINE, "m"), (re.DOTALL, "s"), (re.VERBOSE, "x"))


def _regex_literal(pattern: re.Pattern) -> str:
    """Write a compiled regex as a ``/pattern/flags`` literal."""
    flags = "".join(letter for flag, letter in _REGEX_FLAG_LETTERS if pattern.flags & flag)
    return f"/{pattern.pattern}/{flags}"


class DefinitionsBuilder:
    """Owns one definitions map and grows it model by model.

    A builder belongs to a single generation pass; do not share it between
    threads.
    """

    def __init__(self, translate_keys: KeyTranslator = translate_data_type_keys):
        self._translate_keys = translate_keys
        self._definitions: dict[str, ModelDefinition] = {}

    def add(self, model: ModelDescriptor) -> "DefinitionsBuilder":
        build_definitions(model, self._definitions, self._translate_keys)
        return self

    def __contains__(self, name: str) -> bool:
        return name in self._definitions

    @property
    def definitions(self) -> dict[str, ModelDefinition]:
        """Snapshot of the definitions built so far."""
        return {name: definition.model_copy(deep=True) for name, definition in self._definitions.items()}

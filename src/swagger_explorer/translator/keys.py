"""Renames registry (LDL) field names to their Swagger equivalents."""

import copy
from collections.abc import Callable, Mapping
from typing import Any

KeyTranslator = Callable[[Mapping[str, Any]], dict[str, Any]]

# LDL key -> Swagger key
KEY_TRANSLATIONS = {
    "doc": "description",
    "default": "defaultValue",
    "min": "minimum",
    "max": "maximum",
}


def translate_data_type_keys(field_map: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``field_map`` using Swagger field names.

    LDL keys are always removed; their value moves to the Swagger key
    unless it is None. Multi-line ``doc`` lists are joined with newlines.
    """
    out = copy.deepcopy(dict(field_map))
    for ldl_key, swagger_key in KEY_TRANSLATIONS.items():
        if ldl_key not in out:
            continue
        value = out.pop(ldl_key)
        if value is None:
            continue
        if ldl_key == "doc" and isinstance(value, (list, tuple)):
            value = "\n".join(value)
        out[swagger_key] = value
    return out

"""Conversion of registry property types into Swagger data types.

A raw type may be a type name (``"string"``, ``"Widget"``), a Python class,
an array marker (a list holding at most one element type, or ``list[X]``)
or an anonymous nested object (a dict). See
https://github.com/wordnik/swagger-spec/blob/master/versions/1.2.md#431-primitives
"""

import copy
import typing
from collections.abc import Mapping
from typing import Any

from swagger_explorer.errors import TypeMappingError
from swagger_explorer.schema.swagger import Primitive

# Lower-cased Python class names that have a registry type name.
BUILTIN_TYPE_NAMES = {
    "str": "string",
    "int": "integer",
    "float": "number",
    "decimal": "number",
    "bool": "boolean",
    "dict": "object",
    "object": "object",
    "list": "array",
    "tuple": "array",
    "bytes": "buffer",
    "bytearray": "buffer",
    "datetime": "date",
    "date": "date",
}


def get_prop_type(raw_type: Any) -> str | None:
    """Return the type name of a raw type, without Swagger narrowing."""
    raw_type = _unwrap_generic(raw_type)
    if raw_type is None:
        return None
    if isinstance(raw_type, str):
        return raw_type
    if isinstance(raw_type, (list, tuple)):
        return Primitive.ARRAY.value
    if isinstance(raw_type, Mapping):
        return Primitive.OBJECT.value
    if isinstance(raw_type, type):
        # A class registered as a model carries its model name.
        model_name = getattr(raw_type, "model_name", None)
        if isinstance(model_name, str):
            return model_name
        lowered = raw_type.__name__.lower()
        return BUILTIN_TYPE_NAMES.get(lowered, lowered)
    raise TypeMappingError(f"unsupported type {raw_type!r}")


def to_swagger_data_type(prop: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a property-like mapping to a Swagger data type description.

    Every field of ``prop`` is kept; ``type`` is replaced and ``format`` or
    ``items`` added where Swagger needs them. ``prop`` is not modified.
    """
    out = copy.deepcopy(dict(prop))
    raw_type = _unwrap_generic(prop.get("type"))
    type_name = get_prop_type(raw_type)
    if type_name is None:
        out.pop("type", None)
        return out
    out["type"] = type_name

    if type_name == Primitive.ARRAY.value:
        out["items"] = _array_items(raw_type)
    elif type_name == "date":
        out["type"] = Primitive.STRING.value
        out["format"] = "date"
    elif type_name == "buffer":
        out["type"] = Primitive.STRING.value
        out["format"] = "byte"
    elif type_name == Primitive.NUMBER.value:
        out["format"] = "double"
    return out


def extend_with_type(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Copy an operation or parameter doc with its type converted.

    The type is taken from ``model`` when present, else from ``type``.
    """
    out = copy.deepcopy(dict(obj))
    type_desc = to_swagger_data_type({"type": declared_type(obj)})
    out.update(type_desc)
    return out


def declared_type(doc: Mapping[str, Any]) -> Any:
    """The raw type of a doc: ``model`` when present, else ``type``.

    An empty array marker is a type (an untyped array), so only None falls
    through.
    """
    model = doc.get("model")
    return model if model is not None else doc.get("type")


def array_element(raw_type: Any) -> Any:
    """Element type of an array marker, or None for an untyped array."""
    raw_type = _unwrap_generic(raw_type)
    if isinstance(raw_type, (list, tuple)) and raw_type:
        return raw_type[0]
    return None


def _array_items(raw_type: Any) -> dict[str, Any]:
    element = array_element(raw_type)
    if element is None:
        return {"type": Primitive.ANY.value}
    if isinstance(element, Mapping):
        if "type" not in element:
            return {"type": Primitive.OBJECT.value}
        return to_swagger_data_type(element)
    # Scalar items carry the narrowed type only, never a format.
    return {"type": to_swagger_data_type({"type": element})["type"]}


def _unwrap_generic(raw_type: Any) -> Any:
    # list[X] is written [X] in registry metadata.
    if typing.get_origin(raw_type) in (list, tuple):
        args = typing.get_args(raw_type)
        return [args[0]] if args else []
    return raw_type

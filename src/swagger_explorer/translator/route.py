"""Route descriptor -> Swagger path entry with a single operation.

The ``accepts`` and ``returns`` declarations of a route need some massaging
before they read as Swagger parameters and an operation type: derived and
request-bound arguments are hidden, path arguments are located, and the
auto-generated CRUD routes get their untyped payloads replaced by the
owning model.
"""

from typing import Any

from swagger_explorer.errors import RouteTranslationError, TypeMappingError
from swagger_explorer.logging import get_logger
from swagger_explorer.schema.descriptors import ClassDescriptor, ParameterSpec, RouteDescriptor, RouteKind
from swagger_explorer.schema.swagger import Operation, ParameterDoc, PathEntry, Primitive
from swagger_explorer.translator.keys import KeyTranslator, translate_data_type_keys
from swagger_explorer.translator.types import array_element, declared_type, extend_with_type, get_prop_type

logger = get_logger("translator.route")

VERB_ALIASES = {"all": "POST", "del": "DELETE"}


def convert_verb(verb: str) -> str:
    """Map a remoting verb to an HTTP method name."""
    return VERB_ALIASES.get(verb.lower(), verb.upper())


def convert_path(path: str) -> str:
    """Turn ``:name`` path segments into ``{name}`` placeholders."""
    return "/".join(
        "{" + fragment[1:] + "}" if fragment.startswith(":") else fragment
        for fragment in path.split("/")
    )


def derive_parameters(
    route: RouteDescriptor,
    class_def: ClassDescriptor | None,
    translate_keys: KeyTranslator = translate_data_type_keys,
) -> list[ParameterDoc]:
    """Build the documented parameters of a route."""
    accepts = list(route.accepts)
    shared_ctor = class_def.shared_ctor if class_def is not None else None
    if route.kind is RouteKind.INSTANCE and shared_ctor is not None and shared_ctor.accepts:
        accepts.extend(shared_ctor.accepts)

    default_location = "query" if route.verb.lower() == "get" else "form"
    placeholders = {fragment[1:] for fragment in route.path.split("/") if fragment.startswith(":")}

    params = []
    for spec in accepts:
        if not _is_user_input(spec):
            continue
        raw = translate_keys(spec.to_raw())
        params.append(_to_parameter(route, spec, raw, default_location, placeholders))
    return params


def derive_return_type(
    route: RouteDescriptor,
    class_def: ClassDescriptor,
    translate_keys: KeyTranslator = translate_data_type_keys,
) -> dict[str, Any]:
    """Collapse the declared return values of a route into a single doc."""
    returns = [spec.to_raw() for spec in route.returns]

    # Auto-generated routes return the model, not an untyped object or array.
    if returns and returns[0].get("arg") == "data":
        first = returns[0]
        type_name = get_prop_type(first.get("type"))
        if type_name == Primitive.OBJECT.value:
            first["type"] = class_def.name
        elif type_name == Primitive.ARRAY.value and array_element(first.get("type")) is None:
            first["type"] = [class_def.name]

    returns = [translate_keys(doc) for doc in returns]
    if len(returns) > 1:
        # TODO: emit an ad-hoc model definition for multiple return values.
        return {"model": Primitive.OBJECT.value}
    return returns[0] if returns else {}


def translate_route(
    route: RouteDescriptor,
    class_def: ClassDescriptor,
    translate_keys: KeyTranslator = translate_data_type_keys,
) -> PathEntry:
    """Convert a route into a path entry holding one operation."""
    try:
        parameters = derive_parameters(route, class_def, translate_keys)
        returns = derive_return_type(route, class_def, translate_keys)
        result_type = declared_type(returns)
        # Operations are the only objects allowed a type of "void".
        if result_type is None:
            result_type = Primitive.VOID.value
        result = extend_with_type({"type": result_type})
    except TypeMappingError as e:
        raise RouteTranslationError(e.message, identifier=route.method) from e

    operation = Operation(
        method=convert_verb(route.verb),
        # Swagger UI does not escape "." in its jQuery selectors.
        nickname=route.method.replace(".", "_"),
        type=result["type"],
        format=result.get("format"),
        items=result.get("items"),
        parameters=parameters,
        response_messages=[],
        summary=route.description,
        notes="",
    )
    entry = PathEntry(path=convert_path(route.path), operations=[operation])
    logger.debug("Translated %s %s -> %s %s", route.verb, route.path, operation.method, entry.path)
    return entry


def _is_user_input(spec: ParameterSpec) -> bool:
    if spec.http is None:
        return True
    if spec.http.derived:
        return False
    # The raw request is not user input; a "body" argument is (e.g. create).
    return spec.http.source != "req"


def _to_parameter(
    route: RouteDescriptor,
    spec: ParameterSpec,
    raw: dict[str, Any],
    default_location: str,
    placeholders: set[str],
) -> ParameterDoc:
    name = raw.get("name") or raw.get("arg")
    if not name:
        raise RouteTranslationError("accepted argument has neither name nor arg", identifier=route.method)

    location = default_location
    if name in placeholders:
        location = "path"
    if spec.http is not None and spec.http.source:
        location = spec.http.source

    typed = extend_with_type({"type": raw.get("type")})
    param_type = typed.get("type")
    # Derive the payload type of generated CRUD routes from their model.
    if name == "data" and param_type == Primitive.OBJECT.value:
        param_type = route.owner

    return ParameterDoc(
        location=location,
        name=name,
        description=raw.get("description"),
        type=param_type,
        format=typed.get("format"),
        items=typed.get("items"),
        required=bool(raw.get("required")),
        default_value=raw.get("defaultValue"),
        minimum=raw.get("minimum"),
        maximum=raw.get("maximum"),
        allow_multiple=False,
    )

"""Route and model metadata consumed by the translators.

These models describe a remoting service the way its registry exposes it:
shared classes, the routes they publish, and the model definitions behind
them. Field names follow the registry's (LDL) vocabulary; translating them
into Swagger's is the job of ``swagger_explorer.translator.keys``.
"""

import copy
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def _raw_fields(model: BaseModel, exclude: tuple[str, ...] = ()) -> dict[str, Any]:
    """Deep copy of the explicitly set, non-None fields of a descriptor."""
    keys = set(model.model_fields_set) | set(model.model_extra or {})
    raw = {}
    for key, value in model:
        if key in exclude or key not in keys or value is None:
            continue
        raw[key] = copy.deepcopy(value)
    return raw


class HttpBinding(BaseModel):
    """Where an argument's value comes from in the incoming HTTP request.

    ``derived`` marks arguments computed server-side by a function; those
    never show up as documented parameters.
    """

    model_config = ConfigDict(frozen=True)

    source: str | None = None
    derived: bool = False


class ParameterSpec(BaseModel):
    """A single accepted argument or returned value of a route."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = None
    arg: str | None = None
    type: Any = None
    required: bool = False
    default: Any = None
    min: int | float | None = None
    max: int | float | None = None
    description: str | None = None
    doc: str | list[str] | None = None
    root: bool | None = None
    http: HttpBinding | None = None

    @field_validator("http", mode="before")
    @classmethod
    def _coerce_http(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"source": value}
        if callable(value):
            return {"derived": True}
        return value

    def to_raw(self) -> dict[str, Any]:
        """Return the set fields as a fresh dict, without the http binding."""
        return _raw_fields(self, exclude=("http",))


class RouteKind(str, Enum):
    """Whether a route is invoked on the class or on one of its instances."""

    STATIC = "static"
    INSTANCE = "instance"


class RouteDescriptor(BaseModel):
    """One callable endpoint published by a shared class."""

    model_config = ConfigDict(frozen=True)

    path: str
    verb: str
    method: str  # Owner.member or Owner.prototype.member
    accepts: list[ParameterSpec] = []
    returns: list[ParameterSpec] = []
    description: str | None = None
    kind: RouteKind

    @model_validator(mode="before")
    @classmethod
    def _derive_kind(cls, data: Any) -> Any:
        # Registries that do not classify routes get the prototype-path rule:
        # Owner.prototype.member has three segments, Owner.member has two.
        if isinstance(data, dict) and data.get("kind") is None and isinstance(data.get("method"), str):
            data = dict(data)
            segments = data["method"].split(".")
            data["kind"] = RouteKind.INSTANCE if len(segments) > 2 else RouteKind.STATIC
        return data

    @field_validator("method")
    @classmethod
    def _check_method(cls, value: str) -> str:
        owner, _, member = value.partition(".")
        if not owner or not member:
            raise ValueError(f"method identifier {value!r} must look like 'Owner.member'")
        return value

    @property
    def owner(self) -> str:
        """Name of the class the route belongs to."""
        return self.method.split(".")[0]


class PropertyDefinition(BaseModel):
    """A typed property of a model."""

    model_config = ConfigDict(extra="allow")

    type: Any = None
    required: bool = False
    id: bool | int = False
    generated: bool = False
    description: str | None = None

    def to_raw(self) -> dict[str, Any]:
        return _raw_fields(self)


class ModelDescriptor(BaseModel):
    """A named data entity: properties, validation rules and relations."""

    name: str
    properties: dict[str, PropertyDefinition] = {}
    hidden: list[str] = []
    validations: dict[str, list[dict[str, Any]]] = {}
    relations: dict[str, "Relation"] = {}

    @model_validator(mode="before")
    @classmethod
    def _lift_settings(cls, data: Any) -> Any:
        # Registries nest hidden property names under settings.hidden.
        if not isinstance(data, dict) or not isinstance(data.get("settings"), dict):
            return data
        data = dict(data)
        settings = data.pop("settings")
        hidden = list(data.get("hidden") or [])
        hidden.extend(name for name in settings.get("hidden") or [] if name not in hidden)
        data["hidden"] = hidden
        return data

    @field_validator("properties", mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        # {"name": "string"} is short for {"name": {"type": "string"}}.
        if not isinstance(value, dict):
            return value
        return {
            key: prop if isinstance(prop, (dict, PropertyDefinition)) else {"type": prop}
            for key, prop in value.items()
        }

    def is_hidden(self, property_name: str) -> bool:
        return property_name in self.hidden


class Relation(BaseModel):
    """A relation to another model, optionally through a join model."""

    # Relation graphs may be cyclic, so related models stay out of repr().
    target: ModelDescriptor | None = Field(default=None, repr=False)
    through: ModelDescriptor | None = Field(default=None, repr=False)

    @model_validator(mode="after")
    def _check_models(self) -> "Relation":
        if self.target is None and self.through is None:
            raise ValueError("relation needs a target model or a through model")
        return self


ModelDescriptor.model_rebuild()


class SharedConstructor(BaseModel):
    """Arguments used to resolve an instance before instance routes run."""

    accepts: list[ParameterSpec] = []
    description: str | None = None


class ClassDescriptor(BaseModel):
    """A shared class exposing routes, optionally backed by a model."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    http_path: str | None = Field(default=None, validation_alias=AliasChoices("http_path", "path"))
    shared_ctor: SharedConstructor | None = Field(
        default=None, validation_alias=AliasChoices("shared_ctor", "sharedCtor")
    )
    model: ModelDescriptor | None = None

    @property
    def resource_path(self) -> str:
        """The class's mount point, e.g. ``/widgets``."""
        return "/" + (self.http_path or self.name).strip("/")


class ServiceRegistry(BaseModel):
    """Everything a service exposes: models, classes and routes."""

    models: dict[str, ModelDescriptor] = {}
    classes: list[ClassDescriptor] = []
    routes: list[RouteDescriptor] = []

    def find_class(self, name: str) -> ClassDescriptor | None:
        for class_def in self.classes:
            if class_def.name == name:
                return class_def
        return None

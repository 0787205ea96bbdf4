"""Swagger 1.2 document models produced by the translators.

Attributes are snake_case; ``to_document()`` serializes them with the
camelCase names the Swagger 1.2 format uses.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Primitive(str, Enum):
    """Canonical Swagger data types.

    ``ANY`` is not part of Swagger 1.2; it documents arrays whose element
    type the service never declared.
    """

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    FILE = "file"
    VOID = "void"
    ANY = "any"


class SwaggerModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        """Plain dict in Swagger field names, with absent fields left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ParameterDoc(SwaggerModel):
    """A documented operation parameter."""

    location: str = Field(alias="paramType")  # query / path / form / body / header
    name: str
    description: str | None = None
    type: str | None = None
    format: str | None = None
    items: dict[str, Any] | None = None
    required: bool = False
    default_value: Any = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    allow_multiple: bool = False


class Operation(SwaggerModel):
    """One verb documented under a path."""

    method: str
    nickname: str
    type: str
    format: str | None = None
    items: dict[str, Any] | None = None
    parameters: list[ParameterDoc] = []
    response_messages: list[dict[str, Any]] = []
    summary: str | None = None
    notes: str = ""


class PathEntry(SwaggerModel):
    path: str
    operations: list[Operation] = []


class ModelDefinition(SwaggerModel):
    """Schema of a model, as listed in a declaration's ``models``."""

    id: str
    properties: dict[str, dict[str, Any]] = {}
    required: list[str] = []
    validations: dict[str, list[dict[str, Any]]] = {}


class ApiDeclaration(SwaggerModel):
    """All paths and models documented for one resource."""

    api_version: str
    swagger_version: str
    base_path: str
    resource_path: str
    apis: list[PathEntry] = []
    consumes: list[str] = []
    produces: list[str] = []
    models: dict[str, ModelDefinition] = {}


class ResourceEntry(SwaggerModel):
    path: str
    description: str | None = None


class ResourceListing(SwaggerModel):
    """The top-level index pointing at each resource's declaration."""

    swagger_version: str
    api_version: str
    apis: list[ResourceEntry] = []
    info: dict[str, Any] = {}

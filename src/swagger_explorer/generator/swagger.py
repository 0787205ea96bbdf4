"""Swagger document assembly for a whole service.

Produces the resource listing plus one API declaration per shared class,
with each class's routes and model definitions.
"""

from pydantic import BaseModel

from swagger_explorer.config import ExplorerConfig
from swagger_explorer.errors import RegistryError
from swagger_explorer.logging import get_logger
from swagger_explorer.schema.descriptors import ClassDescriptor, ServiceRegistry
from swagger_explorer.schema.swagger import ApiDeclaration, ResourceEntry, ResourceListing
from swagger_explorer.translator.document import ApiDeclarationBuilder
from swagger_explorer.translator.keys import KeyTranslator, translate_data_type_keys

logger = get_logger("generator.swagger")


class SwaggerDocs(BaseModel):
    """The resource listing and the declarations it points at, keyed by class name."""

    listing: ResourceListing
    declarations: dict[str, ApiDeclaration]


class SwaggerGenerator:
    """Builds Swagger 1.2 documents from a service registry."""

    def __init__(
        self,
        config: ExplorerConfig | None = None,
        translate_keys: KeyTranslator = translate_data_type_keys,
    ):
        self.config = config or ExplorerConfig()
        self.translate_keys = translate_keys

    def generate(self, registry: ServiceRegistry) -> SwaggerDocs:
        listing = ResourceListing(
            swagger_version=self.config.swagger_version,
            api_version=self.config.api_version,
            apis=[],
            info=dict(self.config.api_info),
        )

        builders: dict[str, ApiDeclarationBuilder] = {}
        for class_def in registry.classes:
            builders[class_def.name] = ApiDeclarationBuilder(self._new_declaration(class_def), self.translate_keys)
            description = class_def.shared_ctor.description if class_def.shared_ctor else None
            listing.apis.append(ResourceEntry(path=class_def.resource_path, description=description))

        for route in registry.routes:
            builder = builders.get(route.owner)
            if builder is None:
                raise RegistryError(f"route {route.verb} {route.path} has no registered class", identifier=route.method)
            builder.add_route(route, registry.find_class(route.owner))

        for class_def in registry.classes:
            if class_def.model is not None:
                builders[class_def.name].add_model(class_def.model)

        declarations = {name: builder.build() for name, builder in builders.items()}
        logger.info("Generated %d API declarations from %d routes", len(declarations), len(registry.routes))
        return SwaggerDocs(listing=listing, declarations=declarations)

    def _new_declaration(self, class_def: ClassDescriptor) -> ApiDeclaration:
        return ApiDeclaration(
            api_version=self.config.api_version,
            swagger_version=self.config.swagger_version,
            base_path=self.config.base_path,
            resource_path=class_def.resource_path,
            apis=[],
            consumes=list(self.config.consumes),
            produces=list(self.config.produces),
            models={},
        )


def generate_swagger(registry: ServiceRegistry, config: ExplorerConfig | None = None) -> SwaggerDocs:
    """Generate the resource listing and API declarations for ``registry``."""
    return SwaggerGenerator(config=config).generate(registry)

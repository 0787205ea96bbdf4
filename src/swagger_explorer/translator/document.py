"""Folding translated routes into an API declaration.

Routes sharing a path (same path, different verb) are documented as
operations of one path entry, in the order the routes were added.
"""

from swagger_explorer.logging import get_logger
from swagger_explorer.schema.descriptors import ClassDescriptor, ModelDescriptor, RouteDescriptor
from swagger_explorer.schema.swagger import ApiDeclaration, PathEntry
from swagger_explorer.translator.keys import KeyTranslator, translate_data_type_keys
from swagger_explorer.translator.model import build_definitions
from swagger_explorer.translator.route import translate_route

logger = get_logger("translator.document")


def add_to_document(entry: PathEntry, document: ApiDeclaration) -> ApiDeclaration:
    """Merge ``entry`` into ``document`` and return the document.

    Operations are appended as given; two routes registering the same verb
    on the same path both stay in the document.
    """
    entry = entry.model_copy(deep=True)
    for existing in document.apis:
        if existing.path == entry.path:
            existing.operations.extend(entry.operations)
            logger.debug("Merged %d operation(s) into %s", len(entry.operations), entry.path)
            return document
    document.apis.append(entry)
    return document


class ApiDeclarationBuilder:
    """Owns one API declaration while its routes and models are added.

    Not thread-safe: each generation pass builds its own declarations.
    """

    def __init__(
        self,
        declaration: ApiDeclaration,
        translate_keys: KeyTranslator = translate_data_type_keys,
    ):
        self._declaration = declaration
        self._translate_keys = translate_keys

    def add_route(self, route: RouteDescriptor, class_def: ClassDescriptor) -> PathEntry:
        """Translate a route and merge it into the declaration."""
        entry = translate_route(route, class_def, self._translate_keys)
        add_to_document(entry, self._declaration)
        return entry

    def add_model(self, model: ModelDescriptor) -> None:
        """Add the definitions of a model and its related models."""
        build_definitions(model, self._declaration.models, self._translate_keys)

    def build(self) -> ApiDeclaration:
        """Snapshot of the declaration built so far."""
        return self._declaration.model_copy(deep=True)

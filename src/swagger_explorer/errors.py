"""Exception hierarchy for swagger-explorer.

Every error carries the identifier of the route, model, or class that
caused it, so a failed generation pass points at the offending metadata.
"""


class ExplorerError(Exception):
    """Base exception for all swagger-explorer failures."""

    def __init__(self, message: str, identifier: str | None = None):
        super().__init__(message)
        self.message = message
        self.identifier = identifier

    def __str__(self) -> str:
        if self.identifier:
            return f"{self.identifier}: {self.message}"
        return self.message


class TypeMappingError(ExplorerError):
    """Raised when a raw type cannot be expressed as a Swagger data type."""


class ModelTranslationError(ExplorerError):
    """Raised when a model descriptor cannot be turned into a definition."""


class RouteTranslationError(ExplorerError):
    """Raised when a route descriptor cannot be turned into an operation."""


class RegistryError(ExplorerError):
    """Raised when route/model metadata is missing or inconsistent."""


class ConfigError(ExplorerError):
    """Raised when the configuration file cannot be parsed."""

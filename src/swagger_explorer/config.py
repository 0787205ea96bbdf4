"""Configuration for API document generation.

Values come from an optional YAML file; CLI options override them.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from swagger_explorer.errors import ConfigError

DEFAULT_CONSUMES = [
    "application/json",
    "application/x-www-form-urlencoded",
    "application/xml",
    "text/xml",
]

DEFAULT_PRODUCES = [
    "application/json",
    "application/javascript",
    "application/xml",
    "text/javascript",
    "text/xml",
]


class ExplorerConfig(BaseModel):
    """Settings applied to every generated resource listing and declaration."""

    api_version: str = "0.0.0"
    swagger_version: str = "1.2"
    base_path: str = "/api"
    resource_path: str = "resources"
    api_info: dict[str, Any] = {}
    consumes: list[str] = Field(default_factory=lambda: list(DEFAULT_CONSUMES))
    produces: list[str] = Field(default_factory=lambda: list(DEFAULT_PRODUCES))

    def with_overrides(self, **overrides: Any) -> "ExplorerConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return self.model_copy(update=values)


def load_config(path: Path | None) -> ExplorerConfig:
    """Load configuration from a YAML file. No file means defaults."""
    if path is None or not path.exists():
        return ExplorerConfig()

    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {path.name}: {e}") from e

    if data is None:
        return ExplorerConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")

    try:
        return ExplorerConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path.name}: {e}") from e

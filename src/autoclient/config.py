"""Export configuration loaded from a YAML file.

Example ``autoclient.yaml``::

    apis:
      - endpoint: /api/users
        class: app.controllers:UsersController
        target_dir: static/js/services
        module: App
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from autoclient.generator.service import DEFAULT_MODULE

DEFAULT_CONFIG_FILE = "autoclient.yaml"


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


class ApiExport(BaseModel):
    """One API class to export as a client-side service."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    endpoint: str  # base URL of all published methods
    class_name: str = Field(alias="class")
    target_dir: Path
    module: str = DEFAULT_MODULE
    manifest: Path | None = None  # static metadata instead of runtime introspection


class AutoClientConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    apis: list[ApiExport] = []


def load_config(file_path: Path) -> AutoClientConfig:
    """Load and validate a config file.

    Relative ``target_dir`` and ``manifest`` paths are resolved against the
    directory holding the config file.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {file_path}: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
        config = AutoClientConfig.model_validate(data if isinstance(data, dict) else {"apis": data})
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid config {file_path}:\n{e}") from e

    base = file_path.parent
    for api in config.apis:
        if not api.target_dir.is_absolute():
            api.target_dir = base / api.target_dir
        if api.manifest is not None and not api.manifest.is_absolute():
            api.manifest = base / api.manifest
    return config

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from src.config.models import DetectConfig


class ConfigError(ValueError):
    """Raised when the configuration file or an override is invalid."""


def _is_section(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _apply_env_overrides(
    data: dict[str, Any],
    model: type[BaseModel],
    environ: Mapping[str, str],
    prefix: str = "",
) -> dict[str, Any]:
    """
    Overlay environment variables onto raw config data.

    Variable names are the upper-cased key path joined by underscores,
    e.g. blackduck.api_token -> BLACKDUCK_API_TOKEN.
    """
    for key, field in model.model_fields.items():
        env_name = f"{prefix}{key}".upper()
        if _is_section(field.annotation):
            section = data.get(key) or {}
            if not isinstance(section, dict):
                raise ConfigError(f"Config section '{key}' must be a mapping")
            data[key] = _apply_env_overrides(
                dict(section), field.annotation, environ, prefix=f"{env_name}_"
            )
        elif env_name in environ:
            data[key] = environ[env_name]
    return data


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> DetectConfig:
    """
    Load and validate the detect configuration.

    A path that is given but missing raises FileNotFoundError. Without a
    path, defaults plus environment overrides are used.
    Raises ConfigError if YAML syntax or schema is invalid.
    """
    data: dict[str, Any] = {}

    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Config file not found at: {path}")

        with open(path) as f:
            content = f.read()

        try:
            loaded = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in config file: {e}") from e

        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError("Config file must contain a mapping at the top level")
        data = loaded or {}

    env = os.environ if environ is None else environ
    data = _apply_env_overrides(data, DetectConfig, env)

    try:
        return DetectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed:\n{e}") from e

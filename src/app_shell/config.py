import logging
import os
from pathlib import Path

from src.config.loader import ConfigError, load_config
from src.config.models import DetectConfig

DEFAULT_CONFIG_PATH = "detect.yaml"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_config_path(explicit: str | None) -> Path | None:
    """
    Pick the config file to load.

    An explicit path must exist. Otherwise DETECT_CONFIG_PATH or ./detect.yaml
    is used when present, and environment-only configuration when not.
    """
    if explicit:
        return Path(explicit)

    candidate = Path(os.environ.get("DETECT_CONFIG_PATH", DEFAULT_CONFIG_PATH))
    return candidate if candidate.exists() else None


def load_detect_config(explicit: str | None = None) -> DetectConfig:
    path = resolve_config_path(explicit)
    try:
        return load_config(path)
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e


def configure_logging(config: DetectConfig) -> None:
    """Configure root logging from the loaded config."""
    level_name = config.logging.level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigError(f"Unknown logging level: {config.logging.level}")

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

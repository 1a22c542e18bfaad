"""Home configuration — optional ``config.yaml`` merged onto application state."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from apphome.errors import ConfigError
from apphome.home import PATH_CONFIG

logger = logging.getLogger(__name__)


def load_config(home: str | Path, state: dict[str, Any]) -> bool:
    """Merge ``<home>/config.yaml`` into *state*.

    A missing or empty file leaves *state* untouched. Top-level keys of the
    file replace the same keys in *state*.

    Returns:
        True if a configuration was applied.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does
            not contain a mapping.
    """
    path = Path(home) / PATH_CONFIG
    if not path.exists():
        logger.debug("No configuration file at %s", path)
        return False

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as err:
        raise ConfigError("Failed to load configuration file", path=path) from err

    if data is None:
        return False
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration must be a mapping, got {type(data).__name__}", path=path
        )

    state.update(data)
    logger.debug("Loaded configuration keys %s from %s", sorted(data), path)
    return True

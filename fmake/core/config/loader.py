"""
Configuration loader — reads framework.yml into a FrameworkConfig.

framework.yml describes one framework for one platform: its name,
version, bundle identifier, minimum OS version and umbrella header.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from fmake.core.models.bundle import FrameworkConfig

logger = logging.getLogger(__name__)

FRAMEWORK_CONFIG_FILE = "framework.yml"


class ConfigError(Exception):
    """Raised when framework configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for framework.yml starting from ``start_dir``, walking up.

    Returns:
        Path to framework.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):
        candidate = current / FRAMEWORK_CONFIG_FILE
        if candidate.is_file():
            return candidate
        if current.parent == current:
            break
        current = current.parent

    return None


def load_config(path: Path | None = None) -> FrameworkConfig:
    """Load and validate framework configuration.

    Args:
        path: Explicit path to framework.yml. If None, searches upward.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {FRAMEWORK_CONFIG_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading framework config from %s", path)

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Accept the document either flat or nested under "framework:"
    if isinstance(data.get("framework"), dict):
        data = data["framework"]

    try:
        config = FrameworkConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid framework configuration in {path}: {e}") from e

    logger.info("Loaded framework '%s' for %s", config.name, config.platform.label)
    return config

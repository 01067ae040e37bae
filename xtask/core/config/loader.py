"""
Configuration loader — reads xtask.yml into an XtaskConfig.

This is the primary entry point for loading configuration. It reads
YAML, validates against the Pydantic schema, and returns a frozen
config value that is then passed explicitly through the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from xtask.core.models.config import XtaskConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "xtask.yml"


class ConfigError(Exception):
    """Raised when xtask configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for xtask.yml starting from the given directory, walking up.

    This allows running commands from a crate subdirectory and still
    finding the workspace root.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to xtask.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> XtaskConfig:
    """Load and validate xtask configuration.

    Args:
        path: Explicit path to xtask.yml. If None, searches upward and
            falls back to the built-in defaults when nothing is found.

    Returns:
        Validated, frozen XtaskConfig.

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return XtaskConfig()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return XtaskConfig()

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return XtaskConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = XtaskConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid xtask configuration in {path}: {e}") from e

    logger.info(
        "Loaded config: stable=%s nightly=%s",
        config.toolchains.stable,
        config.toolchains.nightly,
    )
    return config


def project_root(config_path: Path | None) -> Path:
    """Workspace root: the directory holding xtask.yml, else the cwd."""
    if config_path is None:
        return Path.cwd().resolve()
    return config_path.parent.resolve()

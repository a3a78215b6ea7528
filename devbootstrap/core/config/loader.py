"""
Configuration loader: reads packages.yml into domain models.

The catalog file lists the base applications (``bases``) and optional
manager ``settings``. It is read once, validated against the Pydantic
models and shared read-only by every manager.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from devbootstrap.core.config.settings import PackageManagerSettings
from devbootstrap.core.models.package import PackagesData
from devbootstrap.core.services.package_manager.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default config filename
CATALOG_FILE = "packages.yml"


class ConfigError(ConfigurationError):
    """Raised when the catalog file is invalid or missing."""


class Catalog(BaseModel):
    """Everything packages.yml provides."""

    model_config = ConfigDict(frozen=True)

    packages: PackagesData = Field(default_factory=PackagesData)
    settings: PackageManagerSettings = Field(default_factory=PackageManagerSettings)


def find_catalog_file(start_dir: Path | None = None) -> Path | None:
    """Search for packages.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to packages.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CATALOG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_catalog(path: Path | None = None) -> Catalog:
    """Load and validate the package catalog.

    Args:
        path: Explicit path to packages.yml. If None, searches upward.

    Returns:
        Validated Catalog.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_catalog_file()

    if path is None:
        raise ConfigError(f"No {CATALOG_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading package catalog from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        catalog = Catalog(
            packages=PackagesData.model_validate({"bases": data.get("bases") or []}),
            settings=PackageManagerSettings.model_validate(data.get("settings") or {}),
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid package catalog {path}: {e}") from e

    logger.info("Loaded catalog with %d base apps", len(catalog.packages.bases))
    return catalog

"""
Package manager settings, read from the ``settings`` mapping of packages.yml.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from devbootstrap.core.data.constants import (
    DEFAULT_APPLICATIONS_DIR,
    DEFAULT_COMMAND_BIN_DIR,
)


class PackageManagerSettings(BaseModel):
    """Knobs shared by every manager variant.

    ``strict_ide_types`` turns an unknown ``IDEType`` into an error
    instead of a silent skip. ``fail_on_nonzero_exit`` makes a non-zero
    exit code of the install command raise instead of being returned.
    """

    model_config = ConfigDict(frozen=True)

    applications_dir: str = DEFAULT_APPLICATIONS_DIR
    command_bin_dir: str = DEFAULT_COMMAND_BIN_DIR
    log_dir: str | None = None
    strict_ide_types: bool = False
    fail_on_nonzero_exit: bool = False

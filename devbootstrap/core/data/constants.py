"""
L0 Data: static lookup tables and constants.

Pure data. No logic beyond the enum.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from devbootstrap.core.models.package import InstallCommandPackage

VSCODE_NAME = "VSCode"
VSCODE_COMMAND_NAME = "code"

DEFAULT_APPLICATIONS_DIR = "/Applications"

# Must already be on PATH; the shim installer never creates it.
DEFAULT_COMMAND_BIN_DIR = "/usr/local/bin"


class IDEType(str, Enum):
    """IDE families whose extensions we know how to manage."""

    VSCODE = "VSCode"


# App name -> CLI shim shipped inside the installed bundle.
INSTALL_COMMAND_PACKAGES: tuple[InstallCommandPackage, ...] = (
    InstallCommandPackage(
        name=VSCODE_NAME,
        command_relative_path="Contents/Resources/app/bin/code",
    ),
)


def find_install_command_package(
    name: str,
    packages: Sequence[InstallCommandPackage] = INSTALL_COMMAND_PACKAGES,
) -> InstallCommandPackage | None:
    return next((p for p in packages if p.name == name), None)

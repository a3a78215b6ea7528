"""
Package manager registry: central dispatch by package family.

Callers ask the registry to install a package of a given family
("app", "extension", ...) and never touch a concrete manager.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from devbootstrap.core.config.settings import PackageManagerSettings
from devbootstrap.core.data.constants import INSTALL_COMMAND_PACKAGES
from devbootstrap.core.models.package import (
    InstallCommandPackage,
    OperationResult,
    PackageInfo,
    PackagesData,
)
from devbootstrap.core.services.package_manager.errors import ConfigurationError
from devbootstrap.core.services.package_manager.execution.log_sink import LogSink
from devbootstrap.core.services.package_manager.execution.subprocess_runner import SubprocessRunner
from devbootstrap.core.services.package_manager.managers.app import AppManager
from devbootstrap.core.services.package_manager.managers.base import PackageManager
from devbootstrap.core.services.package_manager.managers.ide_extension import IDEExtensionManager

logger = logging.getLogger(__name__)


class PackageManagerRegistry:
    """Registry and dispatcher for package managers."""

    def __init__(self) -> None:
        self._managers: dict[str, PackageManager] = {}

    def register(self, manager: PackageManager) -> None:
        """Register a manager under its family name."""
        name = manager.name
        if name in self._managers:
            logger.warning("Overwriting existing package manager: %s", name)
        self._managers[name] = manager
        logger.debug("Registered package manager: %s", name)

    def unregister(self, name: str) -> None:
        self._managers.pop(name, None)

    def get(self, name: str) -> PackageManager | None:
        return self._managers.get(name)

    def list_managers(self) -> list[str]:
        return list(self._managers.keys())

    def _require(self, family: str) -> PackageManager:
        manager = self._managers.get(family)
        if manager is None:
            known = ", ".join(sorted(self._managers)) or "none"
            raise ConfigurationError(f"No package manager registered for '{family}' (known: {known})")
        return manager

    async def install(self, family: str, package: PackageInfo) -> OperationResult:
        return await self._require(family).install(package)

    async def uninstall(self, family: str, package: PackageInfo) -> None:
        await self._require(family).uninstall(package)


def build_default_registry(
    packages_data: PackagesData,
    settings: PackageManagerSettings | None = None,
    log_sink: LogSink | None = None,
    runner: SubprocessRunner | None = None,
    platform: str | None = None,
    install_command_packages: Sequence[InstallCommandPackage] = INSTALL_COMMAND_PACKAGES,
) -> PackageManagerRegistry:
    """Wire the built-in managers, all sharing one catalog, sink and runner."""
    registry = PackageManagerRegistry()
    shared = {
        "runner": runner,
        "log_sink": log_sink,
        "settings": settings,
        "platform": platform,
    }
    registry.register(AppManager("app", packages_data, **shared))
    registry.register(
        IDEExtensionManager(
            "extension",
            packages_data,
            install_command_packages=install_command_packages,
            **shared,
        )
    )
    return registry

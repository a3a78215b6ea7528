"""
IDE extension manager: install/uninstall editor extensions via the IDE CLI.

Each call walks the same path::

    REQUESTED -> CHECKING_COMMAND -> [SELF_HEALING] -> RUNNING -> DONE | FAILED

The command probe runs on every call. When the IDE command is missing
but the IDE itself is installed, its bundled CLI shim is linked onto
PATH before the real command runs. Healing does not re-probe; if the
healed command then fails to start, ``HealedCommandFailedError`` says so.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any, Literal

from devbootstrap.core.data.constants import (
    INSTALL_COMMAND_PACKAGES,
    VSCODE_COMMAND_NAME,
    VSCODE_NAME,
    IDEType,
    find_install_command_package,
)
from devbootstrap.core.models.package import (
    InstallCommandPackage,
    OperationResult,
    PackageInfo,
    PackagesData,
)
from devbootstrap.core.services.package_manager.detection.command import check_command_installed
from devbootstrap.core.services.package_manager.detection.local_app import LOCAL_INFO_PROBES
from devbootstrap.core.services.package_manager.errors import (
    CommandFailedError,
    ConfigurationError,
    HealedCommandFailedError,
    PrerequisiteMissingError,
    SpawnError,
    UnsupportedExtensionTypeError,
    UnsupportedMechanismError,
)
from devbootstrap.core.services.package_manager.execution.command_path import install_command_to_path
from devbootstrap.core.services.package_manager.managers.base import PackageManager

logger = logging.getLogger(__name__)

Operation = Literal["install", "uninstall"]
ExtensionProcessor = Callable[[str, Operation], Awaitable[int]]
CommandChecker = Callable[[str], Awaitable[bool]]
CommandInstaller = Callable[[str, str, str], Awaitable[object]]


class IDEExtensionManager(PackageManager):
    """Manage IDE extensions, one processor per ``IDEType``."""

    def __init__(
        self,
        channel: str,
        packages_data: PackagesData,
        *,
        command_checker: CommandChecker | None = None,
        command_installer: CommandInstaller | None = None,
        install_command_packages: Sequence[InstallCommandPackage] = INSTALL_COMMAND_PACKAGES,
        **kwargs: Any,
    ):
        super().__init__(channel, packages_data, **kwargs)
        self._check_command = command_checker or check_command_installed
        self._install_command = command_installer or install_command_to_path
        self.install_command_packages = tuple(install_command_packages)
        self.ide_type_processors: dict[str, ExtensionProcessor] = {
            IDEType.VSCODE.value: self._process_vscode_extension,
        }
        self._validate_processors()

    @property
    def name(self) -> str:
        return "extension"

    def _validate_processors(self) -> None:
        missing = [t.value for t in IDEType if t.value not in self.ide_type_processors]
        if missing:
            raise ConfigurationError(f"No extension processor for IDE type(s): {', '.join(missing)}")

    def _resolve_processor(self, package: PackageInfo) -> ExtensionProcessor | None:
        processor = self.ide_type_processors.get(package.ide_type or "")
        if processor is None:
            if self.settings.strict_ide_types:
                raise UnsupportedExtensionTypeError(
                    f"Unsupported IDE type {package.ide_type!r} for extension {package.name}"
                )
            logger.debug("Skipping %s: no processor for IDE type %r", package.name, package.ide_type)
        return processor

    async def install(self, package: PackageInfo) -> OperationResult:
        processor = self._resolve_processor(package)
        if processor is None:
            return OperationResult(name=package.name)
        code = await processor(package.name, "install")
        return OperationResult(name=package.name, exit_code=code)

    async def uninstall(self, package: PackageInfo) -> None:
        processor = self._resolve_processor(package)
        if processor is not None:
            await processor(package.name, "uninstall")

    # ── VS Code ─────────────────────────────────────────────────

    async def _process_vscode_extension(self, extension_id: str, operation: Operation) -> int:
        healed = await self.ensure_command_installed(VSCODE_COMMAND_NAME, VSCODE_NAME)
        return await self._run_ide_command(
            VSCODE_COMMAND_NAME,
            [f"--{operation}-extension", extension_id],
            healed=healed,
        )

    async def _run_ide_command(self, command: str, args: list[str], *, healed: bool) -> int:
        try:
            code = await self.runner.run(
                command,
                args,
                on_stdout=self._forward_output,
                on_stderr=self._forward_output,
            )
        except SpawnError as e:
            self._log(e.stderr or str(e), severity="error")
            if healed:
                raise HealedCommandFailedError(
                    command,
                    f"{command} was linked onto PATH but could not be started: {e}",
                    stderr=e.stderr,
                ) from e
            raise

        if code != 0 and self.settings.fail_on_nonzero_exit:
            self._log(f"{command} {' '.join(args)} exited with code {code}", severity="error")
            raise CommandFailedError(command, code)
        return code

    async def ensure_command_installed(self, command_name: str, app_name: str) -> bool:
        """Make sure ``command_name`` resolves, linking the app's shim if needed.

        Returns:
            True if the shim was linked by this call, False if the command
            was already available.

        Raises:
            ConfigurationError: No catalog entry for the app on this platform.
            UnsupportedMechanismError: The app's install mechanism has no probe.
            PrerequisiteMissingError: The app itself is not installed.
            ShimInstallError: The link could not be written.
        """
        if await self._check_command(command_name):
            return False

        self._log(f"{app_name} command '{command_name}' was not installed.", severity="warn")
        self._log(f"Try to install {command_name} command to path.")

        base = self.packages_data.find_base(app_name, self.platform)
        if base is None:
            raise ConfigurationError(f"{app_name} info was not found.")

        probe = LOCAL_INFO_PROBES.get(base.type)
        if probe is None:
            raise UnsupportedMechanismError(f"The app type {base.type} of {app_name} was not found.")

        local_info = await probe(base, self.settings.applications_dir)
        if not local_info.installed or not local_info.path:
            raise PrerequisiteMissingError(f"{app_name} was not installed.")

        command_package = find_install_command_package(app_name, self.install_command_packages)
        if command_package is None:
            raise ConfigurationError(f"No command shim is known for {app_name}.")

        source = Path(local_info.path) / command_package.command_relative_path
        await self._install_command(str(source), command_name, self.settings.command_bin_dir)
        self._log(f"Install {command_name} command to path successfully.")
        return True

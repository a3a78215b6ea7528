"""
Native app manager: install/uninstall base applications from the catalog.

Only mounted disk images (``dmg``) are supported. Install attaches a
local image, copies the bundle into the applications directory and
detaches again; uninstall removes the bundle.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path

from devbootstrap.core.models.package import BaseAppInfo, OperationResult, PackageInfo
from devbootstrap.core.services.package_manager.detection.local_app import (
    LOCAL_INFO_PROBES,
    bundle_path,
)
from devbootstrap.core.services.package_manager.errors import (
    CommandFailedError,
    ConfigurationError,
    PrerequisiteMissingError,
    SpawnError,
    UnsupportedMechanismError,
)
from devbootstrap.core.services.package_manager.managers.base import PackageManager

logger = logging.getLogger(__name__)

HDIUTIL = "hdiutil"


class AppManager(PackageManager):
    """Manage native app bundles listed in ``PackagesData.bases``."""

    @property
    def name(self) -> str:
        return "app"

    def _find_base(self, package: PackageInfo) -> BaseAppInfo:
        base = self.packages_data.find_base(package.name, self.platform)
        if base is None:
            raise ConfigurationError(f"{package.name} info was not found.")
        if base.type not in LOCAL_INFO_PROBES:
            raise UnsupportedMechanismError(f"The app type {base.type} of {base.name} was not found.")
        return base

    async def install(self, package: PackageInfo) -> OperationResult:
        base = self._find_base(package)
        local_info = await LOCAL_INFO_PROBES[base.type](base, self.settings.applications_dir)
        if local_info.installed:
            version = f" ({local_info.version})" if local_info.version else ""
            self._log(f"{base.name}{version} is already installed.")
            return OperationResult(name=package.name)

        source = package.options.get("source")
        if not source or not Path(source).is_file():
            raise PrerequisiteMissingError(
                f"{base.name} needs a local disk image to install from (got {source!r})."
            )

        self._log(f"Installing {base.name} from {source}.")
        code = await self._install_dmg(base, Path(source))
        if code == 0:
            self._log(f"Install {base.name} successfully.")
        elif self.settings.fail_on_nonzero_exit:
            self._log(f"Copying {base.name} exited with code {code}", severity="error")
            raise CommandFailedError("cp", code)
        return OperationResult(name=package.name, exit_code=code)

    async def _install_dmg(self, base: BaseAppInfo, image: Path) -> int:
        mount_point = Path(tempfile.mkdtemp(prefix="devbootstrap-"))
        try:
            attach = await self._run(
                HDIUTIL,
                ["attach", "-nobrowse", "-readonly", "-mountpoint", str(mount_point), str(image)],
            )
        except SpawnError:
            mount_point.rmdir()
            raise
        if attach != 0:
            self._log(f"Cannot mount {image} (exit {attach}).", severity="error")
            mount_point.rmdir()
            raise CommandFailedError(HDIUTIL, attach)

        try:
            bundle = mount_point / f"{base.bundle_name}.app"
            return await self._run("cp", ["-R", str(bundle), self.settings.applications_dir])
        finally:
            await self._detach(mount_point)

    async def _detach(self, mount_point: Path) -> None:
        # The copy's outcome stands whatever happens here.
        try:
            await self._run(HDIUTIL, ["detach", str(mount_point), "-force"])
        except SpawnError:
            self._log(f"Cannot detach {mount_point}; it may stay mounted.", severity="error")
        shutil.rmtree(mount_point, ignore_errors=True)

    async def _run(self, command: str, args: list[str]) -> int:
        try:
            return await self.runner.run(
                command,
                args,
                on_stdout=self._forward_output,
                on_stderr=self._forward_output,
            )
        except SpawnError as e:
            self._log(e.stderr or str(e), severity="error")
            raise

    async def uninstall(self, package: PackageInfo) -> None:
        base = self._find_base(package)
        bundle = bundle_path(base, self.settings.applications_dir)
        if not bundle.is_dir():
            self._log(f"{base.name} is not installed, nothing to remove.")
            return
        logger.info("Removing %s", bundle)
        await asyncio.to_thread(shutil.rmtree, bundle)
        self._log(f"Uninstall {base.name} successfully.")

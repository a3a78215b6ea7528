"""
Tests for the native app manager (dmg bundles).
"""

from pathlib import Path

import pytest

from devbootstrap.core.config.settings import PackageManagerSettings
from devbootstrap.core.models.package import BaseAppInfo, PackageInfo, PackagesData
from devbootstrap.core.services.package_manager.errors import (
    CommandFailedError,
    ConfigurationError,
    PrerequisiteMissingError,
    SpawnError,
    UnsupportedMechanismError,
)
from devbootstrap.core.services.package_manager.managers.app import AppManager

from tests.fakes import FakeRunner, make_bundle


def _manager(packages_data, settings, sink, runner=None):
    return AppManager(
        "app",
        packages_data,
        runner=runner or FakeRunner(),
        log_sink=sink,
        settings=settings,
        platform="darwin",
    )


@pytest.fixture
def image(tmp_path: Path) -> Path:
    path = tmp_path / "VSCode.dmg"
    path.write_bytes(b"dmg")
    return path


class TestAppInstall:
    async def test_already_installed_spawns_nothing(self, packages_data, settings, sink, applications_dir):
        make_bundle(applications_dir, "Visual Studio Code", version="1.90.0")
        runner = FakeRunner()
        result = await _manager(packages_data, settings, sink, runner).install(PackageInfo(name="VSCode"))

        assert result.name == "VSCode"
        assert result.exit_code is None
        assert runner.call_count == 0
        assert sink.texts() == ["VSCode (1.90.0) is already installed."]

    async def test_attach_copy_detach(self, packages_data, settings, sink, applications_dir, image):
        runner = FakeRunner(stdout=["/dev/disk4\n"])
        manager = _manager(packages_data, settings, sink, runner)

        result = await manager.install(PackageInfo(name="VSCode", options={"source": str(image)}))

        assert result.exit_code == 0
        commands = [(cmd, args[0]) for cmd, args in runner.calls]
        assert commands == [("hdiutil", "attach"), ("cp", "-R"), ("hdiutil", "detach")]
        attach_args = runner.calls[0][1]
        assert attach_args[-1] == str(image)
        mount_point = attach_args[attach_args.index("-mountpoint") + 1]
        assert runner.calls[1][1] == ["-R", f"{mount_point}/Visual Studio Code.app", str(applications_dir)]
        assert not Path(mount_point).exists()
        assert "Install VSCode successfully." in sink.texts()

    async def test_attach_failure(self, packages_data, settings, sink, image):
        runner = FakeRunner()
        runner.exit_codes["hdiutil"] = 1
        with pytest.raises(CommandFailedError) as exc_info:
            await _manager(packages_data, settings, sink, runner).install(
                PackageInfo(name="VSCode", options={"source": str(image)})
            )
        assert exc_info.value.exit_code == 1
        assert runner.call_count == 1

    async def test_spawn_error_is_logged(self, packages_data, settings, sink, image):
        runner = FakeRunner(error=SpawnError("hdiutil", "Cannot start hdiutil", stderr="no hdiutil"))
        with pytest.raises(SpawnError):
            await _manager(packages_data, settings, sink, runner).install(
                PackageInfo(name="VSCode", options={"source": str(image)})
            )
        assert sink.events[-1].severity == "error"
        assert sink.events[-1].text == "no hdiutil"

    async def test_copy_failure_returned_by_default(self, packages_data, settings, sink, image):
        runner = FakeRunner()
        runner.exit_codes["cp"] = 1
        result = await _manager(packages_data, settings, sink, runner).install(
            PackageInfo(name="VSCode", options={"source": str(image)})
        )
        assert result.exit_code == 1
        assert not result.ok
        assert runner.calls[-1][1][0] == "detach"

    async def test_copy_failure_raises_when_configured(self, packages_data, applications_dir, sink, image):
        settings = PackageManagerSettings(applications_dir=str(applications_dir), fail_on_nonzero_exit=True)
        runner = FakeRunner()
        runner.exit_codes["cp"] = 1
        with pytest.raises(CommandFailedError):
            await _manager(packages_data, settings, sink, runner).install(
                PackageInfo(name="VSCode", options={"source": str(image)})
            )

    async def test_detach_failure_keeps_copy_result(self, packages_data, settings, sink, image):
        runner = FakeRunner()
        runner.errors["hdiutil detach"] = SpawnError("hdiutil", "hdiutil detach failed", stderr="resource busy")
        result = await _manager(packages_data, settings, sink, runner).install(
            PackageInfo(name="VSCode", options={"source": str(image)})
        )

        assert result.exit_code == 0
        assert runner.calls[-1][1][0] == "detach"
        errors = [e.text for e in sink.events if e.severity == "error"]
        assert "resource busy" in errors
        assert any(text.startswith("Cannot detach") for text in errors)
        assert "Install VSCode successfully." in sink.texts()

    async def test_detach_failure_does_not_mask_copy_error(self, packages_data, settings, sink, image):
        runner = FakeRunner()
        runner.errors["cp"] = SpawnError("cp", "Cannot start cp", stderr="no cp")
        runner.errors["hdiutil detach"] = SpawnError("hdiutil", "hdiutil detach failed")
        with pytest.raises(SpawnError) as exc_info:
            await _manager(packages_data, settings, sink, runner).install(
                PackageInfo(name="VSCode", options={"source": str(image)})
            )
        assert exc_info.value.command == "cp"
        assert [cmd for cmd, _ in runner.calls] == ["hdiutil", "cp", "hdiutil"]

    async def test_missing_source(self, packages_data, settings, sink, tmp_path):
        manager = _manager(packages_data, settings, sink)
        with pytest.raises(PrerequisiteMissingError):
            await manager.install(PackageInfo(name="VSCode"))
        with pytest.raises(PrerequisiteMissingError):
            await manager.install(PackageInfo(name="VSCode", options={"source": str(tmp_path / "x.dmg")}))

    async def test_unknown_app(self, packages_data, settings, sink):
        with pytest.raises(ConfigurationError, match="iTerm info was not found."):
            await _manager(packages_data, settings, sink).install(PackageInfo(name="iTerm"))

    async def test_unsupported_mechanism(self, settings, sink):
        data = PackagesData(bases=[BaseAppInfo(name="Slack", type="pkg", platforms=["darwin"])])
        with pytest.raises(UnsupportedMechanismError):
            await _manager(data, settings, sink).install(PackageInfo(name="Slack"))


class TestAppUninstall:
    async def test_removes_bundle(self, packages_data, settings, sink, applications_dir):
        bundle = make_bundle(applications_dir, "Visual Studio Code")
        await _manager(packages_data, settings, sink).uninstall(PackageInfo(name="VSCode"))
        assert not bundle.exists()
        assert sink.texts() == ["Uninstall VSCode successfully."]

    async def test_not_installed_is_noop(self, packages_data, settings, sink):
        await _manager(packages_data, settings, sink).uninstall(PackageInfo(name="VSCode"))
        assert sink.texts() == ["VSCode is not installed, nothing to remove."]

    async def test_unknown_app(self, packages_data, settings, sink):
        with pytest.raises(ConfigurationError):
            await _manager(packages_data, settings, sink).uninstall(PackageInfo(name="iTerm"))

"""
Shared test fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from devbootstrap.core.config.settings import PackageManagerSettings
from devbootstrap.core.models.package import BaseAppInfo, PackagesData
from devbootstrap.core.services.package_manager.execution.log_sink import RecordingLogSink


@pytest.fixture
def vscode_base() -> BaseAppInfo:
    return BaseAppInfo(
        name="VSCode",
        type="dmg",
        platforms=["darwin"],
        title="Visual Studio Code",
    )


@pytest.fixture
def packages_data(vscode_base: BaseAppInfo) -> PackagesData:
    return PackagesData(bases=[vscode_base])


@pytest.fixture
def applications_dir(tmp_path: Path) -> Path:
    apps = tmp_path / "Applications"
    apps.mkdir()
    return apps


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def settings(applications_dir: Path, bin_dir: Path) -> PackageManagerSettings:
    return PackageManagerSettings(
        applications_dir=str(applications_dir),
        command_bin_dir=str(bin_dir),
    )


@pytest.fixture
def sink() -> RecordingLogSink:
    return RecordingLogSink()

"""
Package manager base: the contract between callers and installers.

Callers hold one ``PackageInfo`` at a time and hand it to a manager.
They never branch on the manager variant; every family implements the
same two coroutines.

To create a new manager:
    1. Subclass PackageManager
    2. Implement name, install, uninstall
    3. Register it in the PackageManagerRegistry
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod

from devbootstrap.core.config.settings import PackageManagerSettings
from devbootstrap.core.models.package import OperationResult, PackageInfo, PackagesData, Severity
from devbootstrap.core.services.package_manager.execution.log_sink import LoggingLogSink, LogSink
from devbootstrap.core.services.package_manager.execution.subprocess_runner import SubprocessRunner


class PackageManager(ABC):
    """Abstract base class for all package manager variants.

    Holds what every variant shares: the log channel, a read-only view
    of the catalog, the runner, the sink, settings and the platform id.
    """

    def __init__(
        self,
        channel: str,
        packages_data: PackagesData,
        *,
        runner: SubprocessRunner | None = None,
        log_sink: LogSink | None = None,
        settings: PackageManagerSettings | None = None,
        platform: str | None = None,
    ):
        self.channel = channel
        self.packages_data = packages_data
        self.runner = runner or SubprocessRunner()
        self.log_sink = log_sink or LoggingLogSink()
        self.settings = settings or PackageManagerSettings()
        self.platform = platform or sys.platform

    @property
    @abstractmethod
    def name(self) -> str:
        """The package family this manager handles (e.g. 'extension')."""

    @abstractmethod
    async def install(self, package: PackageInfo) -> OperationResult:
        """Install one package."""

    @abstractmethod
    async def uninstall(self, package: PackageInfo) -> None:
        """Uninstall one package."""

    def _log(self, text: str, significant: bool = True, severity: Severity = "info") -> None:
        self.log_sink.write(self.channel, text, significant, severity)

    def _forward_output(self, text: str) -> None:
        self.log_sink.write(self.channel, text, False, "log")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} channel={self.channel!r}>"

"""
Package manager errors.

Every failure a manager can raise derives from ``PackageManagerError`` so
callers can catch per package and decide whether to continue.
"""

from __future__ import annotations


class PackageManagerError(Exception):
    """Base class for installation-layer failures."""


class ConfigurationError(PackageManagerError):
    """A required catalog entry or setting is missing or invalid."""


class UnsupportedMechanismError(PackageManagerError):
    """The app's install-mechanism tag has no implementation."""


class UnsupportedExtensionTypeError(PackageManagerError):
    """The package's ``IDEType`` has no registered processor (strict mode)."""


class PrerequisiteMissingError(PackageManagerError):
    """The application the operation depends on is not installed."""


class ShimInstallError(PackageManagerError, OSError):
    """Linking a command shim into a PATH directory failed."""

    def __init__(self, message: str, target: str = "") -> None:
        super().__init__(message)
        self.target = target

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class SpawnError(PackageManagerError):
    """A subprocess could not be started or errored at the OS level."""

    def __init__(self, command: str, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.command = command
        self.stderr = stderr


class HealedCommandFailedError(SpawnError):
    """The command failed to spawn right after it was linked onto PATH."""


class CommandFailedError(PackageManagerError):
    """The command ran but exited non-zero, and the caller asked for that to fail."""

    def __init__(self, command: str, exit_code: int) -> None:
        super().__init__(f"{command} exited with code {exit_code}")
        self.command = command
        self.exit_code = exit_code

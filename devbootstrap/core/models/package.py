"""
Package models: descriptors for installable units and their outcomes.

Everything a package manager reads is immutable once constructed. The
catalog (``PackagesData``) is loaded once by the config layer and shared
by reference between managers.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

Severity = Literal["info", "error", "log", "warn"]


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class PackageInfo(BaseModel):
    """One installable unit as requested by the caller.

    ``options`` is a bag whose recognized keys depend on the manager
    variant. Extensions read ``IDEType``; native apps read ``source``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    options: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("options", mode="after")
    @classmethod
    def _freeze_options(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        # Copied so later edits to the caller's dict are not seen.
        return MappingProxyType(dict(value))

    @field_serializer("options")
    def _dump_options(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)

    @property
    def ide_type(self) -> str | None:
        """The ``IDEType`` option, if any."""
        return self.options.get("IDEType")


class BaseAppInfo(BaseModel):
    """A base application known to the catalog."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str                              # install mechanism tag, e.g. "dmg"
    platforms: list[str] = Field(default_factory=list)
    title: str | None = None               # bundle name on disk (defaults to name)
    version: str | None = None
    description: str = ""

    @property
    def bundle_name(self) -> str:
        return self.title or self.name

    def supports(self, platform: str) -> bool:
        return platform in self.platforms


class PackagesData(BaseModel):
    """Catalog of base applications, read-only for a manager's lifetime."""

    model_config = ConfigDict(frozen=True)

    bases: list[BaseAppInfo] = Field(default_factory=list)

    def find_base(self, name: str, platform: str) -> BaseAppInfo | None:
        """First base named ``name`` that is distributable on ``platform``."""
        return next(
            (b for b in self.bases if b.name == name and b.supports(platform)),
            None,
        )

    def for_platform(self, platform: str) -> list[BaseAppInfo]:
        return [b for b in self.bases if b.supports(platform)]


class InstallCommandPackage(BaseModel):
    """Where an app keeps the CLI shim that can be linked onto PATH."""

    model_config = ConfigDict(frozen=True)

    name: str
    command_relative_path: str


class LocalAppInfo(BaseModel):
    """What is installed on this machine for one base app."""

    name: str
    path: str | None = None
    version_status: Literal["installed", "uninstalled"] = "uninstalled"
    version: str | None = None

    @property
    def installed(self) -> bool:
        return self.version_status == "installed"


class OperationResult(BaseModel):
    """Outcome of an install call.

    ``exit_code`` is whatever the underlying process returned, or
    ``None`` when nothing was spawned (no-op, already installed).
    """

    name: str
    exit_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code in (None, 0)


class LogEvent(BaseModel):
    """One event written to a log sink."""

    channel: str
    text: str
    significant: bool = False
    severity: Severity = "info"
    timestamp: str = Field(default_factory=_now_iso)

"""
Domain models: Pydantic types for the installation layer.

All models are re-exported here for convenient access:

    from devbootstrap.core.models import PackageInfo, PackagesData, OperationResult
"""

from devbootstrap.core.models.package import (
    BaseAppInfo,
    InstallCommandPackage,
    LocalAppInfo,
    LogEvent,
    OperationResult,
    PackageInfo,
    PackagesData,
    Severity,
)

__all__ = [
    "BaseAppInfo",
    "InstallCommandPackage",
    "LocalAppInfo",
    "LogEvent",
    "OperationResult",
    "PackageInfo",
    "PackagesData",
    "Severity",
]

"""L5 Managers: one ``PackageManager`` per package family."""

from devbootstrap.core.services.package_manager.managers.app import AppManager  # noqa: F401
from devbootstrap.core.services.package_manager.managers.base import PackageManager  # noqa: F401
from devbootstrap.core.services.package_manager.managers.ide_extension import (  # noqa: F401
    IDEExtensionManager,
)
from devbootstrap.core.services.package_manager.managers.registry import (  # noqa: F401
    PackageManagerRegistry,
    build_default_registry,
)

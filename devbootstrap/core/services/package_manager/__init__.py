"""
Package manager service: package re-exports.

    from devbootstrap.core.services.package_manager import IDEExtensionManager

Each symbol lives in its single-responsibility module inside the
appropriate layer (detection -> execution -> managers).
"""

# ── Errors ──
from devbootstrap.core.services.package_manager.errors import (  # noqa: F401
    CommandFailedError,
    ConfigurationError,
    HealedCommandFailedError,
    PackageManagerError,
    PrerequisiteMissingError,
    ShimInstallError,
    SpawnError,
    UnsupportedExtensionTypeError,
    UnsupportedMechanismError,
)

# ── L3: Detection ──
from devbootstrap.core.services.package_manager.detection import (  # noqa: F401
    check_command_installed,
    get_local_dmg_info,
    is_command_installed,
)

# ── L4: Execution ──
from devbootstrap.core.services.package_manager.execution import (  # noqa: F401
    FileLogSink,
    LoggingLogSink,
    LogSink,
    RecordingLogSink,
    SubprocessRunner,
    install_command_to_path,
)

# ── L5: Managers ──
from devbootstrap.core.services.package_manager.managers import (  # noqa: F401
    AppManager,
    IDEExtensionManager,
    PackageManager,
    PackageManagerRegistry,
    build_default_registry,
)

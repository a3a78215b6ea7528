"""L3 Detection: read-only probes of the local machine."""

from devbootstrap.core.services.package_manager.detection.command import (  # noqa: F401
    check_command_installed,
    is_command_installed,
)
from devbootstrap.core.services.package_manager.detection.local_app import (  # noqa: F401
    LOCAL_INFO_PROBES,
    get_local_dmg_info,
)

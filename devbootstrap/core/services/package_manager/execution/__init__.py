"""L4 Execution: side effects (processes, links, log sinks)."""

from devbootstrap.core.services.package_manager.execution.command_path import (  # noqa: F401
    install_command_to_path,
)
from devbootstrap.core.services.package_manager.execution.log_sink import (  # noqa: F401
    FileLogSink,
    LoggingLogSink,
    LogSink,
    RecordingLogSink,
)
from devbootstrap.core.services.package_manager.execution.subprocess_runner import (  # noqa: F401
    SubprocessRunner,
)

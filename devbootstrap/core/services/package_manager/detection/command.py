"""
L3 Detection: is a command reachable via PATH?

Read-only probe. Absence is a normal ``False``, never an exception.
"""

from __future__ import annotations

import asyncio
import logging
import shutil

logger = logging.getLogger(__name__)


def is_command_installed(command_name: str, path: str | None = None) -> bool:
    """Whether invoking ``command_name`` from a shell would resolve.

    ``shutil.which`` carries the per-OS search rules (PATHEXT on
    Windows, executable bit on POSIX).

    Args:
        command_name: Bare command name, e.g. ``"code"``.
        path: Optional search path overriding ``$PATH``.
    """
    if not command_name:
        return False
    try:
        return shutil.which(command_name, path=path) is not None
    except (OSError, ValueError) as e:
        logger.debug("Command probe for %r failed: %s", command_name, e)
        return False


async def check_command_installed(command_name: str, path: str | None = None) -> bool:
    """Async form of ``is_command_installed`` that keeps the loop free."""
    return await asyncio.to_thread(is_command_installed, command_name, path)

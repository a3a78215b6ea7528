"""
L4 Execution: link a command shim into a directory already on PATH.

The bin directory is part of the OS configuration (``/usr/local/bin``
by default). It is never created here: a missing directory is an error.
"""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from pathlib import Path

from devbootstrap.core.data.constants import DEFAULT_COMMAND_BIN_DIR
from devbootstrap.core.services.package_manager.errors import ShimInstallError

logger = logging.getLogger(__name__)


def _link_command(source: Path, target: Path) -> None:
    if target.is_symlink() and os.readlink(target) == str(source):
        logger.debug("%s already links to %s", target, source)
        return

    # Build the link next to the target, then swap it in atomically so
    # concurrent installs of the same shim end in the same state.
    tmp = target.with_name(f".{target.name}.{uuid.uuid4().hex[:8]}")
    try:
        os.symlink(source, tmp)
        os.replace(tmp, target)
    except OSError:
        if tmp.is_symlink():
            tmp.unlink()
        raise


async def install_command_to_path(
    source: str | os.PathLike[str],
    command_name: str,
    bin_dir: str = DEFAULT_COMMAND_BIN_DIR,
) -> Path:
    """Make ``command_name`` resolve to ``source`` via ``bin_dir``.

    Idempotent: a second call with the same arguments is a no-op.

    Args:
        source: Absolute path of the executable shim.
        command_name: Name the command is invoked by.
        bin_dir: Directory on PATH receiving the link.

    Returns:
        Path of the link.

    Raises:
        ShimInstallError: Source missing, bin dir missing, or the link
            could not be written (permissions).
    """
    source_path = Path(source)
    bin_path = Path(bin_dir)
    target = bin_path / command_name

    if not source_path.exists():
        raise ShimInstallError(f"Command source not found: {source_path}", str(target))
    if not bin_path.is_dir():
        raise ShimInstallError(f"PATH directory does not exist: {bin_path}", str(target))

    logger.info("Linking %s -> %s", target, source_path)
    try:
        await asyncio.to_thread(_link_command, source_path, target)
    except OSError as e:
        raise ShimInstallError(f"Cannot install {command_name} to {bin_path}: {e}", str(target)) from e
    return target

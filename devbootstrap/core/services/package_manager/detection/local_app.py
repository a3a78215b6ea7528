"""
L3 Detection: what is installed locally for a catalog app.

One probe per install mechanism. Only mounted disk images (``dmg``) are
implemented: the app lives as a bundle under the applications directory.
"""

from __future__ import annotations

import asyncio
import logging
import plistlib
from collections.abc import Awaitable, Callable
from pathlib import Path

from devbootstrap.core.models.package import BaseAppInfo, LocalAppInfo

logger = logging.getLogger(__name__)

LocalInfoProbe = Callable[[BaseAppInfo, str], Awaitable[LocalAppInfo]]


def bundle_path(base: BaseAppInfo, applications_dir: str) -> Path:
    """Where the app bundle of ``base`` lives once installed."""
    return Path(applications_dir) / f"{base.bundle_name}.app"


def _read_bundle_version(bundle: Path) -> str | None:
    plist = bundle / "Contents" / "Info.plist"
    try:
        with plist.open("rb") as fh:
            data = plistlib.load(fh)
    except (OSError, plistlib.InvalidFileException, ValueError) as e:
        logger.debug("No readable Info.plist in %s: %s", bundle, e)
        return None
    version = data.get("CFBundleShortVersionString") or data.get("CFBundleVersion")
    return str(version) if version else None


def _probe_dmg(base: BaseAppInfo, applications_dir: str) -> LocalAppInfo:
    bundle = bundle_path(base, applications_dir)
    if not bundle.is_dir():
        return LocalAppInfo(name=base.name)
    return LocalAppInfo(
        name=base.name,
        path=str(bundle),
        version_status="installed",
        version=_read_bundle_version(bundle),
    )


async def get_local_dmg_info(base: BaseAppInfo, applications_dir: str) -> LocalAppInfo:
    """Probe the installed bundle of a dmg-distributed app."""
    return await asyncio.to_thread(_probe_dmg, base, applications_dir)


# Install mechanism tag -> local probe.
LOCAL_INFO_PROBES: dict[str, LocalInfoProbe] = {
    "dmg": get_local_dmg_info,
}

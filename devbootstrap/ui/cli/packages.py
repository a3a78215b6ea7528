"""
CLI commands for package installation.

Thin wrappers over ``devbootstrap.core.services.package_manager``.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click

_FAMILIES = ("extension", "app")


def _load_catalog(ctx: click.Context):
    """Load packages.yml from --config or by searching upward from CWD."""
    from devbootstrap.core.config.loader import ConfigError, load_catalog

    config_path: Path | None = ctx.obj.get("config_path")
    try:
        return load_catalog(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _build_registry(ctx: click.Context):
    from devbootstrap.core.services.package_manager import (
        FileLogSink,
        LoggingLogSink,
        build_default_registry,
    )

    catalog = _load_catalog(ctx)
    sink: Any = LoggingLogSink()
    if catalog.settings.log_dir:
        sink = FileLogSink(catalog.settings.log_dir, forward_to=sink)
        ctx.call_on_close(sink.close)
    return build_default_registry(catalog.packages, catalog.settings, log_sink=sink)


def _package_options(ide: str | None, source: str | None) -> dict[str, Any]:
    options: dict[str, Any] = {}
    if ide:
        options["IDEType"] = ide
    if source:
        options["source"] = source
    return options


@click.group()
def packages() -> None:
    """Packages: check commands, list the catalog, install, uninstall."""


# ── Detect ──────────────────────────────────────────────────────


@packages.command()
@click.argument("command")
def check(command: str) -> None:
    """Check whether COMMAND is reachable via PATH."""
    from devbootstrap.core.services.package_manager import is_command_installed

    if is_command_installed(command):
        click.secho(f"✅ {command} is available", fg="green")
        return
    click.secho(f"❌ {command} was not found on PATH", fg="red")
    sys.exit(1)


@packages.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--platform", default=None, help="Platform id (default: this machine).")
@click.pass_context
def list_bases(ctx: click.Context, as_json: bool, platform: str | None) -> None:
    """List catalog base apps available on this platform."""
    catalog = _load_catalog(ctx)
    platform = platform or sys.platform
    bases = catalog.packages.for_platform(platform)

    if as_json:
        click.echo(json.dumps([b.model_dump() for b in bases], indent=2))
        return

    if not bases:
        click.secho(f"⚠️  No base apps for platform {platform}", fg="yellow")
        return

    click.secho(f"📦 Base apps ({platform}):", fg="cyan", bold=True)
    for base in bases:
        version = f" {base.version}" if base.version else ""
        click.echo(f"   • {base.name}{version} [{base.type}]")


# ── Act ─────────────────────────────────────────────────────────


@packages.command()
@click.argument("name")
@click.option("--family", "-f", type=click.Choice(_FAMILIES), default="extension", show_default=True)
@click.option("--ide", default="VSCode", show_default=True, help="IDE type for extensions.")
@click.option("--source", default=None, help="Local disk image for app installs.")
@click.pass_context
def install(ctx: click.Context, name: str, family: str, ide: str, source: str | None) -> None:
    """Install package NAME."""
    from devbootstrap.core.models.package import PackageInfo
    from devbootstrap.core.services.package_manager import PackageManagerError

    registry = _build_registry(ctx)
    package = PackageInfo(name=name, options=_package_options(ide if family == "extension" else None, source))
    try:
        result = asyncio.run(registry.install(family, package))
    except PackageManagerError as e:
        click.secho(f"❌ {name}: {e}", fg="red")
        sys.exit(1)

    if result.exit_code is None and family == "extension":
        click.secho(f"⏭️  {result.name} skipped: no handler for IDE type {ide!r}", fg="yellow")
    elif result.exit_code is None:
        click.secho(f"✅ {result.name} already installed", fg="green")
    elif result.ok:
        click.secho(f"✅ {result.name} installed", fg="green")
    else:
        click.secho(f"⚠️  {result.name}: install exited with code {result.exit_code}", fg="yellow")
        sys.exit(1)


@packages.command()
@click.argument("name")
@click.option("--family", "-f", type=click.Choice(_FAMILIES), default="extension", show_default=True)
@click.option("--ide", default="VSCode", show_default=True, help="IDE type for extensions.")
@click.pass_context
def uninstall(ctx: click.Context, name: str, family: str, ide: str) -> None:
    """Uninstall package NAME."""
    from devbootstrap.core.models.package import PackageInfo
    from devbootstrap.core.services.package_manager import PackageManagerError

    registry = _build_registry(ctx)
    package = PackageInfo(name=name, options=_package_options(ide if family == "extension" else None, None))
    try:
        asyncio.run(registry.uninstall(family, package))
    except PackageManagerError as e:
        click.secho(f"❌ {name}: {e}", fg="red")
        sys.exit(1)

    click.secho(f"✅ {name} uninstalled", fg="green")

"""
devbootstrap: CLI entrypoint.

Usage:
    python -m devbootstrap.main --help
    python -m devbootstrap.main packages list
    python -m devbootstrap.main packages install ms-python.python --ide VSCode
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from devbootstrap import __version__
from devbootstrap.core.observability.logging_config import setup_logging
from devbootstrap.ui.cli.packages import packages


@click.group()
@click.version_option(version=__version__, prog_name="devbootstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to packages.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """devbootstrap: provision a development machine."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("DBS_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("DBS_LOG_FILE"),
        log_file_level=os.environ.get("DBS_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
        channel_level="DEBUG" if verbose else None,
    )


cli.add_command(packages)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

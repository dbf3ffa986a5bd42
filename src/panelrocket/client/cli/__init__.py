"""Command-line interface for panelrocket.

This module provides the main CLI entry point and assembles all commands.

Commands:
- deploy: Upload a static build directory to a 1Panel website
- sites: List websites on the panel
"""

from __future__ import annotations

import click

from panelrocket.client.cli.config import (
    build_endpoint_config,
    configure_logging,
)
from panelrocket.client.cli.deploy import deploy
from panelrocket.client.cli.sites import sites


@click.group()
@click.version_option(package_name="panelrocket")
def cli() -> None:
    """panelrocket - Deploy static websites to 1Panel."""


cli.add_command(deploy)
cli.add_command(sites)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    "build_endpoint_config",
    "cli",
    "configure_logging",
    "main",
]

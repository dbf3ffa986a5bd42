"""Website listing command for panelrocket CLI.

Commands:
- sites: List websites on the panel
"""

from __future__ import annotations

import asyncio
import sys

import click

from panelrocket.client.api import PanelClient, RemoteError, Site
from panelrocket.client.cli.config import (
    build_endpoint_config,
    configure_logging,
    endpoint_options,
)
from panelrocket.core.config import ConfigError


@click.command()
@endpoint_options
def sites(
    base_url: str | None,
    api_key: str | None,
    language: str,
    timeout: float,
) -> None:
    """List websites on the 1Panel server."""
    configure_logging()

    try:
        endpoint = build_endpoint_config(base_url, api_key, language, timeout)

        async def main() -> list[Site]:
            async with PanelClient(endpoint) as client:
                return await client.list_sites()

        found = asyncio.run(main())
    except (ConfigError, RemoteError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not found:
        click.echo("No websites found.")
        return

    for site in found:
        click.echo(f"{site.primary_domain}\t{site.site_path or '-'}")

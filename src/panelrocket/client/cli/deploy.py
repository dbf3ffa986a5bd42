"""Deploy command for panelrocket CLI.

Commands:
- deploy: Upload a static build directory to a website
"""

from __future__ import annotations

import asyncio
import posixpath
import sys
from pathlib import Path

import click

from panelrocket.client.api import PanelClient, RemoteError, Site
from panelrocket.client.cli.config import (
    build_endpoint_config,
    configure_logging,
    endpoint_options,
)
from panelrocket.client.deploy import Deployer, UploadSummary
from panelrocket.core.config import DEFAULT_IGNORE_PATTERNS, ConfigError, DeployConfig

# Site creation is asynchronous on some panels; poll briefly for the new record
CREATE_LOOKUP_ATTEMPTS = 3
CREATE_LOOKUP_INTERVAL = 1.0


async def choose_domain(client: PanelClient) -> str:
    """Ask the user to pick one of the existing websites."""
    sites = await client.list_sites()
    if not sites:
        raise ConfigError("No websites found")

    click.echo("Websites:")
    for index, site in enumerate(sites, start=1):
        click.echo(f"  {index}. {site.primary_domain}")
    choice = click.prompt(
        "Select a website",
        type=click.IntRange(1, len(sites)),
        default=1,
    )
    return sites[choice - 1].primary_domain


async def ensure_site(client: PanelClient, domain: str, yes: bool) -> Site:
    """Return the website for a domain, creating it if confirmed."""
    site = await client.get_site_by_domain(domain)
    if site is not None:
        return site

    if not yes and not click.confirm("Website not found, create it?", default=False):
        raise ConfigError(f"Website not found: {domain}")

    return await client.create_site(
        domain,
        lookup_attempts=CREATE_LOOKUP_ATTEMPTS,
        lookup_interval=CREATE_LOOKUP_INTERVAL,
    )


async def run_deploy(
    client: PanelClient,
    path: Path,
    domain: str | None,
    yes: bool,
    deploy_config: DeployConfig,
) -> tuple[str, UploadSummary]:
    """Resolve the target website and upload the build directory."""
    if not domain:
        domain = await choose_domain(client)
    await ensure_site(client, domain, yes)
    summary = await Deployer(client, deploy_config).deploy(domain, path)
    return domain, summary


@click.command()
@endpoint_options
@click.option(
    "--path",
    "-p",
    "build_path",
    required=True,
    type=click.Path(path_type=Path),
    help="Path to the static website build directory.",
)
@click.option("--domain", "-d", default=None, help="Domain name of the website.")
@click.option("--yes", "-y", is_flag=True, help="Skip all prompts and use default values.")
@click.option(
    "--retries",
    type=click.IntRange(min=1),
    default=3,
    show_default=True,
    help="Upload attempts per file.",
)
@click.option(
    "--retry-delay",
    type=click.FloatRange(min=0),
    default=1.0,
    show_default=True,
    help="Seconds to wait between upload attempts.",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of files uploaded at the same time.",
)
@click.option(
    "--ignore",
    "extra_ignores",
    multiple=True,
    help="Additional ignore pattern (repeatable).",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug output.")
def deploy(
    base_url: str | None,
    api_key: str | None,
    language: str,
    timeout: float,
    build_path: Path,
    domain: str | None,
    yes: bool,
    retries: int,
    retry_delay: float,
    concurrency: int,
    extra_ignores: tuple[str, ...],
    verbose: bool,
) -> None:
    """Deploy a static website build directory to 1Panel.

    Without --domain, you are asked to pick one of the existing websites.
    A missing website is created after confirmation (or directly with --yes).
    """
    configure_logging(verbose)

    if not build_path.exists():
        click.echo(f"Error: Build directory {build_path} does not exist", err=True)
        sys.exit(1)

    try:
        endpoint = build_endpoint_config(base_url, api_key, language, timeout)
        deploy_config = DeployConfig(
            ignore_patterns=DEFAULT_IGNORE_PATTERNS + tuple(extra_ignores),
            max_attempts=retries,
            retry_delay=retry_delay,
            concurrency=concurrency,
        )

        async def main() -> tuple[str, UploadSummary]:
            async with PanelClient(endpoint) as client:
                return await run_deploy(client, build_path, domain, yes, deploy_config)

        deployed_domain, summary = asyncio.run(main())
    except (ConfigError, RemoteError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("")
    click.echo("Deployed to 1Panel successfully")
    click.echo(f"Website: https://{deployed_domain}")
    click.echo(f"Files uploaded: {summary.success_count}")
    if summary.fail_count:
        click.echo(f"Files failed: {summary.fail_count}", err=True)
        for outcome in summary.failures:
            remote_file = posixpath.join(outcome.target_path, outcome.file)
            click.echo(f"  {remote_file}: {outcome.error}", err=True)

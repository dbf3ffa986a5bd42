"""Configuration utilities for panelrocket CLI.

This module provides shared helpers used across CLI commands.
"""

from __future__ import annotations

import logging
import sys

import click

from panelrocket.core.config import ConfigError, EndpointConfig

BASE_URL_ENV = "ONEPANEL_BASE_URL"
API_KEY_ENV = "ONEPANEL_API_KEY"
LANGUAGE_ENV = "ONEPANEL_LANGUAGE"


def endpoint_options(func):  # type: ignore[no-untyped-def]
    """Add the connection options shared by every command."""
    options = [
        click.option(
            "--base-url",
            "-e",
            envvar=BASE_URL_ENV,
            help=f"Base URL of the 1Panel API (env: {BASE_URL_ENV}).",
        ),
        click.option(
            "--api-key",
            "-a",
            envvar=API_KEY_ENV,
            help=f"API key of the 1Panel API (env: {API_KEY_ENV}).",
        ),
        click.option(
            "--language",
            envvar=LANGUAGE_ENV,
            default="en",
            show_default=True,
            help="Language code sent as Accept-Language.",
        ),
        click.option(
            "--timeout",
            type=float,
            default=30.0,
            show_default=True,
            help="Request timeout in seconds.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_endpoint_config(
    base_url: str | None,
    api_key: str | None,
    language: str | None = None,
    timeout: float = 30.0,
) -> EndpointConfig:
    """Build the endpoint configuration from resolved CLI options.

    Raises:
        ConfigError: If the base URL or API key is missing.
    """
    if not base_url or not api_key:
        raise ConfigError("Base URL and API key are required")
    return EndpointConfig(
        base_url=base_url,
        api_key=api_key,
        language_code=language or "en",
        timeout=timeout,
    )


def configure_logging(verbose: bool = False) -> None:
    """Send panelrocket log records to stderr as plain messages."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    panelrocket_logger = logging.getLogger("panelrocket")
    for existing in panelrocket_logger.handlers[:]:
        panelrocket_logger.removeHandler(existing)
    panelrocket_logger.addHandler(handler)
    panelrocket_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    panelrocket_logger.propagate = False

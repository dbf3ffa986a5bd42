"""Deployment of a local build directory to a website.

This module provides:
- Deployer: Resolves the site, walks the local tree and summarizes results
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import TYPE_CHECKING

from panelrocket.client.deploy.ignore import IgnoreFilter
from panelrocket.client.deploy.types import UploadSummary
from panelrocket.client.deploy.upload import FileUploader
from panelrocket.client.deploy.walker import TreeWalker
from panelrocket.core.config import ConfigError, DeployConfig

if TYPE_CHECKING:
    from panelrocket.client.api import PanelClient

logger = logging.getLogger(__name__)


class Deployer:
    """Uploads static files to an existing website."""

    def __init__(
        self,
        client: PanelClient,
        config: DeployConfig | None = None,
        walker: TreeWalker | None = None,
    ) -> None:
        """Initialize the deployer.

        Args:
            client: HTTP client for server communication.
            config: Deployment settings (defaults if None).
            walker: Tree walker to use (built from config if None).
        """
        self._client = client
        self._config = config or DeployConfig()
        self._walker = walker or TreeWalker(
            FileUploader(
                client,
                max_attempts=self._config.max_attempts,
                retry_delay=self._config.retry_delay,
            ),
            ignore=IgnoreFilter(self._config.ignore_patterns),
            concurrency=self._config.concurrency,
            max_depth=self._config.max_depth,
        )

    async def deploy(self, domain: str, source_dir: Path | str) -> UploadSummary:
        """Upload a local directory to a website's web root.

        The site must already exist. Files land under the site's
        filesystem root joined with the index directory.

        Args:
            domain: Primary domain of the website.
            source_dir: Local build directory.

        Returns:
            Summary of the upload.

        Raises:
            ConfigError: If the site, its path or the local directory is missing.
            RemoteError: If the site lookup fails.
        """
        site = await self._client.get_site_by_domain(domain)
        if site is None:
            raise ConfigError(f"Website not found: {domain}")
        if not site.site_path:
            raise ConfigError(f"Cannot get website physical path for {domain}")
        logger.info(f"Website root path: {site.site_path}")

        source = Path(source_dir)
        if not source.exists():
            raise ConfigError(f"Source directory does not exist: {source}")
        if not source.is_dir():
            raise ConfigError(f"Source path is not a directory: {source}")

        target_path = posixpath.join(site.site_path, self._config.index_dir)
        outcomes = await self._walker.walk(source, target_path, base_path=source)

        summary = UploadSummary.from_outcomes(outcomes)
        logger.info(
            f"Upload completed: {summary.total_files} files, "
            f"{summary.success_count} success, {summary.fail_count} failed"
        )
        return summary

"""Shared configuration classes for panelrocket.

This module defines the configuration objects passed explicitly into the
API client, the tree walker and the deployer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ConfigError(Exception):
    """Required configuration is missing or invalid."""


DEFAULT_LANGUAGE = "en"

# Remote subdirectory of a static site that is served as the web root
DEFAULT_INDEX_DIR = "index"

# Dependency, VCS and editor folders, plus environment files
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "node_modules/",
    ".git/",
    ".vscode/",
    ".env",
    ".env.local",
)


@dataclass(frozen=True)
class EndpointConfig:
    """Configuration for connecting to a 1Panel server.

    Attributes:
        base_url: Base URL of the panel (e.g., "https://panel.example.com:8090").
        api_key: API key configured in the panel settings.
        language_code: Value sent as Accept-Language (default "en").
        timeout: Request timeout in seconds.
        verify_ssl: Whether to verify SSL certificates (default True).
    """

    base_url: str
    api_key: str
    language_code: str = DEFAULT_LANGUAGE
    timeout: float = 30.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        """Normalize base URL."""
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def api_url(self) -> str:
        """Get the versioned API root."""
        return f"{self.base_url}/api/v1"


@dataclass(frozen=True)
class SiteDefaults:
    """Fixed values sent when creating a static website."""

    type: str = "static"
    app_type: str = "installed"
    group_id: int = 2
    proxy_type: str = "tcp"
    port: int = 9000
    proxy_protocol: str = "http://"
    runtime_type: str = "php"

    def to_request(self, domain: str) -> dict[str, Any]:
        """Build the POST /websites body for a domain."""
        return {
            "primaryDomain": domain,
            "type": self.type,
            "alias": domain,
            "remark": "",
            "appType": self.app_type,
            "webSiteGroupId": self.group_id,
            "otherDomains": "",
            "proxy": "",
            "appinstall": {
                "appId": 0,
                "name": "",
                "appDetailId": 0,
                "params": {},
                "version": "",
                "appkey": "",
                "advanced": False,
                "cpuQuota": 0,
                "memoryLimit": 0,
                "memoryUnit": "MB",
                "containerName": "",
                "allowPort": False,
            },
            "IPV6": False,
            "enableFtp": False,
            "ftpUser": "",
            "ftpPassword": "",
            "proxyType": self.proxy_type,
            "port": self.port,
            "proxyProtocol": self.proxy_protocol,
            "proxyAddress": "",
            "runtimeType": self.runtime_type,
        }


@dataclass(frozen=True)
class DeployConfig:
    """Settings for a deployment run.

    Attributes:
        ignore_patterns: Literal substrings/basenames excluded from upload.
        max_attempts: Upload attempts per file (including the first).
        retry_delay: Fixed delay between attempts, in seconds.
        concurrency: Number of uploads allowed in flight at once.
        max_depth: Deepest directory level walked (None for no limit).
        index_dir: Subdirectory of the site root that receives the files.
    """

    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    max_attempts: int = 3
    retry_delay: float = 1.0
    concurrency: int = 1
    max_depth: int | None = None
    index_dir: str = DEFAULT_INDEX_DIR

    def __post_init__(self) -> None:
        """Validate numeric settings."""
        if self.max_attempts < 1:
            raise ConfigError("max_attempts must be at least 1")
        if self.retry_delay < 0:
            raise ConfigError("retry_delay must not be negative")
        if self.concurrency < 1:
            raise ConfigError("concurrency must be at least 1")
        if self.max_depth is not None and self.max_depth < 0:
            raise ConfigError("max_depth must not be negative")

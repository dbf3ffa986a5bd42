"""HTTP client for the 1Panel server API.

This module provides:
- PanelClient: async HTTP client with per-request signing
- Website operations (list, lookup by domain, create)
- Single-file upload to a remote directory
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from panelrocket.core.config import EndpointConfig, SiteDefaults
from panelrocket.core.signing import RequestSigner

logger = logging.getLogger(__name__)

# Large enough that the site list always fits in one page
SEARCH_PAGE_SIZE = 999999

UPLOAD_SUCCESS = {"message": "Upload success"}


class RemoteError(Exception):
    """Transport failure or non-success response from the panel."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(RemoteError):
    """The panel rejected the API key or the request signature."""


class SiteNotFoundAfterCreate(RemoteError):
    """Website creation succeeded but the site could not be found afterwards."""


class UploadError(RemoteError):
    """Failed to upload a file."""


@dataclass
class Site:
    """Website record from the panel."""

    primary_domain: str
    site_path: str
    id: int | None = None
    group_id: int | None = None
    alias: str = ""
    type: str = ""
    status: str = ""
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Site:
        """Create from API response dictionary."""
        return cls(
            primary_domain=data.get("primaryDomain", ""),
            site_path=data.get("sitePath") or "",
            id=data.get("id"),
            group_id=data.get("webSiteGroupId"),
            alias=data.get("alias") or "",
            type=data.get("type") or "",
            status=data.get("status") or "",
            raw=dict(data),
        )


class PanelClient:
    """Async HTTP client for the 1Panel API."""

    def __init__(
        self,
        config: EndpointConfig,
        signer: RequestSigner | None = None,
        site_defaults: SiteDefaults | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the panel client.

        Args:
            config: Endpoint configuration.
            signer: Request signer (default: built from the config).
            site_defaults: Values used when creating websites.
            transport: Optional httpx transport override.
        """
        self._config = config
        self._signer = signer or RequestSigner(config.api_key, config.language_code)
        self._site_defaults = site_defaults or SiteDefaults()
        self._client = httpx.AsyncClient(
            base_url=config.api_url,
            timeout=config.timeout,
            verify=config.verify_ssl,
            transport=transport,
            event_hooks={"request": [self._signer.sign]},
        )

    @property
    def config(self) -> EndpointConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> PanelClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Context manager exit."""
        await self.aclose()

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Check status and response envelope, returning the decoded body.

        The panel wraps every answer as {"code": ..., "message": ..., "data": ...}
        and may report failures with HTTP 200 and a non-200 code.
        """
        body: dict[str, Any] = {}
        try:
            decoded = response.json()
        except ValueError:
            decoded = None
        if isinstance(decoded, dict):
            body = decoded

        message = body.get("message") or response.reason_phrase or "Unknown error"
        if response.status_code == 401:
            raise AuthenticationError(f"Authentication failed: {message}", 401)
        if response.status_code >= 400:
            raise RemoteError(message, response.status_code)

        code = body.get("code")
        if code is not None and code != 200:
            raise RemoteError(message, code)
        return body

    async def _post(self, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._client.post(url, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteError(f"Request to {url} failed: {e}") from e
        return self._handle_response(response)

    # === Website operations ===

    async def list_sites(self) -> list[Site]:
        """List all websites, ordered by creation time.

        Returns:
            Websites in server order.

        Raises:
            RemoteError: If the request fails.
        """
        try:
            body = await self._post(
                "/websites/search",
                json={
                    "name": "",
                    "page": 1,
                    "pageSize": SEARCH_PAGE_SIZE,
                    "orderBy": "created_at",
                    "order": "null",
                    "websiteGroupId": 0,
                },
            )
        except RemoteError as e:
            raise type(e)(f"Get website list failed: {e}", e.status_code) from e

        items = (body.get("data") or {}).get("items") or []
        return [Site.from_dict(item) for item in items]

    async def get_site_by_domain(self, domain: str) -> Site | None:
        """Find a website by its primary domain.

        Args:
            domain: Exact (case-sensitive) primary domain.

        Returns:
            The first matching site, or None if there is none.
        """
        for site in await self.list_sites():
            if site.primary_domain == domain:
                return site
        return None

    async def create_site(
        self,
        domain: str,
        lookup_attempts: int = 1,
        lookup_interval: float = 1.0,
    ) -> Site:
        """Create a static website and return its full record.

        The creation endpoint does not return the record, so the site is
        looked up afterwards, polling up to lookup_attempts times.

        Args:
            domain: Primary domain for the website.
            lookup_attempts: Number of lookups before giving up.
            lookup_interval: Seconds between lookups.

        Returns:
            The created site.

        Raises:
            RemoteError: If creation or lookup fails.
            SiteNotFoundAfterCreate: If the site never shows up in the list.
        """
        logger.info(f"Creating website {domain}")
        try:
            await self._post("/websites", json=self._site_defaults.to_request(domain))
        except RemoteError as e:
            raise type(e)(f"Create website failed: {e}", e.status_code) from e

        for attempt in range(1, lookup_attempts + 1):
            site = await self.get_site_by_domain(domain)
            if site is not None:
                return site
            if attempt < lookup_attempts:
                logger.debug(
                    f"Website {domain} not listed yet "
                    f"({attempt}/{lookup_attempts}), retrying in {lookup_interval}s"
                )
                await asyncio.sleep(lookup_interval)

        raise SiteNotFoundAfterCreate(f"Website {domain} not found after creation")

    # === File operations ===

    async def upload_file(self, local_path: Path, remote_dir: str) -> Any:
        """Upload one file into a remote directory, overwriting it.

        Args:
            local_path: Path to the local file.
            remote_dir: Target directory on the server.

        Returns:
            The server's result payload, or a generic success marker.

        Raises:
            UploadError: If the upload fails for any reason.
        """
        try:
            with open(local_path, "rb") as f:
                body = await self._post(
                    "/files/upload",
                    files={"file": (local_path.name, f)},
                    data={"path": remote_dir, "overwrite": "True"},
                )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Anything failing for this one file (read, encoding, transport)
            status_code = e.status_code if isinstance(e, RemoteError) else None
            raise UploadError(f"Upload file failed: {local_path} - {e}", status_code) from e

        return body.get("data") or dict(UPLOAD_SUCCESS)

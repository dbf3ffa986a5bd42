"""Client module - 1Panel API client, deployment and CLI."""

from panelrocket.client.api import (
    AuthenticationError,
    PanelClient,
    RemoteError,
    Site,
    SiteNotFoundAfterCreate,
    UploadError,
)

__all__ = [
    "AuthenticationError",
    "PanelClient",
    "RemoteError",
    "Site",
    "SiteNotFoundAfterCreate",
    "UploadError",
]

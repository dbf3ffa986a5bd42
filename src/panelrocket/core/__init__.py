"""Core module - Shared configuration and request signing."""

from panelrocket.core.config import (
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_INDEX_DIR,
    DEFAULT_LANGUAGE,
    ConfigError,
    DeployConfig,
    EndpointConfig,
    SiteDefaults,
)
from panelrocket.core.signing import (
    LANGUAGE_HEADER,
    TIMESTAMP_HEADER,
    TOKEN_HEADER,
    RequestSigner,
    compute_token,
)

__all__ = [
    # Config
    "DEFAULT_IGNORE_PATTERNS",
    "DEFAULT_INDEX_DIR",
    "DEFAULT_LANGUAGE",
    "ConfigError",
    "DeployConfig",
    "EndpointConfig",
    "SiteDefaults",
    # Signing
    "LANGUAGE_HEADER",
    "TIMESTAMP_HEADER",
    "TOKEN_HEADER",
    "RequestSigner",
    "compute_token",
]

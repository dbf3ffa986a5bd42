"""Request signing for the 1Panel API.

Every request carries a token derived from the API key and the current
timestamp in whole seconds:

    token = md5("1panel" + api_key + timestamp).hexdigest()

The pair is recomputed for each request so the server can reject stale ones.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Callable

import httpx

from panelrocket.core.config import DEFAULT_LANGUAGE

TOKEN_HEADER = "1Panel-Token"
TIMESTAMP_HEADER = "1Panel-Timestamp"
LANGUAGE_HEADER = "Accept-Language"


def compute_token(api_key: str, timestamp: str) -> str:
    """Compute the authentication token for a timestamp.

    Args:
        api_key: Panel API key.
        timestamp: Seconds since epoch, as decimal text.

    Returns:
        Lower-case hex MD5 digest.
    """
    content = f"1panel{api_key}{timestamp}"
    return hashlib.md5(content.encode("utf-8")).hexdigest()


class RequestSigner:
    """Attaches authentication headers to outbound requests."""

    def __init__(
        self,
        api_key: str,
        language_code: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._api_key = api_key
        self._language_code = language_code or DEFAULT_LANGUAGE
        self._clock = clock

    def headers(self) -> dict[str, str]:
        """Build a fresh set of signed headers."""
        timestamp = str(int(self._clock()))
        return {
            TOKEN_HEADER: compute_token(self._api_key, timestamp),
            TIMESTAMP_HEADER: timestamp,
            LANGUAGE_HEADER: self._language_code,
        }

    async def sign(self, request: httpx.Request) -> None:
        """httpx request hook: sign the request right before it is sent."""
        request.headers.update(self.headers())

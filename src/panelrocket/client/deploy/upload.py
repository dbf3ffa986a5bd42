"""File upload with bounded retry.

This module provides:
- FileUploader: Uploads one file, retrying with a fixed delay
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from panelrocket.client.deploy.retry import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    SleepFunc,
    retry_with_fixed_delay,
)

if TYPE_CHECKING:
    from panelrocket.client.api import PanelClient

logger = logging.getLogger(__name__)


class FileUploader:
    """Uploads single files through a PanelClient.

    Uploads always overwrite the remote file, so repeating one after a
    partial failure is safe.
    """

    def __init__(
        self,
        client: PanelClient,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the uploader.

        Args:
            client: HTTP client for server communication.
            max_attempts: Attempts per file, including the first.
            retry_delay: Seconds to wait between attempts.
            sleep: Awaitable sleep function used between attempts.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._sleep = sleep

    async def upload(self, local_path: Path, remote_dir: str) -> Any:
        """Upload a file once."""
        return await self._client.upload_file(local_path, remote_dir)

    async def upload_with_retry(self, local_path: Path, remote_dir: str) -> Any:
        """Upload a file, retrying on any failure.

        Args:
            local_path: Path to the local file.
            remote_dir: Target directory on the server.

        Returns:
            The server's result payload.

        Raises:
            UploadError: The last failure, unwrapped, once attempts run out.
        """

        async def do_upload() -> Any:
            return await self.upload(local_path, remote_dir)

        return await retry_with_fixed_delay(
            do_upload,
            max_attempts=self._max_attempts,
            delay=self._retry_delay,
            description=f"Upload of {local_path}",
            sleep=self._sleep,
        )

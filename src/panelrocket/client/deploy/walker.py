"""Directory traversal and per-file upload.

This module provides:
- TreeWalker: Walks a local tree, uploads every non-ignored file and
  collects one outcome per file
- remote_dir_for: Maps a local relative directory to its remote target
"""

from __future__ import annotations

import asyncio
import logging
import posixpath
from collections.abc import Iterator
from pathlib import Path, PurePath

from panelrocket.client.api import UploadError
from panelrocket.client.deploy.ignore import IgnoreFilter
from panelrocket.client.deploy.types import UploadOutcome, UploadTask
from panelrocket.client.deploy.upload import FileUploader

logger = logging.getLogger(__name__)


def remote_dir_for(remote_root: str, relative_dir: PurePath) -> str:
    """Compute the remote directory for files in a local subdirectory.

    Files directly under the deployment root go to remote_root with a
    trailing "/", nested files to remote_root joined with their directory.
    Separators are always forward slashes.

    Args:
        remote_root: Remote root directory.
        relative_dir: Directory relative to the deployment root.

    Returns:
        Remote target directory.
    """
    root = remote_root if remote_root.endswith("/") else f"{remote_root}/"
    relative = relative_dir.as_posix().replace("\\", "/")
    if relative in ("", "."):
        return root
    return posixpath.join(root, relative)


class TreeWalker:
    """Uploads a directory tree file by file.

    A file that still fails after all retries is recorded as a failed
    outcome; the rest of the tree is uploaded regardless.
    """

    def __init__(
        self,
        uploader: FileUploader,
        ignore: IgnoreFilter | None = None,
        concurrency: int = 1,
        max_depth: int | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            uploader: Uploader used for every file.
            ignore: Ignore filter (default patterns if None).
            concurrency: Maximum uploads in flight (1 = strictly sequential).
            max_depth: Deepest directory level descended into (None = unlimited).
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._uploader = uploader
        self._ignore = ignore or IgnoreFilter()
        self._concurrency = concurrency
        self._max_depth = max_depth

    def _entries(self, directory: Path) -> Iterator[Path]:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
        logger.debug(f"Scanning directory: {directory}, {len(entries)} files/directories")
        return iter(entries)

    def discover(
        self,
        source_dir: Path,
        remote_root: str,
        base_path: Path | None = None,
    ) -> list[UploadTask]:
        """Find every file to upload, depth-first in name order.

        Uses an explicit stack, so tree depth is not limited by recursion.
        Entries that are neither directories nor regular files (dangling
        symlinks, sockets) become tasks with a problem set, reported as
        failed by walk().

        Args:
            source_dir: Local directory to walk.
            remote_root: Remote directory matching base_path.
            base_path: Base for relative path calculation (default: source_dir).

        Returns:
            Upload tasks in traversal order.
        """
        base = base_path or source_dir
        tasks: list[UploadTask] = []
        stack: list[tuple[Iterator[Path], int]] = [(self._entries(source_dir), 0)]

        while stack:
            entries, depth = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue

            relative = entry.relative_to(base)
            is_dir = entry.is_dir()
            if self._ignore.should_ignore(relative, is_dir=is_dir):
                logger.debug(f"Ignoring: {relative.as_posix()}")
                continue

            if is_dir:
                if entry.is_symlink():
                    logger.debug(f"Skipping symlinked directory: {relative.as_posix()}")
                    continue
                if self._max_depth is not None and depth + 1 > self._max_depth:
                    logger.warning(
                        f"Skipping {relative.as_posix()}: deeper than {self._max_depth} levels"
                    )
                    continue
                stack.append((self._entries(entry), depth + 1))
            elif entry.is_file():
                tasks.append(UploadTask(entry, remote_dir_for(remote_root, relative.parent)))
            else:
                problem = "dangling symlink" if entry.is_symlink() else "not a regular file"
                logger.warning(f"Cannot upload {relative.as_posix()}: {problem}")
                tasks.append(
                    UploadTask(entry, remote_dir_for(remote_root, relative.parent), problem)
                )

        return tasks

    async def _upload(self, task: UploadTask) -> UploadOutcome:
        if task.problem is not None:
            return UploadOutcome.failed(task, f"{task.local_path}: {task.problem}")

        logger.info(f"Upload file: {task.local_path.name} -> {task.target_path}")
        try:
            result = await self._uploader.upload_with_retry(task.local_path, task.target_path)
        except UploadError as e:
            logger.error(f"Upload file {task.file} failed after retries: {e}")
            return UploadOutcome.failed(task, e)
        return UploadOutcome.succeeded(task, result)

    async def walk(
        self,
        source_dir: Path,
        remote_root: str,
        base_path: Path | None = None,
    ) -> list[UploadOutcome]:
        """Upload a directory tree.

        Args:
            source_dir: Local directory to upload.
            remote_root: Remote directory receiving source_dir's contents.
            base_path: Base for relative path calculation (default: source_dir).

        Returns:
            One outcome per non-ignored file, in traversal order.
        """
        tasks = self.discover(source_dir, remote_root, base_path)
        logger.info(f"Uploading {len(tasks)} files from {source_dir}")

        if self._concurrency == 1:
            return [await self._upload(task) for task in tasks]

        semaphore = asyncio.Semaphore(self._concurrency)

        async def bounded(task: UploadTask) -> UploadOutcome:
            async with semaphore:
                return await self._upload(task)

        # gather keeps results in task order
        return list(await asyncio.gather(*(bounded(task) for task in tasks)))

"""Ignore patterns for deployment.

This module provides:
- IgnoreFilter: Literal substring/basename matching for local paths
- DEFAULT_IGNORE_PATTERNS: Folders and files never deployed
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable
from pathlib import PurePath

from panelrocket.core.config import DEFAULT_IGNORE_PATTERNS


class IgnoreFilter:
    """Decides whether a local path is excluded from upload.

    Patterns are literal strings, not globs. A path is ignored when it
    contains any pattern, or when its final component equals one.
    """

    def __init__(self, patterns: Iterable[str] | None = None) -> None:
        """Initialize with patterns.

        Args:
            patterns: Patterns to use instead of DEFAULT_IGNORE_PATTERNS.
        """
        self._patterns = tuple(DEFAULT_IGNORE_PATTERNS if patterns is None else patterns)

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def should_ignore(self, path: str | PurePath, is_dir: bool = False) -> bool:
        """Check if a path should be ignored.

        Args:
            path: Path to check, usually relative to the deployment root.
            is_dir: Whether the path is a directory. Directories are matched
                with a trailing "/" so "node_modules/" matches the folder.

        Returns:
            True if the path should be ignored.
        """
        path_str = str(path).replace("\\", "/")
        if is_dir and not path_str.endswith("/"):
            path_str += "/"
        basename = posixpath.basename(path_str.rstrip("/"))

        return any(
            pattern in path_str or basename == pattern for pattern in self._patterns
        )

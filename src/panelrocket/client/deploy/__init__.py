"""Deployment of static files to a 1Panel website.

Architecture:
    Deployer → TreeWalker → FileUploader → PanelClient

Components:
- **Deployer**: Resolves the site and its web root, summarizes results
- **TreeWalker**: Walks the local tree, applies IgnoreFilter, uploads each file
- **FileUploader**: Single-file upload with fixed-delay retry
- **IgnoreFilter**: Literal substring/basename exclusion
"""

from panelrocket.client.deploy.ignore import DEFAULT_IGNORE_PATTERNS, IgnoreFilter
from panelrocket.client.deploy.orchestrator import Deployer
from panelrocket.client.deploy.retry import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    retry_with_fixed_delay,
)
from panelrocket.client.deploy.types import UploadOutcome, UploadSummary, UploadTask
from panelrocket.client.deploy.upload import FileUploader
from panelrocket.client.deploy.walker import TreeWalker, remote_dir_for

__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_RETRY_DELAY",
    "Deployer",
    "FileUploader",
    "IgnoreFilter",
    "TreeWalker",
    "UploadOutcome",
    "UploadSummary",
    "UploadTask",
    "remote_dir_for",
    "retry_with_fixed_delay",
]

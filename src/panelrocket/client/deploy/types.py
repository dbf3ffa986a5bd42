"""Shared types and dataclasses for deployment.

This module provides:
- UploadTask: A discovered local file and its remote target directory
- UploadOutcome: Result of uploading one file
- UploadSummary: Aggregate over all outcomes of a deployment
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class UploadTask:
    """A file found by the tree walker.

    A task with a problem set is reported as failed without being uploaded.
    """

    local_path: Path
    target_path: str
    problem: str | None = None

    @property
    def file(self) -> str:
        return self.local_path.name


@dataclass
class UploadOutcome:
    """Result of a single file upload.

    Attributes:
        file: File name (basename).
        target_path: Remote directory the file was sent to.
        success: Whether the upload eventually succeeded.
        result: Server payload on success.
        error: Error message on failure.
        local_path: Local file that was uploaded.
    """

    file: str
    target_path: str
    success: bool
    result: Any = None
    error: str | None = None
    local_path: Path | None = None

    @classmethod
    def succeeded(cls, task: UploadTask, result: Any) -> UploadOutcome:
        return cls(
            file=task.file,
            target_path=task.target_path,
            success=True,
            result=result,
            local_path=task.local_path,
        )

    @classmethod
    def failed(cls, task: UploadTask, error: Exception | str) -> UploadOutcome:
        return cls(
            file=task.file,
            target_path=task.target_path,
            success=False,
            error=str(error),
            local_path=task.local_path,
        )


@dataclass(frozen=True)
class UploadSummary:
    """Totals for one deployment run."""

    total_files: int
    success_count: int
    fail_count: int
    details: tuple[UploadOutcome, ...]

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[UploadOutcome]) -> UploadSummary:
        """Summarize a flat list of outcomes."""
        details = tuple(outcomes)
        success_count = sum(1 for o in details if o.success)
        return cls(
            total_files=len(details),
            success_count=success_count,
            fail_count=len(details) - success_count,
            details=details,
        )

    @property
    def failures(self) -> list[UploadOutcome]:
        """Outcomes of files that could not be uploaded."""
        return [o for o in self.details if not o.success]

    @property
    def ok(self) -> bool:
        """True when every file was uploaded."""
        return self.fail_count == 0

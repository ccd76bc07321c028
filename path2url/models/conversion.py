from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class FileStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class FileStage(str, Enum):
    """Per-file pipeline states.

    A failed file records the last step it completed and a successful one ends
    at SUCCEEDED. BACKED_UP and WRITTEN name intermediate states only and are
    never stored on a FileResult.
    """

    UNPROCESSED = "unprocessed"
    READ = "read"
    BACKED_UP = "backed_up"
    REWRITTEN = "rewritten"
    WRITTEN = "written"
    SUCCEEDED = "succeeded"


class BackupResult(BaseModel):
    ok: bool
    backup_path: Optional[Path] = None
    error: Optional[str] = None


class FileResult(BaseModel):
    path: Path
    status: FileStatus
    stage: FileStage
    reason: Optional[str] = None
    backup_path: Optional[Path] = None
    replacements: int = 0

    @classmethod
    def succeeded(
        cls,
        path: Path,
        backup_path: Optional[Path] = None,
        replacements: int = 0,
    ) -> "FileResult":
        return cls(
            path=path,
            status=FileStatus.SUCCESS,
            stage=FileStage.SUCCEEDED,
            backup_path=backup_path,
            replacements=replacements,
        )

    @classmethod
    def failed(cls, path: Path, stage: FileStage, reason: str) -> "FileResult":
        return cls(path=path, status=FileStatus.FAILED, stage=stage, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == FileStatus.SUCCESS


class RunStats(BaseModel):
    total: int = 0
    success: int = 0
    failed: int = 0

    def record(self, result: FileResult) -> None:
        if result.ok:
            self.success += 1
        else:
            self.failed += 1

from __future__ import annotations

import shutil
import time
from pathlib import Path
from typing import Optional

from path2url.config import ConverterConfig
from path2url.models.conversion import BackupResult
from path2url.telemetry.run_logger import RunLogger
from path2url.utils.logging_utils import get_logger

logger = get_logger(__name__)


class BackupManager:
    """
    Copies a file into the backup tree before it is overwritten.

    Layout: <root parent>/<backup_dir_name>/<path relative to root>.<epoch>.bak

    Backups are write-only: nothing here reads or restores them. Failures come
    back as BackupResult(ok=False) so the caller can skip just that file.
    """

    def __init__(self, config: ConverterConfig, run_logger: Optional[RunLogger] = None):
        self.config = config
        self.run_logger = run_logger or RunLogger(config.log_file)

    @property
    def enabled(self) -> bool:
        return self.config.enable_backup

    @property
    def backup_root(self) -> Path:
        return self.config.root_dir.parent / self.config.backup_dir_name

    def backup_path_for(self, file_path: Path, timestamp: Optional[int] = None) -> Path:
        relative = Path(file_path).relative_to(self.config.root_dir)
        stamp = int(time.time()) if timestamp is None else timestamp
        mirrored = self.backup_root / relative
        return mirrored.with_name(f"{mirrored.name}.{stamp}.bak")

    def backup(self, file_path: Path) -> BackupResult:
        if not self.enabled:
            return BackupResult(ok=True)

        try:
            target = self.backup_path_for(file_path)
        except ValueError as exc:
            return self._failed(f"File is outside the tree root: {file_path} ({exc})")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return self._failed(f"Failed to create backup directory: {target.parent} ({exc})")

        try:
            shutil.copy2(file_path, target)
        except OSError as exc:
            return self._failed(f"Failed to create backup: {target} ({exc})")

        self.run_logger.info(f"Created backup: {target}")
        return BackupResult(ok=True, backup_path=target)

    def _failed(self, message: str) -> BackupResult:
        self.run_logger.error(message)
        return BackupResult(ok=False, error=message)

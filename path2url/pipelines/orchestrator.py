from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List

from path2url.config import ConverterConfig
from path2url.models.conversion import FileResult, FileStage, RunStats
from path2url.walkers.directory_walker import DirectoryWalker, ScanError, extension_of
from path2url.resolvers.path_resolver import PathResolver
from path2url.rewriters.content_rewriter import ContentRewriter
from path2url.backup.backup_manager import BackupManager
from path2url.telemetry.run_logger import RunLogger
from path2url.utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class OrchestratorDependencies:
    """Container for dependency-injected subsystem instances."""

    walker: DirectoryWalker
    rewriter: ContentRewriter
    backup_manager: BackupManager
    run_logger: RunLogger


def build_dependencies(config: ConverterConfig) -> OrchestratorDependencies:
    run_logger = RunLogger(config.log_file)
    return OrchestratorDependencies(
        walker=DirectoryWalker(config),
        rewriter=ContentRewriter(PathResolver(config.base_domain)),
        backup_manager=BackupManager(config, run_logger=run_logger),
        run_logger=run_logger,
    )


class ConversionOrchestrator:
    """Rewrites relative references across the configured tree.

    Pipeline per file:
    - read -> backup -> rewrite -> write
    - every file yields a FileResult; one bad file never stops the run
    - only a failed scan aborts, by raising ScanError
    """

    def __init__(self, config: ConverterConfig, deps: OrchestratorDependencies) -> None:
        self.config = config
        self.deps = deps
        self.stats = RunStats()
        self.file_results: List[FileResult] = []
        self._processed_files: List[Path] = []

    @classmethod
    def from_config(cls, config: ConverterConfig) -> "ConversionOrchestrator":
        return cls(config, build_dependencies(config))

    @property
    def processed_files(self) -> List[Path]:
        return list(self._processed_files)

    def get_processed_files(self) -> List[Path]:
        return self.processed_files

    def run(self) -> RunStats:
        self.stats = RunStats()
        self.file_results = []
        self._processed_files = []

        try:
            files = self.deps.walker.scan()
        except ScanError as exc:
            self.deps.run_logger.error(f"Processing failed: {exc}")
            raise

        stats = RunStats(total=len(files))

        for file_path in files:
            result = self._process_single(file_path)
            self.file_results.append(result)
            stats.record(result)

            if result.ok:
                self._processed_files.append(file_path)
                self.deps.run_logger.info(f"Successfully processed file: {file_path}")
            else:
                self.deps.run_logger.error(f"Error processing file {file_path}: {result.reason}")

        self.stats = stats
        self.deps.run_logger.info(
            f"Run complete: total={stats.total} success={stats.success} failed={stats.failed}"
        )
        return stats

    def _process_single(self, file_path: Path) -> FileResult:
        # 1. Read
        try:
            content = self._read_content(file_path)
        except (OSError, UnicodeError) as exc:
            return FileResult.failed(file_path, FileStage.UNPROCESSED, f"Failed to read file: {exc}")

        # 2. Backup
        backup = self.deps.backup_manager.backup(file_path)
        if not backup.ok:
            return FileResult.failed(file_path, FileStage.READ, backup.error or "Backup failed")

        # 3. Rewrite
        relative_dir = self._relative_directory(file_path)
        updated, replacements = self.deps.rewriter.rewrite_with_count(
            content, relative_dir, extension_of(file_path)
        )

        # 4. Write
        try:
            self._write_content(file_path, updated)
        except (OSError, UnicodeError) as exc:
            return FileResult.failed(file_path, FileStage.REWRITTEN, f"Failed to write to file: {exc}")

        logger.info("Rewrote %d references in %s", replacements, file_path)
        return FileResult.succeeded(file_path, backup_path=backup.backup_path, replacements=replacements)

    def _relative_directory(self, file_path: Path) -> str:
        relative = file_path.parent.relative_to(self.config.root_dir).as_posix()
        return "" if relative == "." else relative

    def _read_content(self, file_path: Path) -> str:
        # surrogateescape + newline="" keep every byte outside the rewritten references
        with open(file_path, "r", encoding=self.config.encoding, errors="surrogateescape", newline="") as f:
            return f.read()

    def _write_content(self, file_path: Path, content: str) -> None:
        # whole-file replacement: the original stays intact until os.replace
        fd, tmp_name = tempfile.mkstemp(prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent)
        try:
            with open(fd, "w", encoding=self.config.encoding, errors="surrogateescape", newline="") as f:
                f.write(content)
            shutil.copymode(file_path, tmp_name)
            os.replace(tmp_name, file_path)
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

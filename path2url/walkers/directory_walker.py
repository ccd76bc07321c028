from __future__ import annotations

import os
from pathlib import Path
from typing import List

from path2url.config import ConverterConfig
from path2url.utils.logging_utils import get_logger

logger = get_logger(__name__)


class ScanError(RuntimeError):
    """Raised when the tree root cannot be traversed."""


class DirectoryWalker:
    """Recursively collects files under the tree root whose extension is allowed.

    Symlinked directories are not descended into; results are sorted so a given
    filesystem state always yields the same order.
    """

    def __init__(self, config: ConverterConfig):
        self.config = config

    def scan(self) -> List[Path]:
        root = self.config.root_dir
        files: List[Path] = []

        def _raise(exc: OSError) -> None:
            raise ScanError(f"Failed to scan directory: {exc}") from exc

        try:
            for dirpath, dirnames, filenames in os.walk(root, onerror=_raise, followlinks=False):
                dirnames.sort()
                for name in filenames:
                    path = Path(dirpath) / name
                    if path.is_file() and self.matches(path):
                        files.append(path)
        except OSError as exc:
            raise ScanError(f"Failed to scan directory: {exc}") from exc

        files.sort()
        logger.info("Scanned %s: %d matching files", root, len(files))
        return files

    def matches(self, path: Path) -> bool:
        return extension_of(path) in self.config.extensions


def extension_of(path: Path) -> str:
    """Lower-cased text after the final '.', or '' when the name has none."""
    name = path.name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from path2url.utils.logging_utils import get_logger

logger = get_logger(__name__)

INFO = "INFO"
ERROR = "ERROR"

_LEVELS = {INFO: logging.INFO, ERROR: logging.ERROR}


class RunLogger:
    """Append-only event log: one `[YYYY-MM-DD HH:MM:SS] [LEVEL] message` line per event.

    The file is reopened in append mode for every write, so no handle is held
    between events. Each event is also forwarded to the process logger.
    """

    def __init__(self, output_path: str | Path = "url_converter.log"):
        self.path = Path(output_path)

    def info(self, message: str) -> None:
        self.emit(message, INFO)

    def error(self, message: str) -> None:
        self.emit(message, ERROR)

    def emit(self, message: str, level: str = INFO, now: Optional[datetime] = None) -> None:
        logger.log(_LEVELS.get(level, logging.INFO), message)

        line = format_line(message, level, now)
        try:
            if self.path.parent != Path("."):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as exc:
            logger.warning("Failed to write run log %s. Error=%s", self.path, exc)


def format_line(message: str, level: str = INFO, now: Optional[datetime] = None) -> str:
    timestamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    return f"[{timestamp}] [{level}] {message}"

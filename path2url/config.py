from __future__ import annotations

import os
from pathlib import Path
from typing import Any, FrozenSet, List
from urllib.parse import urlparse

from pydantic import AnyUrl, BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator
from pydantic_settings import BaseSettings

DEFAULT_EXTENSIONS = ("html", "css", "js")

_URL_ADAPTER = TypeAdapter(AnyUrl)


class Settings(BaseSettings):
    # Scan
    extensions: List[str] = list(DEFAULT_EXTENSIONS)
    encoding: str = "utf-8"

    # Logging
    log_file: str = "url_converter.log"

    # Backups
    enable_backup: bool = True
    backup_dir_name: str = "path2url_backup"

    class Config:
        env_prefix = "PATH2URL_"
        env_file = ".env"


class ConverterConfig(BaseModel):
    """Validated, read-only settings for a single conversion run."""

    model_config = ConfigDict(frozen=True)

    root_dir: Path
    base_domain: str
    extensions: FrozenSet[str] = frozenset(DEFAULT_EXTENSIONS)
    log_file: Path = Path("url_converter.log")
    enable_backup: bool = True
    backup_dir_name: str = "path2url_backup"
    encoding: str = "utf-8"

    @field_validator("root_dir")
    @classmethod
    def _check_root_dir(cls, value: Path) -> Path:
        if not value.is_dir() or not os.access(value, os.R_OK | os.X_OK):
            raise ValueError(f"Invalid or unreadable directory: {value}")
        # Path() already drops trailing separators
        return Path(os.path.normpath(value))

    @field_validator("base_domain")
    @classmethod
    def _check_base_domain(cls, value: str) -> str:
        value = value.strip()
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError as exc:
            raise ValueError(f"Invalid base domain URL: {value}") from exc
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.hostname:
            raise ValueError(f"Invalid base domain URL: {value}")
        return value.rstrip("/")

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: Any) -> FrozenSet[str]:
        if isinstance(value, str):
            value = [value]
        return frozenset(str(ext).strip().lstrip(".").lower() for ext in value if str(ext).strip())

    @field_validator("backup_dir_name")
    @classmethod
    def _check_backup_dir_name(cls, value: str) -> str:
        if not value or "/" in value or os.sep in value:
            raise ValueError(f"Backup directory name must be a single path component: {value!r}")
        return value

    @classmethod
    def from_settings(
        cls,
        root_dir: str | Path,
        base_domain: str,
        settings: Settings | None = None,
        **overrides: Any,
    ) -> "ConverterConfig":
        settings = settings or Settings()
        values = {
            "root_dir": root_dir,
            "base_domain": base_domain,
            "extensions": settings.extensions,
            "log_file": settings.log_file,
            "enable_backup": settings.enable_backup,
            "backup_dir_name": settings.backup_dir_name,
            "encoding": settings.encoding,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

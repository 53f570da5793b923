"""User settings for devpurge."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CACHE_FILE_NAME = "scan_cache.json"


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


def default_config_path() -> Path:
    """Location of the settings file."""
    override = os.environ.get("DEVPURGE_CONFIG")
    if override:
        return expand_path(override)
    base = os.environ.get("XDG_CONFIG_HOME") or "~/.config"
    return expand_path(base) / "devpurge" / "config.json"


def default_cache_dir() -> Path:
    """Platform cache directory for devpurge."""
    override = os.environ.get("DEVPURGE_CACHE_DIR")
    if override:
        return expand_path(override)
    base = os.environ.get("XDG_CACHE_HOME") or "~/.cache"
    return expand_path(base) / "devpurge"


class Settings(BaseModel):
    """Settings read from the config file, with defaults for anything unset."""

    cache_dir: Path = Field(default_factory=default_cache_dir)
    max_workers: Optional[int] = Field(None, ge=1, description="Size workers (default: CPU count)")
    min_size_mb: int = Field(0, ge=0, description="Default minimum folder size in MB")
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _expand_cache_dir(cls, value: object) -> object:
        if isinstance(value, str):
            return expand_path(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def cache_file(self) -> Path:
        """Path of the persisted scan cache."""
        return self.cache_dir / CACHE_FILE_NAME

    @property
    def workers(self) -> int:
        """Number of size workers to run."""
        return self.max_workers or os.cpu_count() or 1


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    config_path = path or default_config_path()
    if not config_path.exists():
        return Settings()

    try:
        with open(config_path) as f:
            return Settings.model_validate(json.load(f))
    except (json.JSONDecodeError, OSError, ValidationError) as e:
        logger.warning("Ignoring invalid config file %s: %s", config_path, e)
        return Settings()

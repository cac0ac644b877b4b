"""
Configuration helpers for the resource tracker.

Settings are read from environment variables once and cached so that
the storage, persistence and logging layers do not fetch os.environ
directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[1] / "data" / "resources.json"
DEFAULT_STORAGE_KEY = "devResourceTrackerResources"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    data_file: Path
    storage_key: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    data_file = os.getenv("RESOURCE_TRACKER_DATA_FILE") or ""
    storage_key = (os.getenv("RESOURCE_TRACKER_STORAGE_KEY") or "").strip()
    return Settings(
        data_file=Path(data_file).expanduser() if data_file.strip() else DEFAULT_DATA_FILE,
        storage_key=storage_key or DEFAULT_STORAGE_KEY,
        log_level=(os.getenv("RESOURCE_TRACKER_LOG_LEVEL") or "INFO").strip().upper(),
    )

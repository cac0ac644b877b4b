# resource_tracker/storage.py
"""
Key-value storage primitives.

The persistence layer only needs "get a string by key" and "set a
string by key", the same contract as a browser's local storage. Two
backends are provided: ``MemoryStorage`` for tests and throwaway
sessions, and ``JsonFileStorage`` which keeps every key in one JSON
object on disk.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional

from typing_extensions import Protocol


logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """Store string values under string keys in a single JSON file.

    Parameters
    ----------
    path : Path
        Location of the JSON file. The file and its parent directory
        are created on the first write.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        # FastAPI runs sync endpoints on a thread pool
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        """Load the key mapping from disk.

        Returns
        -------
        Dict[str, str]
            The stored mapping. If the file is missing, unreadable or
            does not hold a JSON object, an empty dict is returned.
        """
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        """Write ``value`` under ``key``; I/O errors propagate to the caller.

        The new content goes to a sibling temp file that then replaces
        the live file, so a failed write leaves the old file intact.
        """
        with self._lock:
            data = self._read_all()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=self.path.name + ".", suffix=".tmp", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except Exception:
                os.unlink(tmp_name)
                raise

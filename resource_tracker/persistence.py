"""
Persistence adapter for the resource catalog.

The whole collection is written as one JSON array under a single fixed
key of a ``KeyValueStorage``. Writes are best-effort: a failing backend
is logged and reported through a ``SaveOutcome`` but never raised, the
in-memory store stays the source of truth. Reads are forgiving: an
absent, unparseable or non-array value simply means "no prior data".
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel

from .config import DEFAULT_STORAGE_KEY
from .models import Resource
from .storage import KeyValueStorage


logger = logging.getLogger(__name__)


class SaveOutcome(BaseModel):
    """Result of a single save attempt."""

    ok: bool
    count: int = 0
    error: Optional[str] = None


class ResourcePersistence:
    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def save(self, records: Iterable[Union[Resource, Any]]) -> SaveOutcome:
        """Serialize ``records`` and write them under the storage key.

        Parameters
        ----------
        records : Iterable[Union[Resource, Any]]
            The full current collection, in insertion order. Rows that are
            not ``Resource`` instances are written back verbatim.

        Returns
        -------
        SaveOutcome
            ``ok`` is False when the write failed; ``error`` then holds
            a short description. Nothing is retried or rolled back.
        """
        payload = [
            r.model_dump(mode="json", by_alias=True) if isinstance(r, Resource) else r
            for r in records
        ]
        try:
            self.storage.set(self.key, json.dumps(payload, ensure_ascii=False))
        except Exception as exc:
            logger.error("Failed to save %d resources under %r: %s", len(payload), self.key, exc)
            return SaveOutcome(ok=False, count=len(payload), error=f"{type(exc).__name__}: {exc}")
        logger.debug("Saved %d resources under %r", len(payload), self.key)
        return SaveOutcome(ok=True, count=len(payload))

    def load(self) -> List[Dict[str, Any]]:
        """Read the stored collection.

        Returns
        -------
        List[Dict[str, Any]]
            The parsed records verbatim, or an empty list when nothing
            was stored yet or the stored value is corrupt.
        """
        try:
            raw = self.storage.get(self.key)
        except Exception as exc:
            logger.error("Failed to read %r from storage: %s", self.key, exc)
            return []
        if not raw:
            return []
        try:
            saved = json.loads(raw)
        except ValueError as exc:
            logger.warning("Discarding unparseable data under %r: %s", self.key, exc)
            return []
        if not isinstance(saved, list):
            logger.warning("Discarding data under %r: expected an array, got %s", self.key, type(saved).__name__)
            return []
        logger.info("Loaded %d resources from storage", len(saved))
        return saved

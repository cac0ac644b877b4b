from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from resource_tracker.config import DEFAULT_STORAGE_KEY
from resource_tracker.persistence import ResourcePersistence
from resource_tracker.storage import MemoryStorage
from resource_tracker.store import ResourceStore


SCENARIO_RECORDS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Go Tour",
        "type": "tutorial",
        "link": "",
        "status": "completed",
        "priority": "low",
        "notes": "",
        "createdAt": "2024-01-01T00:00:00Z",
    },
    {
        "id": 2,
        "title": "Rust Book",
        "type": "book",
        "link": "https://doc.rust-lang.org/book/",
        "status": "planned",
        "priority": "high",
        "notes": "",
        "createdAt": "2024-06-01T00:00:00Z",
    },
]


class TickingClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(minutes=1)
        return self.now


def seeded_storage(records: Optional[List[Dict[str, Any]]] = None) -> MemoryStorage:
    storage = MemoryStorage()
    if records is not None:
        storage.set(DEFAULT_STORAGE_KEY, json.dumps(records))
    return storage


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def persistence(storage) -> ResourcePersistence:
    return ResourcePersistence(storage)


@pytest.fixture()
def store(persistence) -> ResourceStore:
    return ResourceStore(persistence, clock=TickingClock())


@pytest.fixture()
def scenario_store() -> ResourceStore:
    persistence = ResourcePersistence(seeded_storage(SCENARIO_RECORDS))
    return ResourceStore(persistence, clock=TickingClock())

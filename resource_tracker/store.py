"""
In-memory resource store.

``ResourceStore`` is the only owner of the record collection and of
the identifier counter. Every successful mutation is followed by a
synchronous save of the full collection through the persistence
adapter. Callers read through ``list()``, which hands out a tuple of
frozen records, never the backing list.

Stored rows that do not validate as a ``Resource`` (missing
timestamp, unknown status, duplicate id...) are kept as they are, in
their original position, and written back untouched on every save.
They are not shown by ``list()``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .models import CreateResourceRequest, Resource, ResourcePriority, ResourceStatus
from .persistence import ResourcePersistence, SaveOutcome


logger = logging.getLogger(__name__)

E = TypeVar("E", ResourceStatus, ResourcePriority)

# same lax coercion the Resource model applies to its ``id`` field
_ID_ADAPTER = TypeAdapter(int)


class ValidationError(ValueError):
    """Raised when a resource cannot be created from the given fields."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_choice(enum_cls: Type[E], value: Optional[str], default: E, field: str) -> E:
    text = (value or "").strip().lower()
    if not text:
        return default
    try:
        return enum_cls(text)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field} {value!r}; expected one of: {allowed}.")


def _raw_id(raw: Any) -> Optional[int]:
    if not isinstance(raw, dict) or "id" not in raw:
        return None
    try:
        return _ID_ADAPTER.validate_python(raw["id"])
    except PydanticValidationError:
        return None


def _entry_id(entry: Union[Resource, Any]) -> Optional[int]:
    return entry.id if isinstance(entry, Resource) else _raw_id(entry)


class ResourceStore:
    """Owns the resource collection and identifier assignment.

    Parameters
    ----------
    persistence : ResourcePersistence
        Adapter used to load the collection at construction time and to
        save it after each mutation.
    clock : Callable[[], datetime], optional
        Source of creation timestamps. Defaults to the current UTC time.
    """

    def __init__(
        self,
        persistence: ResourcePersistence,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._persistence = persistence
        self._clock = clock
        # Resource instances plus raw rows kept for pass-through, in stored order
        self._entries: List[Union[Resource, Any]] = []
        self._next_id: int = 1
        self.last_save: Optional[SaveOutcome] = None
        self.restore(persistence.load())

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return sum(1 for e in self._entries if isinstance(e, Resource))

    # -------------------- loading --------------------
    def restore(self, records: Iterable[Any]) -> None:
        """Seed the collection from raw stored records.

        ``next_id`` becomes one more than the highest id found, whether
        the row validated or is only passed through.
        """
        entries: List[Union[Resource, Any]] = []
        seen = set()
        max_id = 0
        for raw in records:
            try:
                resource = Resource.model_validate(raw)
            except PydanticValidationError as exc:
                logger.warning("Keeping unreadable stored resource as is %r: %s", raw, exc.errors()[:1])
                resource = None
            if resource is not None and resource.id in seen:
                logger.warning("Keeping stored resource with duplicate id %s as is", resource.id)
                resource = None
            entry = resource if resource is not None else raw
            rid = _entry_id(entry)
            if rid is not None:
                max_id = max(max_id, rid)
            if resource is not None:
                seen.add(resource.id)
            entries.append(entry)
        self._entries = entries
        self._next_id = max_id + 1
        logger.info(
            "Restored %d resources (%d kept as is); next id is %d",
            len(seen), len(entries) - len(seen), self._next_id,
        )

    # -------------------- queries --------------------
    def list(self) -> Tuple[Resource, ...]:
        return tuple(e for e in self._entries if isinstance(e, Resource))

    def get(self, resource_id: int) -> Optional[Resource]:
        return next((r for r in self.list() if r.id == resource_id), None)

    # -------------------- mutations --------------------
    def _allocate_id(self) -> int:
        taken = {_entry_id(e) for e in self._entries}
        while self._next_id in taken:
            self._next_id += 1
        nid = self._next_id
        self._next_id += 1
        return nid

    def create(self, req: CreateResourceRequest) -> Resource:
        title = (req.title or "").strip()
        resource_type = (req.type or "").strip()
        if not title or not resource_type:
            raise ValidationError("Please fill in the required fields: Title and Type.")
        status = _coerce_choice(ResourceStatus, req.status, ResourceStatus.PLANNED, "status")
        priority = _coerce_choice(ResourcePriority, req.priority, ResourcePriority.MEDIUM, "priority")

        resource = Resource(
            id=self._allocate_id(),
            title=title,
            type=resource_type,
            link=(req.link or "").strip(),
            status=status,
            priority=priority,
            notes=(req.notes or "").strip(),
            created_at=self._clock(),
        )
        self._entries.append(resource)
        logger.info("Resource added: id=%d title=%r", resource.id, resource.title)
        self._save()
        return resource

    def delete(self, resource_id: int) -> bool:
        for index, entry in enumerate(self._entries):
            if _entry_id(entry) == resource_id:
                del self._entries[index]
                logger.info("Resource deleted: id=%d; %d remaining", resource_id, len(self._entries))
                self._save()
                return True
        logger.warning("Resource not found for id: %s", resource_id)
        return False

    def _save(self) -> SaveOutcome:
        self.last_save = self._persistence.save(tuple(self._entries))
        return self.last_save

"""
Search, filter and sort over a snapshot of the catalog.

``query_resources`` is a pure function: it copies the snapshot it is
given, applies the free-text search, then the status filter, then the
requested ordering, and wraps the result in a ``ResourceView`` that
tells an empty catalog apart from a query that matched nothing.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Union

from .models import (
    STATUS_FILTER_ALL,
    Resource,
    ResourcePriority,
    ResourceStatus,
    ResourceView,
    SortKey,
    ViewState,
)

PRIORITY_RANK: Dict[ResourcePriority, int] = {
    ResourcePriority.HIGH: 3,
    ResourcePriority.MEDIUM: 2,
    ResourcePriority.LOW: 1,
}


def _norm(s: Optional[str]) -> str:
    """Lower-case and strip a search string; ``None`` becomes ""."""
    return (s or "").strip().lower()


def _created_key(resource: Resource) -> datetime:
    created = resource.created_at
    if created.tzinfo is None:
        # naive timestamps are taken as UTC so they compare with aware ones
        created = created.replace(tzinfo=timezone.utc)
    return created


def _matches(resource: Resource, needle: str) -> bool:
    if needle in resource.title.lower() or needle in resource.type.lower():
        return True
    return bool(resource.notes) and needle in resource.notes.lower()


def query_resources(
    records: Iterable[Resource],
    search: Optional[str] = "",
    status: Union[str, ResourceStatus] = STATUS_FILTER_ALL,
    sort: Union[str, SortKey] = SortKey.NEWEST,
) -> ResourceView:
    """Build the ordered view of ``records`` for the given query.

    Parameters
    ----------
    records : Iterable[Resource]
        Snapshot of the catalog, typically ``ResourceStore.list()``. It
        is never mutated.
    search : Optional[str]
        Free-text query. Matching is a case-insensitive substring test
        against title, type and (non-empty) notes. Blank means no search.
    status : str
        ``"all"`` or one of the resource statuses.
    sort : str
        ``"newest"``, ``"oldest"`` or ``"priority"``. Priority ordering
        is stable: equal priorities keep their insertion order.

    Returns
    -------
    ResourceView
        The matching records and the state of the view.

    Raises
    ------
    ValueError
        If ``status`` or ``sort`` is not a known value.
    """
    status_filter = status if status == STATUS_FILTER_ALL else ResourceStatus(status)
    sort_key = SortKey(sort)

    items: List[Resource] = list(records)
    total = len(items)
    if total == 0:
        return ResourceView(items=[], total=0, state=ViewState.EMPTY)

    # Apply free-text search
    needle = _norm(search)
    if needle:
        items = [r for r in items if _matches(r, needle)]

    # Apply status filter
    if status_filter != STATUS_FILTER_ALL:
        items = [r for r in items if r.status == status_filter]

    # Sorting
    if sort_key is SortKey.NEWEST:
        items = sorted(items, key=_created_key, reverse=True)
    elif sort_key is SortKey.OLDEST:
        items = sorted(items, key=_created_key)
    elif sort_key is SortKey.PRIORITY:
        items = sorted(items, key=lambda r: PRIORITY_RANK.get(r.priority, 0), reverse=True)

    state = ViewState.OK if items else ViewState.NO_MATCH
    return ResourceView(items=items, total=total, state=state)

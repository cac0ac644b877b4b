"""
Pydantic models for the resource catalog.

``Resource`` is the stored record. Field names follow the storage
contract (``createdAt`` is exposed through an alias) so that a record
dumped with ``by_alias=True`` is exactly what lands in storage. Records
are frozen: once created by the store nothing can change them, which
also makes a tuple of records a safe read-only snapshot.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class ResourcePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SortKey(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY = "priority"


class ViewState(str, Enum):
    """Why a view has (or lacks) items.

    ``empty`` means the catalog holds no records at all, ``no_match``
    means records exist but the current search/filter removed them all.
    """

    OK = "ok"
    EMPTY = "empty"
    NO_MATCH = "no_match"


STATUS_FILTER_ALL = "all"


class Resource(BaseModel):
    """A single tracked catalog entry.

    Extra keys found in storage are kept on the model and written back
    untouched on the next save.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: int
    title: str
    type: str
    link: Optional[str] = ""
    status: ResourceStatus = ResourceStatus.PLANNED
    priority: ResourcePriority = ResourcePriority.MEDIUM
    notes: Optional[str] = ""
    created_at: datetime = Field(alias="createdAt")


class CreateResourceRequest(BaseModel):
    # status/priority stay plain strings so the store can reject unknown
    # values with its own ValidationError
    title: str
    type: str
    link: str = ""
    status: Optional[str] = None
    priority: Optional[str] = None
    notes: str = ""


class ResourceView(BaseModel):
    """Ordered, display-ready result of a catalog query."""

    items: List[Resource] = Field(default_factory=list)
    total: int = 0
    state: ViewState = ViewState.EMPTY

"""
Route definitions for the resource catalog API.

Endpoints under /api/resources:
- GET    /                : ordered view (search + status filter + sort)
- GET    /html            : same view rendered as an HTML fragment
- GET    /{resource_id}   : get one resource
- POST   /                : create a resource
- DELETE /{resource_id}   : delete a resource
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from typing_extensions import Literal

from .models import CreateResourceRequest, Resource, ResourceView
from .query import query_resources
from .rendering import render_resource_list
from .store import ResourceStore, ValidationError


StatusFilter = Literal["all", "planned", "in-progress", "completed"]
SortField = Literal["newest", "oldest", "priority"]

router = APIRouter(prefix="/api/resources", tags=["resources"])


def get_store(request: Request) -> ResourceStore:
    return request.app.state.store


def _view(store: ResourceStore, q: Optional[str], status: str, sort: str) -> ResourceView:
    # the pipeline only ever sees a snapshot, never the store's own list
    return query_resources(store.list(), search=q, status=status, sort=sort)


@router.get("", response_model=ResourceView)
def list_resources(
    q: Optional[str] = Query(default=None, description="Search text (title/type/notes)"),
    status: StatusFilter = Query(default="all", description="Filter by status"),
    sort: SortField = Query(default="newest", description="Sort order"),
    store: ResourceStore = Depends(get_store),
) -> ResourceView:
    return _view(store, q, status, sort)


@router.get("/html", response_class=HTMLResponse)
def list_resources_html(
    q: Optional[str] = Query(default=None),
    status: StatusFilter = Query(default="all"),
    sort: SortField = Query(default="newest"),
    store: ResourceStore = Depends(get_store),
) -> HTMLResponse:
    return HTMLResponse(render_resource_list(_view(store, q, status, sort)))


@router.get("/{resource_id}", response_model=Resource)
def get_resource(resource_id: int, store: ResourceStore = Depends(get_store)) -> Resource:
    resource = store.get(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    return resource


@router.post("", response_model=Resource, status_code=201)
def create_resource(req: CreateResourceRequest, store: ResourceStore = Depends(get_store)) -> Resource:
    try:
        return store.create(req)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{resource_id}")
def delete_resource(resource_id: int, store: ResourceStore = Depends(get_store)):
    """Delete a resource; unknown ids are a no-op, not an error."""
    deleted = store.delete(resource_id)
    return {"status": "ok", "deleted": deleted}

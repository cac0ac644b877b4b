"""
HTML rendering of a catalog view for the local front-end.

The page injects the returned fragment into its list container as is,
so every user-supplied value is escaped here.
"""

from html import escape
from typing import List

from .models import Resource, ResourceView, ViewState

EMPTY_CATALOG_MESSAGE = "No resources yet. Add your first one using the form on the left."
NO_MATCH_MESSAGE = "No resources match your current search/filter."

STATUS_LABELS = {
    "planned": "Planned",
    "in-progress": "In progress",
    "completed": "Completed",
}


def format_status(status: str) -> str:
    value = getattr(status, "value", status)
    return STATUS_LABELS.get(value, value)


def _render_item(resource: Resource) -> str:
    status = resource.status.value
    priority = resource.priority.value
    parts: List[str] = [
        '<article class="resource-item">',
        '  <header class="resource-item__header">',
        f'    <h3 class="resource-item__title">{escape(resource.title, quote=False)}</h3>',
        f'    <span class="resource-item__type">{escape(resource.type, quote=False)}</span>',
        "  </header>",
        '  <div class="resource-item__meta">',
        f'    <span class="badge badge--status badge--status-{status}">{format_status(status)}</span>',
        f'    <span class="badge badge--priority badge--priority-{priority}">Priority: {priority}</span>',
        "  </div>",
        '  <div class="resource-item__body">',
    ]
    if resource.notes:
        parts.append(f"    <p>{escape(resource.notes, quote=False)}</p>")
    if resource.link:
        parts.append(
            f'    <a href="{escape(resource.link)}" target="_blank" rel="noopener noreferrer">Open resource</a>'
        )
    parts.extend(
        [
            "  </div>",
            '  <footer class="resource-item__actions">',
            f'    <button class="btn btn-ghost resource-delete" data-id="{resource.id}">Delete</button>',
            "  </footer>",
            "</article>",
        ]
    )
    return "\n".join(parts)


def render_resource_list(view: ResourceView) -> str:
    """Render ``view`` as an HTML fragment.

    An empty catalog and a query without matches get different
    messages so the user knows whether to add resources or relax the
    search.
    """
    if view.state == ViewState.EMPTY:
        return f'<p class="empty-state">{EMPTY_CATALOG_MESSAGE}</p>'
    if view.state == ViewState.NO_MATCH or not view.items:
        return f'<p class="empty-state">{NO_MATCH_MESSAGE}</p>'
    return "\n".join(_render_item(r) for r in view.items)

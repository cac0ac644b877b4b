from __future__ import annotations

from resource_tracker.models import CreateResourceRequest
from resource_tracker.query import query_resources
from resource_tracker.rendering import (
    EMPTY_CATALOG_MESSAGE,
    NO_MATCH_MESSAGE,
    format_status,
    render_resource_list,
)


def test_format_status():
    assert format_status("planned") == "Planned"
    assert format_status("in-progress") == "In progress"
    assert format_status("completed") == "Completed"
    assert format_status("someday") == "someday"


def test_empty_messages_differ(store, scenario_store):
    assert EMPTY_CATALOG_MESSAGE in render_resource_list(query_resources(store.list()))
    assert NO_MATCH_MESSAGE in render_resource_list(query_resources(scenario_store.list(), search="zzz"))


def test_items_are_escaped(store):
    store.create(
        CreateResourceRequest(
            title="<script>alert(1)</script>",
            type="book & co",
            link='https://x.test/?q="a"',
            notes="a < b",
            status="in-progress",
            priority="high",
        )
    )
    html = render_resource_list(query_resources(store.list()))

    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "book &amp; co" in html
    assert "<p>a &lt; b</p>" in html
    assert 'href="https://x.test/?q=&quot;a&quot;"' in html
    assert "badge--status-in-progress" in html
    assert "In progress" in html
    assert "Priority: high" in html
    assert 'data-id="1"' in html


def test_link_and_notes_are_optional(store):
    store.create(CreateResourceRequest(title="a", type="book"))
    html = render_resource_list(query_resources(store.list()))
    assert "Open resource" not in html
    assert "<p>" not in html

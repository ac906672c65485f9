from __future__ import annotations

import pytest

from swrzee_admin.app.ui.collection import CollectionController
from swrzee_admin.app.ui.listing import ProjectionSpec
from swrzee_admin.app.ui.view_state import ViewStatus
from swrzee_admin.sdk.exceptions import GENERIC_ERROR_MESSAGE, ServerError, TransportError

SPEC = ProjectionSpec(search_fields=("name",), sortable_fields=("name", "price"), default_sort="name")


class FakeFetch:
    def __init__(self, *batches) -> None:
        self.batches = list(batches)
        self.calls = 0
        self.loading_seen: list[bool] = []
        self.controller: CollectionController | None = None

    def __call__(self) -> list[dict]:
        self.calls += 1
        if self.controller is not None:
            self.loading_seen.append(self.controller.loading)
        outcome = self.batches.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _rows(count: int) -> list[dict]:
    return [{"_id": str(idx), "name": f"item-{idx:02d}", "price": idx} for idx in range(count)]


def test_load_replaces_collection_and_tracks_loading() -> None:
    fetch = FakeFetch(_rows(3), _rows(7))
    controller = CollectionController("services", fetch, SPEC)
    fetch.controller = controller

    assert controller.view_state.status is ViewStatus.IDLE
    assert controller.load() is True
    assert len(controller.items) == 3
    assert controller.invalidate() is True
    assert len(controller.items) == 7
    assert fetch.loading_seen == [True, True]
    assert controller.loading is False
    assert controller.view_state.status is ViewStatus.SUCCESS


def test_failed_load_records_message_and_keeps_previous_items() -> None:
    fetch = FakeFetch(
        _rows(2),
        ServerError(code="HTTP_500", message="Database unavailable", status_code=500),
        TransportError(code="TRANSPORT_ERROR", message=GENERIC_ERROR_MESSAGE, status_code=0),
    )
    controller = CollectionController("batches", fetch, SPEC)
    controller.load()

    assert controller.load() is False
    assert controller.error == "Database unavailable"
    assert controller.loading is False
    assert len(controller.items) == 2
    assert controller.view_state.status is ViewStatus.ERROR

    assert controller.load() is False
    assert controller.error == "An error occurred"
    assert fetch.calls == 3


def test_empty_collection_state() -> None:
    controller = CollectionController("services", FakeFetch([]), SPEC)
    controller.load()

    assert controller.view_state.status is ViewStatus.EMPTY
    assert controller.projection.page == 1


def test_reload_with_fewer_rows_clamps_page() -> None:
    controller = CollectionController("services", FakeFetch(_rows(12), _rows(4)), SPEC, items_per_page=5)
    controller.load()
    controller.set_page(3)
    assert controller.state.page == 3

    controller.invalidate()

    assert controller.state.page == 1
    assert controller.projection.page == 1


def test_paging_and_search_stay_in_range() -> None:
    controller = CollectionController("services", FakeFetch(_rows(12)), SPEC, items_per_page=5)
    controller.load()

    controller.next_page()
    controller.next_page()
    controller.next_page()
    assert controller.state.page == 3
    controller.prev_page()
    assert controller.state.page == 2

    controller.set_search("item-1")
    assert controller.state.page == 1
    assert [row["name"] for row in controller.projection.rows] == ["item-10", "item-11"]


def test_toggle_sort_rejects_unknown_field() -> None:
    controller = CollectionController("services", FakeFetch(_rows(3)), SPEC)
    controller.load()

    controller.toggle_sort("price")
    assert controller.projection.rows[0]["price"] == 0
    controller.toggle_sort("price")
    assert controller.projection.rows[0]["price"] == 2

    with pytest.raises(ValueError):
        controller.toggle_sort("description")

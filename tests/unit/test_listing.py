from __future__ import annotations

from dataclasses import replace

from swrzee_admin.app.ui.listing import (
    ProjectionSpec,
    ProjectionState,
    SortOrder,
    clamp_page,
    filter_rows,
    project,
    reclamp,
    sort_rows,
    toggle_sort,
)
from swrzee_admin.app.ui.views.users_view import USERS_SPEC

NAMES = ["Liam", "Asha", "Kiran", "Diya", "Farhan", "Bela", "Ishaan", "Chen", "Jaya", "Gopal", "Ema", "Hari"]


def _users() -> list[dict]:
    return [
        {"_id": f"id-{idx}", "userId": f"SWZ{idx:03d}", "firstName": name, "email": f"{name.lower()}@example.com"}
        for idx, name in enumerate(NAMES)
    ]


def test_twelve_users_first_page_then_descending() -> None:
    users = _users()
    state = ProjectionState.initial(USERS_SPEC, items_per_page=5)

    first = project(users, state, USERS_SPEC)

    assert [row["firstName"] for row in first.rows] == ["Asha", "Bela", "Chen", "Diya", "Ema"]
    assert first.total_pages == 3
    assert first.has_next and not first.has_prev

    flipped = project(users, toggle_sort(state, "firstName"), USERS_SPEC)

    assert flipped.sort_order is SortOrder.DESC
    assert [row["firstName"] for row in flipped.rows] == ["Liam", "Kiran", "Jaya", "Ishaan", "Hari"]


def test_filter_is_case_insensitive_substring() -> None:
    rows = [{"name": "Alpha"}, {"name": "beta", "code": "ALP-2"}, {"name": None}, {"code": 42}]

    assert filter_rows(rows, "alp", ("name", "code")) == rows[:2]
    assert filter_rows(rows, "4", ("name", "code")) == [rows[3]]
    assert filter_rows(rows, "", ("name",)) == rows


def test_sort_is_stable_and_keeps_missing_last() -> None:
    rows = [
        {"id": 1, "score": 2},
        {"id": 2},
        {"id": 3, "score": 1},
        {"id": 4, "score": 2},
        {"id": 5, "score": None},
    ]

    ascending = [row["id"] for row in sort_rows(rows, "score", SortOrder.ASC)]
    descending = [row["id"] for row in sort_rows(rows, "score", SortOrder.DESC)]

    assert ascending == [3, 1, 4, 2, 5]
    assert descending[-2:] == [2, 5]
    assert descending[:3] == [1, 4, 3]


def test_toggle_sort_on_new_field_resets_to_ascending() -> None:
    state = ProjectionState(sort_field="email", sort_order=SortOrder.DESC)

    assert toggle_sort(state, "role") == replace(state, sort_field="role", sort_order=SortOrder.ASC)
    assert toggle_sort(state, "email").sort_order is SortOrder.ASC


def test_page_is_clamped_to_filtered_range() -> None:
    assert clamp_page(0, 12, 5) == 1
    assert clamp_page(9, 12, 5) == 3
    assert clamp_page(4, 0, 5) == 1

    users = _users()
    state = ProjectionState.initial(USERS_SPEC, items_per_page=5)
    state = replace(state, page=3, search_query="ash")

    assert reclamp(state, users, USERS_SPEC).page == 1
    assert project(users, state, USERS_SPEC).page == 1


def test_exclusion_predicate_hides_admins_unless_included() -> None:
    users = _users() + [
        {"_id": "a1", "userId": "SWZADMIN01", "firstName": "Admin"},
        {"_id": "a2", "userId": "SWZSADMIN01", "firstName": "Root"},
    ]
    state = ProjectionState.initial(USERS_SPEC, items_per_page=50)

    assert project(users, state, USERS_SPEC).filtered_count == 12
    assert project(users, replace(state, include_excluded=True), USERS_SPEC).filtered_count == 14


def test_search_spans_configured_fields_only() -> None:
    spec = ProjectionSpec(search_fields=("firstName",))
    users = _users()

    projection = project(users, ProjectionState(search_query="example.com", items_per_page=5), spec)

    assert projection.filtered_count == 0
    assert projection.rows == []
    assert projection.page == 1
    assert projection.total_pages == 0

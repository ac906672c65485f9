from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

Row = dict[str, Any]
ExcludePredicate = Callable[[Row], bool]


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


@dataclass(frozen=True)
class ProjectionSpec:
    search_fields: tuple[str, ...]
    sortable_fields: tuple[str, ...] = ()
    default_sort: str | None = None
    default_order: SortOrder = SortOrder.ASC
    exclude: ExcludePredicate | None = None


@dataclass(frozen=True)
class ProjectionState:
    search_query: str = ""
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC
    page: int = 1
    items_per_page: int = 5
    include_excluded: bool = False

    @classmethod
    def initial(cls, spec: ProjectionSpec, items_per_page: int = 5) -> "ProjectionState":
        return cls(sort_field=spec.default_sort, sort_order=spec.default_order, items_per_page=items_per_page)


@dataclass(frozen=True)
class Projection:
    rows: list[Row]
    filtered_count: int
    page: int
    total_pages: int
    items_per_page: int
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def _is_missing(value: Any) -> bool:
    return value is None


def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, str):
        return (1, value.casefold())
    return (2, str(value).casefold())


def matches_query(row: Row, query: str, fields: Sequence[str]) -> bool:
    probe = query.casefold()
    for key in fields:
        value = row.get(key)
        if value is None:
            continue
        if probe in str(value).casefold():
            return True
    return False


def filter_rows(rows: Sequence[Row], query: str, fields: Sequence[str]) -> list[Row]:
    if not query:
        return list(rows)
    return [row for row in rows if matches_query(row, query, fields)]


def sort_rows(rows: Sequence[Row], sort_field: str | None, order: SortOrder = SortOrder.ASC) -> list[Row]:
    """Stable sort; rows without a value for ``sort_field`` stay last in either order."""
    if not sort_field:
        return list(rows)
    present = [row for row in rows if not _is_missing(row.get(sort_field))]
    missing = [row for row in rows if _is_missing(row.get(sort_field))]
    ordered = sorted(present, key=lambda row: _sort_key(row.get(sort_field)), reverse=order is SortOrder.DESC)
    return ordered + missing


def total_pages(filtered_count: int, items_per_page: int) -> int:
    return math.ceil(filtered_count / items_per_page) if items_per_page > 0 else 0


def clamp_page(page: int, filtered_count: int, items_per_page: int) -> int:
    upper = max(1, total_pages(filtered_count, items_per_page))
    return min(max(1, page), upper)


def paginate(rows: Sequence[Row], page: int, items_per_page: int) -> list[Row]:
    start = (page - 1) * items_per_page
    return list(rows[start : start + items_per_page])


def filtered_rows(collection: Sequence[Row], state: ProjectionState, spec: ProjectionSpec) -> list[Row]:
    rows = filter_rows(collection, state.search_query, spec.search_fields)
    if spec.exclude is not None and not state.include_excluded:
        rows = [row for row in rows if not spec.exclude(row)]
    return rows


def project(collection: Sequence[Row], state: ProjectionState, spec: ProjectionSpec) -> Projection:
    rows = filtered_rows(collection, state, spec)
    rows = sort_rows(rows, state.sort_field, state.sort_order)
    page = clamp_page(state.page, len(rows), state.items_per_page)
    return Projection(
        rows=paginate(rows, page, state.items_per_page),
        filtered_count=len(rows),
        page=page,
        total_pages=total_pages(len(rows), state.items_per_page),
        items_per_page=state.items_per_page,
        sort_field=state.sort_field,
        sort_order=state.sort_order,
    )


def toggle_sort(state: ProjectionState, sort_field: str) -> ProjectionState:
    if state.sort_field == sort_field:
        return replace(state, sort_order=state.sort_order.flipped())
    return replace(state, sort_field=sort_field, sort_order=SortOrder.ASC)


def reclamp(state: ProjectionState, collection: Sequence[Row], spec: ProjectionSpec) -> ProjectionState:
    page = clamp_page(state.page, len(filtered_rows(collection, state, spec)), state.items_per_page)
    if page == state.page:
        return state
    return replace(state, page=page)

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from swrzee_admin.app.logger import get_logger, log_action
from swrzee_admin.app.ui.listing import (
    Projection,
    ProjectionSpec,
    ProjectionState,
    Row,
    project,
    reclamp,
    toggle_sort,
)
from swrzee_admin.app.ui.view_state import ViewState, resolve_view_state
from swrzee_admin.sdk.exceptions import ApiError

Fetcher = Callable[[], list[Row]]


class CollectionController:
    """Fetch-on-demand collection with a client-side projection.

    ``invalidate`` is the single resync path after any mutation: the whole collection is
    fetched again instead of being patched locally. Failures are never retried here.
    """

    def __init__(
        self,
        module: str,
        fetch: Fetcher,
        spec: ProjectionSpec,
        *,
        items_per_page: int = 5,
        logger: logging.Logger | None = None,
    ) -> None:
        self.module = module
        self.spec = spec
        self._fetch = fetch
        self._logger = logger or get_logger(__name__)
        self.items: list[Row] = []
        self.loading = False
        self.error: str | None = None
        self.loaded_once = False
        self.state = ProjectionState.initial(spec, items_per_page=items_per_page)

    def load(self) -> bool:
        self.loading = True
        self.error = None
        try:
            items = self._fetch()
        except ApiError as error:
            self.error = error.message
            log_action(self._logger, self.module, "load", None, "error", code=error.code, status=error.status_code)
            return False
        finally:
            self.loading = False
        self.items = list(items)
        self.loaded_once = True
        self.state = reclamp(self.state, self.items, self.spec)
        log_action(self._logger, self.module, "load", None, "success", count=len(self.items))
        return True

    def invalidate(self) -> bool:
        return self.load()

    @property
    def projection(self) -> Projection:
        return project(self.items, self.state, self.spec)

    @property
    def view_state(self) -> ViewState:
        return resolve_view_state(
            loading=self.loading,
            has_data=bool(self.items),
            error=self.error,
            loaded=self.loaded_once,
        )

    def set_search(self, query: str) -> None:
        self._update(replace(self.state, search_query=query))

    def set_include_excluded(self, include: bool) -> None:
        self._update(replace(self.state, include_excluded=include, page=1))

    def set_page(self, page: int) -> None:
        self._update(replace(self.state, page=page))

    def next_page(self) -> None:
        self.set_page(self.state.page + 1)

    def prev_page(self) -> None:
        self.set_page(self.state.page - 1)

    def toggle_sort(self, sort_field: str) -> None:
        if self.spec.sortable_fields and sort_field not in self.spec.sortable_fields:
            raise ValueError(f"{self.module}: '{sort_field}' is not sortable")
        self._update(toggle_sort(self.state, sort_field))

    def _update(self, state: ProjectionState) -> None:
        self.state = reclamp(state, self.items, self.spec)

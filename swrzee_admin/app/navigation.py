from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Generic, TypeVar
from urllib.parse import parse_qs, urlencode, urlsplit

from swrzee_admin.app.logger import get_logger, log_action
from swrzee_admin.app.session_guard import DASHBOARD_PATH, ENTRY_PATH, SessionGuard, normalize_path

TAB_PARAM = "tab"

logger = get_logger(__name__)

PopStateListener = Callable[[str], None]
ViewT = TypeVar("ViewT")


class DashboardView(str, Enum):
    OVERVIEW = "overview"
    USERS = "users"
    SERVICES = "services"
    BATCHES = "batches"

    @classmethod
    def default(cls) -> "DashboardView":
        return cls.OVERVIEW

    @classmethod
    def from_query(cls, value: str | None) -> "DashboardView":
        if not value:
            return cls.default()
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.default()

    @property
    def label(self) -> str:
        return self.value.capitalize()


def view_url(view: DashboardView) -> str:
    if view is DashboardView.OVERVIEW:
        return DASHBOARD_PATH
    return f"{DASHBOARD_PATH}?{urlencode({TAB_PARAM: view.value})}"


def view_from_url(url: str) -> DashboardView:
    values = parse_qs(urlsplit(url).query).get(TAB_PARAM)
    return DashboardView.from_query(values[0] if values else None)


class BrowserHistory:
    """Session history stack with the browser's semantics.

    ``push`` drops forward entries, ``replace`` rewrites the current entry in place, and
    pop-state listeners fire only on ``back``/``forward``.
    """

    def __init__(self, initial: str = ENTRY_PATH) -> None:
        self._entries = [initial]
        self._index = 0
        self._listeners: list[PopStateListener] = []

    @property
    def location(self) -> str:
        return self._entries[self._index]

    @property
    def length(self) -> int:
        return len(self._entries)

    def push(self, url: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(url)
        self._index += 1

    def replace(self, url: str) -> None:
        self._entries[self._index] = url

    def back(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        self._emit()
        return True

    def forward(self) -> bool:
        if self._index >= len(self._entries) - 1:
            return False
        self._index += 1
        self._emit()
        return True

    def add_pop_state_listener(self, listener: PopStateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        # Earlier listeners may replace the entry (guard redirects); later ones see the result.
        for listener in list(self._listeners):
            listener(self.location)


class ViewRouter(Generic[ViewT]):
    """Keeps the active dashboard tab and the ``tab`` query parameter in agreement."""

    def __init__(
        self,
        history: BrowserHistory,
        views: Mapping[DashboardView, Callable[[], ViewT]] | None = None,
    ) -> None:
        missing = [view.value for view in DashboardView if views is not None and view not in views]
        if missing:
            raise ValueError(f"views missing for tabs: {', '.join(missing)}")
        self._history = history
        self._views = dict(views or {})
        self.active_view = view_from_url(history.location)
        self._unsubscribe: Callable[[], None] | None = history.add_pop_state_listener(self._on_pop_state)

    def select_view(self, view: DashboardView) -> None:
        self.active_view = view
        self._history.replace(view_url(view))
        log_action(logger, module="router", action="select_view", actor_role=None, outcome="ok", view=view.value)

    def render(self) -> ViewT:
        return self._views[self.active_view]()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_pop_state(self, url: str) -> None:
        if normalize_path(url) != DASHBOARD_PATH:
            return
        self.active_view = view_from_url(url)


class Navigator:
    """Routes every navigation, including back/forward, through the session guard."""

    def __init__(self, history: BrowserHistory, guard: SessionGuard) -> None:
        self.history = history
        self._guard = guard
        self._unsubscribe = history.add_pop_state_listener(lambda _url: self.enforce())

    @property
    def location(self) -> str:
        return self.history.location

    def navigate(self, path: str) -> str:
        self.history.push(path)
        return self.enforce()

    def redirect(self, path: str) -> str:
        self.history.replace(path)
        return self.enforce()

    def enforce(self) -> str:
        seen: set[str] = set()
        while True:
            decision = self._guard.check_path(self.history.location)
            if decision.redirect_to is None or decision.redirect_to in seen:
                return self.history.location
            seen.add(decision.redirect_to)
            self.history.replace(decision.redirect_to)

    def close(self) -> None:
        self._unsubscribe()

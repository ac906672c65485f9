from __future__ import annotations

from typing import Union

from swrzee_admin.app.logger import set_level
from swrzee_admin.app.navigation import BrowserHistory, DashboardView, Navigator, ViewRouter, view_url
from swrzee_admin.app.session_guard import GuardDecision, SessionGuard
from swrzee_admin.app.ui.views.batches_view import BatchesView
from swrzee_admin.app.ui.views.login_view import LoginView
from swrzee_admin.app.ui.views.overview_view import OverviewView
from swrzee_admin.app.ui.views.services_view import ServicesView
from swrzee_admin.app.ui.views.users_view import UsersView
from swrzee_admin.sdk import ApiSession, ClientConfig, load_config

DashboardPanel = Union[OverviewView, UsersView, ServicesView, BatchesView]


class DashboardBootstrap:
    def __init__(
        self,
        config: ClientConfig | None = None,
        session: ApiSession | None = None,
        history: BrowserHistory | None = None,
    ) -> None:
        self.config = config or load_config()
        set_level(self.config.log_level)
        self.session = session or ApiSession(self.config)
        self.history = history or BrowserHistory()
        self.guard = SessionGuard(self.session._store())
        self.navigator = Navigator(self.history, self.guard)

        ipp = self.config.items_per_page
        year = self.config.effective_batch_year
        self.overview = OverviewView(lambda: self.session.admin_client().dashboard())
        self.users = UsersView(self.session, items_per_page=ipp, batch_year=year)
        self.services = ServicesView(self.session, items_per_page=ipp)
        self.batches = BatchesView(self.session, year=year, items_per_page=ipp)
        self.login_view = LoginView(self.session, self.navigator, self.guard)
        self.router: ViewRouter[DashboardPanel] = ViewRouter(
            self.history,
            views={
                DashboardView.OVERVIEW: lambda: self.overview,
                DashboardView.USERS: lambda: self.users,
                DashboardView.SERVICES: lambda: self.services,
                DashboardView.BATCHES: lambda: self.batches,
            },
        )

    def open_dashboard(self, view: DashboardView | None = None) -> tuple[GuardDecision, DashboardPanel | None]:
        """Navigate to the dashboard tab and load its panel once the session checks pass."""
        target = view or DashboardView.default()
        self.navigator.navigate(view_url(target))
        decision = self.guard.require_session(target.value)
        if not decision.should_render:
            if decision.redirect_to is not None:
                self.history.replace(decision.redirect_to)
            return decision, None
        self.router.select_view(target)
        panel = self.router.render()
        panel.load()
        return decision, panel

    def close(self) -> None:
        self.router.close()
        self.navigator.close()

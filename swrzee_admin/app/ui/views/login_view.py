from __future__ import annotations

from dataclasses import dataclass

from swrzee_admin.app.logger import get_logger, log_action
from swrzee_admin.app.navigation import Navigator
from swrzee_admin.app.session_guard import DASHBOARD_PATH, ENTRY_PATH, GuardDecision, SessionGuard
from swrzee_admin.app.ui.dialogs import CreateAdminDialog, RegisterSuperAdminDialog
from swrzee_admin.app.ui.forms import validate_login
from swrzee_admin.sdk.exceptions import ApiError
from swrzee_admin.sdk.models import SessionData
from swrzee_admin.sdk.session import ApiSession

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoginOutcome:
    ok: bool
    session: SessionData | None = None
    next_path: str | None = None
    error: str | None = None


class LoginView:
    """Login portal: validates input, persists the session and routes by role.

    Opening the portal with a session cookie present forwards to the dashboard instead.
    A super admin lands on the admin-creation dialog; closing it returns to the entry view.
    Everyone else goes straight to the dashboard.
    """

    def __init__(self, session: ApiSession, navigator: Navigator, guard: SessionGuard) -> None:
        self._session = session
        self._navigator = navigator
        self._guard = guard
        self.loading = False
        self.error: str | None = None
        self.admin_dialog: CreateAdminDialog | None = None
        self.super_admin_dialog: RegisterSuperAdminDialog | None = None

    def open(self) -> GuardDecision:
        decision = self._guard.guard_entry()
        if decision.redirect_to is not None:
            self._navigator.redirect(decision.redirect_to)
        return decision

    def submit(self, email: str, password: str) -> LoginOutcome:
        self.error = None
        entry = self.open()
        if not entry.should_render:
            return LoginOutcome(ok=False, next_path=self._navigator.location)

        form = validate_login(email, password)
        if not form.is_valid:
            self.error = form.first_error
            return LoginOutcome(ok=False, error=self.error)

        self.loading = True
        try:
            login = self._session.auth_client().login(form.values["email"], form.values["password"])
        except ApiError as error:
            self.error = error.message
            log_action(logger, "login", "submit", None, "error", code=error.code)
            return LoginOutcome(ok=False, error=self.error)
        finally:
            self.loading = False

        session = self._session.establish(login)
        role = session.user.role if session.user else None
        log_action(logger, "login", "submit", role, "success")
        if session.user is not None and session.user.is_superadmin:
            self.admin_dialog = CreateAdminDialog(self._session.admin_client())
            return LoginOutcome(ok=True, session=session)
        return LoginOutcome(ok=True, session=session, next_path=self._navigator.navigate(DASHBOARD_PATH))

    def close_admin_dialog(self) -> str:
        if self.admin_dialog is not None:
            self.admin_dialog.cancel()
            self.admin_dialog = None
        return self._navigator.navigate(ENTRY_PATH)

    def open_super_admin_dialog(self) -> RegisterSuperAdminDialog:
        self.super_admin_dialog = RegisterSuperAdminDialog(self._session.auth_client())
        return self.super_admin_dialog

    def close_super_admin_dialog(self) -> str:
        if self.super_admin_dialog is not None:
            self.super_admin_dialog.cancel()
            self.super_admin_dialog = None
        return self._navigator.navigate(ENTRY_PATH)

    def logout(self) -> str:
        self._session.clear()
        log_action(logger, "login", "logout", None, "success")
        return self._navigator.navigate(ENTRY_PATH)

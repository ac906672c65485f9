from __future__ import annotations

import base64
import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import urlsplit

from swrzee_admin.app.logger import get_logger, log_action
from swrzee_admin.sdk.auth_store import AuthStore

ENTRY_PATH = "/"
LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
PUBLIC_PATHS = frozenset({ENTRY_PATH, LOGIN_PATH})

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionValidation:
    valid: bool
    reason: str | None = None


@dataclass(frozen=True)
class GuardDecision:
    allowed: bool
    redirect_to: str | None = None
    reason: str | None = None
    replace: bool = True

    @property
    def should_render(self) -> bool:
        return self.allowed and self.redirect_to is None


ALLOW = GuardDecision(allowed=True)


def validate_token(token: str | None, now_utc: datetime | None = None) -> SessionValidation:
    """Missing tokens and JWTs past their ``exp`` are invalid; opaque tokens are left to the server."""
    if not token:
        return SessionValidation(valid=False, reason="missing_token")

    parts = token.split(".")
    if len(parts) != 3:
        return SessionValidation(valid=True)

    payload_part = parts[1]
    padded = payload_part + ("=" * (-len(payload_part) % 4))
    try:
        decoded = base64.urlsafe_b64decode(padded.encode("utf-8")).decode("utf-8")
        payload = json.loads(decoded)
    except (ValueError, UnicodeDecodeError):
        return SessionValidation(valid=True)

    exp = payload.get("exp") if isinstance(payload, dict) else None
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        return SessionValidation(valid=True)

    now = now_utc or datetime.now(tz=timezone.utc)
    if float(exp) <= now.timestamp():
        return SessionValidation(valid=False, reason="expired_token")
    return SessionValidation(valid=True)


def normalize_path(path: str) -> str:
    clean = urlsplit(path).path or ENTRY_PATH
    if len(clean) > 1:
        clean = clean.rstrip("/")
    return clean


def is_public_path(path: str) -> bool:
    return normalize_path(path) in PUBLIC_PATHS


def is_protected_path(path: str) -> bool:
    clean = normalize_path(path)
    return clean == DASHBOARD_PATH or clean.startswith(DASHBOARD_PATH + "/")


class SessionGuard:
    """Auth gate evaluated on every navigation; nothing is cached between checks.

    Protected views consult the durable store, the entry view and path-level checks consult
    the cookie mirror. Redirects are always replace-navigations.
    """

    def __init__(
        self,
        auth_store: AuthStore,
        on_redirect: Callable[[GuardDecision], None] | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._auth_store = auth_store
        self._on_redirect = on_redirect
        self._now = now or (lambda: datetime.now(tz=timezone.utc))

    def require_session(self, view: str) -> GuardDecision:
        validation = validate_token(self._auth_store.read().access_token, self._now())
        if validation.valid:
            return ALLOW
        return self._redirect(ENTRY_PATH, validation.reason or "invalid_session", view)

    def guard_entry(self) -> GuardDecision:
        validation = validate_token(self._auth_store.cookie_token(), self._now())
        if not validation.valid:
            return ALLOW
        return self._redirect(DASHBOARD_PATH, "session_present", "entry")

    def check_path(self, path: str) -> GuardDecision:
        if is_public_path(path):
            return self.guard_entry()
        if not is_protected_path(path):
            return ALLOW
        validation = validate_token(self._auth_store.cookie_token(), self._now())
        if validation.valid:
            return ALLOW
        return self._redirect(ENTRY_PATH, validation.reason or "invalid_session", normalize_path(path))

    def _redirect(self, target: str, reason: str, view: str) -> GuardDecision:
        decision = GuardDecision(allowed=False, redirect_to=target, reason=reason)
        log_action(logger, module=view, action="guard.redirect", actor_role=None, outcome=reason, redirect_to=target)
        if self._on_redirect is not None:
            self._on_redirect(decision)
        return decision

from __future__ import annotations

from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.admin import AdminClient
from .clients.auth import AuthClient
from .clients.batches import BatchesClient
from .clients.services import ServicesClient
from .clients.users import UsersClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import LoginData, SessionData, UserProfile
from .storage import LocalStorage


@dataclass
class ApiSession:
    """Binds the config, the persisted session and the per-resource clients.

    The token is re-read from the auth store for every client so a logout done
    elsewhere is seen by the next call.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        if self.auth_store is None:
            self.auth_store = AuthStore(
                storage=LocalStorage(base_dir=self.config.data_dir),
                cookie_domain=self.config.cookie_domain,
                cookie_days=self.config.cookie_days,
            )
        if self.http is None:
            self.http = HttpClient(config=self.config)

    @property
    def access_token(self) -> str | None:
        return self.read().access_token

    @property
    def user(self) -> UserProfile | None:
        return self.read().user

    def read(self) -> SessionData:
        return self._store().read()

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self._http())

    def admin_client(self) -> AdminClient:
        return AdminClient(http=self._http(), access_token=self.access_token)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self._http(), access_token=self.access_token)

    def services_client(self) -> ServicesClient:
        return ServicesClient(http=self._http(), access_token=self.access_token)

    def batches_client(self) -> BatchesClient:
        return BatchesClient(http=self._http(), access_token=self.access_token)

    def establish(self, login: LoginData) -> SessionData:
        session = login.to_session()
        self._store().store(session)
        return session

    def clear(self) -> None:
        self._store().clear()

    def _store(self) -> AuthStore:
        if self.auth_store is None:
            raise RuntimeError("auth store not initialized")
        return self.auth_store

    def _http(self) -> HttpClient:
        if self.http is None:
            raise RuntimeError("HTTP client not initialized")
        return self.http

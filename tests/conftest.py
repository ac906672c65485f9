from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from swrzee_admin.sdk import ApiSession, AuthStore, ClientConfig, LocalStorage, SessionData, TokenPair, UserProfile

BASE_URL = "https://api.example.com"


def make_jwt(payload: dict) -> str:
    def _segment(data: dict) -> str:
        raw = json.dumps(data).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    return f"{_segment({'alg': 'HS256', 'typ': 'JWT'})}.{_segment(payload)}.signature"


def make_session(token: str = "token-abc", role: str = "admin") -> SessionData:
    return SessionData(
        user=UserProfile.model_validate(
            {
                "_id": "u-1",
                "userId": "SWZ001",
                "firstName": "Asha",
                "lastName": "Rao",
                "email": "asha@example.com",
                "phoneNumber": "9999999999",
                "role": role,
                "profileComplete": True,
                "department": "Ops",
            }
        ),
        tokens=TokenPair.model_validate({"accessToken": token, "refreshToken": "refresh-abc"}),
    )


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path) -> None:
    for key in (
        "SWRZEE_ENV",
        "SWRZEE_API_BASE_URL_TEST",
        "SWRZEE_API_BASE_URL_DEV",
        "SWRZEE_TIMEOUT_SECONDS",
        "SWRZEE_VERIFY_SSL",
        "SWRZEE_COOKIE_DAYS",
        "SWRZEE_ITEMS_PER_PAGE",
        "SWRZEE_BATCH_YEAR",
        "SWRZEE_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SWRZEE_API_BASE_URL", BASE_URL)
    monkeypatch.setenv("SWRZEE_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture
def config(tmp_path: Path) -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, data_dir=tmp_path / "data", batch_year=2025)


@pytest.fixture
def auth_store(tmp_path: Path) -> AuthStore:
    return AuthStore(storage=LocalStorage(base_dir=tmp_path / "data"), cookie_domain="api.example.com")


@pytest.fixture
def api_session(config: ClientConfig, auth_store: AuthStore) -> ApiSession:
    return ApiSession(config, auth_store=auth_store)


@pytest.fixture
def signed_in(auth_store: AuthStore) -> SessionData:
    session = make_session()
    auth_store.store(session)
    return session

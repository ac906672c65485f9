from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from http.cookiejar import MozillaCookieJar
from pathlib import Path
from typing import Callable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError
from requests.cookies import create_cookie

from .models import SessionData, TokenPair, UserProfile
from .storage import LocalStorage, default_data_dir

USER_DATA_KEY = "userData"
TOKENS_KEY = "tokens"
ACCESS_TOKEN_COOKIE = "accessToken"
DEFAULT_COOKIE_DAYS = 7

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class AuthStore:
    """Persisted session: profile and token pair in durable storage, access token mirrored in a cookie.

    The cookie mirror is what navigation-time checks read, so every ``store`` writes it and every
    ``clear`` removes it together with the storage entries.
    """

    storage: LocalStorage = field(default_factory=LocalStorage)
    cookie_file: Path | None = None
    cookie_domain: str = "localhost"
    cookie_days: int = DEFAULT_COOKIE_DAYS
    clock: Callable[[], float] = time.time

    def _cookie_path(self) -> Path:
        if self.cookie_file is not None:
            self.cookie_file.parent.mkdir(parents=True, exist_ok=True)
            return self.cookie_file
        base = self.storage.base_dir or default_data_dir()
        base.mkdir(parents=True, exist_ok=True)
        return base / "cookies.txt"

    def _jar(self) -> MozillaCookieJar:
        path = self._cookie_path()
        jar = MozillaCookieJar(str(path))
        if path.exists():
            try:
                jar.load(ignore_discard=True, ignore_expires=True)
            except OSError:
                logger.warning("cookie file %s is unreadable; treating as empty", path)
                jar.clear()
        return jar

    def store(self, session: SessionData) -> None:
        if session.tokens is None or not session.tokens.access_token:
            raise ValueError("cannot store a session without an access token")
        if session.user is not None:
            self.storage.set_item(USER_DATA_KEY, json.dumps(session.user.model_dump(by_alias=True)))
        else:
            self.storage.remove_item(USER_DATA_KEY)
        self.storage.set_item(TOKENS_KEY, json.dumps(session.tokens.model_dump(by_alias=True)))

        jar = self._jar()
        jar.set_cookie(
            create_cookie(
                ACCESS_TOKEN_COOKIE,
                session.tokens.access_token,
                domain=self.cookie_domain,
                path="/",
                expires=int(self.clock()) + self.cookie_days * 24 * 60 * 60,
            )
        )
        jar.save(ignore_discard=True, ignore_expires=True)

    def read(self) -> SessionData:
        return SessionData(
            user=self._read_model(USER_DATA_KEY, UserProfile),
            tokens=self._read_model(TOKENS_KEY, TokenPair),
        )

    def clear(self) -> None:
        self.storage.remove_item(USER_DATA_KEY)
        self.storage.remove_item(TOKENS_KEY)
        jar = self._jar()
        doomed = [cookie for cookie in jar if cookie.name == ACCESS_TOKEN_COOKIE]
        if not doomed:
            return
        for cookie in doomed:
            jar.clear(cookie.domain, cookie.path, cookie.name)
        jar.save(ignore_discard=True, ignore_expires=True)

    def cookie_token(self) -> str | None:
        now = self.clock()
        for cookie in self._jar():
            if cookie.name != ACCESS_TOKEN_COOKIE or not cookie.value:
                continue
            if cookie.is_expired(now):
                continue
            return cookie.value
        return None

    def _read_model(self, key: str, model: type[ModelT]) -> ModelT | None:
        raw = self.storage.get_item(key)
        if raw is None:
            return None
        try:
            return model.model_validate(json.loads(raw))
        except (ValueError, ModelValidationError):
            logger.warning("stored %s is malformed; ignoring it", key)
            return None

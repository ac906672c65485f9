from __future__ import annotations

from typing import Any

from pydantic import ValidationError as ModelValidationError

from ..exceptions import MalformedResponseError
from ..models import LoginData
from .base import BaseClient


class AuthClient(BaseClient):
    def login(self, email: str, password: str) -> LoginData:
        envelope = self.http.request(
            "POST",
            "/auth/login-with-password",
            json_body={"email": email, "password": password},
            fallback_message="Login failed",
        )
        try:
            return LoginData.model_validate(envelope.data)
        except ModelValidationError as exc:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Login failed",
                status_code=200,
                raw_payload=envelope.model_dump(),
            ) from exc

    def register_super_admin(self, payload: dict[str, Any]) -> Any:
        envelope = self.http.request(
            "POST",
            "/auth/register-super-admin",
            json_body=payload,
            fallback_message="Failed to create super admin",
        )
        return envelope.data

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..exceptions import MalformedResponseError
from ..http_client import HttpClient
from ..models import ApiEnvelope


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(self, method: str, path: str, **kwargs: Any) -> ApiEnvelope:
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)

    @staticmethod
    def _records(envelope: ApiEnvelope, fallback_message: str, key: str | None = None) -> list[dict[str, Any]]:
        data = envelope.data
        if key is not None:
            data = data.get(key) if isinstance(data, dict) else None
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=fallback_message,
                status_code=200,
                raw_payload=envelope.model_dump(),
            )
        return data

    @staticmethod
    def _record(envelope: ApiEnvelope, fallback_message: str, key: str | None = None) -> dict[str, Any]:
        data = envelope.data
        if key is not None:
            data = data.get(key) if isinstance(data, dict) else None
        if not isinstance(data, dict):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=fallback_message,
                status_code=200,
                raw_payload=envelope.model_dump(),
            )
        return data

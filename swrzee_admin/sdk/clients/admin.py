from __future__ import annotations

from typing import Any

from pydantic import ValidationError as ModelValidationError

from ..exceptions import MalformedResponseError
from ..models import DashboardData
from .base import BaseClient


class AdminClient(BaseClient):
    def create_admin(self, payload: dict[str, Any]) -> Any:
        envelope = self._request("POST", "/admin", json_body=payload, fallback_message="Failed to create admin")
        return envelope.data

    def dashboard(self) -> DashboardData:
        fallback = "Failed to fetch dashboard data"
        envelope = self._request("GET", "/admin/dashboard", fallback_message=fallback)
        try:
            return DashboardData.model_validate(envelope.data)
        except ModelValidationError as exc:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=fallback,
                status_code=200,
                raw_payload=envelope.model_dump(),
            ) from exc

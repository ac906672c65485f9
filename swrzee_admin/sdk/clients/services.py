from __future__ import annotations

from typing import Any

from .base import BaseClient

COURSE_CATEGORY = "Course"


class ServicesClient(BaseClient):
    def list_services(self, *, category: str = COURSE_CATEGORY, active_only: bool = True) -> list[dict[str, Any]]:
        fallback = "Failed to fetch services"
        params = {"category": category, "isActive": "true" if active_only else "false"}
        envelope = self._request("GET", "/services", params=params, fallback_message=fallback)
        return self._records(envelope, fallback)

    def create_service(self, payload: dict[str, Any]) -> Any:
        envelope = self._request("POST", "/services", json_body=payload, fallback_message="Failed to create service")
        return envelope.data

    def delete_service(self, service_id: str) -> None:
        self._request("DELETE", f"/services/{service_id}", fallback_message="Failed to delete service")

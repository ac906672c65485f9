from __future__ import annotations

from typing import Any

from .base import BaseClient

RUNNING_STATUS = "running"


class BatchesClient(BaseClient):
    def list_batches(self, *, year: int, status: str = RUNNING_STATUS) -> list[dict[str, Any]]:
        fallback = "Failed to fetch batches"
        envelope = self._request(
            "GET",
            "/batches",
            params={"status": status, "year": str(year)},
            fallback_message=fallback,
        )
        return self._records(envelope, fallback)

    def create_batch(self, payload: dict[str, Any]) -> Any:
        envelope = self._request("POST", "/batches", json_body=payload, fallback_message="Failed to create batch")
        return envelope.data

    def delete_batch(self, batch_id: str) -> None:
        self._request("DELETE", f"/batches/{batch_id}", fallback_message="Failed to delete batch")

    def add_student(self, batch_id: str, user_id: str) -> Any:
        envelope = self._request(
            "POST",
            f"/batches/{batch_id}/students/{user_id}",
            fallback_message="Failed to assign batch",
        )
        return envelope.data

    def remove_student(self, batch_id: str, user_id: str) -> None:
        self._request(
            "DELETE",
            f"/batches/{batch_id}/students/{user_id}",
            fallback_message="Failed to remove student",
        )

from __future__ import annotations

from typing import Any

from .base import BaseClient


class UsersClient(BaseClient):
    def list_users(self) -> list[dict[str, Any]]:
        fallback = "Failed to fetch users"
        envelope = self._request("GET", "/users", fallback_message=fallback)
        return self._records(envelope, fallback, key="users")

    def get_user(self, user_id: str) -> dict[str, Any]:
        fallback = "Failed to fetch user details"
        envelope = self._request("GET", f"/users/{user_id}", fallback_message=fallback)
        return self._record(envelope, fallback, key="user")

    def update_user(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        fallback = "Failed to update user"
        envelope = self._request("PUT", f"/users/{user_id}", json_body=payload, fallback_message=fallback)
        return self._record(envelope, fallback, key="user")

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/users/{user_id}", fallback_message="Failed to delete user")

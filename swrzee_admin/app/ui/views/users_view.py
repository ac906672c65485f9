from __future__ import annotations

from typing import Any

from swrzee_admin.app.logger import get_logger, log_action
from swrzee_admin.app.ui.collection import CollectionController
from swrzee_admin.app.ui.dialogs import AssignBatchDialog, DeleteDialog, EditUserDialog
from swrzee_admin.app.ui.listing import ProjectionSpec, Row, SortOrder
from swrzee_admin.sdk.exceptions import ApiError
from swrzee_admin.sdk.session import ApiSession

ADMIN_MARKER = "ADMIN"
SUPER_ADMIN_MARKER = "SADMIN"

USER_COLUMNS = [
    ("firstName", "First name"),
    ("lastName", "Last name"),
    ("email", "Email"),
    ("role", "Role"),
    ("activeStatus", "Active"),
    ("paymentStatus", "Payment"),
    ("userId", "User ID"),
    ("batchId", "Batch"),
]

logger = get_logger(__name__)


def is_admin_row(user: Row) -> bool:
    return ADMIN_MARKER in str(user.get("userId") or "")


USERS_SPEC = ProjectionSpec(
    search_fields=("firstName", "lastName", "email", "phoneNumber", "_id", "userId"),
    sortable_fields=("firstName", "email", "role", "activeStatus", "paymentStatus", "userId", "batchId"),
    default_sort="firstName",
    default_order=SortOrder.ASC,
    exclude=is_admin_row,
)


def user_stats(users: list[Row]) -> dict[str, int]:
    stats = {"total": len(users), "regular": 0, "admin": 0, "superadmin": 0}
    for user in users:
        user_id = str(user.get("userId") or "")
        if SUPER_ADMIN_MARKER in user_id:
            stats["superadmin"] += 1
        elif ADMIN_MARKER in user_id:
            stats["admin"] += 1
        else:
            stats["regular"] += 1
    return stats


def display_row(user: Row) -> dict[str, Any]:
    """Admin accounts show masked identifiers and no batch assignment."""
    row = dict(user)
    row["activeStatus"] = "Active" if user.get("activeStatus") else "Inactive"
    row["paymentStatus"] = "Paid" if user.get("paymentStatus") else "Pending"
    if is_admin_row(user):
        row["userId"] = "Hidden"
        row["batchId"] = "Executive"
    elif user.get("batchId"):
        row["batchId"] = "Assigned"
    else:
        row["batchId"] = "Unassigned"
    return row


def row_actions(user: Row) -> list[str]:
    if is_admin_row(user):
        return ["view"]
    actions = ["view", "edit", "delete"]
    if not user.get("batchId"):
        actions.append("assign")
    return actions


class UsersView:
    def __init__(self, session: ApiSession, *, items_per_page: int = 5, batch_year: int | None = None) -> None:
        self._session = session
        self.batch_year = batch_year
        self.controller = CollectionController(
            "users",
            lambda: self._session.users_client().list_users(),
            USERS_SPEC,
            items_per_page=items_per_page,
        )
        self.details: dict[str, Any] | None = None
        self.details_error: str | None = None

    def load(self) -> bool:
        return self.controller.load()

    def invalidate(self, _result: Any = None) -> bool:
        return self.controller.invalidate()

    @property
    def stats(self) -> dict[str, int]:
        return user_stats(self.controller.items)

    def rows(self) -> list[dict[str, Any]]:
        return [display_row(user) for user in self.controller.projection.rows]

    def show_admins(self, include: bool) -> None:
        self.controller.set_include_excluded(include)

    def load_details(self, user_id: str) -> dict[str, Any] | None:
        self.details = None
        self.details_error = None
        try:
            self.details = self._session.users_client().get_user(user_id)
        except ApiError as error:
            self.details_error = error.message
            log_action(logger, "users", "details", None, "error", code=error.code)
        return self.details

    def edit_dialog(self, user: Row) -> EditUserDialog:
        return EditUserDialog(self._session.users_client(), user, on_success=self.invalidate)

    def assign_batch_dialog(self, user: Row) -> AssignBatchDialog:
        dialog = AssignBatchDialog(
            self._session.batches_client(),
            user,
            on_success=self.invalidate,
            year=self.batch_year,
        )
        dialog.load_options()
        return dialog

    def delete_dialog(self, user: Row) -> DeleteDialog:
        name = " ".join(str(user.get(key) or "") for key in ("firstName", "lastName")).strip()
        return DeleteDialog(
            str(user["_id"]),
            self._session.users_client().delete_user,
            on_success=self.invalidate,
            title="Delete User",
            message=f"Are you sure you want to delete {name or 'this user'}? This action cannot be undone.",
            operation="users.delete",
        )

from __future__ import annotations

import math
from datetime import date
from typing import Any

from swrzee_admin.app.logger import get_logger, log_action
from swrzee_admin.app.ui.collection import CollectionController
from swrzee_admin.app.ui.dialogs import CreateBatchDialog, DeleteDialog, RemoveStudentDialog
from swrzee_admin.app.ui.listing import ProjectionSpec, Row
from swrzee_admin.app.ui.views.overview_view import parse_timestamp
from swrzee_admin.sdk.exceptions import ApiError
from swrzee_admin.sdk.session import ApiSession

MISSING_DATE = "N/A"

BATCH_COLUMNS = [
    ("batchId", "Batch ID"),
    ("programName", "Program"),
    ("startDate", "Start"),
    ("endDate", "End"),
    ("duration", "Duration"),
    ("totalFee", "Fee"),
    ("students", "Students"),
]

BATCHES_SPEC = ProjectionSpec(
    search_fields=("batchId", "programName"),
    sortable_fields=("batchId", "programName", "startDate", "totalFee"),
)

logger = get_logger(__name__)


def format_date(value: str | None) -> str:
    """``2025-01-05T00:00:00Z`` -> ``Jan 5, 2025``."""
    stamp = parse_timestamp(value)
    if stamp is None:
        return MISSING_DATE
    return f"{stamp.strftime('%b')} {stamp.day}, {stamp.year}"


def batch_duration(start_value: str | None, end_value: str | None) -> str:
    start = parse_timestamp(start_value)
    end = parse_timestamp(end_value)
    if start is None or end is None:
        return MISSING_DATE
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day - start.day > 0:
        months += 1
    if months == 0:
        days = math.ceil((end - start).total_seconds() / 86400)
        return f"{days} days"
    if months == 1:
        return "1 month"
    return f"{months} months"


def display_row(batch: Row) -> dict[str, Any]:
    row = dict(batch)
    row["startDate"] = format_date(batch.get("startDate"))
    row["endDate"] = format_date(batch.get("endDate"))
    row["duration"] = batch_duration(batch.get("startDate"), batch.get("endDate"))
    students = batch.get("students") or []
    row["students"] = f"View Students ({len(students)})" if students else "No Students"
    return row


class BatchStudentsPanel:
    """Enrolled students of one batch, fetched one user record at a time."""

    def __init__(self, view: "BatchesView", batch: Row) -> None:
        self._view = view
        self.batch = batch
        self.students: list[dict[str, Any]] = []
        self.loading = False
        self.error: str | None = None

    @property
    def student_ids(self) -> list[str]:
        return [str(student_id) for student_id in self.batch.get("students") or []]

    def load(self) -> bool:
        self.loading = True
        self.error = None
        client = self._view.session.users_client()
        try:
            self.students = [client.get_user(student_id) for student_id in self.student_ids]
        except ApiError as error:
            self.error = "Failed to load students"
            log_action(logger, "batches", "students.load", None, "error", code=error.code)
            return False
        finally:
            self.loading = False
        return True

    def remove_dialog(self, student_id: str) -> RemoveStudentDialog:
        return RemoveStudentDialog(
            self._view.session.batches_client(),
            str(self.batch["_id"]),
            student_id,
            on_success=self._student_removed,
        )

    def _student_removed(self, _student_id: str) -> None:
        self._view.invalidate()
        refreshed = self._view.find(str(self.batch["_id"]))
        if refreshed is not None:
            self.batch = refreshed
        self.load()


class BatchesView:
    def __init__(self, session: ApiSession, *, year: int | None = None, items_per_page: int = 5) -> None:
        self.session = session
        self.year = year or date.today().year
        self.controller = CollectionController(
            "batches",
            lambda: self.session.batches_client().list_batches(year=self.year),
            BATCHES_SPEC,
            items_per_page=items_per_page,
        )

    def load(self) -> bool:
        return self.controller.load()

    def invalidate(self, _result: Any = None) -> bool:
        return self.controller.invalidate()

    def rows(self) -> list[dict[str, Any]]:
        return [display_row(batch) for batch in self.controller.projection.rows]

    def find(self, batch_id: str) -> Row | None:
        return next((batch for batch in self.controller.items if str(batch.get("_id")) == batch_id), None)

    def students_panel(self, batch: Row) -> BatchStudentsPanel:
        panel = BatchStudentsPanel(self, batch)
        panel.load()
        return panel

    def create_dialog(self) -> CreateBatchDialog:
        dialog = CreateBatchDialog(
            self.session.batches_client(),
            on_success=self.invalidate,
            services_client=self.session.services_client(),
            year=self.year,
        )
        dialog.load_options()
        return dialog

    def delete_dialog(self, batch: Row) -> DeleteDialog:
        return DeleteDialog(
            str(batch["_id"]),
            self.session.batches_client().delete_batch,
            on_success=self.invalidate,
            title="Delete Batch",
            message=f"Are you sure you want to delete batch {batch.get('batchId') or ''}? This action cannot be undone.",
            operation="batches.delete",
        )

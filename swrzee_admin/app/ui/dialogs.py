from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from enum import Enum
from typing import Any

from swrzee_admin.app.logger import get_logger, log_action
from swrzee_admin.app.ui.forms import (
    DEFAULT_BATCH_DURATION,
    DEFAULT_COURSE_CREDIT,
    DEFAULT_GRACE_DAYS,
    DEFAULT_MIN_ATTENDANCE,
    FormResult,
    validate_batch_form,
    validate_service_form,
)
from swrzee_admin.sdk.clients.admin import AdminClient
from swrzee_admin.sdk.clients.auth import AuthClient
from swrzee_admin.sdk.clients.batches import BatchesClient
from swrzee_admin.sdk.clients.services import ServicesClient
from swrzee_admin.sdk.clients.users import UsersClient
from swrzee_admin.sdk.exceptions import ApiError, ValidationError

VALIDATION_SUMMARY = "Please fix the validation errors below."

OnSuccess = Callable[[Any], Any]

EDITABLE_USER_FIELDS = (
    "firstName",
    "lastName",
    "batchId",
    "department",
    "rollNumber",
    "semester",
    "institution",
    "fatherName",
    "address",
    "paymentStatus",
    "activeStatus",
    "courseCreditScore",
    "grade",
    "role",
)


class DialogStatus(str, Enum):
    OPEN = "open"
    SUBMITTING = "submitting"
    CLOSED = "closed"


class MutationDialog:
    """Modal form that performs exactly one request.

    On success the caller's ``on_success`` callback runs (normally a collection
    ``invalidate``) and the dialog closes. On failure it stays open with either the server
    message in ``error`` or per-field messages in ``field_errors``.
    """

    operation = "mutation"
    # form keys whose validation errors are reported under a different slot
    error_slots: dict[str, str] = {}

    def __init__(self, on_success: OnSuccess | None = None, *, logger: logging.Logger | None = None) -> None:
        self.on_success = on_success
        self.status = DialogStatus.OPEN
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}
        self.result: Any = None
        self.form: dict[str, Any] = {}
        self._logger = logger or get_logger(__name__)

    @property
    def is_open(self) -> bool:
        return self.status is not DialogStatus.CLOSED

    def update(self, **changes: Any) -> None:
        unknown = sorted(set(changes) - set(self.form))
        if unknown:
            raise KeyError(f"{self.operation}: unknown form fields {unknown}")
        self.form.update(changes)
        for key in changes:
            self.field_errors.pop(self.error_slots.get(key, key), None)

    def validate(self) -> FormResult | None:
        return None

    def submit(self) -> bool:
        if not self.is_open:
            raise RuntimeError(f"{self.operation}: dialog is already closed")
        self.error = None
        self.field_errors = {}

        values: dict[str, Any] = dict(self.form)
        form = self.validate()
        if form is not None:
            if not form.is_valid:
                self.field_errors = dict(form.field_errors)
                return False
            values = form.values

        self.status = DialogStatus.SUBMITTING
        try:
            result = self._perform(values)
        except ValidationError as error:
            self.status = DialogStatus.OPEN
            if error.field_errors:
                self.field_errors = dict(error.field_errors)
                self.error = VALIDATION_SUMMARY
            else:
                self.error = error.message
            log_action(self._logger, self.operation, "submit", None, "validation_error", code=error.code)
            return False
        except ApiError as error:
            self.status = DialogStatus.OPEN
            self.error = error.message
            log_action(self._logger, self.operation, "submit", None, "error", code=error.code, status=error.status_code)
            return False

        self.result = result
        self.status = DialogStatus.CLOSED
        log_action(self._logger, self.operation, "submit", None, "success")
        if self.on_success is not None:
            self.on_success(result)
        return True

    def cancel(self) -> None:
        self.status = DialogStatus.CLOSED

    def _perform(self, values: dict[str, Any]) -> Any:
        raise NotImplementedError


class CreateBatchDialog(MutationDialog):
    operation = "batches.create"

    def __init__(
        self,
        client: BatchesClient,
        on_success: OnSuccess | None = None,
        *,
        services_client: ServicesClient | None = None,
        year: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(on_success, logger=logger)
        self.client = client
        self.services_client = services_client
        self.available_services: list[dict[str, Any]] = []
        self.form = {
            "batchId": "",
            "programName": "",
            "courseCredit": DEFAULT_COURSE_CREDIT,
            "serviceId": "",
            "duration": DEFAULT_BATCH_DURATION,
            "startDate": "",
            "endDate": "",
            "year": year or date.today().year,
            "totalFee": "",
            "minPercentage": DEFAULT_MIN_ATTENDANCE,
            "graceDays": DEFAULT_GRACE_DAYS,
        }

    def load_options(self) -> list[dict[str, Any]]:
        if self.services_client is None:
            return self.available_services
        try:
            self.available_services = self.services_client.list_services()
        except ApiError as error:
            # The form stays usable with an empty service list.
            log_action(self._logger, self.operation, "load_options", None, "error", code=error.code)
        return self.available_services

    def validate(self) -> FormResult:
        return validate_batch_form(
            self.form["batchId"],
            self.form["programName"],
            self.form["serviceId"],
            self.form["startDate"],
            self.form["endDate"],
            self.form["totalFee"],
            course_credit=self.form["courseCredit"],
            duration=self.form["duration"],
            year=self.form["year"],
            min_percentage=self.form["minPercentage"],
            grace_days=self.form["graceDays"],
        )

    def _perform(self, values: dict[str, Any]) -> Any:
        return self.client.create_batch(values)


class CreateServiceDialog(MutationDialog):
    operation = "services.create"
    error_slots = {"name": "serviceName", "features": "dropdownOptions"}

    def __init__(
        self,
        client: ServicesClient,
        on_success: OnSuccess | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(on_success, logger=logger)
        self.client = client
        self.form = {
            "name": "",
            "description": "",
            "price": "",
            "duration": "",
            "isActive": True,
            "features": [],
        }

    def add_feature(self, feature: str) -> None:
        clean = feature.strip()
        if not clean:
            return
        self.form["features"] = [*self.form["features"], clean]
        self.field_errors.pop("dropdownOptions", None)

    def remove_feature(self, index: int) -> None:
        features = list(self.form["features"])
        if 0 <= index < len(features):
            del features[index]
        self.form["features"] = features

    def validate(self) -> FormResult:
        return validate_service_form(
            self.form["name"],
            self.form["description"],
            self.form["price"],
            self.form["duration"],
            self.form["features"],
            is_active=bool(self.form["isActive"]),
        )

    def _perform(self, values: dict[str, Any]) -> Any:
        return self.client.create_service(values)


class EditUserDialog(MutationDialog):
    operation = "users.update"

    def __init__(
        self,
        client: UsersClient,
        user: dict[str, Any],
        on_success: OnSuccess | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(on_success, logger=logger)
        self.client = client
        self.user_id = str(user["_id"])
        self.form = {key: user.get(key) for key in EDITABLE_USER_FIELDS}

    def _perform(self, values: dict[str, Any]) -> Any:
        payload = dict(values)
        payload["batchId"] = payload.get("batchId") or ""
        payload["courseCreditScore"] = payload.get("courseCreditScore") or 0
        payload["grade"] = payload.get("grade") or ""
        return self.client.update_user(self.user_id, payload)


class AssignBatchDialog(MutationDialog):
    operation = "users.assign_batch"

    def __init__(
        self,
        client: BatchesClient,
        user: dict[str, Any],
        on_success: OnSuccess | None = None,
        *,
        year: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(on_success, logger=logger)
        self.client = client
        self.user_id = str(user["_id"])
        self.user_label = " ".join(str(user.get(key) or "") for key in ("firstName", "lastName")).strip()
        self.year = year or date.today().year
        self.batches: list[dict[str, Any]] = []
        self.form = {"batch": ""}

    def load_options(self) -> list[dict[str, Any]]:
        try:
            self.batches = self.client.list_batches(year=self.year)
        except ApiError as error:
            self.error = error.message
        return self.batches

    def validate(self) -> FormResult:
        batch = str(self.form["batch"] or "").strip()
        errors = {} if batch else {"batch": "Please select a batch"}
        return FormResult(values={"batch": batch}, field_errors=errors)

    def submit(self) -> bool:
        submitted = super().submit()
        if not submitted and "batch" in self.field_errors:
            self.error = self.field_errors["batch"]
        return submitted

    def _perform(self, values: dict[str, Any]) -> Any:
        return self.client.add_student(values["batch"], self.user_id)


class RemoveStudentDialog(MutationDialog):
    operation = "batches.remove_student"

    def __init__(
        self,
        client: BatchesClient,
        batch_id: str,
        student_id: str,
        on_success: OnSuccess | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(on_success, logger=logger)
        self.client = client
        self.batch_id = batch_id
        self.student_id = student_id

    def _perform(self, values: dict[str, Any]) -> Any:
        self.client.remove_student(self.batch_id, self.student_id)
        return self.student_id


class DeleteDialog(MutationDialog):
    """Confirmation for deleting one record; ``delete`` is the resource client's delete call."""

    def __init__(
        self,
        record_id: str,
        delete: Callable[[str], None],
        on_success: OnSuccess | None = None,
        *,
        title: str = "Delete",
        message: str = "Are you sure? This action cannot be undone.",
        operation: str = "delete",
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(on_success, logger=logger)
        self.record_id = record_id
        self.title = title
        self.message = message
        self.operation = operation
        self._delete = delete

    def _perform(self, values: dict[str, Any]) -> Any:
        self._delete(self.record_id)
        return self.record_id


def _require_fields(form: dict[str, Any], labels: dict[str, str]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for key, label in labels.items():
        if not str(form.get(key) or "").strip():
            errors[key] = f"{label} is required"
    email = str(form.get("email") or "")
    if "email" in labels and "email" not in errors and "@" not in email:
        errors["email"] = "Please enter a valid email address."
    return errors


ACCOUNT_FIELD_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "phoneNumber": "Phone number",
    "password": "Password",
}


class CreateAdminDialog(MutationDialog):
    operation = "admin.create"

    def __init__(
        self,
        client: AdminClient,
        on_success: OnSuccess | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(on_success, logger=logger)
        self.client = client
        self.form = {key: "" for key in ACCOUNT_FIELD_LABELS}
        self.form["role"] = "admin"

    def validate(self) -> FormResult:
        values = {key: (value.strip() if isinstance(value, str) and key != "password" else value) for key, value in self.form.items()}
        return FormResult(values=values, field_errors=_require_fields(self.form, ACCOUNT_FIELD_LABELS))

    def _perform(self, values: dict[str, Any]) -> Any:
        return self.client.create_admin(values)


class RegisterSuperAdminDialog(MutationDialog):
    operation = "auth.register_super_admin"

    def __init__(
        self,
        client: AuthClient,
        on_success: OnSuccess | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(on_success, logger=logger)
        self.client = client
        self.form = {key: "" for key in ACCOUNT_FIELD_LABELS}

    def validate(self) -> FormResult:
        values = {key: (value.strip() if isinstance(value, str) and key != "password" else value) for key, value in self.form.items()}
        return FormResult(values=values, field_errors=_require_fields(self.form, ACCOUNT_FIELD_LABELS))

    def _perform(self, values: dict[str, Any]) -> Any:
        return self.client.register_super_admin(values)

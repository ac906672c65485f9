from __future__ import annotations

import pytest

from swrzee_admin.sdk.error_mapper import extract_field_errors, map_error
from swrzee_admin.sdk.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    ServerError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (401, AuthError),
        (403, PermissionError),
        (404, NotFoundError),
        (400, ValidationError),
        (422, ValidationError),
        (409, ConflictError),
        (500, ServerError),
        (503, ServerError),
        (418, ApiError),
    ],
)
def test_status_buckets(status: int, expected: type[ApiError]) -> None:
    error = map_error(status, {"success": False, "message": "nope"})

    assert type(error) is expected
    assert error.message == "nope"
    assert error.status_code == status


def test_server_message_is_kept_verbatim() -> None:
    error = map_error(400, {"success": False, "message": "Batch ID already exists"}, "Failed to create batch")

    assert error.message == "Batch ID already exists"


def test_fallback_message_when_payload_has_none() -> None:
    assert map_error(500, None, "Failed to fetch users").message == "Failed to fetch users"
    assert map_error(500, {"message": ""}, "Failed to fetch users").message == "Failed to fetch users"


def test_field_errors_become_validation_error() -> None:
    error = map_error(
        400,
        {
            "success": False,
            "message": "Validation failed",
            "errors": [
                {"path": "price", "message": "Price cannot be negative"},
                {"path": ["attendancePolicy", "graceDays"], "message": "Too many"},
                {"message": "no path"},
            ],
        },
    )

    assert isinstance(error, ValidationError)
    assert error.field_errors == {
        "price": "Price cannot be negative",
        "attendancePolicy.graceDays": "Too many",
    }


def test_extract_field_errors_ignores_non_lists() -> None:
    assert extract_field_errors(None) == {}
    assert extract_field_errors({"path": "x"}) == {}

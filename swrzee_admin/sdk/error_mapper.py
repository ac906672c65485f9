from __future__ import annotations

from typing import Any, Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    ServerError,
    ValidationError,
)

DEFAULT_FAILURE_MESSAGE = "Request failed"


def extract_field_errors(errors: Any) -> dict[str, str]:
    """Map the envelope's ``errors`` array (``[{path, message}]``) to ``{path: message}``."""
    if not isinstance(errors, list):
        return {}
    mapped: dict[str, str] = {}
    for item in errors:
        if not isinstance(item, Mapping):
            continue
        path = item.get("path") or item.get("field")
        if isinstance(path, list):
            path = ".".join(str(part) for part in path) if path else None
        message = item.get("message") or item.get("msg")
        if path and message:
            mapped[str(path)] = str(message)
    return mapped


def map_error(
    status_code: int,
    payload: Mapping[str, object] | None,
    fallback_message: str = DEFAULT_FAILURE_MESSAGE,
) -> ApiError:
    payload = payload or {}
    message = payload.get("message")
    resolved_message = str(message) if isinstance(message, str) and message else fallback_message
    field_errors = extract_field_errors(payload.get("errors"))
    code = str(payload.get("code") or f"HTTP_{status_code}")

    if field_errors:
        return ValidationError(
            code=str(payload.get("code") or "VALIDATION_ERROR"),
            message=resolved_message,
            status_code=status_code,
            details=payload.get("errors"),
            raw_payload=dict(payload),
            field_errors=field_errors,
        )

    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthError
    elif status_code == 403:
        mapped = PermissionError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=resolved_message,
        status_code=status_code,
        details=payload.get("details"),
        raw_payload=dict(payload),
    )

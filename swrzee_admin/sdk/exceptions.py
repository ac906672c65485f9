from __future__ import annotations

from dataclasses import dataclass, field

GENERIC_ERROR_MESSAGE = "An error occurred"


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int
    details: object | None = None
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class AuthError(ApiError):
    """Authentication failed or the session is invalid (401)."""


class PermissionError(ApiError):
    """Authenticated but not allowed (403)."""


class NotFoundError(ApiError):
    pass


@dataclass
class ValidationError(ApiError):
    field_errors: dict[str, str] = field(default_factory=dict)


class ConflictError(ApiError):
    """409 or conflict-style errors such as duplicate identifiers."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class MalformedResponseError(ApiError):
    """A 2xx response whose body does not follow the success envelope."""

from .auth_store import ACCESS_TOKEN_COOKIE, TOKENS_KEY, USER_DATA_KEY, AuthStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    GENERIC_ERROR_MESSAGE,
    ApiError,
    AuthError,
    ConflictError,
    MalformedResponseError,
    NotFoundError,
    PermissionError,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    ApiEnvelope,
    DashboardData,
    LoginData,
    Payment,
    SessionData,
    TokenPair,
    UserProfile,
    UserRole,
)
from .session import ApiSession
from .storage import LocalStorage

__all__ = [
    "ACCESS_TOKEN_COOKIE",
    "GENERIC_ERROR_MESSAGE",
    "TOKENS_KEY",
    "USER_DATA_KEY",
    "ApiEnvelope",
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "DashboardData",
    "HttpClient",
    "LocalStorage",
    "LoginData",
    "MalformedResponseError",
    "NotFoundError",
    "Payment",
    "PermissionError",
    "ServerError",
    "SessionData",
    "TokenPair",
    "TransportError",
    "UserProfile",
    "UserRole",
    "ValidationError",
    "load_config",
]

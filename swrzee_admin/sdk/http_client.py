from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests
from pydantic import ValidationError as ModelValidationError

from .config import ClientConfig
from .error_mapper import DEFAULT_FAILURE_MESSAGE, map_error
from .exceptions import GENERIC_ERROR_MESSAGE, MalformedResponseError, TransportError
from .models import ApiEnvelope

logger = logging.getLogger(__name__)


@dataclass
class LastOperation:
    method: str
    path: str
    duration_ms: int
    result: str
    status_code: int | None


@dataclass
class HttpClient:
    """JSON transport for the dashboard API.

    Every call is sent exactly once: no retries, no de-duplication and, unless configured,
    no timeout. Responses are unwrapped from the ``{success, data, message, errors}``
    envelope; anything else surfaces as an ``ApiError`` subclass.
    """

    config: ClientConfig
    session: requests.Session | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        fallback_message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> ApiEnvelope:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json"}
        if json_body is not None:
            request_headers["Content-Type"] = "application/json"
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        started = time.monotonic()
        try:
            response = self.session.request(
                method=normalized_method,
                url=self._build_url(path),
                headers=request_headers,
                json=json_body,
                params=params,
                timeout=self.config.timeout_seconds,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            self._record(normalized_method, path, started, "transport_error", None)
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=GENERIC_ERROR_MESSAGE,
                status_code=0,
                details={"type": type(exc).__name__, "reason": str(exc)},
            ) from exc

        payload = self._safe_json(response)
        if not response.ok:
            self._record(normalized_method, path, started, "error", response.status_code)
            raise map_error(response.status_code, payload, fallback_message)

        if not response.content:
            self._record(normalized_method, path, started, "success", response.status_code)
            return ApiEnvelope(success=True)

        try:
            envelope = ApiEnvelope.model_validate(payload)
        except ModelValidationError as exc:
            self._record(normalized_method, path, started, "malformed", response.status_code)
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=fallback_message,
                status_code=response.status_code,
                raw_payload=payload,
            ) from exc

        if not envelope.success:
            self._record(normalized_method, path, started, "error", response.status_code)
            raise map_error(response.status_code, payload, fallback_message)

        self._record(normalized_method, path, started, "success", response.status_code)
        return envelope

    def _record(self, method: str, path: str, started: float, result: str, status_code: int | None) -> None:
        self.last_operation = LastOperation(
            method=method,
            path=path,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            status_code=status_code,
        )
        logger.debug("%s %s -> %s (%s)", method, path, status_code, result)

    @staticmethod
    def _safe_json(response: requests.Response) -> dict[str, Any] | None:
        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError:
            return None
        return payload if isinstance(payload, dict) else None

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable
from urllib.parse import urlparse

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float | None = None
    verify_ssl: bool = True
    data_dir: Path | None = None
    cookie_days: int = 7
    items_per_page: int = 5
    batch_year: int | None = None
    log_level: str = "INFO"

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def cookie_domain(self) -> str:
        return urlparse(self.api_base_url).hostname or "localhost"

    @property
    def effective_batch_year(self) -> int:
        return self.batch_year or date.today().year


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str | None) -> float | None:
    raw = os.getenv(name, default)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str | None) -> int | None:
    raw = os.getenv(name, default)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("SWRZEE_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"SWRZEE_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("SWRZEE_API_BASE_URL") or "").strip()
    )
    _require({"SWRZEE_API_BASE_URL": api_base_url}, ["SWRZEE_API_BASE_URL"])

    # Unset means requests wait for the server indefinitely.
    timeout_seconds = _read_float("SWRZEE_TIMEOUT_SECONDS", None)
    _validate(
        timeout_seconds is None or timeout_seconds > 0,
        f"Invalid SWRZEE_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    cookie_days = _read_int("SWRZEE_COOKIE_DAYS", "7")
    _validate(
        cookie_days is not None and cookie_days >= 1,
        f"Invalid SWRZEE_COOKIE_DAYS: expected >= 1, got {cookie_days}",
    )

    items_per_page = _read_int("SWRZEE_ITEMS_PER_PAGE", "5")
    _validate(
        items_per_page is not None and items_per_page >= 1,
        f"Invalid SWRZEE_ITEMS_PER_PAGE: expected >= 1, got {items_per_page}",
    )

    batch_year = _read_int("SWRZEE_BATCH_YEAR", None)
    _validate(
        batch_year is None or batch_year > 0,
        f"Invalid SWRZEE_BATCH_YEAR: expected a positive year, got {batch_year}",
    )

    raw_data_dir = (os.getenv("SWRZEE_DATA_DIR") or "").strip()
    log_level = (os.getenv("SWRZEE_LOG_LEVEL") or "INFO").strip().upper()

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        verify_ssl=_coerce_bool(os.getenv("SWRZEE_VERIFY_SSL"), True),
        data_dir=Path(raw_data_dir).expanduser() if raw_data_dir else None,
        cookie_days=cookie_days,
        items_per_page=items_per_page,
        batch_year=batch_year,
        log_level=log_level,
    )

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from swrzee_admin.sdk.config import ClientConfig, ConfigError, load_config


def test_load_config_defaults(tmp_path: Path) -> None:
    config = load_config()

    assert config.env_name == "dev"
    assert config.api_base_url == "https://api.example.com"
    assert config.timeout_seconds is None
    assert config.verify_ssl is True
    assert config.cookie_days == 7
    assert config.items_per_page == 5
    assert config.batch_year is None
    assert config.log_level == "INFO"
    assert config.data_dir == tmp_path / "data"


def test_per_env_base_url_override(monkeypatch) -> None:
    monkeypatch.setenv("SWRZEE_ENV", "test")
    monkeypatch.setenv("SWRZEE_API_BASE_URL_TEST", "https://staging.example.com/")

    config = load_config()

    assert config.normalized_env == "test"
    assert config.api_base_url == "https://staging.example.com"
    assert config.cookie_domain == "staging.example.com"


def test_missing_base_url_raises(monkeypatch) -> None:
    monkeypatch.delenv("SWRZEE_API_BASE_URL")

    with pytest.raises(ConfigError, match="SWRZEE_API_BASE_URL"):
        load_config()


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("SWRZEE_TIMEOUT_SECONDS", "0"),
        ("SWRZEE_TIMEOUT_SECONDS", "soon"),
        ("SWRZEE_COOKIE_DAYS", "0"),
        ("SWRZEE_ITEMS_PER_PAGE", "-1"),
        ("SWRZEE_BATCH_YEAR", "twenty"),
    ],
)
def test_invalid_numeric_values_raise(monkeypatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError):
        load_config()


def test_optional_values_are_parsed(monkeypatch) -> None:
    monkeypatch.setenv("SWRZEE_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("SWRZEE_VERIFY_SSL", "false")
    monkeypatch.setenv("SWRZEE_ITEMS_PER_PAGE", "10")
    monkeypatch.setenv("SWRZEE_BATCH_YEAR", "2025")
    monkeypatch.setenv("SWRZEE_LOG_LEVEL", "debug")

    config = load_config()

    assert config.timeout_seconds == 2.5
    assert config.verify_ssl is False
    assert config.items_per_page == 10
    assert config.effective_batch_year == 2025
    assert config.log_level == "DEBUG"


def test_batch_year_defaults_to_current_year() -> None:
    config = ClientConfig(env_name="dev", api_base_url="http://localhost:4000")

    assert config.effective_batch_year == date.today().year
    assert config.cookie_domain == "localhost"

from __future__ import annotations

import json
import logging

from swrzee_admin.app.logger import get_logger, log_action, set_level


def test_log_action_emits_json_without_secrets(caplog) -> None:
    logger = get_logger("swrzee_admin.tests.logger")

    with caplog.at_level(logging.INFO, logger="swrzee_admin.tests.logger"):
        log_action(logger, "login", "submit", "admin", "success", password="hunter22", token="abc", email="a@b.co")

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["module"] == "login"
    assert payload["outcome"] == "success"
    assert payload["email"] == "a@b.co"
    assert "password" not in payload
    assert "token" not in payload
    assert payload["ts"].endswith("+00:00")


def test_get_logger_installs_one_handler() -> None:
    first = get_logger("swrzee_admin.tests.handlers")
    second = get_logger("swrzee_admin.tests.handlers")

    assert first is second
    assert len(first.handlers) == 1


def test_set_level_applies_to_package_loggers() -> None:
    logger = get_logger("swrzee_admin.tests.level")

    set_level("WARNING")
    assert logger.level == logging.WARNING
    set_level("INFO")
    assert logger.level == logging.INFO

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_FORBIDDEN_CONTEXT_KEYS = {"password", "token", "access_token", "refresh_token", "authorization"}


def get_logger(name: str, level: str | int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    actor_role: str | None,
    outcome: str,
    **context: Any,
) -> None:
    safe_context = {key: value for key, value in context.items() if key.lower() not in _FORBIDDEN_CONTEXT_KEYS}
    logger.info(
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": "INFO",
                "module": module,
                "action": action,
                "actor_role": actor_role,
                "outcome": outcome,
                **safe_context,
            },
            default=str,
        )
    )


def set_level(level: str | int, prefix: str = "swrzee_admin") -> None:
    for name, candidate in logging.root.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(candidate, logging.Logger):
            candidate.setLevel(level)

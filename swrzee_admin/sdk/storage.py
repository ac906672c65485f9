from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "swrzee-admin"
APP_AUTHOR = "Swrzee"

logger = logging.getLogger(__name__)


def default_data_dir(app_name: str = APP_NAME) -> Path:
    return Path(user_data_dir(app_name, APP_AUTHOR))


@dataclass
class LocalStorage:
    """Durable string key/value store persisted as one JSON object on disk."""

    base_dir: Path | None = None
    filename: str = "storage.json"

    def _path(self) -> Path:
        base = self.base_dir or default_data_dir()
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def _read_all(self) -> dict[str, str]:
        path = self._path()
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("storage file %s is unreadable; treating as empty", path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        path = self._path()
        staging = path.with_name(path.name + ".tmp")
        staging.write_text(json.dumps(items, indent=2), encoding="utf-8")
        try:
            staging.chmod(0o600)
        except OSError:
            pass
        staging.replace(path)

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key not in items:
            return
        del items[key]
        self._write_all(items)

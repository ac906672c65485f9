from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ViewState:
    status: ViewStatus
    message: str

    def render(self) -> dict[str, Any]:
        return {"status": self.status.value, "message": self.message}


def resolve_view_state(*, loading: bool, has_data: bool, error: str | None, loaded: bool = True) -> ViewState:
    if loading:
        return ViewState(status=ViewStatus.LOADING, message="Loading")
    if error:
        return ViewState(status=ViewStatus.ERROR, message=error)
    if not loaded:
        return ViewState(status=ViewStatus.IDLE, message="Not loaded")
    if not has_data:
        return ViewState(status=ViewStatus.EMPTY, message="No records")
    return ViewState(status=ViewStatus.SUCCESS, message="Ready")

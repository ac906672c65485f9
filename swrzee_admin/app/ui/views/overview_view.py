from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta, timezone
from typing import Any

from swrzee_admin.app.logger import get_logger, log_action
from swrzee_admin.app.ui.view_state import ViewState, resolve_view_state
from swrzee_admin.sdk.exceptions import ApiError
from swrzee_admin.sdk.models import DashboardData, Payment

CHART_DAYS = 14
SERIES = ("success", "failed")
STATUS_MAPPING = {
    "success": "success",
    "failed": "failed",
    "failure": "failed",
    "error": "failed",
    "fail": "failed",
}

logger = get_logger(__name__)


def map_status(status: str | None) -> str:
    return STATUS_MAPPING.get((status or "").lower(), "failed")


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def payment_day(payment: Payment) -> date | None:
    stamp = parse_timestamp(payment.payment_date or payment.created_at)
    return stamp.date() if stamp else None


def chart_window(today: date, days: int = CHART_DAYS) -> list[date]:
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def daily_series(payments: Iterable[Payment], today: date, days: int = CHART_DAYS) -> dict[str, list[dict[str, Any]]]:
    """Per-status amount totals for each UTC day of the window, oldest first.

    Payments without a parsable date, or dated outside the window, are skipped.
    """
    window = chart_window(today, days)
    totals: dict[str, dict[date, float]] = {status: {day: 0.0 for day in window} for status in SERIES}
    for payment in payments:
        day = payment_day(payment)
        if day is None:
            log_action(logger, "overview", "chart.skip_payment", None, "invalid_date", payment_id=payment.id)
            continue
        bucket = totals[map_status(payment.status)]
        if day in bucket:
            bucket[day] += payment.amount
    return {
        status: [
            {"date": f"{day.day:02d}", "day": index + 1, "amount": amount}
            for index, (day, amount) in enumerate(bucket.items())
        ]
        for status, bucket in totals.items()
    }


class OverviewView:
    def __init__(
        self,
        fetch: Callable[[], DashboardData],
        *,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._fetch = fetch
        self._today = today or (lambda: datetime.now(tz=timezone.utc).date())
        self.data: DashboardData | None = None
        self.loading = False
        self.error: str | None = None
        self.active_series = SERIES[0]

    def load(self) -> bool:
        self.loading = True
        self.error = None
        try:
            data = self._fetch()
        except ApiError as error:
            self.error = error.message
            log_action(logger, "overview", "load", None, "error", code=error.code)
            return False
        finally:
            self.loading = False
        self.data = data
        log_action(logger, "overview", "load", None, "success", payments=len(data.financial_stats.recent_payments))
        return True

    def invalidate(self) -> bool:
        return self.load()

    def select_series(self, status: str) -> None:
        if status not in SERIES:
            raise ValueError(f"unknown series '{status}'")
        self.active_series = status

    @property
    def view_state(self) -> ViewState:
        return resolve_view_state(
            loading=self.loading,
            has_data=self.data is not None,
            error=self.error,
            loaded=self.data is not None or self.error is not None,
        )

    @property
    def series(self) -> dict[str, list[dict[str, Any]]]:
        payments = self.data.financial_stats.recent_payments if self.data else []
        return daily_series(payments, self._today())

    def summary(self) -> dict[str, Any]:
        if self.data is None:
            return {"total_users": 0, "total_revenue": 0, "recent_payments": [], "series": self.series}
        return {
            "total_users": self.data.user_stats.total,
            "total_revenue": self.data.financial_stats.total_revenue,
            "recent_payments": [payment.to_wire() for payment in self.data.financial_stats.recent_payments],
            "series": self.series,
        }

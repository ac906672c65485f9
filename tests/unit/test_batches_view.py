from __future__ import annotations

import pytest

from swrzee_admin.app.ui.views.batches_view import batch_duration, display_row, format_date


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2025-01-05", "Jan 5, 2025"),
        ("2025-12-31T00:00:00.000Z", "Dec 31, 2025"),
        ("", "N/A"),
        (None, "N/A"),
        ("31/12/2025", "N/A"),
    ],
)
def test_format_date(value, expected) -> None:
    assert format_date(value) == expected


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        ("2025-01-06", "2025-04-06", "3 months"),
        ("2025-01-06", "2025-04-07", "4 months"),
        ("2025-01-06", "2025-02-06", "1 month"),
        ("2025-01-06", "2025-01-20", "1 month"),
        ("2025-01-31", "2025-03-01", "2 months"),
        ("2025-03-01", "2025-03-01", "0 days"),
        ("2025-01-06", "bad", "N/A"),
    ],
)
def test_batch_duration(start, end, expected) -> None:
    assert batch_duration(start, end) == expected


def test_display_row_formats_dates_and_students() -> None:
    row = display_row(
        {
            "_id": "b1",
            "batchId": "B-1",
            "startDate": "2025-01-06",
            "endDate": "2025-04-06",
            "students": ["u1", "u2"],
        }
    )

    assert row["startDate"] == "Jan 6, 2025"
    assert row["duration"] == "3 months"
    assert row["students"] == "View Students (2)"
    assert display_row({"_id": "b2", "students": []})["students"] == "No Students"

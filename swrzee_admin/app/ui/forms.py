from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

COURSE_CATEGORY = "Course"
DEFAULT_BATCH_DURATION = "3 months"
DEFAULT_COURSE_CREDIT = 2
DEFAULT_MIN_ATTENDANCE = 85
DEFAULT_GRACE_DAYS = 3


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str]

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def first_error(self) -> str | None:
        return next(iter(self.field_errors.values()), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _number(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_int_if_whole(value: float) -> int | float:
    return int(value) if value.is_integer() else value


def validate_login(email: str | None, password: str | None) -> FormResult:
    normalized_email = _text(email)
    field_errors: dict[str, str] = {}
    if not normalized_email or "@" not in normalized_email:
        field_errors["email"] = "Please enter a valid email address."
    elif not password or len(password) < 8:
        field_errors["password"] = "Password must be at least 8 characters."
    return FormResult(values={"email": normalized_email, "password": password or ""}, field_errors=field_errors)


def validate_service_form(
    name: str | None,
    description: str | None,
    price: Any,
    duration: Any,
    features: list[str] | None,
    *,
    is_active: bool = True,
    category: str = COURSE_CATEGORY,
) -> FormResult:
    normalized_name = _text(name)
    normalized_description = _text(description)
    clean_features = [_text(item) for item in features or [] if _text(item)]
    price_value = _number(price)
    duration_value = _number(duration)

    field_errors: dict[str, str] = {}
    if not normalized_name:
        field_errors["serviceName"] = "Service name is required"

    if not normalized_description:
        field_errors["description"] = "Description is required"
    elif len(normalized_description) < 10:
        field_errors["description"] = "Description must be at least 10 characters"

    if price_value is None:
        field_errors["price"] = "Price is required"
    elif price_value < 0:
        field_errors["price"] = "Price cannot be negative"

    if duration_value is None:
        field_errors["duration"] = "Duration is required"
    elif duration_value < 1:
        field_errors["duration"] = "Duration must be at least 1"

    if not clean_features:
        field_errors["dropdownOptions"] = "At least one feature is required"

    return FormResult(
        values={
            "name": normalized_name,
            "description": normalized_description,
            "price": _as_int_if_whole(price_value) if price_value is not None else None,
            "duration": _as_int_if_whole(duration_value) if duration_value is not None else None,
            "isActive": is_active,
            "category": category,
            "features": clean_features,
        },
        field_errors=field_errors,
    )


def validate_batch_form(
    batch_id: str | None,
    program_name: str | None,
    service_id: str | None,
    start_date: str | None,
    end_date: str | None,
    total_fee: Any,
    *,
    course_credit: Any = DEFAULT_COURSE_CREDIT,
    duration: str = DEFAULT_BATCH_DURATION,
    year: int | None = None,
    min_percentage: Any = DEFAULT_MIN_ATTENDANCE,
    grace_days: Any = DEFAULT_GRACE_DAYS,
) -> FormResult:
    field_errors: dict[str, str] = {}
    required_text = {
        "batchId": (_text(batch_id), "Batch ID is required"),
        "programName": (_text(program_name), "Program name is required"),
        "services": (_text(service_id), "Select a service"),
        "startDate": (_text(start_date), "Start date is required"),
        "endDate": (_text(end_date), "End date is required"),
    }
    for key, (value, message) in required_text.items():
        if not value:
            field_errors[key] = message

    numbers = {
        "totalFee": (_number(total_fee), "Total fee is required"),
        "courseCredit": (_number(course_credit), "Course credit is required"),
        "minPercentage": (_number(min_percentage), "Minimum attendance is required"),
        "graceDays": (_number(grace_days), "Grace days is required"),
    }
    for key, (value, message) in numbers.items():
        if value is None:
            field_errors[key] = message

    def _num(key: str) -> int | float | None:
        value = numbers[key][0]
        return _as_int_if_whole(value) if value is not None else None

    service = required_text["services"][0]
    return FormResult(
        values={
            "batchId": required_text["batchId"][0],
            "programName": required_text["programName"][0],
            "courseCredit": _num("courseCredit"),
            "services": [service] if service else [],
            "duration": duration,
            "startDate": required_text["startDate"][0],
            "endDate": required_text["endDate"][0],
            "year": year or date.today().year,
            "totalFee": _num("totalFee"),
            "attendancePolicy": {
                "minPercentage": _num("minPercentage"),
                "graceDays": _num("graceDays"),
            },
        },
        field_errors=field_errors,
    )

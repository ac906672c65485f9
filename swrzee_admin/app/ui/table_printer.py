from __future__ import annotations

from typing import Any

EMPTY_VALUE = "-"


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ", ".join(normalize_value(item) for item in value) or EMPTY_VALUE
    return str(value)


def format_table(rows: list[dict[str, Any]], columns: list[tuple[str, str]]) -> list[str]:
    if not rows:
        return ["(no results)"]

    widths = []
    for key, header in columns:
        max_cell = max(len(normalize_value(row.get(key))) for row in rows)
        widths.append(max(len(header), max_cell))

    lines = [
        " | ".join(header.ljust(widths[idx]) for idx, (_, header) in enumerate(columns)),
        "-+-".join("-" * width for width in widths),
    ]
    for row in rows:
        lines.append(" | ".join(normalize_value(row.get(key)).ljust(widths[idx]) for idx, (key, _) in enumerate(columns)))
    return lines


def print_table(title: str, rows: list[dict[str, Any]], columns: list[tuple[str, str]]) -> None:
    print(f"\n{title}")
    for line in format_table(rows, columns):
        print(line)

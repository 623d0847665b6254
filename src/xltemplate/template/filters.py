"""Template filter implementations."""

import json
from datetime import date, datetime
from typing import Any


def filter_length(value: Any) -> int:
    """Return length of string, list, or dict.

    Raises:
        TypeError: If value doesn't support len()
    """
    return len(value)


def filter_default(value: Any, default: Any) -> Any:
    """Return default if value is None or an empty string."""
    return value if value not in (None, "") else default


def filter_json(value: Any) -> str:
    """Serialize value to JSON string."""
    return json.dumps(value, default=str)


def filter_upper(value: Any) -> str:
    return "" if value is None else str(value).upper()


def filter_lower(value: Any) -> str:
    return "" if value is None else str(value).lower()


def filter_date(value: Any, fmt: str = "%Y-%m-%d") -> Any:
    """Format a date/datetime with strftime.

    Strings in ISO format are parsed first; None passes through.

    Raises:
        TypeError: If value is not a date
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, date):
        raise TypeError(f"date filter expects a date, got {type(value).__name__}")
    return value.strftime(fmt)


# Registry of available filters
FILTERS: dict[str, Any] = {
    "length": filter_length,
    "default": filter_default,
    "json": filter_json,
    "upper": filter_upper,
    "lower": filter_lower,
    "date": filter_date,
}

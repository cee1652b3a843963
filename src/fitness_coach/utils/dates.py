"""Date utility functions for the fitness coach engine."""

from datetime import date, datetime, timedelta
from typing import Any, Optional


def parse_date(date_str: str) -> date:
    """
    Parse a date string in ISO format (YYYY-MM-DD).

    Args:
        date_str: Date string in ISO format

    Returns:
        Date object
    """
    try:
        return date.fromisoformat(date_str)
    except ValueError as err:
        raise ValueError(f"Invalid date format: {date_str}. Expected format: YYYY-MM-DD") from err


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of a stored date value; None when it is not a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def get_week_start(day: date) -> date:
    """Monday of the week containing the given date."""
    return day - timedelta(days=day.weekday())


def get_week_range(day: date) -> tuple[date, date]:
    """Monday-start week containing the date, as (start inclusive, end exclusive)."""
    start = get_week_start(day)
    return start, start + timedelta(days=7)

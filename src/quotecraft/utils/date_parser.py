"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "tomorrow", "next month", "in 30 days", etc.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative expressions (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # "in 30 days", "in 2 weeks", "in 1 month"
    match = re.fullmatch(r"in (\d+) (day|week|month|year)s?", date_str)
    if match:
        count = int(match.group(1))
        unit = match.group(2)
        if unit == "day":
            return today + timedelta(days=count)
        elif unit == "week":
            return today + timedelta(weeks=count)
        elif unit == "month":
            return today + relativedelta(months=count)
        return today + relativedelta(years=count)

    if date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def today_iso(today: Optional[date] = None) -> str:
    """Return the given (or current) date as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def days_after_iso(days: int, today: Optional[date] = None) -> str:
    """Return the date ``days`` after today as YYYY-MM-DD."""
    return ((today or date.today()) + timedelta(days=days)).isoformat()


def is_parseable_date(date_str: str) -> bool:
    """Check whether a date string can be parsed."""
    try:
        parse_date(date_str)
    except ValueError:
        return False
    return True

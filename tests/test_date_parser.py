"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from quotecraft.utils.date_parser import days_after_iso, is_parseable_date, parse_date, today_iso

REFERENCE = date(2026, 1, 30)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2026-03-15") == date(2026, 3, 15)


def test_parse_long_form_date():
    """Test parsing a written-out date."""
    assert parse_date("March 15, 2026") == date(2026, 3, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_parse_relative_to_reference():
    """Test parsing 'yesterday' and 'tomorrow' against a reference date."""
    assert parse_date("yesterday", today=REFERENCE) == date(2026, 1, 29)
    assert parse_date("Tomorrow", today=REFERENCE) == date(2026, 1, 31)


def test_parse_in_days_and_weeks():
    """Test parsing 'in N days' and 'in N weeks'."""
    assert parse_date("in 30 days", today=REFERENCE) == REFERENCE + timedelta(days=30)
    assert parse_date("in 2 weeks", today=REFERENCE) == date(2026, 2, 13)


def test_parse_in_months_clamps_to_month_end():
    """Test that 'in 1 month' from January 30 lands on the last day of February."""
    assert parse_date("in 1 month", today=REFERENCE) == date(2026, 2, 28)


def test_parse_next_month():
    """Test parsing 'next month' as the first day of the following month."""
    assert parse_date("next month", today=REFERENCE) == date(2026, 2, 1)


def test_parse_next_year():
    """Test parsing 'next year' as January 1 of the following year."""
    assert parse_date("next year", today=REFERENCE) == date(2027, 1, 1)


def test_parse_next_week_is_monday():
    """Test parsing 'next week' as the Monday of the following week."""
    result = parse_date("next week", today=REFERENCE)
    assert result.weekday() == 0
    assert result > REFERENCE


def test_parse_invalid_date():
    """Test that an unparseable string raises ValueError."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


def test_iso_helpers():
    """Test ISO formatting helpers."""
    assert today_iso(REFERENCE) == "2026-01-30"
    assert days_after_iso(30, REFERENCE) == "2026-03-01"


def test_is_parseable_date():
    """Test the parseability check."""
    assert is_parseable_date("2026-01-30")
    assert not is_parseable_date("someday")

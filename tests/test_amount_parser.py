"""Tests for amount parsing utilities."""

import pytest
from decimal import Decimal
from quotecraft.utils.amount_parser import parse_amount, parse_number, parse_whole_amount


def test_parse_amount_plain():
    """Test parsing a plain decimal amount."""
    assert parse_amount("123.45") == Decimal("123.45")


def test_parse_amount_with_symbol_and_separators():
    """Test parsing amounts with currency symbols and thousands separators."""
    assert parse_amount("$1,234.56") == Decimal("1234.56")
    assert parse_amount("12 500") == Decimal("12500")


def test_parse_amount_with_currency_code():
    """Test parsing an amount followed by an ISO currency code."""
    assert parse_amount("8000 USD") == Decimal("8000")


def test_parse_amount_invalid():
    """Test that garbage input raises ValueError."""
    with pytest.raises(ValueError):
        parse_amount("abc")
    with pytest.raises(ValueError, match="Empty"):
        parse_amount("   ")


def test_parse_number_passes_numbers_through():
    """Test that ints and floats are returned unchanged."""
    assert parse_number(12) == 12
    assert parse_number(12.5) == 12.5


def test_parse_number_strings():
    """Test that numeric strings become ints when whole, floats otherwise."""
    result = parse_number("40")
    assert result == 40
    assert isinstance(result, int)
    assert parse_number("1,250.5") == 1250.5


def test_parse_number_rejects_booleans_and_other_types():
    """Test that booleans and non-numeric types are rejected."""
    with pytest.raises(ValueError):
        parse_number(True)
    with pytest.raises(ValueError):
        parse_number([1])
    with pytest.raises(ValueError):
        parse_number("lots")


def test_parse_whole_amount():
    """Test parsing printed prices into whole numbers."""
    assert parse_whole_amount("12 500") == 12500
    assert parse_whole_amount("8,000") == 8000
    assert parse_whole_amount("450.75") == 450
    with pytest.raises(ValueError):
        parse_whole_amount("n/a")

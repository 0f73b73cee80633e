"""Utility functions for quotecraft."""

from quotecraft.utils.date_parser import parse_date
from quotecraft.utils.amount_parser import parse_amount, parse_number

__all__ = ["parse_date", "parse_amount", "parse_number"]

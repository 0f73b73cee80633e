"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "12 500" (space as thousands separator)
    - "8000 USD" (trailing currency code)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols and trailing ISO codes
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = re.sub(r"\s*[A-Za-z]{3}$", "", amount_str)

    # Remove thousands separators
    amount_str = re.sub(r"[\s,]", "", amount_str)

    try:
        return Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")


def parse_number(value: object) -> float | int:
    """Coerce a JSON value into a number.

    Integers and floats pass through unchanged so that well-formed input keeps
    its exact value. Strings are parsed with :func:`parse_amount`.

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        amount = parse_amount(value)
        if amount == amount.to_integral_value():
            return int(amount)
        return float(amount)
    raise ValueError(f"Expected a number, got {value!r}")


def parse_whole_amount(amount_str: str) -> int:
    """Parse a printed price such as "12 500" or "8,000" into an integer.

    Digits after a decimal point are dropped.
    """
    digits = re.sub(r"[\s,]", "", amount_str).split(".")[0]
    if not digits.isdigit():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return int(digits)

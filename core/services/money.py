"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

Numeric = Union[str, int, float, Decimal, None]


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid.
        NaN and infinities count as invalid.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            # Use string representation to preserve precision
            result = Decimal(str(value))
        elif isinstance(value, str):
            result = Decimal(value.strip())
        else:
            result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")

    if not result.is_finite():
        return Decimal("0")
    return result


def to_price(value: Numeric) -> Decimal:
    """Coerce a unit price: invalid or negative input becomes 0."""
    decimal_value = to_decimal(value)
    if decimal_value < 0:
        return Decimal("0")
    return decimal_value


def round_money(value: Numeric) -> Decimal:
    """Round monetary value to two decimal places (half up)."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def to_json_number(value: Numeric) -> Union[float, str]:
    """
    JSON form of a monetary value that reloads to the same Decimal.

    Plain float when it represents the value exactly, otherwise the decimal
    string (to_decimal parses both back).
    """
    decimal_value = to_decimal(value)
    as_float = float(decimal_value)
    if Decimal(repr(as_float)) == decimal_value:
        return as_float
    return str(decimal_value)


def add(a: Numeric, b: Numeric) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def multiply(value: Numeric, factor: Numeric) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def percent(value: Numeric, rate: Numeric) -> Decimal:
    """Apply a fractional rate (0.10 == 10%) to a monetary value."""
    return multiply(value, rate)


def _group_western(digits: str) -> str:
    return f"{int(digits):,}"


def _group_indian(digits: str) -> str:
    """Lakh/crore grouping: 1234567 -> 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_money(value: Numeric, currency: str = "INR") -> str:
    """
    Format monetary value with currency symbol and two decimals.

    INR uses Indian digit grouping (en-IN), everything else western grouping.

    Args:
        value: Value to format
        currency: Currency code (INR, USD)

    Returns:
        Formatted string, e.g. "₹1,23,456.78" or "$123,456.78"
    """
    # Symbols come from the single source of truth
    from core.services.currency import CURRENCY_SYMBOLS

    amount = round_money(value)
    symbol = CURRENCY_SYMBOLS.get(currency, currency)

    sign = "-" if amount < 0 else ""
    integer_part, fraction = f"{abs(amount):.2f}".split(".")

    if currency == "INR":
        grouped = _group_indian(integer_part)
    else:
        grouped = _group_western(integer_part)

    return f"{sign}{symbol}{grouped}.{fraction}"

"""
Currency Service

Dual-currency handling for the storefront: every product carries an INR
and a USD price, the customer only picks which one is displayed.
"""
from enum import Enum
from typing import Dict, Optional

from core.config import DEFAULT_CURRENCY as _CONFIGURED_CURRENCY
from core.logging import get_logger

logger = get_logger(__name__)


class Currency(str, Enum):
    """Display currencies supported by the storefront."""
    INR = "INR"
    USD = "USD"


CURRENCY_SYMBOLS: Dict[str, str] = {
    "INR": "₹",
    "USD": "$",
}

DEFAULT_CURRENCY = Currency.USD if _CONFIGURED_CURRENCY == "USD" else Currency.INR


def parse_currency(value: Optional[str], default: Currency = DEFAULT_CURRENCY) -> Currency:
    """
    Parse a stored/preferred currency code.

    Args:
        value: Raw value (e.g. "INR", "usd", None)
        default: Returned when value is empty or unknown

    Returns:
        Currency member
    """
    if not value:
        return default

    try:
        return Currency(str(value).strip().upper())
    except ValueError:
        logger.warning(f"Unknown currency preference {value!r}, using {default.value}")
        return default


def toggle(currency: Currency) -> Currency:
    """Flip between INR and USD."""
    return Currency.USD if currency == Currency.INR else Currency.INR


def zero_price(currency: Currency) -> str:
    """Zero-value display string for a currency, e.g. "₹0.00"."""
    return f"{CURRENCY_SYMBOLS[currency.value]}0.00"

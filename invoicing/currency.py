# invoicing/currency.py
"""
Cents <-> display conversion.

Amounts are integer cents in the store, in the query layer and in the view
models. This module is the only place that turns them into dollars (for
display) or turns dollars back into cents (for form input and seed data).
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENTS_PER_UNIT = Decimal(100)
CURRENCY_SYMBOL = "$"

# largest amount a 32-bit INTEGER column holds
MAX_CENTS = 2**31 - 1
MAX_AMOUNT = Decimal(MAX_CENTS) / CENTS_PER_UNIT


def to_cents(amount: Union[Decimal, int, str]) -> int:
    """Convert a dollar amount to integer cents, rounding half up."""
    value = Decimal(amount) * CENTS_PER_UNIT
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_units(cents: int) -> Decimal:
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(Decimal("0.01"))


def format_amount(cents: int) -> str:
    """Plain two-decimal value, e.g. 12345 -> "123.45" (pre-fills edit forms)."""
    return f"{to_units(cents):.2f}"


def format_currency(cents: int) -> str:
    """en-US dollar string, e.g. 123456 -> "$1,234.56"."""
    value = to_units(cents)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


def parse_currency(text: str) -> int:
    """
    Parse "$1,234.56", "1234.56" or "1234" into integer cents.

    Raises ValueError for anything that is not a number.
    """
    cleaned = text.strip().replace(CURRENCY_SYMBOL, "").replace(",", "")
    if not cleaned:
        raise ValueError(f"not a currency amount: {text!r}")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"not a currency amount: {text!r}")
    if not value.is_finite():
        raise ValueError(f"not a currency amount: {text!r}")
    return to_cents(value)

"""
Currency Labels

The currency is a DISPLAY label only. Amounts are stored and summed in
their original unit; nothing in the engine converts between currencies.
"""

from decimal import Decimal
from typing import Optional

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

DEFAULT_SYMBOL = "$"


def currency_symbol(code: Optional[str]) -> str:
    """Symbol for a three-letter code; unknown codes get "$"."""
    if not code:
        return DEFAULT_SYMBOL
    return CURRENCY_SYMBOLS.get(code.strip().upper(), DEFAULT_SYMBOL)


def format_money(
    amount: Decimal,
    code: Optional[str] = None,
    signed: bool = False,
) -> str:
    """
    Render an amount with two decimals and thousands grouping.

    `signed=True` always prints a leading "+" or "-"; otherwise only
    negative amounts carry a sign. Examples for USD:
        1234.5          -> "$1,234.50"
        -60             -> "-$60.00"
        40, signed=True -> "+$40.00"
    """
    symbol = currency_symbol(code)
    magnitude = f"{symbol}{abs(amount):,.2f}"
    if amount < 0:
        return f"-{magnitude}"
    if signed:
        return f"+{magnitude}"
    return magnitude

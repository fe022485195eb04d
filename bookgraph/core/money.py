"""
Money helpers.

Prices are Decimals with two places, rounded half up.
"""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Round a price to cents, half up."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_price(value: Decimal | int | float | str, currency_symbol: str = "$") -> str:
    """Currency-prefixed price with two decimals, e.g. "$10.00"."""
    return f"{currency_symbol}{to_money(value)}"

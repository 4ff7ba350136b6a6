from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

CENTS = Decimal("0.01")


def format_price(price: Union[Decimal, float, int, str], currency_symbol: str = "₱") -> str:
    """
    Format a price for display: currency prefix, thousands separators and
    exactly two decimals (5 -> "₱5.00", 1234.5 -> "₱1,234.50").
    """
    try:
        amount = Decimal(str(price)).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Not a price: {price!r}") from None
    return f"{currency_symbol}{amount:,.2f}"


def display_or_dash(value: Optional[str]) -> str:
    return value if value else "-"

"""
Price rendering with en-IN digit grouping (1,00,000.00).
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from pricebook_web.config import settings

Number = Union[Decimal, float, int, str]

RANGE_SEPARATOR = " – "


def _to_decimal(value: Optional[Number]) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def group_indian(digits: str) -> str:
    """Groups an integer digit string as 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_amount(value: Number, symbol: Optional[str] = None) -> str:
    """One amount with two decimals, e.g. ₹1,499.00."""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    amount = _to_decimal(value)
    if amount is None:
        raise ValueError(f"Not a price: {value!r}")
    amount = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")
    return f"{sign}{symbol}{group_indian(whole)}.{fraction}"


def is_price_range(price: Number, price_max: Optional[Number]) -> bool:
    low = _to_decimal(price)
    high = _to_decimal(price_max)
    if low is None or high is None:
        return False
    return high > low


def format_price(price: Number, price_max: Optional[Number] = None, symbol: Optional[str] = None) -> str:
    """
    Renders a single price, or "<min> – <max>" when price_max forms a real range.

    A missing, equal, lower or non-numeric price_max collapses to one value.
    """
    if is_price_range(price, price_max):
        return f"{format_amount(price, symbol)}{RANGE_SEPARATOR}{format_amount(price_max, symbol)}"
    return format_amount(price, symbol)

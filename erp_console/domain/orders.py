"""Order arithmetic and numbering."""

import re
from typing import Iterable, Protocol


class HasTotal(Protocol):
    total: float


def calculate_order_total(items: Iterable[HasTotal], discount: float, tax: float, shipping: float) -> float:
    """``sum(item.total) - discount + tax + shipping``; item totals are taken as given."""
    subtotal = sum(item.total for item in items)
    return round(subtotal - discount + tax + shipping, 2)


def generate_order_number(order_numbers: Iterable[str], prefix: str = "ORD") -> str:
    """Next ``PREFIX-NNN`` after the lexicographically greatest existing number.

    The greatest number is chosen as a string, so ``ORD-999`` still beats
    ``ORD-1000`` once the suffix outgrows three digits.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
    matching = [number for number in order_numbers if pattern.match(number)]
    if not matching:
        return f"{prefix}-001"

    latest = max(matching)
    next_number = int(pattern.match(latest).group(1)) + 1
    return f"{prefix}-{next_number:03d}"

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, ndigits: int = 0) -> float:
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def percentage(part: int, total: int, ndigits: int = 1) -> float:
    if total <= 0:
        return 0.0
    return round_half_up(part / total * 100, ndigits)


def format_currency(amount: float) -> str:
    """USD with no decimals, e.g. ``$85,000``."""
    rounded = round_half_up(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.0f}"


def format_date(value: date) -> str:
    """Short US form, e.g. ``Jan 5, 2024``."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"

"""
Display formatting.

The engine never rounds; these helpers do, for the screen only.
"""

import math


def format_currency(amount: float, symbol: str = "RM") -> str:
    """
    Whole-unit amount with thousands separators, e.g. "RM 12,345".

    Negative amounts keep their sign in front: "-RM 1,200".
    """
    if not math.isfinite(amount):
        return f"{symbol} -"
    rounded = round(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol} {abs(rounded):,}"


def format_percent(value: float) -> str:
    return f"{value:.0f}%"


"""
Money Field Normalizer

Turns raw keystrokes into committed money amounts.

DESIGN DECISION: The field keeps two values:
- the DRAFT string, exactly what the user is typing ("12.")
- the COMMITTED amount propagated to the FinancialRecord (12.0)

Reconciling them is an explicit rule (see MoneyField.sync) rather than
an accident of re-render timing. Without it, a re-render with the same
amount would rewrite "12." to "12" and eat the decimal point the user
just typed.
"""

import math
import re
from decimal import Decimal
from typing import Callable, Optional


# Digits, at most one decimal point, digits. Empty string is allowed.
DRAFT_PATTERN = re.compile(r"^[0-9]*\.?[0-9]*$")


def is_valid_draft(text: str) -> bool:
    """True if `text` is an acceptable in-progress money entry."""
    return DRAFT_PATTERN.fullmatch(text) is not None


def parse_draft(text: str) -> float:
    """
    Numeric value of an accepted draft.

    Empty string and a lone decimal point both mean 0.

    Raises:
        ValueError: If `text` is not a valid draft
    """
    if not is_valid_draft(text):
        raise ValueError(f"Not a valid money entry: {text!r}")
    if text in ("", "."):
        return 0.0
    return float(text)


def format_amount(value: float) -> str:
    """
    Canonical draft text for a committed amount.

    0 renders as an empty string so the input shows its placeholder.
    Whole amounts drop the decimal point; others use the shortest
    plain decimal form (never exponent notation).
    """
    if value < 0 or not math.isfinite(value):
        raise ValueError(f"Money amount must be finite and non-negative: {value}")
    if value == 0:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


class MoneyField:
    """
    One money input on the form.

    Usage:
        field = MoneyField(on_change=lambda v: setattr(record.expenses, "utilities", v))
        field.edit("1")     # True, commits 1.0
        field.edit("1a")    # False, draft stays "1"
        field.sync(0.0)     # form reset, draft becomes ""
    """

    def __init__(
        self,
        value: float = 0.0,
        on_change: Optional[Callable[[float], None]] = None,
    ):
        self._value = float(value)
        self._draft = format_amount(self._value)
        self._on_change = on_change

    @property
    def draft(self) -> str:
        """Text currently shown in the input."""
        return self._draft

    @property
    def value(self) -> float:
        """Last committed amount."""
        return self._value

    def edit(self, text: str) -> bool:
        """
        Apply a raw edit from the user.

        Returns:
            True if the edit was accepted and committed. False if it was
            rejected, in which case the previous draft is kept.
        """
        if not is_valid_draft(text):
            return False
        value = parse_draft(text)
        if not math.isfinite(value):
            # Too many digits to represent
            return False

        self._draft = text
        self._value = value
        if self._on_change is not None:
            self._on_change(self._value)
        return True

    def sync(self, value: float) -> None:
        """
        Reconcile with a committed value changed from outside (reset, load).

        The draft is only rewritten when it no longer represents `value`,
        so partial entries such as "12." survive unrelated re-renders.
        """
        canonical = format_amount(value)
        self._value = float(value)
        if parse_draft(self._draft) != self._value:
            self._draft = canonical

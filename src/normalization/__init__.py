"""Field normalization package: raw input to committed record values."""

from src.normalization.dates import DateField, days_in_month, is_leap_year
from src.normalization.money import (
    MoneyField,
    format_amount,
    is_valid_draft,
    parse_draft,
)

__all__ = [
    "DateField",
    "MoneyField",
    "days_in_month",
    "format_amount",
    "is_leap_year",
    "is_valid_draft",
    "parse_draft",
]

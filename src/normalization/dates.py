"""
Date Field Normalizer

A date of birth is picked as three independent selections: day, month
and year. The composed date only reaches the FinancialRecord once all
three are set; partial selections stay local to the field.

Changing the month or year can shrink the month (31 Jan -> Feb), so
the day is clamped down to the last valid day whenever that happens.
"""

from datetime import date
from typing import Callable, Optional


MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

_DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def is_leap_year(year: int) -> bool:
    """Gregorian rule: every 4th year, except centuries not divisible by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: Optional[int], month: Optional[int]) -> int:
    """
    Number of days in the given month.

    Until both month and year are known the widest range (31) applies.
    """
    if year is None or month is None:
        return 31
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


class DateField:
    """
    Day / month / year picker for one calendar date.

    Usage:
        field = DateField(on_change=lambda d: setattr(record.basic, "dob", d))
        field.select_year(2024)
        field.select_month(2)
        field.select_day(29)   # emits date(2024, 2, 29)
    """

    def __init__(
        self,
        value: Optional[date] = None,
        on_change: Optional[Callable[[date], None]] = None,
    ):
        self.day: Optional[int] = None
        self.month: Optional[int] = None
        self.year: Optional[int] = None
        self._on_change = on_change
        self.sync(value)

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def max_day(self) -> int:
        return days_in_month(self.year, self.month)

    @property
    def value(self) -> Optional[date]:
        """The composed date, or None while any part is unselected."""
        if self.day is None or self.month is None or self.year is None:
            return None
        return date(self.year, self.month, self.day)

    def day_options(self) -> list[int]:
        return list(range(1, self.max_day + 1))

    @staticmethod
    def month_options() -> list[tuple[int, str]]:
        return [(i + 1, label) for i, label in enumerate(MONTH_LABELS)]

    @staticmethod
    def year_options(today: Optional[date] = None, span: int = 100) -> list[int]:
        """The last `span` years including the current one, newest first."""
        current = (today or date.today()).year
        return [current - i for i in range(span)]

    # -------------------------------------------------------------------------
    # Selections
    # -------------------------------------------------------------------------

    def select_day(self, day: int) -> Optional[date]:
        if not 1 <= day <= self.max_day:
            raise ValueError(f"Day must be between 1 and {self.max_day}, got {day}")
        self.day = day
        return self._emit()

    def select_month(self, month: int) -> Optional[date]:
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        self.month = month
        self._clamp_day()
        return self._emit()

    def select_year(self, year: int) -> Optional[date]:
        if not 1 <= year <= 9999:
            raise ValueError(f"Year out of range: {year}")
        self.year = year
        self._clamp_day()
        return self._emit()

    def sync(self, value: Optional[date]) -> None:
        """Mirror a date set from outside (reset, load). Does not emit."""
        if value is None:
            self.day = self.month = self.year = None
        else:
            self.day, self.month, self.year = value.day, value.month, value.year

    def _clamp_day(self) -> None:
        if self.day is not None and self.day > self.max_day:
            self.day = self.max_day

    def _emit(self) -> Optional[date]:
        composed = self.value
        if composed is not None and self._on_change is not None:
            self._on_change(composed)
        return composed

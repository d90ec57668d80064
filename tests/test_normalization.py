"""
Tests for the field normalizers

Covers keystroke handling for money inputs and day / month / year
handling for the date of birth picker.
"""

from datetime import date

import pytest

from src.normalization import (
    DateField,
    MoneyField,
    days_in_month,
    format_amount,
    is_leap_year,
    is_valid_draft,
    parse_draft,
)


class TestMoneyDrafts:
    """Tests for draft validation and parsing."""

    @pytest.mark.parametrize("text", ["", "0", "12", "12.", ".5", "12.50", "."])
    def test_valid_drafts(self, text):
        assert is_valid_draft(text)

    @pytest.mark.parametrize("text", ["1a", "-1", "1.2.3", "1,000", " 1", "1e5"])
    def test_invalid_drafts(self, text):
        assert not is_valid_draft(text)

    def test_parse_empty_and_lone_point(self):
        assert parse_draft("") == 0
        assert parse_draft(".") == 0

    def test_parse_rejects_invalid(self):
        with pytest.raises(ValueError):
            parse_draft("abc")

    def test_format_amount(self):
        assert format_amount(0) == ""
        assert format_amount(1500.0) == "1500"
        assert format_amount(12.5) == "12.5"
        assert format_amount(0.1) == "0.1"

    def test_format_large_amount_has_no_exponent(self):
        assert format_amount(1e16) == "10000000000000000"

    def test_format_rejects_negative(self):
        with pytest.raises(ValueError):
            format_amount(-1)


class TestMoneyField:
    """Tests for the draft / committed reconciliation."""

    def test_typing_sequence(self):
        """Typing 1, 2, ., 5 shows each draft and commits each value."""
        committed = []
        field = MoneyField(on_change=committed.append)

        for text, expected in [("1", 1.0), ("12", 12.0), ("12.", 12.0), ("12.5", 12.5)]:
            assert field.edit(text)
            assert field.draft == text
            assert field.value == expected

        assert committed == [1.0, 12.0, 12.0, 12.5]

    def test_rejected_edit_keeps_previous_state(self):
        committed = []
        field = MoneyField(on_change=committed.append)
        field.edit("12")

        assert not field.edit("12a")
        assert field.draft == "12"
        assert field.value == 12.0
        assert committed == [12.0]

    def test_clearing_commits_zero(self):
        field = MoneyField(value=40)
        assert field.edit("")
        assert field.draft == ""
        assert field.value == 0

    def test_lone_point_commits_zero(self):
        field = MoneyField()
        assert field.edit(".")
        assert field.draft == "."
        assert field.value == 0

    def test_sync_keeps_equivalent_draft(self):
        """A partial entry survives a re-render with the same value."""
        field = MoneyField()
        field.edit("12.")
        field.sync(12.0)
        assert field.draft == "12."

    def test_sync_rewrites_stale_draft(self):
        field = MoneyField()
        field.edit("12.")
        field.sync(40.0)
        assert field.draft == "40"
        assert field.value == 40.0

    def test_sync_to_zero_clears_draft(self):
        field = MoneyField(value=300)
        assert field.draft == "300"
        field.sync(0)
        assert field.draft == ""

    def test_sync_does_not_emit(self):
        committed = []
        field = MoneyField(on_change=committed.append)
        field.sync(99)
        assert committed == []


class TestCalendar:
    """Tests for leap years and month lengths."""

    @pytest.mark.parametrize("year,expected", [
        (2024, True), (2023, False), (1900, False), (2000, True),
    ])
    def test_is_leap_year(self, year, expected):
        assert is_leap_year(year) is expected

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2023, 4) == 30
        assert days_in_month(None, 2) == 31
        assert days_in_month(2023, None) == 31


class TestDateField:
    """Tests for the day / month / year picker."""

    def test_emits_only_when_complete(self):
        emitted = []
        field = DateField(on_change=emitted.append)

        assert field.select_year(2024) is None
        assert field.select_month(2) is None
        assert field.select_day(29) == date(2024, 2, 29)
        assert emitted == [date(2024, 2, 29)]

    def test_month_change_clamps_day(self):
        """31 Jan 2023 -> February clamps to the 28th."""
        emitted = []
        field = DateField(value=date(2023, 1, 31), on_change=emitted.append)

        assert field.select_month(2) == date(2023, 2, 28)
        assert field.day == 28
        assert emitted == [date(2023, 2, 28)]

    def test_year_change_clamps_leap_day(self):
        field = DateField(value=date(2024, 2, 29))
        assert field.select_year(2023) == date(2023, 2, 28)

    def test_no_clamp_when_day_fits(self):
        field = DateField(value=date(2023, 3, 30))
        assert field.select_month(4) == date(2023, 4, 30)

    def test_clamps_before_complete(self):
        """Day 31 then April without a year still clamps to 30."""
        field = DateField()
        field.select_day(31)
        field.select_month(4)
        assert field.day == 30
        assert field.value is None

    def test_day_options_follow_month(self):
        field = DateField()
        assert len(field.day_options()) == 31
        field.select_year(2023)
        field.select_month(2)
        assert field.day_options()[-1] == 28

    def test_day_out_of_range_rejected(self):
        field = DateField()
        field.select_year(2023)
        field.select_month(4)
        with pytest.raises(ValueError):
            field.select_day(31)

    def test_month_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            DateField().select_month(13)

    def test_sync_does_not_emit(self):
        emitted = []
        field = DateField(on_change=emitted.append)
        field.sync(date(1990, 5, 17))
        assert (field.day, field.month, field.year) == (17, 5, 1990)
        field.sync(None)
        assert field.value is None
        assert emitted == []

    def test_year_options_newest_first(self):
        years = DateField.year_options(today=date(2025, 6, 1), span=100)
        assert years[0] == 2025
        assert years[-1] == 1926
        assert len(years) == 100

    def test_month_options(self):
        months = DateField.month_options()
        assert months[0] == (1, "Jan")
        assert months[-1] == (12, "Dec")

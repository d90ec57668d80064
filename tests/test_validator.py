"""
Tests for pre-save validation
"""

from datetime import date

from src.models.record import FinancialRecord
from src.validation import RecordValidator


TODAY = date(2025, 6, 1)


def issue_types(result) -> set[tuple[str, str]]:
    return {(issue.field, issue.issue_type) for issue in result.issues}


class TestRecordValidator:
    """Tests for RecordValidator."""

    def setup_method(self):
        self.validator = RecordValidator()
        self.record = FinancialRecord()
        self.record.basic.dob = date(1990, 1, 1)

    def test_blank_name_blocks_save(self):
        result = self.validator.validate(self.record, "   ", today=TODAY)
        assert not result.is_valid
        assert result.error_message == "Please enter the client's name before saving."

    def test_named_blank_record_is_valid(self):
        result = self.validator.validate(self.record, "Ali", today=TODAY)
        assert result.is_valid
        assert not result.issues

    def test_future_dob_is_warning(self):
        self.record.basic.dob = date(2030, 1, 1)
        result = self.validator.validate(self.record, "Ali", today=TODAY)
        assert result.is_valid
        assert ("dob", "future_date") in issue_types(result)

    def test_expenses_without_income_warns(self):
        self.record.expenses.utilities = 200
        result = self.validator.validate(self.record, "Ali", today=TODAY)
        assert result.is_valid
        assert ("annual_income", "missing") in issue_types(result)
        assert ("expenses", "negative_cash_flow") not in issue_types(result)

    def test_negative_cash_flow_warns(self):
        self.record.basic.annual_income = 12000
        self.record.expenses.utilities = 2000
        result = self.validator.validate(self.record, "Ali", today=TODAY)
        assert ("expenses", "negative_cash_flow") in issue_types(result)

    def test_missing_dob_is_info(self):
        self.record.basic.dob = None
        result = self.validator.validate(self.record, "Ali", today=TODAY)
        assert result.is_valid
        assert not result.warnings
        assert ("dob", "missing") in issue_types(result)


class TestUserFriendlySummary:
    """Tests for the UI summary text."""

    def setup_method(self):
        self.validator = RecordValidator()

    def test_all_passed(self):
        record = FinancialRecord()
        record.basic.dob = date(1990, 1, 1)
        result = self.validator.validate(record, "Ali", today=TODAY)
        assert self.validator.get_user_friendly_summary(result) == "All checks passed."

    def test_errors_and_warnings_listed(self):
        record = FinancialRecord()
        record.expenses.utilities = 100
        result = self.validator.validate(record, "", today=TODAY)
        summary = self.validator.get_user_friendly_summary(result)

        assert "Cannot save yet:" in summary
        assert "Please enter the client's name" in summary
        assert "Please double-check:" in summary

"""
Tests for the Gap Calculator models

Test strategy:
1. Unit tests for individual components (models, normalizers, engine)
2. Integration tests for flows (with in-memory / mocked storage)
3. No real API calls in tests (use mocks)
"""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from src.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from src.models.history import SavedRecord
from src.models.record import (
    BasicInfo,
    FinancialRecord,
    Gender,
    Liabilities,
    ReplacementYears,
    money_field_paths,
)
from src.models.results import ValidationIssue, ValidationResult


class TestRecordModels:
    """Tests for the FinancialRecord and its sections."""

    def test_blank_record_defaults(self):
        """A new record has zero amounts, no dob and a 5 year horizon."""
        record = FinancialRecord()
        assert record.basic.full_name == ""
        assert record.basic.dob is None
        assert record.basic.gender == Gender.MALE
        assert record.liabilities.housing_loan == 0
        assert record.coverage.ci_income_replacement_years == ReplacementYears.FIVE

    def test_negative_amount_rejected(self):
        """Money fields cannot be negative."""
        with pytest.raises(ValidationError):
            Liabilities(housing_loan=-1)

    def test_negative_assignment_rejected(self):
        """The invariant holds on mutation, not just construction."""
        record = FinancialRecord()
        with pytest.raises(ValidationError):
            record.expenses.utilities = -5

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            Liabilities(car_loan=float("nan"))

    def test_replacement_years_restricted(self):
        """Only 3, 4 or 5 years are allowed."""
        record = FinancialRecord()
        with pytest.raises(ValidationError):
            record.coverage.ci_income_replacement_years = 6

    def test_empty_dob_string_is_unset(self):
        assert BasicInfo(dob="").dob is None

    def test_wire_format_is_camel_case(self):
        """Persisted layout uses camelCase keys."""
        record = FinancialRecord()
        record.basic.full_name = "Ali"
        record.basic.dob = date(1990, 5, 17)
        wire = record.to_wire()

        assert wire["basic"]["fullName"] == "Ali"
        assert wire["basic"]["dob"] == "1990-05-17"
        assert "housingLoan" in wire["liabilities"]
        assert wire["coverage"]["ciIncomeReplacementYears"] == 5

    def test_tolerant_read(self):
        """Missing fields default, unknown fields are ignored."""
        record = FinancialRecord.model_validate({
            "basic": {"fullName": "Siti", "nickname": "S"},
            "liabilities": {"housingLoan": 1000},
            "legacyField": True,
        })
        assert record.basic.full_name == "Siti"
        assert record.liabilities.housing_loan == 1000
        assert record.expenses.utilities == 0

    def test_money_field_paths(self):
        """Every money input is listed once, income first."""
        paths = money_field_paths()
        assert paths[0] == ("basic", "annual_income")
        assert ("liabilities", "other_liabilities") in paths
        assert ("expenses", "others") in paths
        assert paths[-1] == ("coverage", "critical_illness")
        assert len(paths) == len(set(paths)) == 1 + 7 + 14 + 2


class TestSavedRecord:
    """Tests for history entries."""

    def test_timestamp_round_trips_as_epoch_millis(self):
        saved = SavedRecord.model_validate({
            "id": "abc",
            "timestamp": 1735689600123,
            "clientName": "Ali",
            "data": {},
        })
        assert saved.timestamp == datetime(2025, 1, 1, 0, 0, 0, 123000, tzinfo=timezone.utc)
        assert saved.to_wire()["timestamp"] == 1735689600123

    def test_saved_record_is_frozen(self):
        saved = SavedRecord(client_name="Ali", data=FinancialRecord())
        with pytest.raises(ValidationError):
            saved.client_name = "Other"

    def test_ids_are_unique(self):
        first = SavedRecord(client_name="Ali", data=FinancialRecord())
        second = SavedRecord(client_name="Ali", data=FinancialRecord())
        assert first.id != second.id

    def test_matches_name_case_insensitive(self):
        saved = SavedRecord(client_name="Ahmad Tan", data=FinancialRecord())
        assert saved.matches("ahmad")
        assert saved.matches("TAN")
        assert not saved.matches("lee")

    def test_matches_contact_number(self):
        record = FinancialRecord()
        record.basic.contact_number = "012-345 6789"
        saved = SavedRecord(client_name="Ali", data=record)
        assert saved.matches("345 6")
        assert not saved.matches("3456")

    def test_empty_query_matches_everything(self):
        saved = SavedRecord(client_name="Ali", data=FinancialRecord())
        assert saved.matches("")


class TestActivityModels:
    """Tests for activity-related models."""

    def test_activity_event_creation(self):
        event = ActivityEvent(
            event_type=ActivityEventType.RECORD_SAVED,
            description="Saved",
        )
        assert event.severity == ActivitySeverity.INFO
        assert event.event_id is not None

    def test_builder_storage_error(self):
        event = ActivityEventBuilder.storage_error("save", "disk full")
        assert event.event_type == ActivityEventType.STORAGE_ERROR
        assert event.severity == ActivitySeverity.ERROR
        assert event.error_message == "disk full"

    def test_to_log_dict(self):
        event = ActivityEventBuilder.record_deleted("abc")
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "record_deleted"
        assert log_dict["record_id"] == "abc"
        assert isinstance(log_dict["event_id"], str)


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_valid_result(self):
        result = ValidationResult(is_valid=True, issues=[])
        assert result.is_valid
        assert not result.has_errors
        assert result.error_count == 0
        assert result.error_message == ""

    def test_result_with_errors_and_warnings(self):
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="client_name",
                    issue_type="missing",
                    message="Name required",
                    severity="error",
                ),
                ValidationIssue(
                    field="dob",
                    issue_type="future_date",
                    message="Future dob",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors
        assert result.error_count == 1
        assert [w.field for w in result.warnings] == ["dob"]
        assert result.error_message == "Name required"

    def test_severity_pattern(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")

"""
Pre-Save Record Validation

DESIGN DECISION: Validation runs in two tiers.

ERRORS block the save:
- Client name is empty (history entries are found by name)

WARNINGS are shown but never block:
- Date of birth in the future
- No income entered while expenses are
- Monthly commitments exceed monthly income

Field-level invariants (non-negative money, valid calendar dates) are
already enforced by the pydantic models, so they never reach here.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for the advisor to review.
"""

from datetime import date
from typing import Optional

from src.calculation import calculate_gap
from src.models.record import FinancialRecord
from src.models.results import ValidationIssue, ValidationResult


class RecordValidator:
    """Checks a FinancialRecord before it is written to history."""

    def _validate_required(self, client_name: str) -> list[ValidationIssue]:
        issues = []

        if not client_name or not client_name.strip():
            issues.append(ValidationIssue(
                field="client_name",
                issue_type="missing",
                message="Please enter the client's name before saving.",
                severity="error",
                suggested_fix="Fill in Full Name in Basic Info",
            ))

        return issues

    def _validate_semantic(
        self,
        record: FinancialRecord,
        today: date,
    ) -> list[ValidationIssue]:
        issues = []
        basic = record.basic

        if basic.dob and basic.dob > today:
            issues.append(ValidationIssue(
                field="dob",
                issue_type="future_date",
                message=f"Date of birth ({basic.dob}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date of birth",
            ))

        metrics = calculate_gap(record)

        if basic.annual_income == 0 and metrics.monthly_commitment > 0:
            issues.append(ValidationIssue(
                field="annual_income",
                issue_type="missing",
                message="No annual income entered, but monthly expenses are",
                severity="warning",
                suggested_fix="Enter the client's annual income",
            ))
        elif metrics.affordability < 0:
            issues.append(ValidationIssue(
                field="expenses",
                issue_type="negative_cash_flow",
                message="Monthly commitments exceed monthly income",
                severity="warning",
            ))

        if basic.dob is None:
            issues.append(ValidationIssue(
                field="dob",
                issue_type="missing",
                message="Date of birth not selected",
                severity="info",
            ))

        return issues

    def validate(
        self,
        record: FinancialRecord,
        client_name: str,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Validate a record for saving under `client_name`.

        Returns:
            ValidationResult; is_valid is False only when there are errors
        """
        issues = self._validate_required(client_name)
        issues.extend(self._validate_semantic(record, today or date.today()))

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a short summary of validation results for the UI.
        """
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []

        if result.has_errors:
            lines.append("Cannot save yet:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please double-check:")
            for warning in result.warnings:
                lines.append(f"   • {warning.message}")

        return "\n".join(lines)

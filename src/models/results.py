"""
Result Models

Everything derived from a FinancialRecord: the gap metrics, the
display ratios, the status assessment, and the outcome of pre-save
validation.

CRITICAL: None of these are persisted as authoritative. Metrics are
recomputed from the record on every read.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


RESULT_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


# =============================================================================
# GAP METRICS
# =============================================================================

class DerivedMetrics(BaseModel):
    """
    Output of the gap calculation engine.

    All amounts are non-negative except affordability, which is
    negative when commitments exceed income.
    """
    model_config = RESULT_CONFIG

    total_liabilities: float = Field(..., ge=0)
    monthly_commitment: float = Field(..., ge=0)
    debt_shortfall: float = Field(..., ge=0)
    total_ci_need: float = Field(..., ge=0, alias="totalCINeed")
    ci_shortfall: float = Field(..., ge=0)
    monthly_income: float = Field(..., ge=0)
    affordability: float = Field(
        ...,
        description="Monthly income minus monthly commitment (may be negative)"
    )


class CoverageRatios(BaseModel):
    """Share of each need already covered, as a percentage in [0, 100]."""
    model_config = RESULT_CONFIG

    debt_coverage_percent: float = Field(..., ge=0, le=100)
    ci_coverage_percent: float = Field(..., ge=0, le=100)


class DebtStatus(str, Enum):
    SECURE = "secure"
    RISK = "risk"


class CriticalIllnessStatus(str, Enum):
    SECURE = "secure"
    ATTENTION = "attention"


class CashFlowStatus(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class GapAssessment(BaseModel):
    """
    Headline status for each gap.

    Used to label the summary cards and report notes.
    """
    model_config = RESULT_CONFIG

    debt: DebtStatus
    critical_illness: CriticalIllnessStatus
    cash_flow: CashFlowStatus

    @property
    def is_fully_covered(self) -> bool:
        """True when neither debt nor critical illness has a shortfall."""
        return (
            self.debt == DebtStatus.SECURE
            and self.critical_illness == CriticalIllnessStatus.SECURE
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'future_date', 'negative_cash_flow')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a record before it is saved.

    Errors block the save. Warnings are shown but do not block.
    """

    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Non-blocking issues."""
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def error_message(self) -> str:
        """User-facing message combining all errors."""
        return " ".join(
            issue.message for issue in self.issues if issue.severity == "error"
        )

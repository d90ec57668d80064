"""
Data Models Package

This package contains all Pydantic models used by the gap calculator.
All data flowing through the system must conform to these schemas.
"""

from src.models.record import (
    BasicInfo,
    ExistingCoverage,
    Expenses,
    FinancialRecord,
    Gender,
    Liabilities,
    ReplacementYears,
    money_field_paths,
)
from src.models.results import (
    CashFlowStatus,
    CoverageRatios,
    CriticalIllnessStatus,
    DebtStatus,
    DerivedMetrics,
    GapAssessment,
    ValidationIssue,
    ValidationResult,
)
from src.models.history import SavedRecord
from src.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Record models
    "BasicInfo",
    "ExistingCoverage",
    "Expenses",
    "FinancialRecord",
    "Gender",
    "Liabilities",
    "ReplacementYears",
    "money_field_paths",
    # Result models
    "CashFlowStatus",
    "CoverageRatios",
    "CriticalIllnessStatus",
    "DebtStatus",
    "DerivedMetrics",
    "GapAssessment",
    "ValidationIssue",
    "ValidationResult",
    # History
    "SavedRecord",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]

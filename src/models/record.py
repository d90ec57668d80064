"""
Financial Record Models

These models define the data an advisor enters for one client:
basic information, outstanding liabilities, monthly expenses and
existing insurance coverage.

They are designed to:
1. Enforce the record invariants at runtime (money is never negative)
2. Keep those invariants on every mutation (validate_assignment)
3. Serialize to the camelCase layout used by the persisted history

DESIGN DECISION: Python attributes are snake_case, the wire format is
camelCase. The alias generator maps between them, and populate_by_name
lets code construct models with either spelling.
"""

from datetime import date
from enum import Enum, IntEnum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# Non-negative, finite money amount (RM)
Money = Annotated[float, Field(ge=0, allow_inf_nan=False)]


RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    validate_assignment=True,
    extra="ignore",
)


# =============================================================================
# ENUMS
# =============================================================================

class Gender(str, Enum):
    """Client gender."""
    MALE = "Male"
    FEMALE = "Female"


class ReplacementYears(IntEnum):
    """
    Income-replacement horizon for critical illness cover.

    The period a client needs to recover before returning to work.
    """
    THREE = 3
    FOUR = 4
    FIVE = 5


# =============================================================================
# RECORD SECTIONS
# =============================================================================

class BasicInfo(BaseModel):
    """Personal details and income."""
    model_config = RECORD_CONFIG

    full_name: str = Field(
        default="",
        max_length=200,
        description="Client full name"
    )
    contact_number: str = Field(
        default="",
        max_length=50,
        description="Contact number, free text"
    )
    dob: Optional[date] = Field(
        default=None,
        description="Date of birth, unset until fully selected"
    )
    gender: Gender = Field(default=Gender.MALE)
    annual_income: Money = 0.0

    @field_validator("dob", mode="before")
    @classmethod
    def empty_dob_is_unset(cls, v):
        """An empty string means no date was selected."""
        if v == "":
            return None
        return v


class Liabilities(BaseModel):
    """Outstanding loan balances."""
    model_config = RECORD_CONFIG

    housing_loan: Money = 0.0
    car_loan: Money = 0.0
    personal_loan: Money = 0.0
    credit_card: Money = 0.0
    business_loan: Money = 0.0
    study_loan: Money = 0.0
    other_liabilities: Money = 0.0


class Expenses(BaseModel):
    """Fixed monthly commitments."""
    model_config = RECORD_CONFIG

    housing_installment: Money = 0.0
    car_installment: Money = 0.0
    credit_card_payment: Money = 0.0
    food_groceries: Money = 0.0
    utilities: Money = 0.0
    phone_internet: Money = 0.0
    children_education: Money = 0.0
    insurance_premium: Money = 0.0
    transport: Money = 0.0
    parents_allowance: Money = 0.0
    childcare: Money = 0.0
    entertainment: Money = 0.0
    savings: Money = 0.0
    others: Money = 0.0


class ExistingCoverage(BaseModel):
    """Sums assured under the client's current policies."""
    model_config = RECORD_CONFIG

    life_tpd: Money = 0.0
    critical_illness: Money = 0.0
    ci_income_replacement_years: ReplacementYears = Field(
        default=ReplacementYears.FIVE,
        description="Years of income to replace on a critical illness claim"
    )


# =============================================================================
# AGGREGATE
# =============================================================================

class FinancialRecord(BaseModel):
    """
    Everything entered for one client.

    The record being edited belongs to the active session. A saved
    copy in history is independent of it until explicitly loaded.
    """
    model_config = RECORD_CONFIG

    basic: BasicInfo = Field(default_factory=BasicInfo)
    liabilities: Liabilities = Field(default_factory=Liabilities)
    expenses: Expenses = Field(default_factory=Expenses)
    coverage: ExistingCoverage = Field(default_factory=ExistingCoverage)

    def to_wire(self) -> dict:
        """Dump in the camelCase layout used for persistence."""
        return self.model_dump(mode="json", by_alias=True)

    def canonical_json(self) -> str:
        """Stable JSON form, used as a value key for caching."""
        return self.model_dump_json(by_alias=True)


# Sections holding only money fields, keyed by their attribute on FinancialRecord
MONEY_SECTIONS: dict[str, type[BaseModel]] = {
    "liabilities": Liabilities,
    "expenses": Expenses,
}


def money_field_paths() -> list[tuple[str, str]]:
    """
    All (section, field) pairs that hold a money amount.

    Order follows the form: income first, then liabilities, expenses
    and coverage amounts.
    """
    paths = [("basic", "annual_income")]
    for section, model in MONEY_SECTIONS.items():
        paths.extend((section, name) for name in model.model_fields)
    paths.append(("coverage", "life_tpd"))
    paths.append(("coverage", "critical_illness"))
    return paths

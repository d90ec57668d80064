"""
Gap Calculation Engine

DESIGN DECISION: The calculation is a PURE function of the record.
No side effects, no hidden state, no rounding. Callers recompute on
every read; presentation decides how to round.

Formulas:
    total_liabilities  = sum(liabilities)
    monthly_commitment = sum(expenses)
    debt_shortfall     = max(0, total_liabilities - life_tpd)
    total_ci_need      = monthly_commitment * replacement_years * 12
    ci_shortfall       = max(0, total_ci_need - critical_illness)
    monthly_income     = annual_income / 12
    affordability      = monthly_income - monthly_commitment
"""

from functools import lru_cache

from src.models.record import FinancialRecord
from src.models.results import (
    CashFlowStatus,
    CoverageRatios,
    CriticalIllnessStatus,
    DebtStatus,
    DerivedMetrics,
    GapAssessment,
)


MONTHS_PER_YEAR = 12


def shortfall(need: float, existing: float) -> float:
    """Uncovered part of a need; never negative."""
    return max(0.0, need - existing)


def calculate_gap(record: FinancialRecord) -> DerivedMetrics:
    """
    Derive all gap metrics from a financial record.

    Deterministic and total: every valid record produces metrics.
    """
    total_liabilities = float(sum(record.liabilities.model_dump().values()))
    monthly_commitment = float(sum(record.expenses.model_dump().values()))
    coverage = record.coverage

    total_ci_need = (
        monthly_commitment * int(coverage.ci_income_replacement_years) * MONTHS_PER_YEAR
    )
    monthly_income = record.basic.annual_income / MONTHS_PER_YEAR

    return DerivedMetrics(
        total_liabilities=total_liabilities,
        monthly_commitment=monthly_commitment,
        debt_shortfall=shortfall(total_liabilities, coverage.life_tpd),
        total_ci_need=total_ci_need,
        ci_shortfall=shortfall(total_ci_need, coverage.critical_illness),
        monthly_income=monthly_income,
        affordability=monthly_income - monthly_commitment,
    )


def _percent_covered(existing: float, need: float) -> float:
    """existing / need as a percentage, clamped to [0, 100]; 0 when need is 0."""
    if need <= 0:
        return 0.0
    return min(100.0, max(0.0, existing / need * 100))


def coverage_ratios(record: FinancialRecord, metrics: DerivedMetrics) -> CoverageRatios:
    """
    Share of each need covered by existing policies.

    Both ratios are clamped to [0, 100] and default to 0 when there is
    nothing to cover, so the result is never NaN.
    """
    return CoverageRatios(
        debt_coverage_percent=_percent_covered(
            record.coverage.life_tpd, metrics.total_liabilities
        ),
        ci_coverage_percent=_percent_covered(
            record.coverage.critical_illness, metrics.total_ci_need
        ),
    )


def assess_gap(metrics: DerivedMetrics) -> GapAssessment:
    """Headline status for the summary cards."""
    return GapAssessment(
        debt=DebtStatus.RISK if metrics.debt_shortfall > 0 else DebtStatus.SECURE,
        critical_illness=(
            CriticalIllnessStatus.ATTENTION
            if metrics.ci_shortfall > 0
            else CriticalIllnessStatus.SECURE
        ),
        cash_flow=(
            CashFlowStatus.POSITIVE
            if metrics.affordability > 0
            else CashFlowStatus.NEGATIVE
        ),
    )


@lru_cache(maxsize=256)
def _calculate_from_json(payload: str) -> DerivedMetrics:
    return calculate_gap(FinancialRecord.model_validate_json(payload))


def calculate_gap_cached(record: FinancialRecord) -> DerivedMetrics:
    """
    Memoized calculate_gap for hot paths.

    Keyed on the record's value (its canonical JSON), not its identity,
    so a mutated record never returns stale metrics.
    """
    return _calculate_from_json(record.canonical_json())

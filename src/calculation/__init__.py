"""Gap calculation package."""

from src.calculation.engine import (
    assess_gap,
    calculate_gap,
    calculate_gap_cached,
    coverage_ratios,
    shortfall,
)

__all__ = [
    "assess_gap",
    "calculate_gap",
    "calculate_gap_cached",
    "coverage_ratios",
    "shortfall",
]

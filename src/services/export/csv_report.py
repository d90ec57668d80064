"""
CSV Gap Analysis Report

A flat, spreadsheet-friendly report: one row per input or result,
grouped by category, with a notes column for the status of each gap.

Layout:
    CATEGORY | ITEM | VALUE (RM) | NOTES
"""

import csv
from io import StringIO

from src.services.export.interface import (
    ExportAdapter,
    ExportResult,
    ExportSnapshot,
    suggested_filename,
)


LIABILITY_ITEMS = [
    ("housing_loan", "Housing Loan"),
    ("car_loan", "Car Loan"),
    ("personal_loan", "Personal Loan"),
    ("credit_card", "Credit Card"),
    ("business_loan", "Business Loan"),
    ("study_loan", "Study Loan"),
    ("other_liabilities", "Others"),
]

EXPENSE_ITEMS = [
    ("housing_installment", "Housing Installment"),
    ("car_installment", "Car Installment"),
    ("credit_card_payment", "Credit Card"),
    ("food_groceries", "Food & Groceries"),
    ("utilities", "Utilities"),
    ("phone_internet", "Phone & Internet"),
    ("children_education", "Education"),
    ("insurance_premium", "Insurance"),
    ("transport", "Transport"),
    ("parents_allowance", "Parents"),
    ("childcare", "Childcare"),
    ("entertainment", "Entertainment"),
    ("savings", "Savings"),
    ("others", "Others"),
]


def _coverage_note(shortfall: float) -> str:
    return "Underinsured" if shortfall > 0 else "Fully Covered"


def _section(title: str, items: list[tuple[str, str]], values) -> list[list]:
    """Rows for one section; the title sits on the first row only."""
    rows = []
    for idx, (name, label) in enumerate(items):
        rows.append([title if idx == 0 else "", label, getattr(values, name)])
    return rows


class CsvReportAdapter(ExportAdapter):
    """Renders a snapshot as a UTF-8 CSV gap analysis report."""

    extension = "csv"
    mime_type = "text/csv"

    def __init__(self, currency_symbol: str = "RM"):
        self._currency_symbol = currency_symbol

    def build_rows(self, snapshot: ExportSnapshot) -> list[list]:
        record = snapshot.record
        metrics = snapshot.metrics
        basic = record.basic
        coverage = record.coverage

        rows = [
            ["Insurance Gap Analysis Report"],
            [f"Generated on: {snapshot.generated_at.date().isoformat()}"],
            [],
            ["CATEGORY", "ITEM", f"VALUE ({self._currency_symbol})", "NOTES"],
            ["Basic Information", "Full Name", basic.full_name],
            ["", "Contact", basic.contact_number],
            ["", "DOB", basic.dob.isoformat() if basic.dob else ""],
            ["", "Gender", basic.gender.value],
            ["", "Annual Income", basic.annual_income],
            [],
        ]

        rows.extend(_section("Liabilities (Debts)", LIABILITY_ITEMS, record.liabilities))
        rows.append(["", "TOTAL LIABILITIES", metrics.total_liabilities, "Sum of all debts"])
        rows.append([])

        rows.extend(_section("Monthly Expenses", EXPENSE_ITEMS, record.expenses))
        rows.append(["", "TOTAL COMMITMENT", metrics.monthly_commitment])
        rows.append([])

        rows.extend([
            ["Existing Coverage", "Life/TPD Coverage", coverage.life_tpd],
            ["", "Critical Illness Coverage", coverage.critical_illness],
            ["", "Income Replacement Years", int(coverage.ci_income_replacement_years)],
            [],
            ["ANALYSIS RESULTS"],
            [
                "Debt Protection", "Debt Shortfall", metrics.debt_shortfall,
                _coverage_note(metrics.debt_shortfall),
            ],
            ["Critical Illness", "Total CI Need", metrics.total_ci_need],
            [
                "", "CI Shortfall", metrics.ci_shortfall,
                _coverage_note(metrics.ci_shortfall),
            ],
            ["Affordability", "Monthly Income", metrics.monthly_income],
            [
                "", "Monthly Surplus", metrics.affordability,
                "Positive Cashflow" if metrics.affordability > 0 else "Negative Cashflow",
            ],
        ])
        return rows

    def export(self, snapshot: ExportSnapshot) -> ExportResult:
        output = StringIO()
        writer = csv.writer(output)
        writer.writerows(self.build_rows(snapshot))

        return ExportResult(
            success=True,
            filename=suggested_filename(snapshot, self.extension),
            content=output.getvalue().encode("utf-8"),
            mime_type=self.mime_type,
        )

"""Schedule reporting: tabular and yearly views of an amortization schedule."""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from mortgage_engine.models.loan import AmortizationEntry
from mortgage_engine.models.report import YearlySummary

SCHEDULE_COLUMNS = [
    "payment_number",
    "payment_date",
    "principal_paid",
    "interest_paid",
    "extra_principal_paid",
    "pmi_paid",
    "total_payment",
    "remaining_balance",
    "current_rate",
    "pmi_active",
    "ltv_percent",
]


def schedule_to_frame(schedule: list[AmortizationEntry]) -> pd.DataFrame:
    """One row per payment, in schedule order."""
    if not schedule:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)
    df = pd.DataFrame([entry.model_dump() for entry in schedule])
    return df[SCHEDULE_COLUMNS]


def summarize_by_year(schedule: list[AmortizationEntry]) -> list[YearlySummary]:
    """Totals per loan year (payments 1-12 are year 1), with the year-end balance."""
    df = schedule_to_frame(schedule)
    if df.empty:
        return []
    df["year"] = (df["payment_number"] - 1) // 12 + 1
    agg = (
        df.groupby("year")
        .agg(
            principal_paid=("principal_paid", "sum"),
            interest_paid=("interest_paid", "sum"),
            extra_principal_paid=("extra_principal_paid", "sum"),
            pmi_paid=("pmi_paid", "sum"),
            ending_balance=("remaining_balance", "last"),
        )
        .reset_index()
    )
    return [
        YearlySummary(
            year=int(row.year),
            principal_paid=float(row.principal_paid),
            interest_paid=float(row.interest_paid),
            extra_principal_paid=float(row.extra_principal_paid),
            pmi_paid=float(row.pmi_paid),
            ending_balance=float(row.ending_balance),
        )
        for row in agg.itertuples(index=False)
    ]


def yearly_frame(schedule: list[AmortizationEntry]) -> pd.DataFrame:
    return pd.DataFrame([y.model_dump() for y in summarize_by_year(schedule)])


def write_schedule(schedule: list[AmortizationEntry], path: Path) -> Path:
    """Write the schedule to ``path``; the suffix picks the format.

    ``.xlsx`` gets a "Schedule" sheet and a "Yearly" sheet (via openpyxl),
    anything else is written as CSV.
    """
    path = Path(path)
    df = schedule_to_frame(schedule)
    if path.suffix.lower() == ".xlsx":
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Schedule", index=False)
            yearly_frame(schedule).to_excel(writer, sheet_name="Yearly", index=False)
    else:
        df.to_csv(path, index=False)
    return path

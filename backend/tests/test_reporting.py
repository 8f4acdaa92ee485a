"""Tests for schedule reporting: DataFrame view and yearly rollup."""
from datetime import date

import pandas as pd
import pytest
from openpyxl import load_workbook

from mortgage_engine.models.loan import LoanInputs
from mortgage_engine.services.loan_service import calculate_comprehensive_loan_results
from mortgage_engine.services.reporting import (
    SCHEDULE_COLUMNS,
    schedule_to_frame,
    summarize_by_year,
    write_schedule,
)


def _results(**overrides):
    defaults = dict(principal=200_000, interest_rate=5.0, term_years=30, start_date=date(2025, 1, 1))
    defaults.update(overrides)
    return calculate_comprehensive_loan_results(LoanInputs(**defaults))


def test_schedule_frame_shape():
    df = schedule_to_frame(_results().amortization_schedule)
    assert list(df.columns) == SCHEDULE_COLUMNS
    assert len(df) == 360
    assert df["payment_number"].iloc[0] == 1


def test_empty_schedule():
    assert schedule_to_frame([]).empty
    assert summarize_by_year([]) == []


def test_yearly_totals_match_schedule():
    res = _results()
    years = summarize_by_year(res.amortization_schedule)
    assert len(years) == 30
    assert [y.year for y in years] == list(range(1, 31))
    assert sum(y.interest_paid for y in years) == pytest.approx(res.total_interest)
    assert sum(y.principal_paid for y in years) == pytest.approx(200_000)
    assert years[0].ending_balance == res.amortization_schedule[11].remaining_balance
    assert years[-1].ending_balance == 0


def test_yearly_partial_final_year():
    res = _results(interest_rate=6.0, extra_payments={"extra_monthly": 400})
    years = summarize_by_year(res.amortization_schedule)
    assert len(years) == (res.accelerated_term_months - 1) // 12 + 1
    assert sum(y.extra_principal_paid for y in years) == pytest.approx(
        sum(e.extra_principal_paid for e in res.amortization_schedule)
    )


def test_write_schedule_csv(tmp_path):
    res = _results(term_years=5)
    out = write_schedule(res.amortization_schedule, tmp_path / "schedule.csv")
    df = pd.read_csv(out)
    assert list(df.columns) == SCHEDULE_COLUMNS
    assert len(df) == 60


def test_write_schedule_xlsx(tmp_path):
    res = _results(term_years=5)
    out = write_schedule(res.amortization_schedule, tmp_path / "schedule.xlsx")
    wb = load_workbook(out)
    assert wb.sheetnames == ["Schedule", "Yearly"]
    assert wb["Schedule"].max_row == 61
    assert wb["Yearly"].max_row == 6
    assert wb["Yearly"]["A1"].value == "year"

"""Tests for the loan feature calculators."""
from datetime import date

import pytest

from mortgage_engine.amortization.schedule import generate_amortization_schedule
from mortgage_engine.models.loan import (
    ClosingCosts,
    LenderPaidPMI,
    LoanInputs,
    MonthlyPMI,
    NoPMI,
    SinglePremiumPMI,
)
from mortgage_engine.services.loan_features import (
    calculate_cash_at_closing,
    calculate_effective_rate,
    calculate_ltv,
    calculate_monthly_pmi,
    calculate_points_cost,
    calculate_total_closing_costs,
    find_pmi_removal_month,
    monthly_escrow,
    resolve_down_payment,
    sync_down_payment,
    upfront_pmi_premium,
)


# --- Points and rate ---


def test_effective_rate_examples():
    assert calculate_effective_rate(6.0, 0) == 6.0
    assert calculate_effective_rate(6.0, 1) == 5.75
    assert calculate_effective_rate(6.0, 2) == 5.5


def test_effective_rate_floored_at_zero():
    assert calculate_effective_rate(1.0, 10) == 0


def test_points_cost():
    assert calculate_points_cost(500_000, 1, 0) == 5000
    assert calculate_points_cost(500_000, 1, 1) == 10_000
    assert calculate_points_cost(500_000, 0, 0) == 0


# --- Closing costs ---


def test_total_closing_costs_no_credits():
    costs = ClosingCosts(appraisal_fee=600, title_insurance=1400, attorney_fees=1000, transfer_tax=7000)
    assert calculate_total_closing_costs(costs, 0, 0, 0) == 10_000


def test_total_closing_costs_with_concessions_and_credits():
    costs = ClosingCosts(other_closing_costs=10_000)
    assert calculate_total_closing_costs(costs, 0, 2000, 1000) == 7000


def test_total_closing_costs_includes_points():
    costs = ClosingCosts(recording_fees=250)
    assert calculate_total_closing_costs(costs, 4000, 0, 0) == 4250


def test_total_closing_costs_may_go_negative():
    costs = ClosingCosts(survey_fee=500)
    assert calculate_total_closing_costs(costs, 0, 1500, 0) == -1000


def test_cash_at_closing():
    assert calculate_cash_at_closing(100_000, 10_000) == 110_000
    assert calculate_cash_at_closing(100_000, 0) == 100_000


# --- LTV and PMI ---


def test_ltv_examples():
    assert calculate_ltv(400_000, 500_000) == 80.0
    assert calculate_ltv(450_000, 500_000) == 90.0
    assert calculate_ltv(500_000, 500_000) == 100.0


def test_ltv_zero_price():
    assert calculate_ltv(400_000, 0) == 0.0


def test_monthly_pmi_monthly_type():
    assert abs(calculate_monthly_pmi(400_000, MonthlyPMI(monthly_rate=0.005)) - 166.6667) < 1e-3
    assert abs(calculate_monthly_pmi(400_000, MonthlyPMI(monthly_rate=0.01)) - 333.3333) < 1e-3


@pytest.mark.parametrize("config", [
    NoPMI(),
    LenderPaidPMI(),
    SinglePremiumPMI(single_premium_amount=5000),
])
def test_monthly_pmi_other_types_zero(config):
    assert calculate_monthly_pmi(400_000, config) == 0


def test_monthly_pmi_rejects_unknown_config():
    with pytest.raises(ValueError):
        calculate_monthly_pmi(400_000, object())


def test_upfront_premium_only_for_single_premium():
    assert upfront_pmi_premium(SinglePremiumPMI(single_premium_amount=5000)) == 5000
    assert upfront_pmi_premium(MonthlyPMI(monthly_rate=0.005)) == 0


def test_pmi_removal_month_at_78_percent():
    schedule = generate_amortization_schedule(450_000, 6, 30, date(2025, 1, 1))
    month = find_pmi_removal_month(schedule, 500_000)
    assert month is not None
    assert schedule[month - 1].remaining_balance <= 390_000
    assert schedule[month - 2].remaining_balance > 390_000


def test_pmi_removal_month_first_payment_when_already_below():
    schedule = generate_amortization_schedule(300_000, 6, 30, date(2025, 1, 1))
    assert find_pmi_removal_month(schedule, 500_000) == 1


def test_pmi_removal_month_none_when_never_reached():
    schedule = generate_amortization_schedule(450_000, 6, 30, date(2025, 1, 1))
    assert find_pmi_removal_month(schedule[:12], 500_000) is None


# --- Down payment sync ---


def test_sync_down_payment_from_percent():
    res = sync_down_payment(500_000, percent=20)
    assert res.dollar == 100_000
    assert res.loan_amount == 400_000


def test_sync_down_payment_from_dollar():
    res = sync_down_payment(500_000, dollar=100_000)
    assert res.percent == pytest.approx(20)
    assert res.loan_amount == 400_000


def test_sync_down_payment_fifteen_percent():
    res = sync_down_payment(500_000, percent=15)
    assert res.dollar == 75_000
    assert res.loan_amount == 425_000


def test_sync_down_payment_defaults_to_twenty_percent():
    res = sync_down_payment(500_000)
    assert res.percent == pytest.approx(20)
    assert res.dollar == 100_000


def test_sync_down_payment_changed_field_drives():
    # Stale percent, fresh dollar amount
    res = sync_down_payment(500_000, percent=20, dollar=50_000, changed="dollar")
    assert res.percent == pytest.approx(10)
    assert res.loan_amount == 450_000


def test_sync_down_payment_changed_field_missing():
    with pytest.raises(ValueError):
        sync_down_payment(500_000, percent=20, changed="dollar")


def test_sync_down_payment_dollar_above_price():
    with pytest.raises(ValueError, match="cannot exceed"):
        sync_down_payment(500_000, dollar=600_000)
    assert sync_down_payment(500_000, dollar=500_000).loan_amount == 0


# --- Input-derived helpers ---


def _make_inputs(**overrides) -> LoanInputs:
    defaults = dict(principal=400_000, interest_rate=6.5, term_years=30)
    defaults.update(overrides)
    return LoanInputs(**defaults)


def test_resolve_down_payment_precedence():
    assert resolve_down_payment(_make_inputs()) == 0
    assert resolve_down_payment(_make_inputs(property_price=500_000)) == 100_000
    assert resolve_down_payment(_make_inputs(property_price=500_000, down_payment_percent=10)) == 50_000
    assert resolve_down_payment(_make_inputs(property_price=500_000, down_payment_dollar=120_000)) == 120_000


def test_monthly_escrow_annual_tax_and_insurance_monthly_hoa():
    inputs = _make_inputs(property_tax=6000, insurance=1200, hoa_fees=150)
    assert monthly_escrow(inputs) == 500 + 100 + 150
    assert monthly_escrow(_make_inputs()) == 0

"""Worst-case rate path for adjustable-rate mortgages.

The rate holds for the initial fixed period, jumps by the initial cap at the
first adjustment, then climbs by the periodic cap in every later year,
never exceeding ``initial_rate + lifetime_cap``. The path is yearly, with one
periodic step per year for either adjustment frequency. Payments are
re-amortized each year on the balance, rate and term remaining at that point.
"""
from __future__ import annotations

from mortgage_engine.amortization.schedule import calculate_monthly_payment
from mortgage_engine.models.loan import ARMConfig, ARMRateEntry


def _amortize_year(balance: float, annual_rate_percent: float, payment: float) -> float:
    """Balance left after twelve payments at a fixed rate."""
    r = annual_rate_percent / 12 / 100
    for _ in range(12):
        balance = max(balance - (payment - balance * r), 0.0)
    return balance


def project_arm_rate(arm_config: ARMConfig, initial_rate: float, year: int, previous_rate: float) -> float:
    """Rate in effect during loan ``year`` under the worst case."""
    ceiling = initial_rate + arm_config.lifetime_cap
    fixed_years = arm_config.initial_fixed_period_years
    if year <= fixed_years:
        return initial_rate
    if year == fixed_years + 1:
        return min(initial_rate + arm_config.initial_cap, ceiling)
    return min(previous_rate + arm_config.periodic_cap, ceiling)


def generate_arm_projections(
    arm_config: ARMConfig,
    initial_rate: float,
    loan_amount: float,
    term_years: int,
) -> list[ARMRateEntry]:
    """Year-by-year worst-case rate and P&I payment over the full term."""
    projections: list[ARMRateEntry] = []
    balance = loan_amount
    rate = initial_rate
    for year in range(1, term_years + 1):
        rate = project_arm_rate(arm_config, initial_rate, year, rate)
        remaining_years = term_years - year + 1
        payment = calculate_monthly_payment(balance, rate, remaining_years)
        projections.append(ARMRateEntry(year=year, rate=rate, monthly_payment=payment))
        balance = _amortize_year(balance, rate, payment)
    return projections

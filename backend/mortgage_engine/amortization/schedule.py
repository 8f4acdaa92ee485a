"""Amortization engine: level monthly payment and payment-by-payment schedule.

Rates are annual percentages (``6.5`` for 6.5%). Payment dates step by
calendar month from the start date.
"""
from __future__ import annotations

import calendar
from datetime import date

from mortgage_engine.models.loan import AmortizationEntry


def calculate_monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """Standard PMT formula for a fixed-rate fully amortizing loan.

    PMT = P * r(1+r)^n / ((1+r)^n - 1), r = rate/12/100, n = years*12.
    A zero rate falls back to straight division.
    """
    n = term_years * 12
    if annual_rate_percent == 0:
        return principal / n
    r = annual_rate_percent / 12 / 100
    factor = (1 + r) ** n
    return principal * (r * factor) / (factor - 1)


def add_months(start: date, months: int) -> date:
    """Return ``start`` moved forward by whole calendar months.

    The day is clamped to the last day of the target month (Jan 31 + 1 month
    is Feb 28 or 29).
    """
    year = start.year + (start.month - 1 + months) // 12
    month = (start.month - 1 + months) % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def generate_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    start_date: date | None = None,
) -> list[AmortizationEntry]:
    """Build the full schedule of ``term_years * 12`` payments.

    The final payment retires whatever balance is left so the schedule always
    ends at exactly zero.
    """
    start = start_date or date.today()
    payment = calculate_monthly_payment(principal, annual_rate_percent, term_years)
    monthly_rate = annual_rate_percent / 12 / 100
    n = term_years * 12

    schedule: list[AmortizationEntry] = []
    balance = principal
    for i in range(1, n + 1):
        interest = balance * monthly_rate
        principal_paid = payment - interest
        if i == n:
            principal_paid = balance
        balance = max(balance - principal_paid, 0.0)

        schedule.append(AmortizationEntry(
            payment_number=i,
            payment_date=add_months(start, i),
            principal_paid=principal_paid,
            interest_paid=interest,
            remaining_balance=balance,
            current_rate=annual_rate_percent,
            total_payment=principal_paid + interest,
        ))

    return schedule

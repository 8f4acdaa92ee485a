"""Re-amortization of a schedule under extra principal payments.

Every period is re-simulated from the running balance: interest accrues on
what is actually owed, the scheduled P&I payment is applied, then any extra
principal. The schedule stops as soon as the balance reaches zero.
"""
from __future__ import annotations

import logging
from collections import defaultdict

from mortgage_engine.models.loan import AmortizationEntry, ExtraPayments

logger = logging.getLogger(__name__)

# Balances below half a cent are treated as paid off
_PAYOFF_TOLERANCE = 0.005


def _extra_for_period(
    payment_number: int,
    extra_payments: ExtraPayments,
    lump_sums: dict[int, float],
    biweekly_extra: float,
) -> float:
    extra = extra_payments.extra_monthly + biweekly_extra + lump_sums.get(payment_number, 0.0)
    if extra_payments.extra_annual > 0 and extra_payments.extra_annual_month is not None:
        month_of_loan_year = (payment_number - 1) % 12 + 1
        if month_of_loan_year == extra_payments.extra_annual_month:
            extra += extra_payments.extra_annual
    return extra


def recalculate_with_extra_payments(
    base_schedule: list[AmortizationEntry],
    extra_payments: ExtraPayments,
    monthly_payment: float,
) -> list[AmortizationEntry]:
    """Apply extra payments to ``base_schedule`` and return the shortened schedule.

    Args:
        base_schedule: Schedule produced by ``generate_amortization_schedule``.
            Its dates and per-period rates are reused; it is not modified.
        extra_payments: Monthly, annual, lump-sum and biweekly extras.
        monthly_payment: Scheduled P&I payment.

    Returns:
        New entries with ``extra_principal_paid`` and ``total_payment`` set,
        ending at the period the balance reaches zero.
    """
    if not base_schedule:
        return []

    first = base_schedule[0]
    balance = first.remaining_balance + first.principal_paid
    last_number = base_schedule[-1].payment_number

    lump_sums: dict[int, float] = defaultdict(float)
    for lump in extra_payments.lump_sums:
        lump_sums[lump.payment_month] += lump.amount
    biweekly_extra = monthly_payment / 12 if extra_payments.biweekly_enabled else 0.0

    schedule: list[AmortizationEntry] = []
    for base in base_schedule:
        if balance <= 0:
            break

        interest = balance * base.current_rate / 12 / 100
        principal_paid = min(max(monthly_payment - interest, 0.0), balance)
        if base.payment_number == last_number:
            principal_paid = balance

        extra = _extra_for_period(base.payment_number, extra_payments, lump_sums, biweekly_extra)
        extra = min(extra, balance - principal_paid)

        balance = balance - principal_paid - extra
        if balance < _PAYOFF_TOLERANCE:
            principal_paid += balance
            balance = 0.0

        schedule.append(base.model_copy(update={
            "principal_paid": principal_paid,
            "interest_paid": interest,
            "extra_principal_paid": extra,
            "remaining_balance": balance,
            "total_payment": principal_paid + interest + extra,
        }))

    logger.debug(
        "Extra payments shortened schedule from %d to %d payments",
        len(base_schedule), len(schedule),
    )
    return schedule

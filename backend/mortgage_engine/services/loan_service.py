"""Comprehensive loan calculation service.

Combines the amortization engine and feature calculators into a single
LoanResults per loan. Pure: inputs are never modified and the same inputs
always produce the same result.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from mortgage_engine.amortization.arm import generate_arm_projections
from mortgage_engine.amortization.extra_payments import recalculate_with_extra_payments
from mortgage_engine.amortization.schedule import (
    calculate_monthly_payment,
    generate_amortization_schedule,
)
from mortgage_engine.models.loan import (
    AmortizationEntry,
    LoanInputs,
    LoanResults,
    LoanType,
    MonthlyPMI,
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
    sum_closing_costs,
    upfront_pmi_premium,
)

logger = logging.getLogger(__name__)


def _apply_pmi_and_ltv(
    schedule: list[AmortizationEntry],
    monthly_pmi: float,
    removal_month: Optional[int],
    property_price: Optional[float],
) -> list[AmortizationEntry]:
    """Return entries with PMI charges, per-entry LTV and total payment filled in.

    PMI is charged on every payment before the removal month; with no known
    removal month it runs for the whole schedule.
    """
    decorated: list[AmortizationEntry] = []
    for entry in schedule:
        active = monthly_pmi > 0 and (removal_month is None or entry.payment_number < removal_month)
        pmi_paid = monthly_pmi if active else 0.0
        ltv = calculate_ltv(entry.remaining_balance, property_price) if property_price else None
        decorated.append(entry.model_copy(update={
            "pmi_active": active,
            "pmi_paid": pmi_paid,
            "ltv_percent": ltv,
            "total_payment": entry.principal_paid + entry.interest_paid + entry.extra_principal_paid + pmi_paid,
        }))
    return decorated


def calculate_comprehensive_loan_results(inputs: Union[LoanInputs, Mapping[str, Any]]) -> LoanResults:
    """Calculate payments, schedule, closing costs, PMI, extra-payment and ARM figures.

    Raises:
        ValueError: if the inputs are out of range or inconsistent (for
            example an ARM loan without an ARM configuration).
    """
    if not isinstance(inputs, LoanInputs):
        inputs = LoanInputs.model_validate(inputs)
    if inputs.loan_type == LoanType.arm and inputs.arm_config is None:
        raise ValueError("ARM configuration is required when loan type is ARM")

    principal = inputs.principal
    n_months = inputs.term_years * 12

    effective_rate = calculate_effective_rate(inputs.interest_rate, inputs.discount_points)
    monthly_pi = calculate_monthly_payment(principal, effective_rate, inputs.term_years)

    # Closing
    points_cost = calculate_points_cost(principal, inputs.discount_points, inputs.origination_points)
    total_closing = sum_closing_costs(inputs.closing_costs) + points_cost
    net_closing = calculate_total_closing_costs(
        inputs.closing_costs, points_cost, inputs.seller_concessions, inputs.lender_credits,
    )
    down_payment = resolve_down_payment(inputs)
    upfront_pmi = upfront_pmi_premium(inputs.pmi_config)
    cash_at_closing = calculate_cash_at_closing(down_payment, net_closing + upfront_pmi)

    # Schedule, re-amortized when extra payments are configured
    base_schedule = generate_amortization_schedule(
        principal, effective_rate, inputs.term_years, inputs.start_date,
    )
    base_interest = sum(e.interest_paid for e in base_schedule)
    schedule = base_schedule
    accelerated_term = None
    interest_saved = None
    early_payoff = None
    if not inputs.extra_payments.is_empty:
        schedule = recalculate_with_extra_payments(base_schedule, inputs.extra_payments, monthly_pi)
        accelerated_term = len(schedule)
        interest_saved = base_interest - sum(e.interest_paid for e in schedule)
        early_payoff = schedule[-1].payment_date if schedule else None

    # PMI
    monthly_pmi = calculate_monthly_pmi(principal, inputs.pmi_config)
    removal_month = None
    if inputs.property_price and isinstance(inputs.pmi_config, MonthlyPMI):
        removal_month = find_pmi_removal_month(schedule, inputs.property_price)
    schedule = _apply_pmi_and_ltv(schedule, monthly_pmi, removal_month, inputs.property_price)
    removal_date = None
    if removal_month is not None:
        removal_date = schedule[removal_month - 1].payment_date
    total_pmi = sum(e.pmi_paid for e in schedule) + upfront_pmi

    monthly_total = monthly_pi + monthly_escrow(inputs) + monthly_pmi
    total_interest = sum(e.interest_paid for e in schedule)
    total_cost = monthly_total * n_months

    # ARM worst case
    projections = None
    worst_case_max = None
    worst_case_total = None
    if inputs.loan_type == LoanType.arm:
        projections = generate_arm_projections(
            inputs.arm_config, effective_rate, principal, inputs.term_years,
        )
        worst_case_max = max(p.monthly_payment for p in projections)
        worst_case_total = sum(p.monthly_payment * 12 for p in projections)

    logger.info(
        "Loan calculated: principal=%.2f rate=%.3f%% term=%dy P&I=%.2f total=%.2f payments=%d",
        principal, effective_rate, inputs.term_years, monthly_pi, monthly_total, len(schedule),
    )

    return LoanResults(
        monthly_payment_pi=monthly_pi,
        monthly_payment_total=monthly_total,
        total_interest=total_interest,
        total_cost=total_cost,
        amortization_schedule=schedule,
        effective_rate=effective_rate,
        points_cost=points_cost,
        total_closing_costs=total_closing,
        net_closing_costs=net_closing,
        down_payment=down_payment,
        cash_needed_at_closing=cash_at_closing,
        ltv=calculate_ltv(principal, inputs.property_price) if inputs.property_price else None,
        monthly_pmi=monthly_pmi,
        pmi_removal_month=removal_month,
        pmi_removal_date=removal_date,
        total_pmi_paid=total_pmi,
        original_term_months=n_months,
        accelerated_term_months=accelerated_term,
        total_interest_saved=interest_saved,
        early_payoff_date=early_payoff,
        arm_projections=projections,
        worst_case_max_payment=worst_case_max,
        worst_case_total_cost=worst_case_total,
    )

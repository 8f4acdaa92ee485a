"""Loan feature calculators: points, closing costs, LTV, PMI, down payment.

Small pure functions combined by the loan service. Rates are annual
percentages; points are percent of the loan amount.
"""
from __future__ import annotations

from typing import Literal, Optional

from mortgage_engine.models.loan import (
    AmortizationEntry,
    ClosingCosts,
    DownPaymentSync,
    LenderPaidPMI,
    LoanInputs,
    MonthlyPMI,
    NoPMI,
    PMIConfig,
    SinglePremiumPMI,
)

# Each discount point buys 0.25 percentage points off the rate
RATE_REDUCTION_PER_POINT = 0.25
# Borrower-paid PMI terminates automatically at 78% of the original value
PMI_AUTO_TERMINATION_LTV = 0.78
DEFAULT_DOWN_PAYMENT_PERCENT = 20.0


def calculate_effective_rate(base_rate: float, discount_points: float) -> float:
    """Rate after discount points; never below zero."""
    return max(base_rate - RATE_REDUCTION_PER_POINT * discount_points, 0.0)


def calculate_points_cost(loan_amount: float, discount_points: float, origination_points: float) -> float:
    return loan_amount * (discount_points + origination_points) / 100


def sum_closing_costs(closing_costs: ClosingCosts) -> float:
    """Total of the itemized closing-cost line items."""
    return sum(closing_costs.model_dump().values())


def calculate_total_closing_costs(
    closing_costs: ClosingCosts,
    points_cost: float,
    seller_concessions: float,
    lender_credits: float,
) -> float:
    """Net closing costs: line items plus points, less concessions and credits.

    May be negative when credits exceed costs.
    """
    return sum_closing_costs(closing_costs) + points_cost - seller_concessions - lender_credits


def calculate_cash_at_closing(down_payment: float, net_closing_costs: float) -> float:
    return down_payment + net_closing_costs


def calculate_ltv(loan_amount: float, property_price: float) -> float:
    """Loan-to-value as a percentage."""
    if property_price == 0:
        return 0.0
    return loan_amount / property_price * 100


def calculate_monthly_pmi(loan_amount: float, pmi_config: PMIConfig) -> float:
    """Monthly PMI charge. Only borrower-paid monthly PMI adds to the payment."""
    if isinstance(pmi_config, MonthlyPMI):
        return loan_amount * pmi_config.monthly_rate / 12
    if isinstance(pmi_config, (SinglePremiumPMI, LenderPaidPMI, NoPMI)):
        return 0.0
    raise ValueError(f"Unknown PMI configuration: {pmi_config!r}")


def upfront_pmi_premium(pmi_config: PMIConfig) -> float:
    """PMI paid in cash at closing (single-premium policies)."""
    if isinstance(pmi_config, SinglePremiumPMI):
        return pmi_config.single_premium_amount
    if isinstance(pmi_config, (MonthlyPMI, LenderPaidPMI, NoPMI)):
        return 0.0
    raise ValueError(f"Unknown PMI configuration: {pmi_config!r}")


def find_pmi_removal_month(
    schedule: list[AmortizationEntry],
    original_property_price: float,
) -> Optional[int]:
    """First payment number at which the balance is at or below 78% of the price."""
    threshold = PMI_AUTO_TERMINATION_LTV * original_property_price
    for entry in schedule:
        if entry.remaining_balance <= threshold:
            return entry.payment_number
    return None


def sync_down_payment(
    property_price: float,
    percent: Optional[float] = None,
    dollar: Optional[float] = None,
    changed: Optional[Literal["percent", "dollar"]] = None,
) -> DownPaymentSync:
    """Recompute the down payment pair and loan amount from the field that changed.

    ``changed`` names the driving field. Without it, a given percent drives,
    then a given dollar amount; with neither, 20% down is assumed.
    """
    if changed is None:
        if percent is not None:
            changed = "percent"
        elif dollar is not None:
            changed = "dollar"

    if changed == "dollar":
        if dollar is None:
            raise ValueError("Down payment dollar amount is required when it is the changed field")
        if dollar > property_price:
            raise ValueError("Down payment cannot exceed the property price")
        percent = dollar / property_price * 100 if property_price else 0.0
    else:
        if changed == "percent" and percent is None:
            raise ValueError("Down payment percent is required when it is the changed field")
        if percent is None:
            percent = DEFAULT_DOWN_PAYMENT_PERCENT
        dollar = property_price * percent / 100

    return DownPaymentSync(percent=percent, dollar=dollar, loan_amount=property_price - dollar)


def resolve_down_payment(inputs: LoanInputs) -> float:
    """Down payment implied by the inputs.

    An explicit dollar amount wins, then percent of the price, then the gap
    between price and principal. Without a property price there is none.
    """
    if inputs.down_payment_dollar is not None:
        return inputs.down_payment_dollar
    if inputs.property_price is None:
        return 0.0
    if inputs.down_payment_percent is not None:
        return sync_down_payment(inputs.property_price, percent=inputs.down_payment_percent).dollar
    return max(inputs.property_price - inputs.principal, 0.0)


def monthly_escrow(inputs: LoanInputs) -> float:
    """Monthly property tax, insurance and HOA (tax and insurance are annual inputs)."""
    return (inputs.property_tax or 0.0) / 12 + (inputs.insurance or 0.0) / 12 + (inputs.hoa_fees or 0.0)

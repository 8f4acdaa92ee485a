"""Tax benefit service: mortgage interest and property tax deductions.

Compares first-year itemized deductions against the standard deduction and
turns any excess into tax savings at the borrower's marginal rate.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

from mortgage_engine.amortization.schedule import (
    calculate_monthly_payment,
    generate_amortization_schedule,
)
from mortgage_engine.models.loan import LoanInputs
from mortgage_engine.models.tax import TaxBenefitCalculation, TaxProfile
from mortgage_engine.services.loan_features import calculate_monthly_pmi, monthly_escrow
from mortgage_engine.tax.brackets import (
    QUALIFIED_DEBT_LIMIT,
    SALT_CAP,
    calculate_marginal_tax_rate,
    get_standard_deduction,
)

logger = logging.getLogger(__name__)


def calculate_first_year_interest(loan_inputs: LoanInputs) -> float:
    """Interest paid over the first twelve payments at the stated rate."""
    if loan_inputs.interest_rate == 0:
        return 0.0
    schedule = generate_amortization_schedule(
        loan_inputs.principal,
        loan_inputs.interest_rate,
        loan_inputs.term_years,
        loan_inputs.start_date,
    )
    return sum(entry.interest_paid for entry in schedule[:12])


def calculate_tax_benefits(
    loan_inputs: Union[LoanInputs, Mapping[str, Any]],
    tax_profile: Union[TaxProfile, Mapping[str, Any]],
) -> TaxBenefitCalculation:
    """Itemized-vs-standard comparison and effective monthly payment for a loan."""
    if not isinstance(loan_inputs, LoanInputs):
        loan_inputs = LoanInputs.model_validate(loan_inputs)
    if not isinstance(tax_profile, TaxProfile):
        tax_profile = TaxProfile.model_validate(tax_profile)

    principal = loan_inputs.principal
    first_year_interest = calculate_first_year_interest(loan_inputs)

    # Interest on debt above the qualified limit is not deductible
    mortgage_interest_deduction = first_year_interest
    if principal > QUALIFIED_DEBT_LIMIT:
        mortgage_interest_deduction = first_year_interest * (QUALIFIED_DEBT_LIMIT / principal)

    property_tax_deduction = min(tax_profile.property_tax_annual, SALT_CAP)
    total_itemized = mortgage_interest_deduction + property_tax_deduction
    standard_deduction = get_standard_deduction(tax_profile.filing_status)

    itemization_beneficial = total_itemized > standard_deduction
    additional_benefit = total_itemized - standard_deduction if itemization_beneficial else 0.0

    marginal_rate = calculate_marginal_tax_rate(tax_profile.annual_income, tax_profile.filing_status)
    annual_savings = additional_benefit * marginal_rate
    monthly_savings = annual_savings / 12

    # P&I at the stated rate, plus the same escrow and PMI the loan service charges
    monthly_pi = calculate_monthly_payment(principal, loan_inputs.interest_rate, loan_inputs.term_years)
    original_payment = (
        monthly_pi
        + monthly_escrow(loan_inputs)
        + calculate_monthly_pmi(principal, loan_inputs.pmi_config)
    )

    logger.debug(
        "Tax benefits: itemized=%.2f standard=%.2f rate=%.2f savings/yr=%.2f",
        total_itemized, standard_deduction, marginal_rate, annual_savings,
    )

    return TaxBenefitCalculation(
        loan_amount=principal,
        first_year_interest=first_year_interest,
        mortgage_interest_deduction=mortgage_interest_deduction,
        property_tax_deduction=property_tax_deduction,
        total_itemized_deductions=total_itemized,
        standard_deduction=standard_deduction,
        recommended_method="itemized" if itemization_beneficial else "standard",
        additional_itemized_benefit=additional_benefit,
        marginal_tax_rate=marginal_rate,
        annual_tax_savings=annual_savings,
        monthly_tax_savings=monthly_savings,
        original_monthly_payment=original_payment,
        effective_monthly_payment=original_payment - monthly_savings,
        exceeds_750k_limit=principal > QUALIFIED_DEBT_LIMIT,
        exceeds_salt_cap=tax_profile.property_tax_annual > SALT_CAP,
        itemization_beneficial=itemization_beneficial,
    )

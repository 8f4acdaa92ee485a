"""Side-by-side comparison of two loan configurations."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from mortgage_engine.models.comparison import LoanComparison
from mortgage_engine.models.loan import LoanInputs
from mortgage_engine.services.loan_service import calculate_comprehensive_loan_results

# Payments within half a cent are reported as equal
_EQUAL_TOLERANCE = 0.005


def compare_loans(
    loan_a: Union[LoanInputs, Mapping[str, Any]],
    loan_b: Union[LoanInputs, Mapping[str, Any]],
) -> LoanComparison:
    """Calculate both loans independently and report ``b - a`` differences."""
    results_a = calculate_comprehensive_loan_results(loan_a)
    results_b = calculate_comprehensive_loan_results(loan_b)

    payment_diff = results_b.monthly_payment_total - results_a.monthly_payment_total
    if abs(payment_diff) < _EQUAL_TOLERANCE:
        lower = "equal"
    elif payment_diff > 0:
        lower = "loan_a"
    else:
        lower = "loan_b"

    return LoanComparison(
        loan_a=results_a,
        loan_b=results_b,
        monthly_payment_difference=payment_diff,
        total_interest_difference=results_b.total_interest - results_a.total_interest,
        total_cost_difference=results_b.total_cost - results_a.total_cost,
        cash_at_closing_difference=results_b.cash_needed_at_closing - results_a.cash_needed_at_closing,
        lower_monthly_payment=lower,
    )

from typing import Literal

from mortgage_engine.models.base import CamelModel
from mortgage_engine.models.loan import LoanResults


class LoanComparison(CamelModel):
    """Two loans side by side; differences are ``loan_b - loan_a``."""
    loan_a: LoanResults
    loan_b: LoanResults
    monthly_payment_difference: float
    total_interest_difference: float
    total_cost_difference: float
    cash_at_closing_difference: float
    lower_monthly_payment: Literal["loan_a", "loan_b", "equal"]

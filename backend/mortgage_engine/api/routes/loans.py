from typing import Any, Literal, Optional

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, Field

from mortgage_engine.api.deps import validation_http_error
from mortgage_engine.models.comparison import LoanComparison
from mortgage_engine.models.loan import DownPaymentSync, LoanResults
from mortgage_engine.models.report import YearlySummary
from mortgage_engine.services.comparison_service import compare_loans
from mortgage_engine.services.loan_features import sync_down_payment
from mortgage_engine.services.loan_service import calculate_comprehensive_loan_results
from mortgage_engine.services.reporting import summarize_by_year
from mortgage_engine.services.validation import InputValidationError, validate_loan_inputs

router = APIRouter(tags=["loans"])


class DownPaymentRequest(BaseModel):
    property_price: float = Field(gt=0)
    percent: Optional[float] = Field(None, ge=0, le=100)
    dollar: Optional[float] = Field(None, ge=0)
    changed: Optional[Literal["percent", "dollar"]] = None


@router.post("/loans/calculate", response_model=LoanResults)
def calculate_loan(payload: dict[str, Any] = Body(...)):
    """Full loan calculation: payments, schedule, closing costs, PMI, extras, ARM."""
    try:
        inputs = validate_loan_inputs(payload)
    except InputValidationError as e:
        raise validation_http_error(e)
    return calculate_comprehensive_loan_results(inputs)


@router.post("/loans/compare", response_model=LoanComparison)
def compare_loan_pair(payload: dict[str, Any] = Body(...)):
    """Compare two loans. Body: ``{"loan_a": {...}, "loan_b": {...}}``."""
    try:
        loan_a = validate_loan_inputs(payload.get("loan_a") or {})
        loan_b = validate_loan_inputs(payload.get("loan_b") or {})
    except InputValidationError as e:
        raise validation_http_error(e)
    return compare_loans(loan_a, loan_b)


@router.post("/loans/down-payment", response_model=DownPaymentSync)
def sync_down_payment_endpoint(request: DownPaymentRequest):
    try:
        return sync_down_payment(request.property_price, request.percent, request.dollar, request.changed)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/loans/amortization/yearly", response_model=list[YearlySummary])
def yearly_amortization(payload: dict[str, Any] = Body(...)):
    """Loan schedule rolled up by loan year."""
    try:
        inputs = validate_loan_inputs(payload)
    except InputValidationError as e:
        raise validation_http_error(e)
    results = calculate_comprehensive_loan_results(inputs)
    return summarize_by_year(results.amortization_schedule)

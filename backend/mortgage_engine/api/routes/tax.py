from typing import Any

from fastapi import APIRouter, Body, HTTPException

from mortgage_engine.api.deps import validation_http_error
from mortgage_engine.models.tax import BracketTable, FilingStatus, TaxBenefitCalculation
from mortgage_engine.services.tax_service import calculate_tax_benefits
from mortgage_engine.services.validation import (
    InputValidationError,
    validate_loan_inputs,
    validate_tax_profile,
)
from mortgage_engine.tax.brackets import TAX_YEAR, get_standard_deduction, get_tax_brackets

router = APIRouter(tags=["tax"])


@router.post("/tax/benefits", response_model=TaxBenefitCalculation)
def tax_benefits(payload: dict[str, Any] = Body(...)):
    """Deduction comparison for a loan. Body: ``{"loan": {...}, "profile": {...}}``."""
    try:
        loan = validate_loan_inputs(payload.get("loan") or {})
        profile = validate_tax_profile(payload.get("profile") or {})
    except InputValidationError as e:
        raise validation_http_error(e)
    return calculate_tax_benefits(loan, profile)


@router.get("/tax/brackets/{filing_status}", response_model=BracketTable)
def tax_brackets(filing_status: str):
    try:
        status = FilingStatus(filing_status)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown filing status '{filing_status}'")
    return BracketTable(
        filing_status=status,
        tax_year=TAX_YEAR,
        standard_deduction=get_standard_deduction(status),
        brackets=get_tax_brackets(status),
    )

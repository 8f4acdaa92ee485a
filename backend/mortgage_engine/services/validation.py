"""Input validation: turns raw user input into validated engine records.

Pydantic does the structural checks; this layer adds the user-facing bounds
that are stricter than the engine's own (an interest rate of at least 0.01%)
and maps every failure to a readable message. Messages come from a table
keyed by ``"<field>.<error type>"`` which callers may override per call.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from mortgage_engine.models.loan import LoanInputs
from mortgage_engine.models.tax import TaxProfile

logger = logging.getLogger(__name__)

MIN_USER_INTEREST_RATE = 0.01

DEFAULT_MESSAGES: dict[str, str] = {
    "principal.missing": "Principal is required",
    "principal.float_parsing": "Principal must be a number",
    "principal.float_type": "Principal must be a number",
    "principal.greater_than_equal": "Principal must be at least $1,000",
    "principal.less_than_equal": "Principal cannot exceed $10,000,000",
    "interest_rate.missing": "Interest rate is required",
    "interest_rate.float_parsing": "Interest rate must be a number",
    "interest_rate.float_type": "Interest rate must be a number",
    "interest_rate.greater_than_equal": "Interest rate must be at least 0.01%",
    "interest_rate.less_than_equal": "Interest rate cannot exceed 20%",
    "term_years.missing": "Loan term is required",
    "term_years.int_parsing": "Loan term must be a number",
    "term_years.int_from_float": "Loan term must be a whole number",
    "term_years.int_type": "Loan term must be a number",
    "term_years.greater_than_equal": "Loan term must be at least 1 year",
    "term_years.less_than_equal": "Loan term cannot exceed 50 years",
    "property_tax.greater_than_equal": "Property tax cannot be negative",
    "insurance.greater_than_equal": "Insurance cannot be negative",
    "hoa_fees.greater_than_equal": "HOA fees cannot be negative",
    "property_price.greater_than": "Property price must be positive",
    "down_payment_percent.greater_than_equal": "Down payment percent cannot be negative",
    "down_payment_percent.less_than_equal": "Down payment percent cannot exceed 100%",
    "down_payment_dollar.greater_than_equal": "Down payment cannot be negative",
    "discount_points.greater_than_equal": "Discount points cannot be negative",
    "discount_points.less_than_equal": "Discount points typically don't exceed 4",
    "origination_points.greater_than_equal": "Origination points cannot be negative",
    "origination_points.less_than_equal": "Origination points typically don't exceed 3",
    "lender_credits.greater_than_equal": "Lender credits cannot be negative",
    "seller_concessions.greater_than_equal": "Seller concessions cannot be negative",
    "closing_costs.greater_than_equal": "Closing costs cannot be negative",
    "pmi_config.monthly.monthly_rate.greater_than_equal": "PMI rate must be at least 0.3%",
    "pmi_config.monthly.monthly_rate.less_than_equal": "PMI rate cannot exceed 1.5%",
    "pmi_config.single_premium.single_premium_amount.greater_than": "Single premium amount must be positive",
    "extra_payments.extra_monthly.greater_than_equal": "Extra monthly payment cannot be negative",
    "extra_payments.extra_annual.greater_than_equal": "Extra annual payment cannot be negative",
    "extra_payments.extra_annual_month.greater_than_equal": "Month must be 1-12",
    "extra_payments.extra_annual_month.less_than_equal": "Month must be 1-12",
    "extra_payments.lump_sums.too_long": "Maximum 10 lump sum payments allowed",
    "arm_config.initial_fixed_period_years.literal_error": "Initial fixed period must be 3, 5, 7 or 10 years",
    "annual_income.missing": "Income is required",
    "annual_income.greater_than": "Income must be positive",
    "annual_income.less_than_equal": "Income must be reasonable",
    "filing_status.enum": "Filing status must be single, married_joint, married_separate or head_of_household",
    "property_tax_annual.greater_than_equal": "Property tax cannot be negative",
}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class InputValidationError(ValueError):
    """Raised when raw input fails validation; carries one FieldError per problem."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


def _field_path(loc: tuple) -> str:
    # List indices are dropped so messages key on the field, not the position
    return ".".join(str(part) for part in loc if not isinstance(part, int))


def _message_for(path: str, error_type: str, default: str, messages: Mapping[str, str]) -> str:
    """Most specific table entry for the error, falling back to parent fields."""
    parts = path.split(".") if path else []
    while parts:
        key = ".".join(parts) + "." + error_type
        if key in messages:
            return messages[key]
        parts.pop()
    return default.removeprefix("Value error, ")


def _to_field_errors(exc: ValidationError, messages: Mapping[str, str]) -> list[FieldError]:
    errors = []
    for err in exc.errors():
        path = _field_path(err["loc"])
        errors.append(FieldError(
            field=path or "__root__",
            message=_message_for(path, err["type"], err["msg"], messages),
        ))
    return errors


def validate_loan_inputs(
    raw: Mapping[str, Any],
    messages: Optional[Mapping[str, str]] = None,
) -> LoanInputs:
    """Validate raw loan input.

    Raises:
        InputValidationError: with one FieldError per offending field.
    """
    table = DEFAULT_MESSAGES if messages is None else {**DEFAULT_MESSAGES, **messages}
    try:
        inputs = LoanInputs.model_validate(raw)
    except ValidationError as exc:
        errors = _to_field_errors(exc, table)
        logger.info("Loan input rejected: %s", [e.field for e in errors])
        raise InputValidationError(errors) from exc

    if inputs.interest_rate < MIN_USER_INTEREST_RATE:
        raise InputValidationError([FieldError(
            field="interest_rate",
            message=_message_for("interest_rate", "greater_than_equal", "Invalid input", table),
        )])
    return inputs


def validate_tax_profile(
    raw: Mapping[str, Any],
    messages: Optional[Mapping[str, str]] = None,
) -> TaxProfile:
    """Validate a raw tax profile. Raises InputValidationError."""
    table = DEFAULT_MESSAGES if messages is None else {**DEFAULT_MESSAGES, **messages}
    try:
        return TaxProfile.model_validate(raw)
    except ValidationError as exc:
        raise InputValidationError(_to_field_errors(exc, table)) from exc

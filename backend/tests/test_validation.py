"""Tests for user-facing input validation."""
import pytest

from mortgage_engine.models.loan import LoanInputs
from mortgage_engine.services.validation import (
    InputValidationError,
    validate_loan_inputs,
    validate_tax_profile,
)


def _raw_loan(**overrides) -> dict:
    raw = {"principal": 300_000, "interestRate": 6.5, "termYears": 30}
    raw.update(overrides)
    return raw


def _errors(raw, **kwargs) -> dict:
    with pytest.raises(InputValidationError) as exc_info:
        validate_loan_inputs(raw, **kwargs)
    return {e.field: e.message for e in exc_info.value.errors}


def test_valid_loan_returns_inputs():
    loan = validate_loan_inputs(_raw_loan())
    assert isinstance(loan, LoanInputs)
    assert loan.principal == 300_000


def test_principal_too_small():
    assert _errors(_raw_loan(principal=500)) == {"principal": "Principal must be at least $1,000"}


def test_principal_too_large():
    assert _errors(_raw_loan(principal=20_000_000))["principal"] == "Principal cannot exceed $10,000,000"


def test_principal_missing():
    raw = _raw_loan()
    del raw["principal"]
    assert _errors(raw)["principal"] == "Principal is required"


def test_principal_not_a_number():
    assert _errors(_raw_loan(principal="lots"))["principal"] == "Principal must be a number"


def test_rate_below_user_minimum():
    assert _errors(_raw_loan(interestRate=0)) == {"interest_rate": "Interest rate must be at least 0.01%"}


def test_rate_minimum_accepted():
    assert validate_loan_inputs(_raw_loan(interestRate=0.01)).interest_rate == 0.01


def test_rate_too_high():
    assert _errors(_raw_loan(interestRate=25))["interest_rate"] == "Interest rate cannot exceed 20%"


def test_term_must_be_whole():
    assert _errors(_raw_loan(termYears=30.5))["term_years"] == "Loan term must be a whole number"


def test_term_bounds():
    assert _errors(_raw_loan(termYears=0))["term_years"] == "Loan term must be at least 1 year"
    assert _errors(_raw_loan(termYears=51))["term_years"] == "Loan term cannot exceed 50 years"


def test_multiple_errors_reported_together():
    errors = _errors({"principal": 10, "interestRate": 30, "termYears": 100})
    assert set(errors) == {"principal", "interest_rate", "term_years"}


def test_nested_pmi_rate_message():
    errors = _errors(_raw_loan(pmiConfig={"type": "monthly", "monthlyRate": 0.1}))
    assert errors == {"pmi_config.monthly.monthly_rate": "PMI rate cannot exceed 1.5%"}


def test_too_many_lump_sums():
    lumps = [{"amount": 100, "paymentMonth": i} for i in range(1, 12)]
    errors = _errors(_raw_loan(extraPayments={"lumpSums": lumps}))
    assert errors == {"extra_payments.lump_sums": "Maximum 10 lump sum payments allowed"}


def test_closing_cost_item_falls_back_to_parent_message():
    errors = _errors(_raw_loan(closingCosts={"appraisalFee": -1}))
    assert errors == {"closing_costs.appraisal_fee": "Closing costs cannot be negative"}


def test_arm_without_config_is_form_level_error():
    errors = _errors(_raw_loan(loanType="arm"))
    assert errors == {"__root__": "ARM configuration is required when loan type is ARM"}


def test_custom_messages_override_defaults():
    errors = _errors(_raw_loan(principal=500), messages={"principal.greater_than_equal": "Too small"})
    assert errors == {"principal": "Too small"}


def test_error_string_lists_fields():
    with pytest.raises(ValueError, match="principal"):
        validate_loan_inputs(_raw_loan(principal=1))


# --- Tax profile ---


def test_valid_tax_profile():
    profile = validate_tax_profile({"annualIncome": 90_000, "filingStatus": "single", "propertyTaxAnnual": 0})
    assert profile.annual_income == 90_000


def test_tax_profile_errors():
    with pytest.raises(InputValidationError) as exc_info:
        validate_tax_profile({"annualIncome": 0, "filingStatus": "widowed", "propertyTaxAnnual": -5})
    errors = {e.field: e.message for e in exc_info.value.errors}
    assert errors["annual_income"] == "Income must be positive"
    assert errors["filing_status"].startswith("Filing status must be")
    assert errors["property_tax_annual"] == "Property tax cannot be negative"

from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from mortgage_engine.models.base import CamelModel, FrozenCamelModel


class FilingStatus(str, Enum):
    """Federal filing status."""
    single = "single"
    married_joint = "married_joint"
    married_separate = "married_separate"
    head_of_household = "head_of_household"


class TaxBracket(FrozenCamelModel):
    """A published bracket; both bounds inclusive, ``max_income`` None for the top bracket."""
    rate: float
    min_income: float
    max_income: Optional[float] = None


class TaxProfile(CamelModel):
    annual_income: float = Field(gt=0, le=10_000_000)
    filing_status: FilingStatus
    property_tax_annual: float = Field(ge=0)


class TaxBenefitCalculation(CamelModel):
    """First-year deduction picture for a loan under a tax profile."""
    loan_amount: float
    first_year_interest: float

    mortgage_interest_deduction: float
    property_tax_deduction: float
    total_itemized_deductions: float
    standard_deduction: float

    recommended_method: Literal["itemized", "standard"]
    additional_itemized_benefit: float

    marginal_tax_rate: float
    annual_tax_savings: float
    monthly_tax_savings: float

    original_monthly_payment: float
    effective_monthly_payment: float

    exceeds_750k_limit: bool
    exceeds_salt_cap: bool = Field(alias="exceedsSALTCap")
    itemization_beneficial: bool


class BracketTable(CamelModel):
    filing_status: FilingStatus
    tax_year: int
    standard_deduction: float
    brackets: list[TaxBracket]

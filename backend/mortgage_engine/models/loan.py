from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, model_validator

from mortgage_engine.models.base import CamelModel, FrozenCamelModel


class LoanType(str, Enum):
    """Rate structure of a loan."""
    fixed = "fixed"
    arm = "arm"


class ClosingCosts(CamelModel):
    """Itemized closing costs paid by the buyer."""
    appraisal_fee: float = Field(0.0, ge=0)
    title_insurance: float = Field(0.0, ge=0)
    title_search_fee: float = Field(0.0, ge=0)
    recording_fees: float = Field(0.0, ge=0)
    attorney_fees: float = Field(0.0, ge=0)
    transfer_tax: float = Field(0.0, ge=0)
    survey_fee: float = Field(0.0, ge=0)
    prepaid_escrow: float = Field(0.0, ge=0)
    other_closing_costs: float = Field(0.0, ge=0)
    buyer_agent_commission: float = Field(0.0, ge=0)


# --- PMI variants (discriminated on ``type``) ---


class MonthlyPMI(CamelModel):
    """Borrower-paid PMI billed monthly; ``monthly_rate`` is the annual rate as a decimal."""
    type: Literal["monthly"] = "monthly"
    monthly_rate: float = Field(ge=0.003, le=0.015)


class SinglePremiumPMI(CamelModel):
    """PMI paid once, up front, at closing."""
    type: Literal["single_premium"] = "single_premium"
    single_premium_amount: float = Field(gt=0)


class LenderPaidPMI(CamelModel):
    """PMI paid by the lender (priced into the rate)."""
    type: Literal["lender_paid"] = "lender_paid"


class NoPMI(CamelModel):
    type: Literal["none"] = "none"


PMIConfig = Annotated[
    Union[MonthlyPMI, SinglePremiumPMI, LenderPaidPMI, NoPMI],
    Field(discriminator="type"),
]


class LumpSumPayment(CamelModel):
    amount: float = Field(gt=0)
    payment_month: int = Field(ge=1)


class ExtraPayments(CamelModel):
    """Extra principal applied on top of the scheduled P&I payment.

    ``extra_annual_month`` is the month (1-12) within each loan year in which
    ``extra_annual`` is paid. ``biweekly_enabled`` models paying half the
    payment every two weeks: one extra monthly payment per year, spread evenly.
    """
    extra_monthly: float = Field(0.0, ge=0)
    extra_annual: float = Field(0.0, ge=0)
    extra_annual_month: Optional[int] = Field(None, ge=1, le=12)
    lump_sums: list[LumpSumPayment] = Field(default_factory=list, max_length=10)
    biweekly_enabled: bool = False

    @model_validator(mode="after")
    def _annual_month_required(self) -> "ExtraPayments":
        if self.extra_annual > 0 and self.extra_annual_month is None:
            raise ValueError("Extra annual month is required when extra annual payment is specified")
        return self

    @property
    def is_empty(self) -> bool:
        return (
            self.extra_monthly <= 0
            and self.extra_annual <= 0
            and not self.lump_sums
            and not self.biweekly_enabled
        )


class ARMConfig(CamelModel):
    """Adjustable-rate terms. Caps are in percentage points."""
    initial_fixed_period_years: Literal[3, 5, 7, 10]
    adjustment_frequency: Literal["annual", "semi-annual"] = "annual"
    initial_cap: float = Field(ge=0, le=10)
    periodic_cap: float = Field(ge=0, le=10)
    lifetime_cap: float = Field(ge=0, le=10)


class LoanInputs(CamelModel):
    """Full configuration of a single mortgage.

    ``property_tax`` and ``insurance`` are annual amounts; ``hoa_fees`` is
    monthly. An interest rate of 0 is accepted here and handled as a special
    case by the engine; the user-facing minimum is enforced by
    :mod:`mortgage_engine.services.validation`.
    """
    principal: float = Field(ge=1000, le=10_000_000)
    interest_rate: float = Field(ge=0, le=20)
    term_years: int = Field(ge=1, le=50)
    property_tax: Optional[float] = Field(None, ge=0)
    insurance: Optional[float] = Field(None, ge=0)
    hoa_fees: Optional[float] = Field(None, ge=0)

    property_price: Optional[float] = Field(None, gt=0)
    down_payment_percent: Optional[float] = Field(None, ge=0, le=100)
    down_payment_dollar: Optional[float] = Field(None, ge=0)

    discount_points: float = Field(0.0, ge=0, le=4)
    origination_points: float = Field(0.0, ge=0, le=3)
    lender_credits: float = Field(0.0, ge=0)
    seller_concessions: float = Field(0.0, ge=0)

    closing_costs: ClosingCosts = Field(default_factory=ClosingCosts)
    pmi_config: PMIConfig = Field(default_factory=NoPMI)
    extra_payments: ExtraPayments = Field(default_factory=ExtraPayments)
    loan_type: LoanType = LoanType.fixed
    arm_config: Optional[ARMConfig] = None
    start_date: Optional[date] = None

    @model_validator(mode="after")
    def _arm_requires_config(self) -> "LoanInputs":
        if self.loan_type == LoanType.arm and self.arm_config is None:
            raise ValueError("ARM configuration is required when loan type is ARM")
        return self


class AmortizationEntry(FrozenCamelModel):
    """One scheduled payment. Immutable once generated."""
    payment_number: int
    payment_date: date
    principal_paid: float
    interest_paid: float
    remaining_balance: float
    current_rate: float
    pmi_active: bool = False
    pmi_paid: float = 0.0
    ltv_percent: Optional[float] = None
    extra_principal_paid: float = 0.0
    total_payment: float = 0.0


class ARMRateEntry(FrozenCamelModel):
    """Projected worst-case rate and P&I payment for one loan year."""
    year: int
    rate: float
    monthly_payment: float


class DownPaymentSync(CamelModel):
    percent: float
    dollar: float
    loan_amount: float


class LoanResults(CamelModel):
    """Everything derived from one :class:`LoanInputs`."""
    monthly_payment_pi: float = Field(alias="monthlyPaymentPI")
    monthly_payment_total: float
    total_interest: float
    total_cost: float
    amortization_schedule: list[AmortizationEntry]

    effective_rate: float
    points_cost: float
    total_closing_costs: float
    net_closing_costs: float
    down_payment: float
    cash_needed_at_closing: float
    ltv: Optional[float] = None

    monthly_pmi: float = Field(0.0, alias="monthlyPMI")
    pmi_removal_month: Optional[int] = None
    pmi_removal_date: Optional[date] = None
    total_pmi_paid: float = Field(0.0, alias="totalPMIPaid")

    original_term_months: int
    accelerated_term_months: Optional[int] = None
    total_interest_saved: Optional[float] = None
    early_payoff_date: Optional[date] = None

    arm_projections: Optional[list[ARMRateEntry]] = None
    worst_case_max_payment: Optional[float] = None
    worst_case_total_cost: Optional[float] = None

from mortgage_engine.models.base import CamelModel


class YearlySummary(CamelModel):
    """Schedule totals for one loan year."""
    year: int
    principal_paid: float
    interest_paid: float
    extra_principal_paid: float
    pmi_paid: float
    ending_balance: float

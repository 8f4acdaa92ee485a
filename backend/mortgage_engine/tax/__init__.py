"""Federal tax tables and lookups."""
from mortgage_engine.tax.brackets import (
    QUALIFIED_DEBT_LIMIT,
    SALT_CAP,
    TAX_YEAR,
    calculate_marginal_tax_rate,
    get_standard_deduction,
    get_tax_brackets,
)

__all__ = [
    "QUALIFIED_DEBT_LIMIT",
    "SALT_CAP",
    "TAX_YEAR",
    "calculate_marginal_tax_rate",
    "get_standard_deduction",
    "get_tax_brackets",
]

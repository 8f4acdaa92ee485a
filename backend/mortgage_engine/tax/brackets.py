"""2025 federal tax tables: brackets, standard deductions and deduction caps.

Bracket bounds are the published whole-dollar figures and are inclusive on
both ends.
"""
from __future__ import annotations

from typing import Union

from mortgage_engine.models.tax import FilingStatus, TaxBracket

TAX_YEAR = 2025

# Qualified residence debt eligible for the full interest deduction (post-TCJA)
QUALIFIED_DEBT_LIMIT = 750_000
# State and local tax deduction cap
SALT_CAP = 10_000

STANDARD_DEDUCTIONS: dict[FilingStatus, float] = {
    FilingStatus.single: 15_000,
    FilingStatus.married_joint: 30_000,
    FilingStatus.married_separate: 15_000,
    FilingStatus.head_of_household: 22_500,
}


def _table(*rows: tuple[float, float, float | None]) -> list[TaxBracket]:
    return [TaxBracket(rate=rate, min_income=lo, max_income=hi) for rate, lo, hi in rows]


TAX_BRACKETS: dict[FilingStatus, list[TaxBracket]] = {
    FilingStatus.single: _table(
        (0.10, 0, 11_600),
        (0.12, 11_601, 47_150),
        (0.22, 47_151, 100_525),
        (0.24, 100_526, 191_950),
        (0.32, 191_951, 243_725),
        (0.35, 243_726, 609_350),
        (0.37, 609_351, None),
    ),
    FilingStatus.married_joint: _table(
        (0.10, 0, 23_200),
        (0.12, 23_201, 94_300),
        (0.22, 94_301, 201_050),
        (0.24, 201_051, 383_900),
        (0.32, 383_901, 487_450),
        (0.35, 487_451, 731_200),
        (0.37, 731_201, None),
    ),
    FilingStatus.married_separate: _table(
        (0.10, 0, 11_600),
        (0.12, 11_601, 47_150),
        (0.22, 47_151, 100_525),
        (0.24, 100_526, 191_950),
        (0.32, 191_951, 243_725),
        (0.35, 243_726, 365_600),
        (0.37, 365_601, None),
    ),
    FilingStatus.head_of_household: _table(
        (0.10, 0, 16_550),
        (0.12, 16_551, 63_100),
        (0.22, 63_101, 100_500),
        (0.24, 100_501, 191_950),
        (0.32, 191_951, 243_700),
        (0.35, 243_701, 609_350),
        (0.37, 609_351, None),
    ),
}


def get_tax_brackets(filing_status: Union[FilingStatus, str]) -> list[TaxBracket]:
    """Bracket table for a filing status. Raises ValueError for unknown statuses."""
    return TAX_BRACKETS[FilingStatus(filing_status)]


def get_standard_deduction(filing_status: Union[FilingStatus, str]) -> float:
    return STANDARD_DEDUCTIONS[FilingStatus(filing_status)]


def calculate_marginal_tax_rate(income: float, filing_status: Union[FilingStatus, str]) -> float:
    """Rate of the bracket containing ``income``, as a decimal (0.22 for 22%).

    The first bracket whose maximum is at or above the income wins, so an
    income between two published whole-dollar bounds (47,150.50) falls into
    the higher bracket.
    """
    brackets = get_tax_brackets(filing_status)
    for bracket in brackets:
        if bracket.max_income is None or income <= bracket.max_income:
            return bracket.rate
    return brackets[-1].rate

#!/usr/bin/env python3
"""Loan Report: run one loan (and optionally a tax profile) from a JSON file.

Prints the payment, closing, PMI, extra-payment and ARM figures, and the
first-year tax picture when an income is given.

Usage:
    cd backend && python scripts/loan_report.py loan.json
    cd backend && python scripts/loan_report.py loan.json --income 120000 --filing-status married_joint
    cd backend && python scripts/loan_report.py loan.json --yearly --output schedule.csv
    cd backend && python scripts/loan_report.py loan.json --output schedule.xlsx
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BACKEND_DIR))

logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(message)s", datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)

from mortgage_engine.models.tax import FilingStatus
from mortgage_engine.services.loan_service import calculate_comprehensive_loan_results
from mortgage_engine.services.reporting import summarize_by_year, write_schedule
from mortgage_engine.services.tax_service import calculate_tax_benefits
from mortgage_engine.services.validation import (
    InputValidationError,
    validate_loan_inputs,
    validate_tax_profile,
)


def _money(value: float | None) -> str:
    return "-" if value is None else f"${value:,.0f}"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Mortgage loan report")
    parser.add_argument("loan", type=Path, help="JSON file with loan inputs")
    parser.add_argument("--income", type=float, help="Annual income for the tax comparison")
    parser.add_argument(
        "--filing-status",
        default=FilingStatus.single.value,
        choices=[s.value for s in FilingStatus],
    )
    parser.add_argument("--property-tax", type=float, help="Annual property tax (defaults to the loan's)")
    parser.add_argument("--yearly", action="store_true", help="Print the yearly amortization summary")
    parser.add_argument("--output", type=Path, help="Write the full schedule to this .csv or .xlsx file")
    args = parser.parse_args(argv)

    raw = json.loads(args.loan.read_text())
    try:
        inputs = validate_loan_inputs(raw)
    except InputValidationError as e:
        for err in e.errors:
            logger.error("%s: %s", err.field, err.message)
        return 1

    results = calculate_comprehensive_loan_results(inputs)

    logger.info("Effective rate:        %.3f%%", results.effective_rate)
    logger.info("Monthly P&I:           %s", _money(results.monthly_payment_pi))
    logger.info("Monthly total:         %s", _money(results.monthly_payment_total))
    logger.info("Total interest:        %s", _money(results.total_interest))
    logger.info("Total cost:            %s", _money(results.total_cost))
    logger.info("Net closing costs:     %s", _money(results.net_closing_costs))
    logger.info("Cash at closing:       %s", _money(results.cash_needed_at_closing))
    if results.monthly_pmi:
        logger.info("Monthly PMI:           %s (removed at payment %s)",
                    _money(results.monthly_pmi), results.pmi_removal_month or "-")
    if results.accelerated_term_months is not None:
        logger.info("Payoff:                %d of %d months, interest saved %s",
                    results.accelerated_term_months, results.original_term_months,
                    _money(results.total_interest_saved))
    if results.arm_projections:
        logger.info("ARM worst-case payment: %s", _money(results.worst_case_max_payment))

    if args.income is not None:
        property_tax = args.property_tax if args.property_tax is not None else (inputs.property_tax or 0.0)
        try:
            profile = validate_tax_profile({
                "annual_income": args.income,
                "filing_status": args.filing_status,
                "property_tax_annual": property_tax,
            })
        except InputValidationError as e:
            for err in e.errors:
                logger.error("%s: %s", err.field, err.message)
            return 1
        tax = calculate_tax_benefits(inputs, profile)
        logger.info("Recommended deduction: %s (itemized %s vs standard %s)",
                    tax.recommended_method, _money(tax.total_itemized_deductions),
                    _money(tax.standard_deduction))
        logger.info("Monthly tax savings:   %s -> effective payment %s",
                    _money(tax.monthly_tax_savings), _money(tax.effective_monthly_payment))

    if args.yearly:
        for year in summarize_by_year(results.amortization_schedule):
            logger.info("Year %2d  principal %12s  interest %12s  balance %12s",
                        year.year, _money(year.principal_paid), _money(year.interest_paid),
                        _money(year.ending_balance))

    if args.output:
        out = write_schedule(results.amortization_schedule, args.output)
        logger.info("Schedule written to %s", out)

    return 0


if __name__ == "__main__":
    sys.exit(main())

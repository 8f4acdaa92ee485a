"""Amortization engine: payments, schedules, extra payments, and ARM projections."""
from mortgage_engine.amortization.schedule import (
    add_months,
    calculate_monthly_payment,
    generate_amortization_schedule,
)
from mortgage_engine.amortization.extra_payments import recalculate_with_extra_payments
from mortgage_engine.amortization.arm import generate_arm_projections, project_arm_rate

__all__ = [
    "add_months",
    "calculate_monthly_payment",
    "generate_amortization_schedule",
    "recalculate_with_extra_payments",
    "generate_arm_projections",
    "project_arm_rate",
]

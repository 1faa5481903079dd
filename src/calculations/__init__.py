"""Calculation modules for the development pro forma."""

from .scenario import compute_effective_values, allocate_duration_delta
from .revenue import calculate_revenue
from .costs import calculate_costs
from .financing import calculate_financing
from .cashflow import (
    UnallocatedCostWarning,
    CashflowPlan,
    DrawState,
    generate_monthly_cashflows,
    schedule_plan,
)
from .irr import calculate_irr, calculate_equity_irr
from .equity import compute_equity_metrics
from .totals import compute_totals

# Orchestrator (single entry point)
from .proforma import (
    compute_pro_forma,
    compute_delta,
    compare_scenario,
)

__all__ = [
    "compute_effective_values",
    "allocate_duration_delta",
    "calculate_revenue",
    "calculate_costs",
    "calculate_financing",
    "UnallocatedCostWarning",
    "CashflowPlan",
    "DrawState",
    "generate_monthly_cashflows",
    "schedule_plan",
    "calculate_irr",
    "calculate_equity_irr",
    "compute_equity_metrics",
    "compute_totals",
    "compute_pro_forma",
    "compute_delta",
    "compare_scenario",
]

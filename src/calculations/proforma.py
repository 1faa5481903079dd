"""Pro forma orchestrator: the single entry point for a computation.

compute_pro_forma() is a pure function of (assumptions, apply_scenario):
every call builds its outputs from scratch and shares no state.
"""

from dataclasses import replace
from typing import Optional

from ..models.assumptions import Monetization, ProFormaAssumptions
from ..models.outputs import (
    CostResult,
    EffectiveValues,
    FinancingResult,
    MonthlySchedule,
    ProFormaFlags,
    ProFormaOutputs,
    RevenueResult,
    ScenarioDeltasResult,
    Totals,
)
from .scenario import compute_effective_values
from .revenue import calculate_revenue
from .costs import calculate_costs
from .financing import calculate_financing
from .cashflow import build_plan, schedule_plan, unallocated_costs
from .equity import compute_equity_metrics
from .totals import complete_financing, compute_totals, total_interest


def unsupported_outputs() -> ProFormaOutputs:
    """All-None placeholder for monetization modes that are not computed."""
    return ProFormaOutputs(
        eff=EffectiveValues(),
        revenue=RevenueResult(),
        costs=CostResult(),
        financing=FinancingResult(),
        totals=Totals(),
        monthly=MonthlySchedule(),
        flags=ProFormaFlags(monetization_supported=False),
    )


def compute_pro_forma(
    assumptions: ProFormaAssumptions,
    apply_scenario: bool = False,
) -> ProFormaOutputs:
    """Compute the full pro forma for a set of assumptions.

    Steps:
    1. Resolve effective values (scenario deltas, phase durations)
    2. Revenue
    3. Costs before financing
    4. Loan sizing
    5. Monthly cashflows (loan draws, interest, equity plug)
    6. Equity metrics and IRR
    7. Totals

    Args:
        assumptions: Validated assumptions.
        apply_scenario: Whether to apply the stored scenario deltas.

    Returns:
        ProFormaOutputs. Rental projects get a placeholder with
        flags.monetization_supported = False.
    """
    if assumptions.meta.monetization != Monetization.FOR_SALE:
        return unsupported_outputs()

    eff = compute_effective_values(assumptions, apply_scenario)
    revenue = calculate_revenue(assumptions, eff)
    costs = calculate_costs(assumptions, eff)
    financing = calculate_financing(assumptions, costs)

    plan = build_plan(assumptions, eff, costs, financing, revenue.net_revenue)
    monthly = schedule_plan(plan) if plan is not None else MonthlySchedule()

    financing = complete_financing(financing, total_interest(monthly))
    equity = compute_equity_metrics(monthly)
    totals = compute_totals(revenue, costs, financing, equity)

    dropped = unallocated_costs(plan) if plan is not None else 0.0

    return ProFormaOutputs(
        eff=eff,
        revenue=revenue,
        costs=costs,
        financing=financing,
        totals=totals,
        monthly=monthly,
        flags=ProFormaFlags(
            monetization_supported=True,
            unallocated_costs=dropped if dropped > 0 else None,
        ),
    )


def compute_delta(base: Optional[float], scenario: Optional[float]) -> Optional[float]:
    """scenario - base, or None if either side is missing."""
    if base is None or scenario is None:
        return None
    return scenario - base


def compare_scenario(assumptions: ProFormaAssumptions) -> ProFormaOutputs:
    """Compute the scenario case with its deltas against the base case.

    Args:
        assumptions: Assumptions whose scenario deltas should be applied.

    Returns:
        Scenario ProFormaOutputs with `deltas` set (profit, margin points,
        peak equity).
    """
    base = compute_pro_forma(assumptions, apply_scenario=False)
    scenario = compute_pro_forma(assumptions, apply_scenario=True)

    deltas = ScenarioDeltasResult(
        profit_delta=compute_delta(base.totals.profit, scenario.totals.profit),
        profit_margin_delta_pct=compute_delta(
            base.totals.profit_margin_pct, scenario.totals.profit_margin_pct
        ),
        equity_needed_delta=compute_delta(
            base.totals.equity_needed_peak, scenario.totals.equity_needed_peak
        ),
    )

    return replace(scenario, deltas=deltas)

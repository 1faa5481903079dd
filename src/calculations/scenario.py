"""Scenario resolution: apply what-if deltas to the base assumptions."""

import math
from typing import Optional, Tuple

from ..models.assumptions import ProFormaAssumptions
from ..models.outputs import EffectiveValues


def resolve_sales_months(assumptions: ProFormaAssumptions) -> Optional[int]:
    """Sales-phase duration before any scenario delta.

    When auto-calc is enabled and absorption is known, the stored duration
    is replaced by the months needed to close every unit.
    """
    units = assumptions.program.units
    units_per_month = assumptions.absorption.units_per_month

    if (
        assumptions.timeline.auto_calc_sales_months
        and units is not None
        and units > 0
        and units_per_month is not None
        and units_per_month > 0
    ):
        return math.ceil(units / units_per_month)

    return assumptions.timeline.phases.sales_lease_months


def apply_pct_delta(base: Optional[float], delta_pct: float) -> Optional[float]:
    """Scale by a percentage delta, floored at zero."""
    if base is None:
        return None
    return max(0.0, base * (1 + delta_pct / 100))


def allocate_duration_delta(
    entitlement: int,
    construction: int,
    sales: int,
    delta_months: int,
) -> Tuple[int, int, int]:
    """Spread a total-duration delta across the three phases.

    The effective total is floored at one month. Extensions go entirely
    to the sales phase; cuts come out of sales first, then construction,
    then entitlement, each floored at zero.

    Args:
        entitlement: Base entitlement months.
        construction: Base construction months.
        sales: Base sales/lease months.
        delta_months: Signed change to the total duration.

    Returns:
        Tuple of (entitlement, construction, sales) effective months.

    Example:
        >>> allocate_duration_delta(6, 18, 6, -4)
        (6, 18, 2)
        >>> allocate_duration_delta(6, 18, 6, -30)
        (1, 0, 0)
    """
    base_total = entitlement + construction + sales
    eff_total = max(1, base_total + delta_months)
    total_delta = eff_total - base_total

    if total_delta >= 0:
        return entitlement, construction, sales + total_delta

    remaining = -total_delta

    eff_sales = max(0, sales - remaining)
    remaining -= sales - eff_sales

    eff_construction = construction
    if remaining > 0:
        eff_construction = max(0, construction - remaining)
        remaining -= construction - eff_construction

    eff_entitlement = entitlement
    if remaining > 0:
        eff_entitlement = max(0, entitlement - remaining)

    return eff_entitlement, eff_construction, eff_sales


def compute_effective_values(
    assumptions: ProFormaAssumptions,
    apply_scenario: bool,
) -> EffectiveValues:
    """Resolve effective price, cost, rate and phase durations.

    Args:
        assumptions: Base assumptions.
        apply_scenario: If False, every scenario delta is treated as zero.

    Returns:
        EffectiveValues for this computation.
    """
    scenario = assumptions.scenario
    delta_price = scenario.delta_sale_price_per_sqft_pct if apply_scenario else 0.0
    delta_hard = scenario.delta_hard_cost_per_sqft_pct if apply_scenario else 0.0
    delta_rate = scenario.delta_interest_rate_pct if apply_scenario else 0.0
    delta_months = scenario.delta_total_months if apply_scenario else 0

    eff_price = apply_pct_delta(assumptions.revenue_sale.sale_price_per_sqft, delta_price)
    eff_hard = apply_pct_delta(assumptions.costs.hard_cost_per_sqft, delta_hard)

    base_rate = assumptions.financing.interest_rate_pct
    eff_rate = max(0.0, base_rate + delta_rate) if base_rate is not None else None

    phases = assumptions.timeline.phases
    base_entitlement = phases.entitlement_months
    base_construction = phases.construction_months
    base_sales = resolve_sales_months(assumptions)

    if base_entitlement is None or base_construction is None or base_sales is None:
        return EffectiveValues(
            sale_price_per_sqft=eff_price,
            hard_cost_per_sqft=eff_hard,
            interest_rate_pct=eff_rate,
        )

    entitlement, construction, sales = allocate_duration_delta(
        base_entitlement, base_construction, base_sales, delta_months
    )

    return EffectiveValues(
        sale_price_per_sqft=eff_price,
        hard_cost_per_sqft=eff_hard,
        interest_rate_pct=eff_rate,
        total_months=entitlement + construction + sales,
        entitlement_months=entitlement,
        construction_months=construction,
        sales_lease_months=sales,
    )

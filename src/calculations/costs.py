"""Development cost calculations (before financing)."""

from typing import Optional

from ..models.assumptions import ProFormaAssumptions
from ..models.outputs import CostResult, EffectiveValues


def pct_of(base: Optional[float], pct: Optional[float]) -> Optional[float]:
    """base x pct / 100, or None if either side is missing."""
    if base is None or pct is None:
        return None
    return base * pct / 100


def sum_known(*values: Optional[float]) -> Optional[float]:
    """Sum the non-None values; None only when every value is None."""
    known = [v for v in values if v is not None]
    if not known:
        return None
    return sum(known)


def calculate_costs(
    assumptions: ProFormaAssumptions,
    eff: EffectiveValues,
) -> CostResult:
    """Calculate land, hard, soft, contingency and developer fee.

    Cost stack:
        hard = saleable area x effective hard cost per sqft
        soft = hard x soft %
        contingency = hard x contingency-on-hard % + soft x contingency-on-soft %
        land total = land price x (1 + closing %)
        dev fee = (land total + hard + soft + contingency) x dev fee %

    The subtotals treat a missing term as zero, and are only None when
    every term is missing.

    Args:
        assumptions: Base assumptions (program, acquisition, cost inputs).
        eff: Effective values carrying the scenario-adjusted hard cost.

    Returns:
        CostResult with each component and the pre-financing subtotal.
    """
    area = assumptions.program.saleable_area_sqft
    costs = assumptions.costs
    acquisition = assumptions.acquisition

    hard = None
    if area is not None and eff.hard_cost_per_sqft is not None:
        hard = area * eff.hard_cost_per_sqft

    soft = pct_of(hard, costs.soft_cost_pct_of_hard)

    contingency = sum_known(
        pct_of(hard, costs.contingency_pct_of_hard),
        pct_of(soft, costs.contingency_pct_of_soft),
    )

    land_total = None
    if acquisition.land_price is not None:
        land_closing = pct_of(acquisition.land_price, acquisition.closing_costs_pct)
        land_total = acquisition.land_price + (land_closing or 0.0)

    subtotal_before_dev_fee = sum_known(land_total, hard, soft, contingency)
    dev_fee = pct_of(subtotal_before_dev_fee, costs.dev_fee_pct_of_cost)

    subtotal_before_financing = None
    if subtotal_before_dev_fee is not None:
        subtotal_before_financing = subtotal_before_dev_fee + (dev_fee or 0.0)

    return CostResult(
        land_total=land_total,
        hard=hard,
        soft=soft,
        contingency=contingency,
        dev_fee=dev_fee,
        subtotal_before_financing=subtotal_before_financing,
    )

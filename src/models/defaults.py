"""Default assumptions and scenario slider ranges."""

from dataclasses import dataclass
from typing import Dict

from .assumptions import ProFormaAssumptions


@dataclass(frozen=True)
class SliderRange:
    """Recommended range for a scenario delta."""

    min: float
    max: float
    step: float


# Recommended slider ranges for scenario analysis
SCENARIO_RANGES: Dict[str, SliderRange] = {
    "delta_sale_price_per_sqft_pct": SliderRange(min=-10, max=10, step=1),
    "delta_hard_cost_per_sqft_pct": SliderRange(min=-10, max=10, step=1),
    "delta_interest_rate_pct": SliderRange(min=-2, max=2, step=0.1),
    "delta_total_months": SliderRange(min=-6, max=6, step=1),
}

DEFAULT_NET_TO_GROSS_PCT = 80.0
DEFAULT_UNITS_PER_MONTH = 4.0

# Legacy single-total timelines are split entitlement/construction/sales
LEGACY_PHASE_SPLIT = (0.25, 0.60, 0.15)

SQFT_PER_M2 = 10.7639


def default_assumptions() -> ProFormaAssumptions:
    """Fresh default assumptions.

    All numeric inputs are None (not entered), phases are 6/18/6 months,
    sales months are derived from absorption (4 units/month) and every
    scenario delta is zero.
    """
    return ProFormaAssumptions()

"""Range validation for assumptions before they are saved or computed.

The engine only checks for missing values; ranges are enforced here, at
the boundary where assumptions enter the system.
"""

import math
from numbers import Real
from typing import List, Optional

from .models.assumptions import AssetType, Monetization, ProFormaAssumptions


class AssumptionsValidationError(ValueError):
    """One or more assumption fields are out of range."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("Invalid assumptions: " + "; ".join(errors))


def _check_number(
    errors: List[str],
    path: str,
    value: Optional[float],
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
    integer: bool = False,
    nullable: bool = True,
) -> None:
    """Append an error message if value is not a number within range."""
    if value is None:
        if not nullable:
            errors.append(f"{path} is required")
        return

    if isinstance(value, bool) or not isinstance(value, Real):
        errors.append(f"{path} must be a number")
        return

    if not math.isfinite(value):
        errors.append(f"{path} must be finite")
        return

    if integer and value != int(value):
        errors.append(f"{path} must be a whole number")

    if min_value is not None and value < min_value:
        errors.append(f"{path} must be >= {min_value}")

    if max_value is not None and value > max_value:
        errors.append(f"{path} must be <= {max_value}")


def _check_pct(errors: List[str], path: str, value: Optional[float]) -> None:
    _check_number(errors, path, value, 0, 100)


def collect_errors(assumptions: ProFormaAssumptions) -> List[str]:
    """Return every range violation in the assumptions (empty if valid)."""
    errors: List[str] = []
    a = assumptions

    if not isinstance(a.meta.asset_type, AssetType):
        errors.append("meta.asset_type must be one of " + ", ".join(t.value for t in AssetType))
    if not isinstance(a.meta.monetization, Monetization):
        errors.append("meta.monetization must be one of " + ", ".join(m.value for m in Monetization))

    _check_number(errors, "program.units", a.program.units, 1, 50_000, integer=True)
    _check_number(errors, "program.saleable_area_sqft", a.program.saleable_area_sqft, 1, 5_000_000)
    _check_number(errors, "program.net_to_gross_pct", a.program.net_to_gross_pct, 30, 95)

    _check_number(errors, "acquisition.land_price", a.acquisition.land_price)
    _check_pct(errors, "acquisition.closing_costs_pct", a.acquisition.closing_costs_pct)

    _check_number(errors, "revenue_sale.sale_price_per_sqft", a.revenue_sale.sale_price_per_sqft)
    _check_number(errors, "revenue_sale.other_revenue", a.revenue_sale.other_revenue)
    _check_pct(errors, "revenue_sale.sales_commission_pct", a.revenue_sale.sales_commission_pct)

    _check_number(
        errors, "revenue_rent.avg_rent_per_unit_monthly", a.revenue_rent.avg_rent_per_unit_monthly
    )
    _check_pct(errors, "revenue_rent.vacancy_pct", a.revenue_rent.vacancy_pct)

    _check_number(errors, "costs.hard_cost_per_sqft", a.costs.hard_cost_per_sqft)
    _check_pct(errors, "costs.soft_cost_pct_of_hard", a.costs.soft_cost_pct_of_hard)
    _check_pct(errors, "costs.contingency_pct_of_hard", a.costs.contingency_pct_of_hard)
    _check_pct(errors, "costs.contingency_pct_of_soft", a.costs.contingency_pct_of_soft)
    _check_pct(errors, "costs.dev_fee_pct_of_cost", a.costs.dev_fee_pct_of_cost)

    _check_pct(errors, "financing.loan_to_cost_pct", a.financing.loan_to_cost_pct)
    _check_pct(errors, "financing.interest_rate_pct", a.financing.interest_rate_pct)
    _check_pct(errors, "financing.lender_fee_pct", a.financing.lender_fee_pct)

    phases = a.timeline.phases
    _check_number(errors, "timeline.phases.entitlement_months", phases.entitlement_months, 0, 120, integer=True)
    _check_number(errors, "timeline.phases.construction_months", phases.construction_months, 0, 120, integer=True)
    _check_number(errors, "timeline.phases.sales_lease_months", phases.sales_lease_months, 0, 120, integer=True)
    _check_number(errors, "timeline.total_months", a.timeline.total_months, 1, 240, integer=True)

    _check_number(errors, "absorption.units_per_month", a.absorption.units_per_month, 0.1, 500)

    s = a.scenario
    _check_number(
        errors, "scenario.delta_sale_price_per_sqft_pct", s.delta_sale_price_per_sqft_pct,
        -10, 10, nullable=False,
    )
    _check_number(
        errors, "scenario.delta_hard_cost_per_sqft_pct", s.delta_hard_cost_per_sqft_pct,
        -10, 10, nullable=False,
    )
    _check_number(
        errors, "scenario.delta_interest_rate_pct", s.delta_interest_rate_pct,
        -2, 2, nullable=False,
    )
    _check_number(
        errors, "scenario.delta_total_months", s.delta_total_months,
        -6, 6, integer=True, nullable=False,
    )

    return errors


def validate_assumptions(assumptions: ProFormaAssumptions) -> ProFormaAssumptions:
    """Validate assumptions, returning them unchanged if valid.

    Raises:
        AssumptionsValidationError: If any field is out of range.
    """
    errors = collect_errors(assumptions)
    if errors:
        raise AssumptionsValidationError(errors)
    return assumptions

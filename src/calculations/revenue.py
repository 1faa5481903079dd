"""For-sale revenue calculations."""

from ..models.assumptions import Monetization, ProFormaAssumptions
from ..models.outputs import EffectiveValues, RevenueResult


def calculate_revenue(
    assumptions: ProFormaAssumptions,
    eff: EffectiveValues,
) -> RevenueResult:
    """Calculate gross and net sale revenue.

    Gross = saleable area x effective price + other revenue
    Net = gross - sales commission

    Other revenue counts as zero in the gross sum when not entered.
    Rental projects have no sale revenue and return all None.

    Args:
        assumptions: Base assumptions (program and revenue inputs).
        eff: Effective values carrying the scenario-adjusted sale price.

    Returns:
        RevenueResult with gross, commission and net revenue.
    """
    if assumptions.meta.monetization != Monetization.FOR_SALE:
        return RevenueResult()

    area = assumptions.program.saleable_area_sqft
    price = eff.sale_price_per_sqft
    other = assumptions.revenue_sale.other_revenue
    commission_pct = assumptions.revenue_sale.sales_commission_pct

    gross_revenue = None
    if area is not None and price is not None:
        gross_revenue = area * price + (other if other is not None else 0.0)

    sales_commission = None
    if gross_revenue is not None and commission_pct is not None:
        sales_commission = gross_revenue * commission_pct / 100

    net_revenue = None
    if gross_revenue is not None and sales_commission is not None:
        net_revenue = gross_revenue - sales_commission

    return RevenueResult(
        gross_revenue=gross_revenue,
        sales_commission=sales_commission,
        net_revenue=net_revenue,
    )

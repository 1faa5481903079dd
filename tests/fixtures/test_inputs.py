"""Reference assumptions used across the test suite."""

from dataclasses import replace

from src.models.assumptions import (
    Absorption,
    Acquisition,
    Costs,
    Financing,
    Meta,
    Monetization,
    ProFormaAssumptions,
    Program,
    RevenueSale,
    ScenarioDeltas,
    Timeline,
    TimelinePhases,
)


def get_reference_assumptions() -> ProFormaAssumptions:
    """20-unit townhome project with a 6/18/6 month timeline.

    Expected derived values:
    - Net revenue: 20,000 sqft x $400 x (1 - 5%) = $7.6M
    - Hard: $3.0M, soft: $0.6M, land incl. closing: $1.02M
    - Subtotal before financing: $4.62M
    - Max loan (65% LTC): $3.003M, lender fee (1%): $30,030

    Returns:
        ProFormaAssumptions with scenario deltas at zero.
    """
    return ProFormaAssumptions(
        meta=Meta(monetization=Monetization.FOR_SALE),
        program=Program(units=20, saleable_area_sqft=20_000),
        acquisition=Acquisition(land_price=1_000_000, closing_costs_pct=2),
        revenue_sale=RevenueSale(sale_price_per_sqft=400, sales_commission_pct=5),
        costs=Costs(hard_cost_per_sqft=150, soft_cost_pct_of_hard=20),
        financing=Financing(loan_to_cost_pct=65, interest_rate_pct=8, lender_fee_pct=1),
        timeline=Timeline(
            phases=TimelinePhases(
                entitlement_months=6,
                construction_months=18,
                sales_lease_months=6,
            ),
            total_months=30,
            auto_calc_sales_months=False,
        ),
        absorption=Absorption(units_per_month=4),
    )


def get_full_cost_assumptions() -> ProFormaAssumptions:
    """Reference project with contingency and developer fee entered."""
    base = get_reference_assumptions()
    return replace(
        base,
        costs=Costs(
            hard_cost_per_sqft=150,
            soft_cost_pct_of_hard=20,
            contingency_pct_of_hard=5,
            contingency_pct_of_soft=10,
            dev_fee_pct_of_cost=4,
        ),
        revenue_sale=RevenueSale(
            sale_price_per_sqft=400,
            other_revenue=50_000,
            sales_commission_pct=5,
        ),
    )


def with_scenario(assumptions: ProFormaAssumptions, **deltas) -> ProFormaAssumptions:
    """Copy of assumptions with the given scenario deltas set."""
    return replace(assumptions, scenario=replace(assumptions.scenario, **deltas))


def with_phases(
    assumptions: ProFormaAssumptions,
    entitlement: int,
    construction: int,
    sales: int,
) -> ProFormaAssumptions:
    """Copy of assumptions with a different phase timeline."""
    return replace(
        assumptions,
        timeline=replace(
            assumptions.timeline,
            phases=TimelinePhases(
                entitlement_months=entitlement,
                construction_months=construction,
                sales_lease_months=sales,
            ),
        ),
    )


# Expected values for the reference project
EXPECTED_NET_REVENUE = 7_600_000
EXPECTED_SUBTOTAL_BEFORE_FINANCING = 4_620_000
EXPECTED_MAX_LOAN = 3_003_000
EXPECTED_LENDER_FEE = 30_030

NO_SCENARIO = ScenarioDeltas()

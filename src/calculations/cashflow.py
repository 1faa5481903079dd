"""Monthly cashflow engine: cost spreading, loan draws and the equity plug.

Each month is assigned to a phase, costs and revenue are spread by phase,
the construction loan is drawn against a debt-capacity curve, interest
accrues on the average balance and equity balances the month.

The simulation steps through months 1..N carrying a DrawState
accumulator, so a month's row depends only on the plan and the state
coming into that month.
"""

import math
import warnings
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..models.assumptions import ProFormaAssumptions
from ..models.outputs import (
    CostResult,
    EffectiveValues,
    FinancingResult,
    MonthlyCashflowRow,
    MonthlySchedule,
    PhaseType,
)

# Share of soft costs incurred during entitlement; the rest lands in the
# first half of construction
SOFT_COST_ENTITLEMENT_SHARE = 0.6
SOFT_COST_CONSTRUCTION_SHARE = 0.4


class UnallocatedCostWarning(UserWarning):
    """Costs were entered for a phase that has zero months."""


@dataclass(frozen=True)
class CashflowPlan:
    """Static totals and timing the monthly simulation spreads.

    Missing cost totals are carried as zero; they are only spreading bases.
    """

    entitlement_months: int
    construction_months: int
    sales_lease_months: int

    land_total: float
    soft_total: float
    hard_total: float
    contingency_total: float
    dev_fee_total: float
    lender_fee_total: float

    subtotal_before_financing: float
    max_loan_amount: Optional[float]
    interest_rate_pct: Optional[float]

    net_revenue: Optional[float]
    units: Optional[int]
    units_per_month: Optional[float]

    @property
    def total_months(self) -> int:
        return self.entitlement_months + self.construction_months + self.sales_lease_months

    @property
    def construction_first_half(self) -> int:
        """Construction months that carry the remaining soft costs."""
        return math.ceil(self.construction_months / 2)

    @property
    def uses_absorption(self) -> bool:
        """True if revenue is recognized at the absorption pace."""
        return (
            self.units_per_month is not None
            and self.units_per_month > 0
            and self.units is not None
            and self.units > 0
        )


@dataclass(frozen=True)
class DrawState:
    """Running balances carried from one month to the next."""

    debt_outstanding: float = 0.0
    cost_to_date: float = 0.0  # Non-interest uses paid so far


def build_plan(
    assumptions: ProFormaAssumptions,
    eff: EffectiveValues,
    costs: CostResult,
    financing: FinancingResult,
    net_revenue: Optional[float],
) -> Optional[CashflowPlan]:
    """Collect the spreading inputs, or None if the schedule cannot be built.

    A schedule needs all three effective phase durations and the
    pre-financing subtotal.
    """
    if (
        eff.entitlement_months is None
        or eff.construction_months is None
        or eff.sales_lease_months is None
        or costs.subtotal_before_financing is None
    ):
        return None

    return CashflowPlan(
        entitlement_months=eff.entitlement_months,
        construction_months=eff.construction_months,
        sales_lease_months=eff.sales_lease_months,
        land_total=costs.land_total or 0.0,
        soft_total=costs.soft or 0.0,
        hard_total=costs.hard or 0.0,
        contingency_total=costs.contingency or 0.0,
        dev_fee_total=costs.dev_fee or 0.0,
        lender_fee_total=financing.lender_fee or 0.0,
        subtotal_before_financing=costs.subtotal_before_financing,
        max_loan_amount=financing.max_loan_amount,
        interest_rate_pct=eff.interest_rate_pct,
        net_revenue=net_revenue,
        units=assumptions.program.units,
        units_per_month=assumptions.absorption.units_per_month,
    )


def get_phase(month: int, plan: CashflowPlan) -> PhaseType:
    """Determine the phase for a given month (1-indexed).

    Boundary months belong to the earlier phase.
    """
    if month <= plan.entitlement_months:
        return PhaseType.ENTITLEMENT
    elif month <= plan.entitlement_months + plan.construction_months:
        return PhaseType.CONSTRUCTION
    else:
        return PhaseType.SALES_LEASE


def unallocated_costs(plan: CashflowPlan) -> float:
    """Costs assigned to phases with zero months, which the schedule never charges."""
    amount = 0.0

    if plan.entitlement_months == 0:
        amount += plan.soft_total * SOFT_COST_ENTITLEMENT_SHARE

    if plan.construction_months == 0:
        amount += (
            plan.soft_total * SOFT_COST_CONSTRUCTION_SHARE
            + plan.hard_total
            + plan.contingency_total
            + plan.dev_fee_total
        )

    return amount


def soft_cost_for_month(month: int, phase: PhaseType, plan: CashflowPlan) -> float:
    """60% across entitlement, 40% across the first half of construction."""
    if phase == PhaseType.ENTITLEMENT and plan.entitlement_months > 0:
        return plan.soft_total * SOFT_COST_ENTITLEMENT_SHARE / plan.entitlement_months

    if phase == PhaseType.CONSTRUCTION and plan.construction_months > 0:
        month_in_construction = month - plan.entitlement_months
        if month_in_construction <= plan.construction_first_half:
            return plan.soft_total * SOFT_COST_CONSTRUCTION_SHARE / plan.construction_first_half

    return 0.0


def sales_revenue_for_month(month: int, phase: PhaseType, plan: CashflowPlan) -> float:
    """Net sale revenue closing in a sales-phase month.

    With a known absorption pace, units close at a flat rate capped at the
    total unit count. Otherwise net revenue is spread evenly over the
    sales phase.
    """
    if (
        phase != PhaseType.SALES_LEASE
        or plan.sales_lease_months <= 0
        or plan.net_revenue is None
    ):
        return 0.0

    if plan.uses_absorption:
        revenue_per_unit = plan.net_revenue / plan.units
        month_in_sales = month - plan.entitlement_months - plan.construction_months
        units_closed_so_far = min((month_in_sales - 1) * plan.units_per_month, plan.units)
        units_closing = min(plan.units_per_month, plan.units - units_closed_so_far)
        return units_closing * revenue_per_unit

    return plan.net_revenue / plan.sales_lease_months


def simulate_month(
    plan: CashflowPlan,
    state: DrawState,
    month: int,
) -> Tuple[DrawState, MonthlyCashflowRow]:
    """Compute one month's row and the state carried into the next month.

    Loan draw logic:
    1. Cost to date grows by this month's non-interest uses
    2. Debt capacity = cost to date / total cost x max loan, capped at max loan
    3. Draw only the increment above the outstanding balance
    4. Interest accrues on the average of opening and closing balance

    Args:
        plan: Spreading inputs for the whole schedule.
        state: Balances at the start of the month.
        month: Month number (1-indexed).

    Returns:
        Tuple of (state at end of month, row for this month).
    """
    phase = get_phase(month, plan)
    in_construction = phase == PhaseType.CONSTRUCTION and plan.construction_months > 0

    land = plan.land_total if month == 1 else 0.0
    lender_fee = plan.lender_fee_total if month == 1 else 0.0
    soft = soft_cost_for_month(month, phase, plan)
    hard = plan.hard_total / plan.construction_months if in_construction else 0.0
    contingency = plan.contingency_total / plan.construction_months if in_construction else 0.0
    dev_fee = plan.dev_fee_total / plan.construction_months if in_construction else 0.0

    sales_revenue = sales_revenue_for_month(month, phase, plan)

    cost_to_date = state.cost_to_date + land + soft + hard + contingency + dev_fee + lender_fee

    loan_draw = 0.0
    if plan.max_loan_amount is not None and plan.subtotal_before_financing > 0:
        debt_capacity = min(
            cost_to_date / plan.subtotal_before_financing * plan.max_loan_amount,
            plan.max_loan_amount,
        )
        loan_draw = max(0.0, debt_capacity - state.debt_outstanding)

    interest = 0.0
    if plan.interest_rate_pct is not None and plan.interest_rate_pct > 0:
        avg_balance = (state.debt_outstanding + (state.debt_outstanding + loan_draw)) / 2
        interest = avg_balance * plan.interest_rate_pct / 100 / 12

    uses = land + soft + hard + contingency + dev_fee + lender_fee + interest
    sources = sales_revenue + loan_draw

    debt_outstanding = state.debt_outstanding + loan_draw

    row = MonthlyCashflowRow(
        month_index=month,
        phase=phase,
        land=land,
        soft=soft,
        hard=hard,
        contingency=contingency,
        dev_fee=dev_fee,
        lender_fee=lender_fee,
        interest=interest,
        sales_revenue=sales_revenue,
        loan_draw=loan_draw,
        equity=uses - sources,
        debt_outstanding=debt_outstanding,
    )

    return DrawState(debt_outstanding=debt_outstanding, cost_to_date=cost_to_date), row


def run_schedule(plan: CashflowPlan) -> MonthlySchedule:
    """Step simulate_month through months 1..N, carrying the DrawState forward."""
    state = DrawState()
    rows: List[MonthlyCashflowRow] = []

    for month in range(1, plan.total_months + 1):
        state, row = simulate_month(plan, state, month)
        rows.append(row)

    return MonthlySchedule(rows=rows)


def schedule_plan(plan: CashflowPlan) -> MonthlySchedule:
    """Run the schedule for a plan, warning about costs it cannot charge.

    Costs assigned to a zero-length phase are reported with an
    UnallocatedCostWarning rather than dropped silently. The warning
    points at the code that requested the schedule.
    """
    dropped = unallocated_costs(plan)
    if dropped > 0:
        warnings.warn(
            f"${dropped:,.0f} of costs fall in a phase with zero months "
            f"(entitlement={plan.entitlement_months}, construction={plan.construction_months}) "
            "and are not charged in the monthly schedule.",
            UnallocatedCostWarning,
            stacklevel=3,
        )

    return run_schedule(plan)


def generate_monthly_cashflows(
    assumptions: ProFormaAssumptions,
    eff: EffectiveValues,
    costs: CostResult,
    financing: FinancingResult,
    net_revenue: Optional[float],
) -> MonthlySchedule:
    """Generate the month-by-month cashflow schedule.

    Spreading rules:
    - Land and lender fee: month 1
    - Soft costs: 60% over entitlement, 40% over first half of construction
    - Hard costs, contingency, developer fee: evenly over construction
    - Revenue: sales phase only, at the absorption pace or evenly

    Args:
        assumptions: Base assumptions (units and absorption pace).
        eff: Effective phase durations and interest rate.
        costs: Pre-financing cost totals.
        financing: Loan amount and lender fee.
        net_revenue: Net sale revenue to recognize.

    Returns:
        MonthlySchedule with N = E + C + S rows, or empty if the timeline
        or cost subtotal is unknown.
    """
    plan = build_plan(assumptions, eff, costs, financing, net_revenue)
    if plan is None:
        return MonthlySchedule()

    return schedule_plan(plan)

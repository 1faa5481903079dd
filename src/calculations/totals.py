"""Profit, margin and return totals."""

from typing import Optional

from ..models.outputs import (
    CostResult,
    EquityMetrics,
    FinancingResult,
    MonthlySchedule,
    RevenueResult,
    Totals,
)
from .costs import sum_known


def total_interest(schedule: MonthlySchedule) -> float:
    """Sum of monthly interest; 0.0 for an empty schedule."""
    return sum(row.interest for row in schedule.rows)


def complete_financing(financing: FinancingResult, interest: float) -> FinancingResult:
    """Fill in total interest and total financing once the schedule has run.

    total financing = lender fee + total interest
    """
    total_financing = None
    if financing.lender_fee is not None:
        total_financing = financing.lender_fee + interest

    return FinancingResult(
        max_loan_amount=financing.max_loan_amount,
        lender_fee=financing.lender_fee,
        total_interest=interest,
        total_financing=total_financing,
    )


def _ratio_pct(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """numerator / denominator x 100, None on a missing or zero denominator."""
    if numerator is None or denominator is None or denominator == 0:
        return None
    return numerator / denominator * 100


def compute_totals(
    revenue: RevenueResult,
    costs: CostResult,
    financing: FinancingResult,
    equity: EquityMetrics,
) -> Totals:
    """Combine revenue, costs, financing and equity into final totals.

    total cost = subtotal before financing + total financing
    profit = net revenue - total cost
    margin = profit / net revenue
    ROI = profit / equity invested

    Args:
        revenue: Revenue breakdown.
        costs: Pre-financing costs.
        financing: Financing with total interest filled in.
        equity: Equity metrics from the monthly schedule.

    Returns:
        Totals with profit and return metrics.
    """
    total_cost = sum_known(costs.subtotal_before_financing, financing.total_financing)

    profit = None
    if revenue.net_revenue is not None and total_cost is not None:
        profit = revenue.net_revenue - total_cost

    return Totals(
        total_cost=total_cost,
        profit=profit,
        profit_margin_pct=_ratio_pct(profit, revenue.net_revenue),
        equity_needed_peak=equity.equity_needed_peak,
        equity_invested_total=equity.equity_invested_total,
        equity_multiple=equity.equity_multiple,
        equity_irr_pct=equity.equity_irr_pct,
        roi_pct=_ratio_pct(profit, equity.equity_invested_total),
    )

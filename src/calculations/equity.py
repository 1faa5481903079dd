"""Equity metrics from the monthly equity series."""

from typing import Sequence

from ..models.outputs import EquityMetrics, MonthlySchedule
from .irr import calculate_equity_irr


def peak_cumulative_exposure(equity_cashflows: Sequence[float]) -> float:
    """Absolute value of the lowest point of the running equity balance."""
    cumulative = 0.0
    peak = 0.0
    for equity in equity_cashflows:
        cumulative += equity
        peak = min(peak, cumulative)
    return abs(peak)


def compute_equity_metrics(schedule: MonthlySchedule) -> EquityMetrics:
    """Aggregate the monthly equity plug into summary metrics.

    Two notions of exposure are kept apart:
    - equity_invested_total sums every negative month on its own
    - equity_needed_peak tracks the running cumulative balance

    Args:
        schedule: Monthly cashflow schedule, in month order.

    Returns:
        EquityMetrics; every field is None for an empty schedule.
    """
    if len(schedule) == 0:
        return EquityMetrics()

    equity_cashflows = schedule.equity_cashflows()

    invested = sum(abs(cf) for cf in equity_cashflows if cf < 0)
    distributed = sum(cf for cf in equity_cashflows if cf > 0)
    peak = peak_cumulative_exposure(equity_cashflows)

    equity_invested_total = invested if invested > 0 else None

    return EquityMetrics(
        equity_invested_total=equity_invested_total,
        equity_needed_peak=peak if peak > 0 else None,
        equity_multiple=distributed / invested if equity_invested_total is not None else None,
        equity_irr_pct=calculate_equity_irr(equity_cashflows),
    )

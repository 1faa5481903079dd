"""IRR solve for monthly equity cashflows.

Newton-Raphson on the monthly rate with a bisection fallback. Both are
bounded by an iteration cap; any failure resolves to None.
"""

import math
from typing import Optional, Sequence

import numpy as np
import numpy_financial as npf

MAX_ITERATIONS = 100
TOLERANCE = 1e-7
DEFAULT_GUESS = 0.1

# Bisection bracket on the monthly rate
MIN_RATE = -0.9
MAX_RATE = 1_000.0


def _npv(cash_flows: np.ndarray, rate: float) -> float:
    """NPV with the first cashflow at t = 0."""
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return float(npf.npv(rate, cash_flows))


def _npv_derivative(cash_flows: np.ndarray, rate: float) -> float:
    """Derivative of NPV with respect to rate."""
    periods = np.arange(len(cash_flows))
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return float(-np.sum(periods * cash_flows / (1 + rate) ** (periods + 1)))


def _newton(cash_flows: np.ndarray, guess: float) -> Optional[float]:
    """Newton-Raphson from a guess; None if it stalls or diverges."""
    rate = guess

    for _ in range(MAX_ITERATIONS):
        npv = _npv(cash_flows, rate)
        dnpv = _npv_derivative(cash_flows, rate)

        if not math.isfinite(npv) or not math.isfinite(dnpv) or abs(dnpv) < TOLERANCE:
            return None

        new_rate = rate - npv / dnpv

        if not math.isfinite(new_rate) or new_rate <= -1:
            return None

        if abs(new_rate - rate) < TOLERANCE:
            return new_rate

        rate = new_rate

    return None


def _bisect(cash_flows: np.ndarray) -> Optional[float]:
    """Bisection over [MIN_RATE, MAX_RATE]; None without a sign change."""
    lo, hi = MIN_RATE, MAX_RATE
    npv_lo = _npv(cash_flows, lo)
    npv_hi = _npv(cash_flows, hi)

    if not math.isfinite(npv_lo) or not math.isfinite(npv_hi) or npv_lo * npv_hi > 0:
        return None

    for _ in range(MAX_ITERATIONS):
        mid = (lo + hi) / 2
        npv_mid = _npv(cash_flows, mid)

        if not math.isfinite(npv_mid):
            return None

        if npv_mid == 0 or (hi - lo) / 2 < TOLERANCE:
            return mid

        if npv_lo * npv_mid < 0:
            hi = mid
        else:
            lo, npv_lo = mid, npv_mid

    return None


def calculate_irr(cash_flows: Sequence[float], guess: float = DEFAULT_GUESS) -> Optional[float]:
    """Periodic IRR of a cashflow series.

    Args:
        cash_flows: Periodic cashflows, first at t = 0.
        guess: Initial rate for Newton-Raphson.

    Returns:
        Periodic rate as a decimal, or None if the series has no sign
        change or neither solver converges.
    """
    values = np.asarray(cash_flows, dtype=float)

    if len(values) < 2 or not np.all(np.isfinite(values)):
        return None

    if not (np.any(values < 0) and np.any(values > 0)):
        return None

    rate = _newton(values, guess)
    if rate is None:
        rate = _bisect(values)

    if rate is None or not math.isfinite(rate):
        return None

    return rate


def calculate_equity_irr(cash_flows: Sequence[float]) -> Optional[float]:
    """Annualized IRR, in percent, from monthly equity cashflows.

    annual = (1 + monthly)^12 - 1

    Returns:
        Annual IRR as a percentage (e.g. 18.5 for 18.5%), or None.
    """
    monthly_irr = calculate_irr(cash_flows)
    if monthly_irr is None:
        return None

    try:
        annual_irr = (1 + monthly_irr) ** 12 - 1
    except OverflowError:
        return None

    if not math.isfinite(annual_irr):
        return None

    return annual_irr * 100

"""Result structures produced by the pro forma engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PhaseType(str, Enum):
    """Development phase a month belongs to."""

    ENTITLEMENT = "ENTITLEMENT"
    CONSTRUCTION = "CONSTRUCTION"
    SALES_LEASE = "SALES_LEASE"


@dataclass(frozen=True)
class EffectiveValues:
    """Inputs after scenario deltas and phase resolution."""

    sale_price_per_sqft: Optional[float] = None
    hard_cost_per_sqft: Optional[float] = None
    interest_rate_pct: Optional[float] = None
    total_months: Optional[int] = None
    entitlement_months: Optional[int] = None
    construction_months: Optional[int] = None
    sales_lease_months: Optional[int] = None


@dataclass(frozen=True)
class RevenueResult:
    """For-sale revenue breakdown."""

    gross_revenue: Optional[float] = None
    sales_commission: Optional[float] = None
    net_revenue: Optional[float] = None


@dataclass(frozen=True)
class CostResult:
    """Development costs before financing."""

    land_total: Optional[float] = None  # Land + closing costs
    hard: Optional[float] = None
    soft: Optional[float] = None
    contingency: Optional[float] = None
    dev_fee: Optional[float] = None
    subtotal_before_financing: Optional[float] = None


@dataclass(frozen=True)
class FinancingResult:
    """Construction loan sizing and financing costs."""

    max_loan_amount: Optional[float] = None
    lender_fee: Optional[float] = None
    total_interest: Optional[float] = None  # Sum of monthly interest
    total_financing: Optional[float] = None


@dataclass(frozen=True)
class EquityMetrics:
    """Metrics derived from the monthly equity series."""

    equity_invested_total: Optional[float] = None
    equity_needed_peak: Optional[float] = None
    equity_multiple: Optional[float] = None
    equity_irr_pct: Optional[float] = None


@dataclass(frozen=True)
class Totals:
    """Profit and return metrics."""

    total_cost: Optional[float] = None
    profit: Optional[float] = None
    profit_margin_pct: Optional[float] = None  # profit / net revenue
    equity_needed_peak: Optional[float] = None
    equity_invested_total: Optional[float] = None
    equity_multiple: Optional[float] = None
    equity_irr_pct: Optional[float] = None  # Annualized, in percent
    roi_pct: Optional[float] = None  # profit / equity invested


@dataclass(frozen=True)
class MonthlyCashflowRow:
    """Sources and uses for a single month.

    Equity is the plug that balances the month: uses - sources.
    """

    month_index: int  # 1-indexed
    phase: PhaseType

    # Uses
    land: float = 0.0
    soft: float = 0.0
    hard: float = 0.0
    contingency: float = 0.0
    dev_fee: float = 0.0
    lender_fee: float = 0.0
    interest: float = 0.0

    # Sources
    sales_revenue: float = 0.0
    loan_draw: float = 0.0

    equity: float = 0.0  # Negative = investment, positive = distribution

    # Balances
    debt_outstanding: float = 0.0

    @property
    def total_uses(self) -> float:
        """All uses this month, interest included."""
        return (
            self.land
            + self.soft
            + self.hard
            + self.contingency
            + self.dev_fee
            + self.lender_fee
            + self.interest
        )

    @property
    def total_sources(self) -> float:
        """Sales revenue plus loan draw."""
        return self.sales_revenue + self.loan_draw


@dataclass(frozen=True)
class MonthlySchedule:
    """Ordered month-by-month cashflow rows (months 1..N)."""

    rows: List[MonthlyCashflowRow] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def get_month(self, month_index: int) -> MonthlyCashflowRow:
        """Get the row for a specific month (1-indexed)."""
        if month_index < 1 or month_index > len(self.rows):
            raise IndexError(f"Month {month_index} out of range [1, {len(self.rows)}]")
        return self.rows[month_index - 1]

    def get_phase_rows(self, phase: PhaseType) -> List[MonthlyCashflowRow]:
        """Get all rows for a given phase."""
        return [row for row in self.rows if row.phase == phase]

    def equity_cashflows(self) -> List[float]:
        """Signed equity series in month order."""
        return [row.equity for row in self.rows]


@dataclass(frozen=True)
class ProFormaFlags:
    """Support and edge-case flags for a computation."""

    monetization_supported: bool = True
    # Costs assigned to a phase with zero months (never charged)
    unallocated_costs: Optional[float] = None


@dataclass(frozen=True)
class ScenarioDeltasResult:
    """Scenario minus base for the headline metrics."""

    profit_delta: Optional[float] = None
    profit_margin_delta_pct: Optional[float] = None  # Percentage points
    equity_needed_delta: Optional[float] = None


@dataclass(frozen=True)
class ProFormaOutputs:
    """Complete result of one pro forma computation."""

    eff: EffectiveValues
    revenue: RevenueResult
    costs: CostResult
    financing: FinancingResult
    totals: Totals
    monthly: MonthlySchedule
    flags: ProFormaFlags
    deltas: Optional[ScenarioDeltasResult] = None

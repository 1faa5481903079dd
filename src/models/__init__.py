"""Data models for the pro forma engine."""

from .assumptions import (
    AssetType,
    Monetization,
    Meta,
    Program,
    Acquisition,
    RevenueSale,
    RevenueRent,
    Costs,
    Financing,
    TimelinePhases,
    Timeline,
    Absorption,
    ScenarioDeltas,
    ProFormaAssumptions,
)
from .outputs import (
    PhaseType,
    EffectiveValues,
    RevenueResult,
    CostResult,
    FinancingResult,
    EquityMetrics,
    Totals,
    MonthlyCashflowRow,
    MonthlySchedule,
    ProFormaFlags,
    ScenarioDeltasResult,
    ProFormaOutputs,
)
from .defaults import (
    SliderRange,
    SCENARIO_RANGES,
    default_assumptions,
)

__all__ = [
    "AssetType",
    "Monetization",
    "Meta",
    "Program",
    "Acquisition",
    "RevenueSale",
    "RevenueRent",
    "Costs",
    "Financing",
    "TimelinePhases",
    "Timeline",
    "Absorption",
    "ScenarioDeltas",
    "ProFormaAssumptions",
    "PhaseType",
    "EffectiveValues",
    "RevenueResult",
    "CostResult",
    "FinancingResult",
    "EquityMetrics",
    "Totals",
    "MonthlyCashflowRow",
    "MonthlySchedule",
    "ProFormaFlags",
    "ScenarioDeltasResult",
    "ProFormaOutputs",
    "SliderRange",
    "SCENARIO_RANGES",
    "default_assumptions",
]

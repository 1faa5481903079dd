"""Pro forma assumptions: the structured input record for a project."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class AssetType(str, Enum):
    """Built form of the project (informational only)."""

    TOWNHOME = "TOWNHOME"
    MULTIFAMILY = "MULTIFAMILY"


class Monetization(str, Enum):
    """How the project is monetized. Only FOR_SALE is computed."""

    FOR_SALE = "FOR_SALE"
    FOR_RENT = "FOR_RENT"


@dataclass
class Meta:
    """Asset type and monetization toggles."""

    asset_type: AssetType = AssetType.TOWNHOME
    monetization: Monetization = Monetization.FOR_SALE


@dataclass
class Program:
    """Unit count and saleable area."""

    units: Optional[int] = None
    saleable_area_sqft: Optional[float] = None  # GFA / saleable area
    net_to_gross_pct: Optional[float] = 80.0  # Multifamily modeling only


@dataclass
class Acquisition:
    """Land purchase."""

    land_price: Optional[float] = None
    closing_costs_pct: Optional[float] = None  # % of land price


@dataclass
class RevenueSale:
    """For-sale revenue inputs."""

    sale_price_per_sqft: Optional[float] = None
    other_revenue: Optional[float] = None  # Parking, storage, misc (flat)
    sales_commission_pct: Optional[float] = None  # % of gross revenue


@dataclass
class RevenueRent:
    """For-rent revenue inputs. Stored but never computed."""

    avg_rent_per_unit_monthly: Optional[float] = None
    vacancy_pct: Optional[float] = None


@dataclass
class Costs:
    """Construction and development cost inputs."""

    hard_cost_per_sqft: Optional[float] = None
    soft_cost_pct_of_hard: Optional[float] = None
    contingency_pct_of_hard: Optional[float] = None
    contingency_pct_of_soft: Optional[float] = None
    dev_fee_pct_of_cost: Optional[float] = None  # % of land + hard + soft + contingency


@dataclass
class Financing:
    """Construction loan terms."""

    loan_to_cost_pct: Optional[float] = None
    interest_rate_pct: Optional[float] = None  # Annual %
    lender_fee_pct: Optional[float] = None  # % of loan amount, one-time


@dataclass
class TimelinePhases:
    """Durations of the three development phases, in months."""

    entitlement_months: Optional[int] = 6
    construction_months: Optional[int] = 18
    sales_lease_months: Optional[int] = 6

    def total(self) -> Optional[int]:
        """Sum of the phases, or None if any phase is missing."""
        if (
            self.entitlement_months is None
            or self.construction_months is None
            or self.sales_lease_months is None
        ):
            return None
        return self.entitlement_months + self.construction_months + self.sales_lease_months


@dataclass
class Timeline:
    """Project timeline."""

    phases: TimelinePhases = field(default_factory=TimelinePhases)
    total_months: Optional[int] = 30  # Derived from phases on save
    auto_calc_sales_months: bool = True  # Derive sales months from absorption


@dataclass
class Absorption:
    """For-sale absorption pace."""

    units_per_month: Optional[float] = 4.0


@dataclass
class ScenarioDeltas:
    """What-if deltas applied on top of the base case. Never None."""

    delta_sale_price_per_sqft_pct: float = 0.0
    delta_hard_cost_per_sqft_pct: float = 0.0
    delta_interest_rate_pct: float = 0.0  # Absolute percentage points
    delta_total_months: int = 0  # Applied to the total, allocated to phases


@dataclass
class ProFormaAssumptions:
    """Complete set of assumptions for one pro forma computation.

    Numeric fields left as None mean "not yet entered" and propagate as
    None through every downstream result.
    """

    meta: Meta = field(default_factory=Meta)
    program: Program = field(default_factory=Program)
    acquisition: Acquisition = field(default_factory=Acquisition)
    revenue_sale: RevenueSale = field(default_factory=RevenueSale)
    revenue_rent: RevenueRent = field(default_factory=RevenueRent)
    costs: Costs = field(default_factory=Costs)
    financing: Financing = field(default_factory=Financing)
    timeline: Timeline = field(default_factory=Timeline)
    absorption: Absorption = field(default_factory=Absorption)
    scenario: ScenarioDeltas = field(default_factory=ScenarioDeltas)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase record layout used for storage."""
        phases = self.timeline.phases
        return {
            "meta": {
                "assetType": self.meta.asset_type.value,
                "monetization": self.meta.monetization.value,
            },
            "program": {
                "units": self.program.units,
                "saleableAreaSqft": self.program.saleable_area_sqft,
                "netToGrossPct": self.program.net_to_gross_pct,
            },
            "acquisition": {
                "landPrice": self.acquisition.land_price,
                "closingCostsPct": self.acquisition.closing_costs_pct,
            },
            "revenueSale": {
                "salePricePerSqft": self.revenue_sale.sale_price_per_sqft,
                "otherRevenue": self.revenue_sale.other_revenue,
                "salesCommissionPct": self.revenue_sale.sales_commission_pct,
            },
            "revenueRent": {
                "avgRentPerUnitMonthly": self.revenue_rent.avg_rent_per_unit_monthly,
                "vacancyPct": self.revenue_rent.vacancy_pct,
            },
            "costs": {
                "hardCostPerSqft": self.costs.hard_cost_per_sqft,
                "softCostPctOfHard": self.costs.soft_cost_pct_of_hard,
                "contingencyPctOfHard": self.costs.contingency_pct_of_hard,
                "contingencyPctOfSoft": self.costs.contingency_pct_of_soft,
                "devFeePctOfCost": self.costs.dev_fee_pct_of_cost,
            },
            "financing": {
                "loanToCostPct": self.financing.loan_to_cost_pct,
                "interestRatePct": self.financing.interest_rate_pct,
                "lenderFeePct": self.financing.lender_fee_pct,
            },
            "timeline": {
                "phases": {
                    "entitlementMonths": phases.entitlement_months,
                    "constructionMonths": phases.construction_months,
                    "salesLeaseMonths": phases.sales_lease_months,
                },
                "totalMonths": self.timeline.total_months,
                "autoCalcSalesMonths": self.timeline.auto_calc_sales_months,
            },
            "absorption": {
                "unitsPerMonth": self.absorption.units_per_month,
            },
            "scenario": {
                "deltaSalePricePerSqftPct": self.scenario.delta_sale_price_per_sqft_pct,
                "deltaHardCostPerSqftPct": self.scenario.delta_hard_cost_per_sqft_pct,
                "deltaInterestRatePct": self.scenario.delta_interest_rate_pct,
                "deltaTotalMonths": self.scenario.delta_total_months,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProFormaAssumptions":
        """Build assumptions from a (migrated) camelCase record.

        Missing groups or keys fall back to the dataclass defaults.
        """
        meta = data.get("meta") or {}
        program = data.get("program") or {}
        acquisition = data.get("acquisition") or {}
        revenue_sale = data.get("revenueSale") or {}
        revenue_rent = data.get("revenueRent") or {}
        costs = data.get("costs") or {}
        financing = data.get("financing") or {}
        timeline = data.get("timeline") or {}
        phases = timeline.get("phases") or {}
        absorption = data.get("absorption") or {}
        scenario = data.get("scenario") or {}

        default_phases = TimelinePhases()
        default_timeline = Timeline()

        return cls(
            meta=Meta(
                asset_type=AssetType(meta.get("assetType", AssetType.TOWNHOME.value)),
                monetization=Monetization(meta.get("monetization", Monetization.FOR_SALE.value)),
            ),
            program=Program(
                units=program.get("units"),
                saleable_area_sqft=program.get("saleableAreaSqft"),
                net_to_gross_pct=program.get("netToGrossPct", Program().net_to_gross_pct),
            ),
            acquisition=Acquisition(
                land_price=acquisition.get("landPrice"),
                closing_costs_pct=acquisition.get("closingCostsPct"),
            ),
            revenue_sale=RevenueSale(
                sale_price_per_sqft=revenue_sale.get("salePricePerSqft"),
                other_revenue=revenue_sale.get("otherRevenue"),
                sales_commission_pct=revenue_sale.get("salesCommissionPct"),
            ),
            revenue_rent=RevenueRent(
                avg_rent_per_unit_monthly=revenue_rent.get("avgRentPerUnitMonthly"),
                vacancy_pct=revenue_rent.get("vacancyPct"),
            ),
            costs=Costs(
                hard_cost_per_sqft=costs.get("hardCostPerSqft"),
                soft_cost_pct_of_hard=costs.get("softCostPctOfHard"),
                contingency_pct_of_hard=costs.get("contingencyPctOfHard"),
                contingency_pct_of_soft=costs.get("contingencyPctOfSoft"),
                dev_fee_pct_of_cost=costs.get("devFeePctOfCost"),
            ),
            financing=Financing(
                loan_to_cost_pct=financing.get("loanToCostPct"),
                interest_rate_pct=financing.get("interestRatePct"),
                lender_fee_pct=financing.get("lenderFeePct"),
            ),
            timeline=Timeline(
                phases=TimelinePhases(
                    entitlement_months=phases.get("entitlementMonths", default_phases.entitlement_months),
                    construction_months=phases.get("constructionMonths", default_phases.construction_months),
                    sales_lease_months=phases.get("salesLeaseMonths", default_phases.sales_lease_months),
                ),
                total_months=timeline.get("totalMonths", default_timeline.total_months),
                auto_calc_sales_months=timeline.get(
                    "autoCalcSalesMonths", default_timeline.auto_calc_sales_months
                ),
            ),
            absorption=Absorption(
                units_per_month=absorption.get("unitsPerMonth", Absorption().units_per_month),
            ),
            scenario=ScenarioDeltas(
                delta_sale_price_per_sqft_pct=scenario.get("deltaSalePricePerSqftPct", 0.0),
                delta_hard_cost_per_sqft_pct=scenario.get("deltaHardCostPerSqftPct", 0.0),
                delta_interest_rate_pct=scenario.get("deltaInterestRatePct", 0.0),
                delta_total_months=scenario.get("deltaTotalMonths", 0),
            ),
        )

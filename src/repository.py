"""Pro forma persistence: repository interface, in-memory store and migration.

The engine never touches storage. Callers load assumptions through a
ProFormaService backed by any ProFormaRepository; the in-memory
implementation owns its own dict, so separate instances never share state.
"""

import copy
import math
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from .models.assumptions import ProFormaAssumptions, Program, Timeline
from .models.defaults import (
    DEFAULT_NET_TO_GROSS_PCT,
    DEFAULT_UNITS_PER_MONTH,
    LEGACY_PHASE_SPLIT,
    SQFT_PER_M2,
    default_assumptions,
)
from .validation import validate_assumptions


@dataclass(frozen=True)
class ProFormaRecord:
    """Stored pro forma for a project."""

    project_id: str
    updated_at: datetime
    assumptions: Dict[str, Any]  # camelCase record layout


class ProFormaRepository(Protocol):
    """Storage for pro forma records keyed by project id."""

    def get(self, project_id: str) -> Optional[ProFormaRecord]:
        ...

    def upsert(self, project_id: str, assumptions: Dict[str, Any]) -> ProFormaRecord:
        ...


class InMemoryProFormaRepository:
    """Dict-backed repository for tests and local use."""

    def __init__(self) -> None:
        self._records: Dict[str, ProFormaRecord] = {}

    def get(self, project_id: str) -> Optional[ProFormaRecord]:
        return self._records.get(project_id)

    def upsert(self, project_id: str, assumptions: Dict[str, Any]) -> ProFormaRecord:
        record = ProFormaRecord(
            project_id=project_id,
            updated_at=datetime.now(timezone.utc),
            assumptions=copy.deepcopy(assumptions),
        )
        self._records[project_id] = record
        return record


def split_legacy_total(total_months: int) -> Dict[str, int]:
    """Split a single legacy duration into three phases (25/60/15).

    Entitlement and construction round half up; sales takes the remainder.
    """
    entitlement_share, construction_share, _ = LEGACY_PHASE_SPLIT
    entitlement = math.floor(total_months * entitlement_share + 0.5)
    construction = math.floor(total_months * construction_share + 0.5)
    return {
        "entitlementMonths": entitlement,
        "constructionMonths": construction,
        "salesLeaseMonths": total_months - entitlement - construction,
    }


def migrate_legacy_assumptions(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Upgrade a stored record to the current three-phase layout.

    Handles:
    - timeline.totalMonths without phases -> 25/60/15 split, auto-calc off
    - revenue -> revenueSale (with an empty revenueRent)
    - financing.interestCoverageFactor -> removed
    - missing meta, absorption, program.netToGrossPct, timeline and
      timeline.autoCalcSalesMonths -> defaults

    The input dict is not modified.
    """
    migrated = copy.deepcopy(raw)
    defaults = default_assumptions().to_dict()

    timeline = migrated.get("timeline")
    if timeline and timeline.get("totalMonths") and not timeline.get("phases"):
        total = timeline["totalMonths"]
        migrated["timeline"] = {
            "phases": split_legacy_total(total),
            "totalMonths": total,
            "autoCalcSalesMonths": False,
        }

    if "revenue" in migrated and "revenueSale" not in migrated:
        migrated["revenueSale"] = migrated.pop("revenue")
        migrated["revenueRent"] = {
            "avgRentPerUnitMonthly": None,
            "vacancyPct": None,
        }

    financing = migrated.get("financing")
    if financing is not None:
        financing.pop("interestCoverageFactor", None)

    if not migrated.get("meta"):
        migrated["meta"] = defaults["meta"]

    if not migrated.get("absorption"):
        migrated["absorption"] = {"unitsPerMonth": DEFAULT_UNITS_PER_MONTH}

    program = migrated.get("program")
    if program is not None and "netToGrossPct" not in program:
        program["netToGrossPct"] = DEFAULT_NET_TO_GROSS_PCT

    if not migrated.get("timeline"):
        migrated["timeline"] = defaults["timeline"]

    if "autoCalcSalesMonths" not in migrated["timeline"]:
        migrated["timeline"]["autoCalcSalesMonths"] = True

    return migrated


@dataclass(frozen=True)
class ProjectProfile:
    """Subset of a project profile used to seed a new pro forma."""

    units_proposed: Optional[int] = None
    gfa_value: Optional[float] = None
    gfa_unit: str = "sqft"  # "sqft" or "m2"


def seed_from_profile(
    assumptions: ProFormaAssumptions,
    profile: ProjectProfile,
) -> ProFormaAssumptions:
    """Copy units and saleable area from a project profile.

    Area given in square metres is converted to square feet.
    """
    area = profile.gfa_value
    if area is not None and profile.gfa_unit == "m2":
        area = area * SQFT_PER_M2

    if not profile.units_proposed and not area:
        return assumptions

    return replace(
        assumptions,
        program=Program(
            units=profile.units_proposed,
            saleable_area_sqft=area,
            net_to_gross_pct=DEFAULT_NET_TO_GROSS_PCT,
        ),
    )


def normalize_assumptions(assumptions: ProFormaAssumptions) -> ProFormaAssumptions:
    """Recompute the derived total duration from the phases."""
    total = assumptions.timeline.phases.total()
    if total is None:
        return assumptions

    return replace(
        assumptions,
        timeline=Timeline(
            phases=assumptions.timeline.phases,
            total_months=total,
            auto_calc_sales_months=assumptions.timeline.auto_calc_sales_months,
        ),
    )


class ProFormaService:
    """Load, save and create pro formas on top of a repository."""

    def __init__(self, repository: ProFormaRepository):
        self.repository = repository

    def load(self, project_id: str) -> Optional[ProFormaAssumptions]:
        """Load migrated assumptions for a project, or None if none are stored."""
        record = self.repository.get(project_id)
        if record is None or not record.assumptions:
            return None
        return ProFormaAssumptions.from_dict(migrate_legacy_assumptions(record.assumptions))

    def save(self, project_id: str, assumptions: ProFormaAssumptions) -> ProFormaAssumptions:
        """Normalize, validate and store assumptions.

        Raises:
            AssumptionsValidationError: If any field is out of range.
        """
        normalized = validate_assumptions(normalize_assumptions(assumptions))
        record = self.repository.upsert(project_id, normalized.to_dict())
        return ProFormaAssumptions.from_dict(record.assumptions)

    def ensure(
        self,
        project_id: str,
        profile: Optional[ProjectProfile] = None,
    ) -> ProFormaAssumptions:
        """Load the project's pro forma, creating it from defaults if missing."""
        existing = self.load(project_id)
        if existing is not None:
            return existing

        assumptions = default_assumptions()
        if profile is not None:
            assumptions = seed_from_profile(assumptions, profile)

        return self.save(project_id, assumptions)

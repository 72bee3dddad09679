from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from config.defaults import SITE_STATUS_ACTIVE
from models.closure import ClosurePlan
from models.organization import ProjectAssignment


@dataclass
class Region:
    region_id: str
    code: str
    name: str


@dataclass
class Zone:
    zone_id: str
    code: str
    name: str
    floor_id: str
    capacities: Dict[str, int] = field(default_factory=dict)  # year_month -> seats
    assignments: List[ProjectAssignment] = field(default_factory=list)

    def capacity_for(self, year_month: str) -> Optional[int]:
        return self.capacities.get(year_month)

    def assignments_for(self, year_month: str) -> List[ProjectAssignment]:
        return [a for a in self.assignments if a.year_month == year_month]

    def occupied_for(self, year_month: str) -> int:
        return sum(a.seats for a in self.assignments_for(year_month))


@dataclass
class Floor:
    floor_id: str
    code: str
    name: str
    site_id: str
    zones: List[Zone] = field(default_factory=list)
    closure_plans: List[ClosurePlan] = field(default_factory=list)
    site: Optional["Site"] = field(default=None, repr=False, compare=False)

    def closure_plan_by(self, year_month: str) -> Optional[ClosurePlan]:
        """First PLANNED closure that has taken effect by year_month, if any."""
        for plan in self.closure_plans:
            if plan.closes_by(year_month):
                return plan
        return None

    def is_closed_by(self, year_month: str) -> bool:
        return self.closure_plan_by(year_month) is not None


@dataclass
class Site:
    site_id: str
    code: str
    name: str
    region: Region
    status: str = SITE_STATUS_ACTIVE  # ACTIVE, CLOSING, PLANNED, CLOSED
    opening_date: Optional[date] = None
    closing_date: Optional[date] = None
    floors: List[Floor] = field(default_factory=list)

    @property
    def region_id(self) -> str:
        return self.region.region_id

    @property
    def is_active(self) -> bool:
        return self.status == SITE_STATUS_ACTIVE

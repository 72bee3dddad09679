"""Capacity Repository — read access to one point-in-time portfolio snapshot."""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Optional

from config.defaults import CLOSURE_STATUS_PLANNED
from models.building import Region, Site, Floor
from models.closure import ClosurePlan
from engine.errors import NotFoundError, RepositoryError
from engine.months import year_month_of
from engine.occupancy import compute_seats_on_floor

logger = logging.getLogger(__name__)


class CapacityRepository(ABC):
    """Interface the allocation engine reads from."""

    @abstractmethod
    def list_active_sites_in_region(
        self, region_id: str, exclude_site_id: str, year_month: str,
    ) -> List[Site]:
        """ACTIVE sites of a region other than exclude_site_id, with floors, zones,
        capacities, assignments and closure plans attached."""

    @abstractmethod
    def get_closure_plan(self, plan_id: str) -> Optional[ClosurePlan]:
        """The plan with its floor (and the floor's site and zones) attached, or None."""

    @abstractmethod
    def list_sites(self) -> List[Site]:
        ...

    @abstractmethod
    def list_closure_plans(self, year_month: Optional[str] = None) -> List[ClosurePlan]:
        ...


class InMemoryCapacityRepository(CapacityRepository):
    """Snapshot held in memory, built once and passed to the engine explicitly."""

    def __init__(self, regions: List[Region], sites: List[Site]):
        self._regions: Dict[str, Region] = {r.region_id: r for r in regions}
        self._sites: Dict[str, Site] = {}
        self._floors: Dict[str, Floor] = {}
        self._plans: Dict[str, ClosurePlan] = {}

        for site in sites:
            if site.region.region_id not in self._regions:
                raise RepositoryError(f"Site {site.site_id} references unknown region {site.region.region_id}")
            self._sites[site.site_id] = site
            for floor in site.floors:
                self._link_floor(site, floor)

        logger.info(
            "Loaded snapshot: %d regions, %d sites, %d floors, %d closure plans",
            len(self._regions), len(self._sites), len(self._floors), len(self._plans),
        )

    def _link_floor(self, site: Site, floor: Floor):
        if floor.site_id != site.site_id:
            raise RepositoryError(f"Floor {floor.floor_id} is listed under site {site.site_id} but belongs to {floor.site_id}")
        floor.site = site
        self._floors[floor.floor_id] = floor
        for zone in floor.zones:
            if zone.floor_id != floor.floor_id:
                raise RepositoryError(f"Zone {zone.zone_id} is listed under floor {floor.floor_id} but belongs to {zone.floor_id}")
        for plan in floor.closure_plans:
            if plan.plan_id in self._plans:
                raise RepositoryError(f"Duplicate closure plan id {plan.plan_id} on floor {floor.floor_id}")
            plan.floor = floor
            self._plans[plan.plan_id] = plan

    # --- Reads ---

    def list_regions(self) -> List[Region]:
        return sorted(self._regions.values(), key=lambda r: r.name)

    def get_region(self, region_id: str) -> Optional[Region]:
        return self._regions.get(region_id)

    def get_site(self, site_id: str) -> Optional[Site]:
        return self._sites.get(site_id)

    def get_floor(self, floor_id: str) -> Optional[Floor]:
        return self._floors.get(floor_id)

    def list_sites(self) -> List[Site]:
        return sorted(self._sites.values(), key=lambda s: (s.name, s.site_id))

    def list_active_sites_in_region(
        self, region_id: str, exclude_site_id: str, year_month: str,
    ) -> List[Site]:
        return [
            s for s in self.list_sites()
            if s.is_active and s.region_id == region_id and s.site_id != exclude_site_id
        ]

    def get_closure_plan(self, plan_id: str) -> Optional[ClosurePlan]:
        return self._plans.get(plan_id)

    def list_closure_plans(self, year_month: Optional[str] = None) -> List[ClosurePlan]:
        plans = sorted(self._plans.values(), key=lambda p: (p.closure_date, p.plan_id))
        if year_month is not None:
            plans = [p for p in plans if p.year_month == year_month]
        return plans

    # --- Writes ---

    def add_closure_plan(
        self,
        floor_id: str,
        closure_date: date,
        seats_affected: Optional[int] = None,
    ) -> ClosurePlan:
        """Schedule a floor closure; seats default to the floor's assignments that month."""
        floor = self._floors.get(floor_id)
        if floor is None:
            raise NotFoundError("Floor", floor_id)

        year_month = year_month_of(closure_date)
        if not seats_affected:
            seats_affected = compute_seats_on_floor(floor, year_month)

        plan = ClosurePlan(
            plan_id=f"cp_{floor.site.code}{floor.code}",
            floor_id=floor_id,
            closure_date=closure_date,
            year_month=year_month,
            seats_affected=seats_affected,
            status=CLOSURE_STATUS_PLANNED,
            floor=floor,
        )
        existing = self._plans.get(plan.plan_id)
        if existing is not None and existing.floor_id != floor_id:
            raise RepositoryError(
                f"Closure plan id {plan.plan_id} already belongs to floor {existing.floor_id}"
            )
        if existing is not None:
            floor.closure_plans.remove(existing)
        floor.closure_plans.append(plan)
        self._plans[plan.plan_id] = plan
        logger.info("Closure plan %s scheduled for %s (%d seats)", plan.plan_id, year_month, seats_affected)
        return plan

    def remove_closure_plan(self, plan_id: str):
        plan = self._plans.pop(plan_id, None)
        if plan is None:
            raise NotFoundError("Closure plan", plan_id)
        plan.floor.closure_plans.remove(plan)

"""Tests for destination site capacity and regional availability."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date

from models.organization import Client, Project, Queue, ProjectAssignment
from models.building import Region, Site, Floor, Zone
from models.closure import ClosurePlan
from data.repository import InMemoryCapacityRepository
from engine.site_capacity import (
    compute_site_capacity, rank_site_capacities, compute_site_capacities,
    compute_region_available, get_region_capacity_for_month,
)

YM = "2025-06"
PROJECT = Project("P1", "P1", "Project 1", Client("C1", "ACME", "Acme"))
QUEUE = Queue("Q1", "SUP", "Support")


def make_region(region_id="R1", code="APAC"):
    return Region(region_id, code, code.title())


def make_zone(zone_id, floor_id, capacity, occupied, year_month=YM):
    zone = Zone(zone_id, zone_id, f"Zone {zone_id}", floor_id)
    if capacity is not None:
        zone.capacities[year_month] = capacity
    if occupied:
        zone.assignments.append(ProjectAssignment(zone_id, PROJECT, QUEUE, year_month, occupied))
    return zone


def make_site(site_id, region, floors, name=None, status="ACTIVE"):
    """floors: one list of (capacity, occupied) pairs per floor."""
    site = Site(site_id, site_id, name or f"Site {site_id}", region, status=status)
    for f_idx, zone_specs in enumerate(floors, start=1):
        floor_id = f"{site_id}-F{f_idx}"
        floor = Floor(floor_id, f"F{f_idx}", f"Floor {f_idx}", site_id)
        floor.zones = [
            make_zone(f"{floor_id}-Z{z_idx}", floor_id, cap, occ)
            for z_idx, (cap, occ) in enumerate(zone_specs, start=1)
        ]
        site.floors.append(floor)
    return site


def close_floor(floor, closure_date=date(2025, 6, 1), status="PLANNED"):
    plan = ClosurePlan(
        plan_id=f"cp_{floor.floor_id}",
        floor_id=floor.floor_id,
        closure_date=closure_date,
        year_month=f"{closure_date.year}-{closure_date.month:02d}",
        seats_affected=0,
        status=status,
        floor=floor,
    )
    floor.closure_plans.append(plan)
    return plan


class TestComputeSiteCapacity:
    def test_totals(self):
        site = make_site("S1", make_region(), [[(50, 30), (40, 40)]])
        cap = compute_site_capacity(site, YM)

        assert cap.total_capacity == 90
        assert cap.total_occupied == 70
        assert cap.available_capacity == 20
        assert cap.current_utilization == 77.8
        assert cap.region_code == "APAC"

    def test_breakdown_keeps_only_zones_with_room(self):
        site = make_site("S1", make_region(), [[(50, 30), (40, 40)], [(20, 20)]])
        cap = compute_site_capacity(site, YM)

        assert len(cap.floor_breakdown) == 1
        floor = cap.floor_breakdown[0]
        assert floor.floor_name == "Floor 1"
        assert [z.available for z in floor.zones] == [20]

    def test_floors_sorted_by_available(self):
        site = make_site("S1", make_region(), [[(10, 5)], [(30, 0)], [(20, 10)]])
        cap = compute_site_capacity(site, YM)
        assert [f.total_available for f in cap.floor_breakdown] == [30, 10, 5]

    def test_closed_floor_contributes_nothing(self):
        site = make_site("S1", make_region(), [[(50, 10)], [(100, 40)]])
        close_floor(site.floors[1], date(2025, 3, 15))
        cap = compute_site_capacity(site, YM)

        assert cap.total_capacity == 50
        assert cap.total_occupied == 10
        assert cap.available_capacity == 40
        assert [f.floor_id for f in cap.floor_breakdown] == ["S1-F1"]

    def test_future_closure_still_counts(self):
        site = make_site("S1", make_region(), [[(50, 10)], [(100, 40)]])
        close_floor(site.floors[1], date(2025, 9, 1))
        cap = compute_site_capacity(site, YM)
        assert cap.total_capacity == 150

    def test_cancelled_closure_still_counts(self):
        site = make_site("S1", make_region(), [[(50, 10)], [(100, 40)]])
        close_floor(site.floors[1], date(2025, 3, 1), status="CANCELLED")
        cap = compute_site_capacity(site, YM)
        assert cap.total_capacity == 150

    def test_missing_capacity_counts_as_zero(self):
        site = make_site("S1", make_region(), [[(None, 5), (20, 0)]])
        cap = compute_site_capacity(site, YM)

        assert cap.total_capacity == 20
        assert cap.total_occupied == 5
        assert cap.available_capacity == 15

    def test_over_occupied_site_has_zero_available(self):
        site = make_site("S1", make_region(), [[(10, 12)]])
        cap = compute_site_capacity(site, YM)
        assert cap.available_capacity == 0
        assert cap.current_utilization == 120.0
        assert cap.floor_breakdown == []

    def test_empty_site(self):
        site = make_site("S1", make_region(), [])
        cap = compute_site_capacity(site, YM)
        assert cap.total_capacity == 0
        assert cap.current_utilization == 0.0


class TestRanking:
    def test_descending_by_available(self):
        region = make_region()
        sites = [
            make_site("S1", region, [[(20, 10)]]),
            make_site("S2", region, [[(50, 10)]]),
            make_site("S3", region, [[(30, 10)]]),
        ]
        ranked = rank_site_capacities(sites, YM)
        assert [c.site_id for c in ranked] == ["S2", "S3", "S1"]

    def test_ties_keep_input_order(self):
        region = make_region()
        sites = [
            make_site("S1", region, [[(20, 10)]]),
            make_site("S2", region, [[(20, 10)]]),
        ]
        ranked = rank_site_capacities(sites, YM)
        assert [c.site_id for c in ranked] == ["S1", "S2"]


class TestRepositoryBackedCapacity:
    def _repository(self):
        apac, emea = make_region("R1", "APAC"), make_region("R2", "EMEA")
        sites = [
            make_site("S1", apac, [[(50, 50)]], name="Alpha"),
            make_site("S2", apac, [[(40, 10)]], name="Bravo"),
            make_site("S3", apac, [[(60, 0)]], name="Charlie", status="PLANNED"),
            make_site("S4", emea, [[(100, 0)]], name="Delta"),
            make_site("S5", apac, [[(30, 0)]], name="Echo"),
        ]
        return InMemoryCapacityRepository([apac, emea], sites)

    def test_same_region_active_sites_only(self):
        caps = compute_site_capacities(self._repository(), "R1", "S1", YM)
        assert [c.site_id for c in caps] == ["S2", "S5"]
        assert all(c.region_id == "R1" for c in caps)

    def test_unknown_region_is_empty(self):
        assert compute_site_capacities(self._repository(), "R9", "S1", YM) == []

    def test_region_available(self):
        assert get_region_capacity_for_month(self._repository(), "R1", "S1", YM) == 60


class TestRegionAvailable:
    def test_sum_of_zone_availability(self):
        # Zone A is over-full; its deficit does not eat into zone B's room
        site = make_site("S1", make_region(), [[(10, 15), (10, 0)]])
        assert compute_region_available([site], YM) == 10
        assert compute_site_capacity(site, YM).available_capacity == 5

    def test_closed_floor_excluded(self):
        site = make_site("S1", make_region(), [[(10, 0)], [(20, 0)]])
        close_floor(site.floors[1], date(2025, 6, 30))
        assert compute_region_available([site], YM) == 10


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])

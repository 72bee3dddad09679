"""Tests for the stable closure month recommender."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.building import Region, Site, Floor, Zone
from data.repository import InMemoryCapacityRepository
from engine.stable_month import (
    recommend_closure_month, find_stable_closure_month, region_capacity_timeline,
)


def make_capacity(default=0, **by_month):
    """Regional availability lookup: by_month keys are month numbers like m6=40."""
    values = {f"2025-{int(k[1:]):02d}": v for k, v in by_month.items()}
    return lambda ym: values.get(ym, default)


def make_repository(capacities):
    """Region R1 with source site S1 and one destination zone on S2."""
    region = Region("R1", "APAC", "Asia Pacific")
    source = Site("S1", "SRC", "Source", region, floors=[Floor("S1-F1", "F1", "Floor 1", "S1")])
    zone = Zone("S2-F1-Z1", "Z1", "Zone 1", "S2-F1", capacities=dict(capacities))
    dest = Site("S2", "DST", "Destination", region,
                floors=[Floor("S2-F1", "F1", "Floor 1", "S2", zones=[zone])])
    return InMemoryCapacityRepository([region], [source, dest])


class CountingRepository(InMemoryCapacityRepository):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads = 0

    def list_active_sites_in_region(self, region_id, exclude_site_id, year_month):
        self.reads += 1
        return super().list_active_sites_in_region(region_id, exclude_site_id, year_month)


class TestCapacityInStartMonth:
    def test_stable_through_year_end(self):
        rec = recommend_closure_month(make_capacity(default=50), 40, "2025-03")
        assert rec.has_capacity is True
        assert rec.suggested_closure_month is None
        assert rec.capacity_available == 50
        assert rec.stable_through == "2025-12"
        assert rec.reason == "Capacity available and stable through year-end"

    def test_exact_match_counts(self):
        rec = recommend_closure_month(make_capacity(default=40), 40, "2025-03")
        assert rec.has_capacity is True
        assert rec.stable_through == "2025-12"

    def test_breaks_later_in_year(self):
        capacity = make_capacity(default=50, m9=10, m10=10, m11=10, m12=10)
        rec = recommend_closure_month(capacity, 40, "2025-03")
        assert rec.has_capacity is True
        assert rec.stable_through == "2025-08"
        assert rec.reason == "Capacity available but may need reallocation after August"

    def test_breaks_next_month(self):
        capacity = make_capacity(default=0, m5=50)
        rec = recommend_closure_month(capacity, 40, "2025-05")
        assert rec.has_capacity is True
        assert rec.stable_through == "2025-05"
        assert rec.reason == "Capacity available but may need reallocation after May"

    def test_december_start(self):
        rec = recommend_closure_month(make_capacity(m12=40), 40, "2025-12")
        assert rec.has_capacity is True
        assert rec.stable_through == "2025-12"


class TestLaterMonth:
    def test_suggests_first_stable_month(self):
        capacity = make_capacity(default=40, m6=0)
        rec = recommend_closure_month(capacity, 40, "2025-06")
        assert rec.has_capacity is False
        assert rec.suggested_closure_month == "2025-07"
        assert rec.suggested_month_name == "July 2025"
        assert rec.capacity_available == 40
        assert rec.stable_through == "2025-12"
        assert rec.reason == "No capacity in June. Recommend closing in July (stable through December)"

    def test_unstable_window_rejected(self):
        # Room from June to November only; December drops back to zero
        capacity = make_capacity(default=0, m6=40, m7=40, m8=40, m9=40, m10=40, m11=40)
        rec = recommend_closure_month(capacity, 40, "2025-05")
        assert rec.has_capacity is False
        assert rec.suggested_closure_month is None
        assert rec.suggested_month_name is None
        assert rec.capacity_available == 0
        assert rec.stable_through is None
        assert rec.reason.startswith("No month with stable capacity through December found")

    def test_skips_unstable_candidate_for_later_stable_one(self):
        capacity = make_capacity(default=40, m3=0, m5=0)
        rec = recommend_closure_month(capacity, 40, "2025-03")
        assert rec.suggested_closure_month == "2025-06"

    def test_december_start_without_capacity(self):
        rec = recommend_closure_month(make_capacity(default=0), 10, "2025-12")
        assert rec.has_capacity is False
        assert rec.suggested_closure_month is None

    def test_never_rolls_into_next_year(self):
        calls = []

        def capacity(ym):
            calls.append(ym)
            return 0

        recommend_closure_month(capacity, 10, "2025-10")
        assert all(ym.startswith("2025-") for ym in calls)


class TestRepositoryBacked:
    def test_reads_region_capacity(self):
        repository = make_repository({"2025-06": 0, **{f"2025-{m:02d}": 40 for m in range(7, 13)}})
        rec = find_stable_closure_month(repository, "R1", "S1", 40, "2025-06")
        assert rec.suggested_closure_month == "2025-07"

    def test_each_month_read_once(self):
        capacities = {f"2025-{m:02d}": 40 for m in range(6, 12)}
        base = make_repository(capacities)
        repository = CountingRepository(base.list_regions(), base.list_sites())
        rec = find_stable_closure_month(repository, "R1", "S1", 40, "2025-05")

        assert rec.suggested_closure_month is None
        assert repository.reads == 8

    def test_source_site_capacity_ignored(self):
        repository = make_repository({})
        source_floor = repository.get_floor("S1-F1")
        source_floor.zones.append(
            Zone("S1-F1-Z1", "Z1", "Zone 1", "S1-F1", capacities={"2025-06": 500})
        )
        rec = find_stable_closure_month(repository, "R1", "S1", 10, "2025-06")
        assert rec.has_capacity is False

    def test_timeline(self):
        repository = make_repository({"2025-10": 5, "2025-11": 15, "2025-12": 25})
        timeline = region_capacity_timeline(repository, "R1", "S1", "2025-10")
        assert timeline == [
            {"year_month": "2025-10", "available": 5},
            {"year_month": "2025-11", "available": 15},
            {"year_month": "2025-12", "available": 25},
        ]


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])

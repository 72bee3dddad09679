"""Tests for sheet validation, parsing and the sample portfolio."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd
import pytest

from data.sample_data import generate_sample_frames, generate_sample_excel
from data.loader import (
    build_repository, load_csv_folder, load_multi_sheet_excel, SHEET_KEYS,
)
from data.validator import validate_portfolio, validate_sheet
from engine.errors import RepositoryError
from engine.occupancy import compute_seats_on_floor


def make_frames():
    return generate_sample_frames(2025)


class TestValidator:
    def test_sample_is_valid(self):
        result = validate_portfolio(make_frames())
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_missing_sheet(self):
        frames = make_frames()
        del frames["zones"]
        result = validate_portfolio(frames)
        assert not result.is_valid
        assert any("Zones" in e for e in result.errors)

    def test_closure_sheet_optional(self):
        frames = make_frames()
        del frames["closure_plans"]
        assert validate_portfolio(frames).is_valid

    def test_missing_column(self):
        frames = make_frames()
        frames["sites"] = frames["sites"].drop(columns=["Region ID"])
        result = validate_portfolio(frames)
        assert not result.is_valid
        assert any("Region ID" in e for e in result.errors)

    def test_bad_year_month(self):
        df = pd.DataFrame([{"Zone ID": "Z1", "Year Month": "2025-3", "Capacity": 10}])
        result = validate_sheet("zone_capacity", df)
        assert not result.is_valid

    def test_negative_seats(self):
        df = pd.DataFrame([{
            "Zone ID": "Z1", "Project ID": "P1", "Queue ID": "Q1", "Year Month": "2025-03", "Seats": -4,
        }])
        result = validate_sheet("project_assignments", df)
        assert not result.is_valid
        assert any("negative" in e for e in result.errors)

    def test_duplicate_ids(self):
        df = pd.DataFrame([
            {"Region ID": "R1", "Region Code": "APAC", "Region Name": "Asia"},
            {"Region ID": "R1", "Region Code": "EMEA", "Region Name": "Europe"},
        ])
        assert not validate_sheet("regions", df).is_valid

    def test_bad_closure_date(self):
        df = pd.DataFrame([{"Floor ID": "S1-F1", "Closure Date": "someday"}])
        assert not validate_sheet("closure_plans", df).is_valid

    def test_unknown_site_status(self):
        frames = make_frames()
        frames["sites"].loc[0, "Status"] = "DEMOLISHED"
        result = validate_portfolio(frames)
        assert not result.is_valid
        assert any("DEMOLISHED" in e for e in result.errors)

    def test_duplicate_generated_closure_ids(self):
        frames = make_frames()
        frames["closure_plans"] = pd.DataFrame([
            {"Floor ID": "S1-F1", "Closure Date": "2025-03-01", "Status": "PLANNED"},
            {"Floor ID": "S1-F1", "Closure Date": "2025-09-01", "Status": "CANCELLED"},
        ])
        result = validate_portfolio(frames)
        assert not result.is_valid
        assert any("cp_MNLF1" in e for e in result.errors)

    def test_duplicate_explicit_closure_ids(self):
        frames = make_frames()
        frames["closure_plans"] = pd.DataFrame([
            {"Closure ID": "cp_1", "Floor ID": "S1-F1", "Closure Date": "2025-03-01"},
            {"Closure ID": "cp_1", "Floor ID": "S2-F1", "Closure Date": "2025-04-01"},
        ])
        assert not validate_portfolio(frames).is_valid

    def test_distinct_closures_on_one_floor(self):
        frames = make_frames()
        frames["closure_plans"] = pd.DataFrame([
            {"Closure ID": "cp_a", "Floor ID": "S1-F1", "Closure Date": "2025-03-01"},
            {"Floor ID": "S1-F1", "Closure Date": "2025-09-01"},
        ])
        assert validate_portfolio(frames).is_valid

    def test_dangling_reference_is_warning(self):
        frames = make_frames()
        frames["floors"] = pd.concat([
            frames["floors"],
            pd.DataFrame([{"Floor ID": "S9-F1", "Floor Code": "F1", "Floor Name": "Ghost", "Site ID": "S9"}]),
        ], ignore_index=True)
        result = validate_portfolio(frames)
        assert result.is_valid
        assert any("S9" in w for w in result.warnings)


class TestBuildRepository:
    def test_sample_portfolio(self):
        repository = build_repository(make_frames())

        assert len(repository.list_regions()) == 2
        assert len(repository.list_sites()) == 6
        assert sum(len(s.floors) for s in repository.list_sites()) == 16
        assert [p.plan_id for p in repository.list_closure_plans()] == ["cp_MNLF4", "cp_CEBF3", "cp_LONF3"]

    def test_closure_seats_default_to_floor_assignments(self):
        repository = build_repository(make_frames())
        plan = repository.get_closure_plan("cp_MNLF4")
        assert plan.year_month == "2025-03"
        assert plan.seats_affected == compute_seats_on_floor(plan.floor, "2025-03")
        assert plan.seats_affected > 0

    def test_generated_closure_id(self):
        frames = make_frames()
        frames["closure_plans"] = pd.DataFrame([{"Floor ID": "S2-F1", "Closure Date": "2025-09-01"}])
        repository = build_repository(frames)
        plan = repository.get_closure_plan("cp_CEBF1")
        assert plan is not None
        assert plan.year_month == "2025-09"

    def test_dangling_rows_dropped(self):
        frames = make_frames()
        frames["floors"] = pd.concat([
            frames["floors"],
            pd.DataFrame([{"Floor ID": "S9-F1", "Floor Code": "F1", "Floor Name": "Ghost", "Site ID": "S9"}]),
        ], ignore_index=True)
        repository = build_repository(frames)
        assert repository.get_floor("S9-F1") is None

    def test_duplicate_closure_ids_rejected(self):
        frames = make_frames()
        frames["closure_plans"] = pd.DataFrame([
            {"Floor ID": "S1-F1", "Closure Date": "2025-03-01"},
            {"Floor ID": "S1-F1", "Closure Date": "2025-09-01"},
        ])
        with pytest.raises(RepositoryError):
            build_repository(frames)

    def test_timestamp_year_month(self):
        frames = make_frames()
        frames["zone_capacity"] = frames["zone_capacity"].assign(
            **{"Year Month": pd.to_datetime(frames["zone_capacity"]["Year Month"] + "-01")}
        )
        repository = build_repository(frames)
        zone = repository.get_floor("S1-F1").zones[0]
        assert "2025-03" in zone.capacities

    def test_no_closure_sheet(self):
        frames = make_frames()
        del frames["closure_plans"]
        assert build_repository(frames).list_closure_plans() == []


class TestFileLoading:
    def test_excel_round_trip(self, tmp_path):
        path = tmp_path / "portfolio.xlsx"
        generate_sample_excel(str(path), 2025)

        frames = load_multi_sheet_excel(str(path))
        assert list(frames) == SHEET_KEYS
        assert validate_portfolio(frames).is_valid
        assert len(build_repository(frames).list_closure_plans()) == 3

    def test_excel_missing_sheet(self, tmp_path):
        path = tmp_path / "partial.xlsx"
        make_frames()["regions"].to_excel(path, sheet_name="Regions", index=False)
        with pytest.raises(ValueError):
            load_multi_sheet_excel(str(path))

    def test_csv_folder(self, tmp_path):
        for key, df in make_frames().items():
            df.to_csv(tmp_path / f"{key}.csv", index=False)
        repository = build_repository(load_csv_folder(str(tmp_path)))
        assert len(repository.list_sites()) == 6

    def test_csv_folder_missing_file(self, tmp_path):
        with pytest.raises(ValueError):
            load_csv_folder(str(tmp_path))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

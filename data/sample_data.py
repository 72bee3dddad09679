"""Generate a synthetic demo portfolio for the Seat Capacity & Closure Allocation Platform."""

import random
from datetime import date
from typing import Dict, Optional

import pandas as pd

REGIONS = [("R1", "APAC", "Asia Pacific"), ("R2", "EMEA", "Europe & Middle East")]

# site id, code, name, region id, status, floors
SITES = [
    ("S1", "MNL", "Manila Tower", "R1", "ACTIVE", 4),
    ("S2", "CEB", "Cebu Hub", "R1", "ACTIVE", 3),
    ("S3", "DVO", "Davao Center", "R1", "ACTIVE", 2),
    ("S4", "KUL", "Kuala Lumpur Park", "R1", "PLANNED", 2),
    ("S5", "LON", "London Bridge", "R2", "ACTIVE", 3),
    ("S6", "DUB", "Dublin Docks", "R2", "ACTIVE", 2),
]

ZONES_PER_FLOOR = 3

QUEUES = [
    ("Q1", "CS", "Customer Support"),
    ("Q2", "TS", "Technical Support"),
    ("Q3", "SAL", "Sales"),
    ("Q4", "BO", "Back Office"),
]

CLIENTS = [
    ("C1", "ACME", "Acme Corp"),
    ("C2", "GLOBX", "Globex"),
    ("C3", "INIT", "Initech"),
    ("C4", "UMBR", "Umbrella"),
]

PROJECTS_PER_CLIENT = 3


def _year_months(year: int):
    return [f"{year}-{m:02d}" for m in range(1, 13)]


def generate_regions_df() -> pd.DataFrame:
    return pd.DataFrame([
        {"Region ID": rid, "Region Code": code, "Region Name": name} for rid, code, name in REGIONS
    ])


def generate_sites_df() -> pd.DataFrame:
    return pd.DataFrame([
        {"Site ID": sid, "Site Code": code, "Site Name": name, "Region ID": rid, "Status": status}
        for sid, code, name, rid, status, _ in SITES
    ])


def generate_floors_df() -> pd.DataFrame:
    rows = []
    for sid, code, _, _, _, floor_count in SITES:
        for f in range(1, floor_count + 1):
            rows.append({
                "Floor ID": f"{sid}-F{f}",
                "Floor Code": f"F{f}",
                "Floor Name": f"{code} Floor {f}",
                "Site ID": sid,
            })
    return pd.DataFrame(rows)


def generate_zones_df() -> pd.DataFrame:
    rows = []
    for _, floor in generate_floors_df().iterrows():
        for z in range(1, ZONES_PER_FLOOR + 1):
            rows.append({
                "Zone ID": f"{floor['Floor ID']}-Z{z}",
                "Zone Code": f"Z{z}",
                "Zone Name": f"{floor['Floor Name']} Zone {chr(64 + z)}",
                "Floor ID": floor["Floor ID"],
            })
    return pd.DataFrame(rows)


def generate_clients_df() -> pd.DataFrame:
    return pd.DataFrame([
        {"Client ID": cid, "Client Code": code, "Client Name": name} for cid, code, name in CLIENTS
    ])


def generate_projects_df() -> pd.DataFrame:
    rows = []
    for cid, code, name in CLIENTS:
        for p in range(1, PROJECTS_PER_CLIENT + 1):
            rows.append({
                "Project ID": f"{cid}-P{p}",
                "Project Code": f"{code}-{p:02d}",
                "Project Name": f"{name} Program {p}",
                "Client ID": cid,
            })
    return pd.DataFrame(rows)


def generate_queues_df() -> pd.DataFrame:
    return pd.DataFrame([
        {"Queue ID": qid, "Queue Code": code, "Queue Name": name} for qid, code, name in QUEUES
    ])


def generate_capacity_and_assignments(year: int):
    """Monthly zone capacity and project seat assignments for a whole year.

    Capacity is flat per zone; occupancy drifts upward through the year so
    regional headroom shrinks toward December.
    """
    random.seed(42)
    zones = generate_zones_df()
    projects = generate_projects_df()["Project ID"].tolist()
    queue_ids = [q[0] for q in QUEUES]

    capacity_rows = []
    assignment_rows = []
    for _, zone in zones.iterrows():
        capacity = random.choice([30, 40, 50, 60])
        base_fill = random.uniform(0.55, 0.9)
        project_id = random.choice(projects)
        queue_id = random.choice(queue_ids)
        second_project = random.choice(projects)

        for idx, ym in enumerate(_year_months(year)):
            capacity_rows.append({"Zone ID": zone["Zone ID"], "Year Month": ym, "Capacity": capacity})
            fill = min(1.0, base_fill + idx * 0.015)
            seats = round(capacity * fill)
            first = round(seats * 0.6)
            assignment_rows.append({
                "Zone ID": zone["Zone ID"], "Project ID": project_id, "Queue ID": queue_id,
                "Year Month": ym, "Seats": first,
            })
            if seats - first > 0:
                assignment_rows.append({
                    "Zone ID": zone["Zone ID"], "Project ID": second_project, "Queue ID": queue_id,
                    "Year Month": ym, "Seats": seats - first,
                })

    return pd.DataFrame(capacity_rows), pd.DataFrame(assignment_rows)


def generate_closure_plans_df(year: int) -> pd.DataFrame:
    return pd.DataFrame([
        {"Closure ID": "cp_MNLF4", "Floor ID": "S1-F4", "Closure Date": date(year, 3, 15), "Status": "PLANNED"},
        {"Closure ID": "cp_CEBF3", "Floor ID": "S2-F3", "Closure Date": date(year, 8, 1), "Status": "PLANNED"},
        {"Closure ID": "cp_LONF3", "Floor ID": "S5-F3", "Closure Date": date(year, 11, 30), "Status": "PLANNED"},
    ])


def generate_sample_frames(year: Optional[int] = None) -> Dict[str, pd.DataFrame]:
    """All sheets needed by data.loader.build_repository."""
    year = year or date.today().year
    capacity_df, assignments_df = generate_capacity_and_assignments(year)
    return {
        "regions": generate_regions_df(),
        "sites": generate_sites_df(),
        "floors": generate_floors_df(),
        "zones": generate_zones_df(),
        "zone_capacity": capacity_df,
        "clients": generate_clients_df(),
        "projects": generate_projects_df(),
        "queues": generate_queues_df(),
        "project_assignments": assignments_df,
        "closure_plans": generate_closure_plans_df(year),
    }


def generate_sample_excel(path: str, year: Optional[int] = None):
    """Write a single multi-tab Excel workbook with every sheet."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for key, df in generate_sample_frames(year).items():
            df.to_excel(writer, sheet_name=key.replace("_", " ").title(), index=False)

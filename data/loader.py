"""File upload parsing — CSV/XLSX sheets into a portfolio snapshot."""

import logging
import os
from typing import Dict, List

import pandas as pd

from config.defaults import SITE_STATUS_ACTIVE, CLOSURE_STATUS_PLANNED
from models.building import Region, Site, Floor, Zone
from models.closure import ClosurePlan
from models.organization import Client, Project, Queue, ProjectAssignment
from data.repository import InMemoryCapacityRepository
from engine.months import year_month_of, parse_year_month, format_year_month
from engine.occupancy import compute_seats_on_floor

logger = logging.getLogger(__name__)

SHEET_KEYS = [
    "regions", "sites", "floors", "zones", "zone_capacity",
    "clients", "projects", "queues", "project_assignments", "closure_plans",
]
OPTIONAL_SHEETS = {"closure_plans"}

# Expected sheet names for multi-tab Excel (case-insensitive matching)
SHEET_ALIASES = {
    "regions": ["regions", "region"],
    "sites": ["sites", "site", "site master"],
    "floors": ["floors", "floor"],
    "zones": ["zones", "zone"],
    "zone_capacity": ["zone capacity", "zone_capacity", "capacity", "monthly capacity"],
    "clients": ["clients", "client"],
    "projects": ["projects", "project"],
    "queues": ["queues", "queue", "business units", "business unit"],
    "project_assignments": ["project assignments", "project_assignments", "assignments", "occupancy"],
    "closure_plans": ["closure plans", "closure_plans", "closures"],
}


def _text(value) -> str:
    return str(value).strip()


def _optional_date(value):
    if value is None or pd.isna(value) or _text(value) == "":
        return None
    return pd.to_datetime(value).date()


def _year_month(value) -> str:
    """Normalize a Year Month cell; Excel may hand back a timestamp."""
    if hasattr(value, "month"):
        return format_year_month(value.year, value.month)
    text = _text(value)[:7]
    parse_year_month(text)
    return text


def parse_regions(df: pd.DataFrame) -> Dict[str, Region]:
    regions = {}
    for _, row in df.iterrows():
        region = Region(
            region_id=_text(row["Region ID"]),
            code=_text(row["Region Code"]),
            name=_text(row["Region Name"]),
        )
        regions[region.region_id] = region
    return regions


def parse_sites(df: pd.DataFrame, regions: Dict[str, Region]) -> Dict[str, Site]:
    sites = {}
    for _, row in df.iterrows():
        region_id = _text(row["Region ID"])
        if region_id not in regions:
            logger.warning("Site %s skipped: unknown region %s", row["Site ID"], region_id)
            continue
        status = SITE_STATUS_ACTIVE
        if "Status" in df.columns and pd.notna(row.get("Status")):
            status = _text(row["Status"]).upper()
        site = Site(
            site_id=_text(row["Site ID"]),
            code=_text(row["Site Code"]),
            name=_text(row["Site Name"]),
            region=regions[region_id],
            status=status,
            opening_date=_optional_date(row.get("Opening Date")),
            closing_date=_optional_date(row.get("Closing Date")),
        )
        sites[site.site_id] = site
    return sites


def parse_floors(df: pd.DataFrame, sites: Dict[str, Site]) -> Dict[str, Floor]:
    floors = {}
    for _, row in df.iterrows():
        site_id = _text(row["Site ID"])
        if site_id not in sites:
            logger.warning("Floor %s skipped: unknown site %s", row["Floor ID"], site_id)
            continue
        floor = Floor(
            floor_id=_text(row["Floor ID"]),
            code=_text(row["Floor Code"]),
            name=_text(row["Floor Name"]),
            site_id=site_id,
        )
        sites[site_id].floors.append(floor)
        floors[floor.floor_id] = floor
    return floors


def parse_zones(df: pd.DataFrame, floors: Dict[str, Floor]) -> Dict[str, Zone]:
    zones = {}
    for _, row in df.iterrows():
        floor_id = _text(row["Floor ID"])
        if floor_id not in floors:
            logger.warning("Zone %s skipped: unknown floor %s", row["Zone ID"], floor_id)
            continue
        zone = Zone(
            zone_id=_text(row["Zone ID"]),
            code=_text(row["Zone Code"]),
            name=_text(row["Zone Name"]),
            floor_id=floor_id,
        )
        floors[floor_id].zones.append(zone)
        zones[zone.zone_id] = zone
    return zones


def parse_zone_capacity(df: pd.DataFrame, zones: Dict[str, Zone]):
    """Attach monthly capacities; a later row for the same (zone, month) wins."""
    for _, row in df.iterrows():
        zone_id = _text(row["Zone ID"])
        if zone_id not in zones:
            logger.warning("Capacity row skipped: unknown zone %s", zone_id)
            continue
        zones[zone_id].capacities[_year_month(row["Year Month"])] = max(0, int(row["Capacity"]))


def parse_clients(df: pd.DataFrame) -> Dict[str, Client]:
    return {
        _text(row["Client ID"]): Client(
            client_id=_text(row["Client ID"]),
            code=_text(row["Client Code"]),
            name=_text(row["Client Name"]),
        )
        for _, row in df.iterrows()
    }


def parse_projects(df: pd.DataFrame, clients: Dict[str, Client]) -> Dict[str, Project]:
    projects = {}
    for _, row in df.iterrows():
        client_id = _text(row["Client ID"])
        if client_id not in clients:
            logger.warning("Project %s skipped: unknown client %s", row["Project ID"], client_id)
            continue
        project = Project(
            project_id=_text(row["Project ID"]),
            code=_text(row["Project Code"]),
            name=_text(row["Project Name"]),
            client=clients[client_id],
        )
        projects[project.project_id] = project
    return projects


def parse_queues(df: pd.DataFrame) -> Dict[str, Queue]:
    return {
        _text(row["Queue ID"]): Queue(
            queue_id=_text(row["Queue ID"]),
            code=_text(row["Queue Code"]),
            name=_text(row["Queue Name"]),
        )
        for _, row in df.iterrows()
    }


def parse_assignments(
    df: pd.DataFrame,
    zones: Dict[str, Zone],
    projects: Dict[str, Project],
    queues: Dict[str, Queue],
) -> int:
    """Attach assignments to zones; rows with a dangling reference are dropped."""
    attached = 0
    for _, row in df.iterrows():
        zone_id = _text(row["Zone ID"])
        project_id = _text(row["Project ID"])
        queue_id = _text(row["Queue ID"])
        if zone_id not in zones or project_id not in projects or queue_id not in queues:
            logger.warning(
                "Assignment skipped: zone=%s project=%s queue=%s not all found",
                zone_id, project_id, queue_id,
            )
            continue
        zones[zone_id].assignments.append(ProjectAssignment(
            zone_id=zone_id,
            project=projects[project_id],
            queue=queues[queue_id],
            year_month=_year_month(row["Year Month"]),
            seats=max(0, int(row["Seats"])),
        ))
        attached += 1
    return attached


def parse_closure_plans(df: pd.DataFrame, floors: Dict[str, Floor], sites: Dict[str, Site]) -> List[ClosurePlan]:
    plans = []
    for _, row in df.iterrows():
        floor_id = _text(row["Floor ID"])
        floor = floors.get(floor_id)
        if floor is None:
            logger.warning("Closure plan skipped: unknown floor %s", floor_id)
            continue
        closure_date = _optional_date(row["Closure Date"])
        year_month = year_month_of(closure_date)

        plan_id = None
        if "Closure ID" in df.columns and pd.notna(row.get("Closure ID")):
            plan_id = _text(row["Closure ID"])
        if not plan_id:
            plan_id = f"cp_{sites[floor.site_id].code}{floor.code}"

        seats = None
        if "Seats Affected" in df.columns and pd.notna(row.get("Seats Affected")):
            seats = int(row["Seats Affected"])
        if not seats:
            seats = compute_seats_on_floor(floor, year_month)

        status = CLOSURE_STATUS_PLANNED
        if "Status" in df.columns and pd.notna(row.get("Status")):
            status = _text(row["Status"]).upper()

        plan = ClosurePlan(
            plan_id=plan_id,
            floor_id=floor_id,
            closure_date=closure_date,
            year_month=year_month,
            seats_affected=seats,
            status=status,
        )
        floor.closure_plans.append(plan)
        plans.append(plan)
    return plans


def build_repository(frames: Dict[str, pd.DataFrame]) -> InMemoryCapacityRepository:
    """Wire parsed sheets into the site -> floor -> zone graph and wrap it in a repository."""
    regions = parse_regions(frames["regions"])
    sites = parse_sites(frames["sites"], regions)
    floors = parse_floors(frames["floors"], sites)
    zones = parse_zones(frames["zones"], floors)
    parse_zone_capacity(frames["zone_capacity"], zones)

    clients = parse_clients(frames["clients"])
    projects = parse_projects(frames["projects"], clients)
    queues = parse_queues(frames["queues"])
    parse_assignments(frames["project_assignments"], zones, projects, queues)

    closures = frames.get("closure_plans")
    if closures is not None and not closures.empty:
        parse_closure_plans(closures, floors, sites)

    return InMemoryCapacityRepository(list(regions.values()), list(sites.values()))


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


def _match_sheet(sheet_names: List[str], category: str):
    """Find a sheet name matching the given category, or None when absent."""
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    return None


def load_multi_sheet_excel(uploaded_file) -> Dict[str, pd.DataFrame]:
    """Load a single Excel workbook with one tab per entity.

    Sheet names are matched case-insensitively against SHEET_ALIASES.
    The closure plans tab is optional; every other tab is required.
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    frames = {}
    for key in SHEET_KEYS:
        sheet = _match_sheet(sheet_names, key)
        if sheet is None:
            if key in OPTIONAL_SHEETS:
                continue
            raise ValueError(
                f"Could not find a sheet for '{key}'. "
                f"Expected one of: {SHEET_ALIASES[key]}. "
                f"Found sheets: {sheet_names}"
            )
        frames[key] = pd.read_excel(xl, sheet_name=sheet)
    return frames


def load_csv_folder(path: str) -> Dict[str, pd.DataFrame]:
    """Load <sheet key>.csv files from a local folder."""
    frames = {}
    for key in SHEET_KEYS:
        file_path = os.path.join(path, f"{key}.csv")
        if not os.path.exists(file_path):
            if key in OPTIONAL_SHEETS:
                continue
            raise ValueError(f"Missing file: {file_path}")
        frames[key] = pd.read_csv(file_path, dtype={"Year Month": str})
    return frames

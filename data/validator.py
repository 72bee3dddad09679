"""Schema validation for uploaded portfolio sheets."""

import re
from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from config.defaults import SITE_STATUSES, CLOSURE_STATUSES

YEAR_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def merge(self, other: "ValidationResult"):
        self.is_valid = self.is_valid and other.is_valid
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


REQUIRED_COLUMNS = {
    "regions": ["Region ID", "Region Code", "Region Name"],
    "sites": ["Site ID", "Site Code", "Site Name", "Region ID"],
    "floors": ["Floor ID", "Floor Code", "Floor Name", "Site ID"],
    "zones": ["Zone ID", "Zone Code", "Zone Name", "Floor ID"],
    "zone_capacity": ["Zone ID", "Year Month", "Capacity"],
    "clients": ["Client ID", "Client Code", "Client Name"],
    "projects": ["Project ID", "Project Code", "Project Name", "Client ID"],
    "queues": ["Queue ID", "Queue Code", "Queue Name"],
    "project_assignments": ["Zone ID", "Project ID", "Queue ID", "Year Month", "Seats"],
    "closure_plans": ["Floor ID", "Closure Date"],
}

SHEET_LABELS = {
    "regions": "Regions",
    "sites": "Sites",
    "floors": "Floors",
    "zones": "Zones",
    "zone_capacity": "Zone Capacity",
    "clients": "Clients",
    "projects": "Projects",
    "queues": "Queues",
    "project_assignments": "Project Assignments",
    "closure_plans": "Closure Plans",
}

ID_COLUMNS = {
    "regions": "Region ID",
    "sites": "Site ID",
    "floors": "Floor ID",
    "zones": "Zone ID",
    "clients": "Client ID",
    "projects": "Project ID",
    "queues": "Queue ID",
}

# (sheet, column) -> (referenced sheet, referenced id column)
REFERENCES = {
    ("sites", "Region ID"): ("regions", "Region ID"),
    ("floors", "Site ID"): ("sites", "Site ID"),
    ("zones", "Floor ID"): ("floors", "Floor ID"),
    ("zone_capacity", "Zone ID"): ("zones", "Zone ID"),
    ("projects", "Client ID"): ("clients", "Client ID"),
    ("project_assignments", "Zone ID"): ("zones", "Zone ID"),
    ("project_assignments", "Project ID"): ("projects", "Project ID"),
    ("project_assignments", "Queue ID"): ("queues", "Queue ID"),
    ("closure_plans", "Floor ID"): ("floors", "Floor ID"),
}


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str, allow_empty: bool = False) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty and not allow_empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def _check_year_months(df: pd.DataFrame, file_label: str) -> ValidationResult:
    result = ValidationResult()
    values = df["Year Month"].astype(str).str.strip().str[:7]
    bad = values[~values.str.match(YEAR_MONTH_PATTERN)]
    if not bad.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: Invalid Year Month values (expected YYYY-MM): {bad.unique().tolist()[:5]}")
    return result


def _check_non_negative(df: pd.DataFrame, column: str, file_label: str) -> ValidationResult:
    result = ValidationResult()
    values = pd.to_numeric(df[column], errors="coerce")
    if values.isna().any():
        result.is_valid = False
        result.errors.append(f"{file_label}: {column} must be a whole number.")
    elif (values < 0).any():
        result.is_valid = False
        result.errors.append(f"{file_label}: {column} cannot be negative.")
    return result


def _check_statuses(df: pd.DataFrame, allowed: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    if "Status" not in df.columns:
        return result
    values = df["Status"].dropna().astype(str).str.strip().str.upper()
    unknown = sorted(set(values) - set(allowed))
    if unknown:
        result.is_valid = False
        result.errors.append(f"{file_label}: Unknown Status values {unknown}. Allowed: {', '.join(allowed)}")
    return result


def validate_sheet(key: str, df: pd.DataFrame) -> ValidationResult:
    label = SHEET_LABELS[key]
    result = _check_required_columns(df, REQUIRED_COLUMNS[key], label, allow_empty=key == "closure_plans")
    if not result.is_valid:
        return result

    id_column = ID_COLUMNS.get(key)
    if id_column:
        dupes = df.duplicated(subset=[id_column], keep=False)
        if dupes.any():
            result.is_valid = False
            result.errors.append(f"{label}: Duplicate {id_column} values: {df[dupes][id_column].unique().tolist()}")

    if key == "sites":
        result.merge(_check_statuses(df, SITE_STATUSES, label))

    if key == "zone_capacity":
        result.merge(_check_year_months(df, label))
        result.merge(_check_non_negative(df, "Capacity", label))
        dupes = df.duplicated(subset=["Zone ID", "Year Month"], keep=False)
        if dupes.any():
            result.warnings.append(f"{label}: Multiple capacity rows for the same zone and month; the last one is used.")

    if key == "project_assignments":
        result.merge(_check_year_months(df, label))
        result.merge(_check_non_negative(df, "Seats", label))

    if key == "closure_plans" and not df.empty:
        dates = pd.to_datetime(df["Closure Date"], errors="coerce")
        if dates.isna().any():
            result.is_valid = False
            result.errors.append(f"{label}: Closure Date must be a valid date.")
        result.merge(_check_statuses(df, CLOSURE_STATUSES, label))

    return result


def validate_references(frames: Dict[str, pd.DataFrame]) -> ValidationResult:
    """Warn about rows pointing at IDs that do not exist; those rows are dropped on load."""
    result = ValidationResult()
    for (sheet, column), (target, target_column) in REFERENCES.items():
        if sheet not in frames or target not in frames:
            continue
        known = set(frames[target][target_column].astype(str).str.strip())
        values = set(frames[sheet][column].astype(str).str.strip())
        missing = sorted(values - known)
        if missing:
            result.warnings.append(
                f"{SHEET_LABELS[sheet]}: {len(missing)} unknown {column} value(s) "
                f"({', '.join(missing[:5])}). These rows will be ignored."
            )
    return result


def validate_closure_ids(frames: Dict[str, pd.DataFrame]) -> ValidationResult:
    """Closure plan ids, explicit or generated as cp_<site code><floor code>, must be unique."""
    result = ValidationResult()
    closures = frames.get("closure_plans")
    if closures is None or closures.empty:
        return result

    sites, floors = frames["sites"], frames["floors"]
    site_codes = dict(zip(sites["Site ID"].astype(str).str.strip(), sites["Site Code"].astype(str).str.strip()))
    generated = {
        floor_id: f"cp_{site_codes.get(site_id, '')}{code}"
        for floor_id, site_id, code in zip(
            floors["Floor ID"].astype(str).str.strip(),
            floors["Site ID"].astype(str).str.strip(),
            floors["Floor Code"].astype(str).str.strip(),
        )
    }

    ids = []
    for _, row in closures.iterrows():
        explicit = row.get("Closure ID")
        if explicit is not None and pd.notna(explicit) and str(explicit).strip():
            ids.append(str(explicit).strip())
        else:
            floor_id = str(row["Floor ID"]).strip()
            if floor_id in generated:
                ids.append(generated[floor_id])

    plan_ids = pd.Series(ids, dtype=str)
    dupes = sorted(plan_ids[plan_ids.duplicated()].unique())
    if dupes:
        result.is_valid = False
        result.errors.append(
            f"{SHEET_LABELS['closure_plans']}: Duplicate closure plan ids {dupes}. "
            "Give each closure a distinct Closure ID."
        )
    return result


def validate_portfolio(frames: Dict[str, pd.DataFrame]) -> ValidationResult:
    result = ValidationResult()
    for key in REQUIRED_COLUMNS:
        if key not in frames:
            if key != "closure_plans":
                result.is_valid = False
                result.errors.append(f"{SHEET_LABELS[key]}: Sheet is missing.")
            continue
        result.merge(validate_sheet(key, frames[key]))

    if result.is_valid:
        result.merge(validate_closure_ids(frames))
        result.merge(validate_references(frames))
    return result

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ZoneStatus:
    zone_id: str
    zone_code: str
    zone_name: str
    capacity: int
    occupied: int
    available: int
    utilization_percent: float
    risk_status: str
    is_closing: bool = False
    closure_date: Optional[str] = None


@dataclass
class FloorStatus:
    floor_id: str
    floor_code: str
    floor_name: str
    total_capacity: int
    total_occupied: int
    total_available: int
    utilization_percent: float
    risk_status: str
    is_closing: bool = False
    zones: List[ZoneStatus] = field(default_factory=list)


@dataclass
class SiteStatus:
    site_id: str
    site_code: str
    site_name: str
    region_code: str
    region_name: str
    status: str
    total_capacity: int
    total_occupied: int
    total_available: int
    utilization_percent: float
    risk_status: str
    floors: List[FloorStatus] = field(default_factory=list)


@dataclass
class ClosureSummary:
    id: str
    floor_id: str
    site_name: str
    floor_name: str
    zone_names: str
    closure_date: str
    year_month: str
    seats_affected: int
    status: str


@dataclass
class PortfolioDashboard:
    year_month: str
    year: int
    month: int
    month_name: str
    total_capacity: int
    total_occupied: int
    total_available: int
    sites: List[SiteStatus] = field(default_factory=list)
    closures_this_month: List[ClosureSummary] = field(default_factory=list)

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ZoneAvailability:
    zone_id: str
    zone_name: str
    capacity: int
    occupied: int
    available: int


@dataclass
class FloorBreakdown:
    floor_id: str
    floor_name: str
    total_capacity: int
    total_occupied: int
    total_available: int
    zones: List[ZoneAvailability] = field(default_factory=list)  # only zones with available > 0


@dataclass
class SiteCapacity:
    """Capacity of one candidate destination site for a single month."""
    site_id: str
    site_name: str
    site_code: str
    region_id: str
    region_code: str
    region_name: str
    total_capacity: int
    total_occupied: int
    available_capacity: int       # max(0, capacity - occupied)
    current_utilization: float    # percent, one decimal
    opening_date: Optional[str] = None
    floor_breakdown: List[FloorBreakdown] = field(default_factory=list)

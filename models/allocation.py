from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.capacity import FloorBreakdown
from models.occupancy import BusinessUnitSummary, OccupancyItem
from models.recommendation import DateRecommendation


@dataclass
class SiteAllocation:
    """Running allocation state for one destination site during a placement pass."""
    seats: int = 0
    project_codes: List[str] = field(default_factory=list)
    business_units: List[str] = field(default_factory=list)


@dataclass
class UnseatedProject:
    project_code: str
    seats: int
    business_unit: str


@dataclass
class PlacementResult:
    allocation_by_site: Dict[str, SiteAllocation]
    allocated_projects: List[str]
    unseated_projects: List[UnseatedProject]
    total_allocated_seats: int
    total_unseated_seats: int
    whole_units: List[str] = field(default_factory=list)  # business units placed intact
    explanation_steps: List[str] = field(default_factory=list)


@dataclass
class AllocationRecommendation:
    target_site_id: str
    target_site_name: str
    target_site_code: str
    target_region: str
    available_capacity: int
    recommended_allocation: int
    allocated_projects: List[str]
    allocated_business_units: List[str]
    new_utilization: float
    risk_status: str
    is_editable: bool = True
    floor_breakdown: List[FloorBreakdown] = field(default_factory=list)


@dataclass
class ClosurePlanSummary:
    id: str
    site_name: str
    floor_name: str
    zone_names: str
    closure_date: str   # "YYYY-MM-DD"
    seats_affected: int
    region_code: str
    region_name: str


@dataclass
class AllocationReport:
    """Complete answer for one closure plan evaluation."""
    closure_plan: ClosurePlanSummary
    occupancy_breakdown: List[OccupancyItem]
    by_business_unit: List[BusinessUnitSummary]
    recommendations: List[AllocationRecommendation]
    allocated_projects: List[str]
    unseated_projects: List[UnseatedProject]
    total_allocated: int
    unseated_staff: int
    date_recommendation: Optional[DateRecommendation] = None
    explanation_steps: List[str] = field(default_factory=list)

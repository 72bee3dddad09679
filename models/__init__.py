from models.organization import Client, Project, Queue, ProjectAssignment
from models.closure import ClosurePlan
from models.building import Region, Site, Floor, Zone
from models.occupancy import (
    OccupancyItem, ProjectSeats, ClientSummary, BusinessUnitProject, BusinessUnitSummary,
)
from models.capacity import ZoneAvailability, FloorBreakdown, SiteCapacity
from models.recommendation import DateRecommendation
from models.allocation import (
    SiteAllocation, UnseatedProject, PlacementResult, AllocationRecommendation,
    ClosurePlanSummary, AllocationReport,
)
from models.dashboard import ZoneStatus, FloorStatus, SiteStatus, ClosureSummary, PortfolioDashboard

"""Portfolio-wide capacity view for one month."""

from typing import List, Optional

from config.defaults import MONTH_ABBREVIATIONS
from models.building import Floor, Site
from models.closure import ClosurePlan
from models.dashboard import (
    ZoneStatus, FloorStatus, SiteStatus, ClosureSummary, PortfolioDashboard,
)
from engine.months import parse_year_month
from engine.utilization import available_seats, raw_utilization, round_half_up, get_risk_status


def _floor_status(floor: Floor, year_month: str, rule_config: Optional[dict]) -> FloorStatus:
    closure = floor.closure_plan_by(year_month)
    is_closed = closure is not None

    zones = []
    floor_capacity = 0
    floor_occupied = 0
    for zone in floor.zones:
        capacity = zone.capacity_for(year_month) or 0
        occupied = 0 if is_closed else zone.occupied_for(year_month)
        utilization = raw_utilization(occupied, capacity)

        if not is_closed:
            floor_capacity += capacity
            floor_occupied += occupied

        zones.append(ZoneStatus(
            zone_id=zone.zone_id,
            zone_code=zone.code,
            zone_name=zone.name,
            capacity=capacity,
            occupied=occupied,
            available=0 if is_closed else available_seats(capacity, occupied),
            utilization_percent=round_half_up(utilization),
            risk_status=get_risk_status(utilization, is_closed, rule_config),
            is_closing=is_closed,
            closure_date=closure.closure_date.isoformat() if closure else None,
        ))

    utilization = raw_utilization(floor_occupied, floor_capacity)
    return FloorStatus(
        floor_id=floor.floor_id,
        floor_code=floor.code,
        floor_name=floor.name,
        total_capacity=floor_capacity,
        total_occupied=floor_occupied,
        total_available=available_seats(floor_capacity, floor_occupied),
        utilization_percent=round_half_up(utilization),
        risk_status=get_risk_status(utilization, is_closed, rule_config),
        is_closing=is_closed,
        zones=zones,
    )


def compute_site_status(site: Site, year_month: str, rule_config: Optional[dict] = None) -> SiteStatus:
    floors = [_floor_status(f, year_month, rule_config) for f in site.floors]
    capacity = sum(f.total_capacity for f in floors)
    occupied = sum(f.total_occupied for f in floors)
    utilization = raw_utilization(occupied, capacity)
    return SiteStatus(
        site_id=site.site_id,
        site_code=site.code,
        site_name=site.name,
        region_code=site.region.code,
        region_name=site.region.name,
        status=site.status,
        total_capacity=capacity,
        total_occupied=occupied,
        total_available=available_seats(capacity, occupied),
        utilization_percent=round_half_up(utilization),
        risk_status=get_risk_status(utilization, rule_config=rule_config),
        floors=floors,
    )


def summarize_closure(plan: ClosurePlan) -> ClosureSummary:
    floor = plan.floor
    return ClosureSummary(
        id=plan.plan_id,
        floor_id=plan.floor_id,
        site_name=floor.site.name if floor and floor.site else "",
        floor_name=floor.name if floor else "",
        zone_names=", ".join(z.name for z in floor.zones) if floor else "",
        closure_date=plan.closure_date.isoformat(),
        year_month=plan.year_month,
        seats_affected=plan.seats_affected,
        status=plan.status,
    )


def build_dashboard(
    sites: List[Site],
    closures: List[ClosurePlan],
    year_month: str,
    rule_config: Optional[dict] = None,
) -> PortfolioDashboard:
    year, month = parse_year_month(year_month)
    site_statuses = [compute_site_status(s, year_month, rule_config) for s in sites]
    capacity = sum(s.total_capacity for s in site_statuses)
    occupied = sum(s.total_occupied for s in site_statuses)

    return PortfolioDashboard(
        year_month=year_month,
        year=year,
        month=month,
        month_name=MONTH_ABBREVIATIONS[month - 1],
        total_capacity=capacity,
        total_occupied=occupied,
        total_available=available_seats(capacity, occupied),
        sites=site_statuses,
        closures_this_month=[summarize_closure(c) for c in closures if c.year_month == year_month],
    )


def get_dashboard(repository, year_month: str, rule_config: Optional[dict] = None) -> PortfolioDashboard:
    return build_dashboard(
        repository.list_sites(),
        repository.list_closure_plans(year_month),
        year_month,
        rule_config,
    )

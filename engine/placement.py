"""Greedy placement of displaced business units into destination sites.

Business units are placed largest first. Each unit first tries to land
intact on the first site (in capacity-descending order) with room for all
of it. If no site can hold the whole unit, its projects are placed one by
one, largest first, with the same first-fit rule. A project is never split
across sites; one that fits nowhere is reported as unseated.
"""

import logging
from typing import Dict, Iterable, List, Optional

from models.allocation import (
    SiteAllocation, UnseatedProject, PlacementResult, AllocationRecommendation,
)
from models.capacity import SiteCapacity
from models.occupancy import BusinessUnitSummary
from engine.explainer import (
    explain_whole_unit, explain_split_unit, explain_project, explain_unseated,
    explain_placement_summary,
)
from engine.utilization import raw_utilization, round_half_up, get_risk_status

logger = logging.getLogger(__name__)


def _first_fit(
    sites: List[SiteCapacity],
    remaining: Dict[str, int],
    seats: int,
) -> Optional[SiteCapacity]:
    for site in sites:
        if remaining[site.site_id] >= seats:
            return site
    return None


def place_business_units(
    site_capacities: List[SiteCapacity],
    business_units: Iterable[BusinessUnitSummary],
) -> PlacementResult:
    """Run one placement pass. All mutable state is local to this call.

    site_capacities must already be ordered by available capacity, largest first.
    """
    remaining: Dict[str, int] = {s.site_id: s.available_capacity for s in site_capacities}
    allocation_by_site: Dict[str, SiteAllocation] = {
        s.site_id: SiteAllocation() for s in site_capacities
    }
    allocated_projects: List[str] = []
    unseated: List[UnseatedProject] = []
    whole_units: List[str] = []
    body: List[str] = []

    sorted_units = sorted(business_units, key=lambda bu: bu.total_seats, reverse=True)

    for bu in sorted_units:
        site = _first_fit(site_capacities, remaining, bu.total_seats)
        if site is not None:
            remaining[site.site_id] -= bu.total_seats
            alloc = allocation_by_site[site.site_id]
            alloc.seats += bu.total_seats
            alloc.business_units.append(bu.business_unit)
            for project in bu.projects:
                alloc.project_codes.append(project.project_code)
                allocated_projects.append(project.project_code)
            whole_units.append(bu.business_unit)
            body.append(explain_whole_unit(
                bu.business_unit, bu.total_seats, site.site_name, remaining[site.site_id],
            ))
            logger.debug("Placed %s (%d seats) intact on %s", bu.business_unit, bu.total_seats, site.site_id)
            continue

        # Fallback: per-project first fit
        body.append(explain_split_unit(bu.business_unit, bu.total_seats, len(bu.projects)))
        for project in sorted(bu.projects, key=lambda p: p.seats, reverse=True):
            site = _first_fit(site_capacities, remaining, project.seats)
            if site is None:
                unseated.append(UnseatedProject(
                    project_code=project.project_code,
                    seats=project.seats,
                    business_unit=bu.business_unit,
                ))
                body.append(explain_unseated(project.project_code, project.seats))
                logger.debug("Project %s (%d seats) unseated", project.project_code, project.seats)
                continue

            remaining[site.site_id] -= project.seats
            alloc = allocation_by_site[site.site_id]
            alloc.seats += project.seats
            alloc.project_codes.append(project.project_code)
            if bu.business_unit not in alloc.business_units:
                alloc.business_units.append(bu.business_unit)
            allocated_projects.append(project.project_code)
            body.append(explain_project(
                project.project_code, project.seats, site.site_name, remaining[site.site_id],
            ))

    total_allocated = sum(a.seats for a in allocation_by_site.values())
    total_unseated = sum(p.seats for p in unseated)

    summary = explain_placement_summary(
        seats_to_place=sum(bu.total_seats for bu in sorted_units),
        total_allocated=total_allocated,
        total_unseated=total_unseated,
        site_count=len(site_capacities),
    )

    return PlacementResult(
        allocation_by_site=allocation_by_site,
        allocated_projects=allocated_projects,
        unseated_projects=unseated,
        total_allocated_seats=total_allocated,
        total_unseated_seats=total_unseated,
        whole_units=whole_units,
        explanation_steps=[summary[0]] + body + [summary[1]],
    )


def build_recommendations(
    site_capacities: List[SiteCapacity],
    placement: PlacementResult,
    rule_config: Optional[dict] = None,
) -> List[AllocationRecommendation]:
    """One recommendation per candidate site that had any room, in ranking order."""
    recommendations = []
    for site in site_capacities:
        if site.available_capacity <= 0:
            continue
        alloc = placement.allocation_by_site.get(site.site_id) or SiteAllocation()
        utilization = raw_utilization(site.total_occupied + alloc.seats, site.total_capacity)

        recommendations.append(AllocationRecommendation(
            target_site_id=site.site_id,
            target_site_name=site.site_name,
            target_site_code=site.site_code,
            target_region=site.region_name,
            available_capacity=site.available_capacity,
            recommended_allocation=alloc.seats,
            allocated_projects=list(alloc.project_codes),
            allocated_business_units=list(alloc.business_units),
            new_utilization=round_half_up(utilization),
            risk_status=get_risk_status(utilization, rule_config=rule_config),
            floor_breakdown=site.floor_breakdown,
        ))
    return recommendations

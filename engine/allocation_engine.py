"""Closure allocation pipeline — the core business engine.

occupancy of the closing floor + ranked destination sites -> placement
-> per-site recommendations + stable closure month advice.
"""

import logging
from typing import Optional

from models.allocation import AllocationReport, ClosurePlanSummary
from models.closure import ClosurePlan
from engine.errors import InvalidInputError, NotFoundError
from engine.occupancy import aggregate_occupancy
from engine.placement import place_business_units, build_recommendations
from engine.site_capacity import compute_site_capacities
from engine.stable_month import find_stable_closure_month

logger = logging.getLogger(__name__)


def summarize_closure_plan(plan: ClosurePlan) -> ClosurePlanSummary:
    floor = plan.floor
    site = floor.site
    return ClosurePlanSummary(
        id=plan.plan_id,
        site_name=site.name,
        floor_name=floor.name,
        zone_names=", ".join(z.name for z in floor.zones),
        closure_date=plan.closure_date.isoformat(),
        seats_affected=plan.seats_affected,
        region_code=site.region.code,
        region_name=site.region.name,
    )


def get_allocation_recommendation(
    repository,
    closure_plan_id: str,
    rule_config: Optional[dict] = None,
    include_date_recommendation: bool = True,
) -> AllocationReport:
    """Evaluate one closure plan against the current capacity snapshot.

    Raises InvalidInputError for a missing id and NotFoundError when the plan
    (or its floor/site) cannot be resolved. Repository failures propagate
    unchanged. Insufficient capacity is reported as unseated projects.
    """
    if not closure_plan_id:
        raise InvalidInputError("closurePlanId required")

    plan = repository.get_closure_plan(closure_plan_id)
    if plan is None:
        raise NotFoundError("Closure plan", closure_plan_id)
    if plan.floor is None:
        raise NotFoundError("Floor", plan.floor_id)
    if plan.floor.site is None:
        raise NotFoundError("Site", plan.floor.site_id)

    floor = plan.floor
    site = floor.site
    region_id = site.region_id

    occupancy, by_business_unit = aggregate_occupancy(floor, plan.year_month)

    # HARD CONSTRAINT: destinations come from the source region only
    site_capacities = compute_site_capacities(repository, region_id, site.site_id, plan.year_month)

    placement = place_business_units(site_capacities, by_business_unit.values())
    recommendations = build_recommendations(site_capacities, placement, rule_config)

    date_recommendation = None
    if include_date_recommendation:
        date_recommendation = find_stable_closure_month(
            repository, region_id, site.site_id, plan.seats_affected, plan.year_month,
        )

    logger.info(
        "Closure plan %s (%s): %d seats affected, %d allocated, %d unseated",
        plan.plan_id, plan.year_month, plan.seats_affected,
        placement.total_allocated_seats, placement.total_unseated_seats,
    )

    return AllocationReport(
        closure_plan=summarize_closure_plan(plan),
        occupancy_breakdown=occupancy,
        by_business_unit=list(by_business_unit.values()),
        recommendations=recommendations,
        allocated_projects=placement.allocated_projects,
        unseated_projects=placement.unseated_projects,
        total_allocated=placement.total_allocated_seats,
        unseated_staff=placement.total_unseated_seats,
        date_recommendation=date_recommendation,
        explanation_steps=placement.explanation_steps,
    )

"""Occupancy aggregation — who sits on the closing floor, grouped BU -> client -> project."""

import logging
from typing import Dict, List, Tuple

from models.building import Floor
from models.occupancy import (
    OccupancyItem, ProjectSeats, ClientSummary, BusinessUnitProject, BusinessUnitSummary,
)

logger = logging.getLogger(__name__)


def build_occupancy_breakdown(floor: Floor, year_month: str) -> List[OccupancyItem]:
    """Flat list of seated assignments on every zone of the floor, largest first."""
    items = []
    for zone in floor.zones:
        for assignment in zone.assignments_for(year_month):
            if assignment.seats <= 0:
                continue
            items.append(OccupancyItem(
                project_code=assignment.project.code,
                client_code=assignment.project.client.code,
                business_unit=assignment.queue.name,
                business_unit_code=assignment.queue.code,
                seats=assignment.seats,
            ))

    # Stable sort: equal seat counts keep zone/assignment order
    items.sort(key=lambda i: i.seats, reverse=True)
    return items


def group_by_business_unit(items: List[OccupancyItem]) -> Dict[str, BusinessUnitSummary]:
    """Group a flat breakdown into business unit -> client -> project.

    A project listed on several zones under the same business unit is merged
    into a single entry so it is always placed as one indivisible unit.
    """
    grouped: Dict[str, BusinessUnitSummary] = {}

    for item in items:
        bu = grouped.get(item.business_unit)
        if bu is None:
            bu = BusinessUnitSummary(
                business_unit=item.business_unit,
                business_unit_code=item.business_unit_code,
            )
            grouped[item.business_unit] = bu
        bu.total_seats += item.seats

        client = next((c for c in bu.clients if c.client == item.client_code), None)
        if client is None:
            client = ClientSummary(client=item.client_code)
            bu.clients.append(client)
        client.total_seats += item.seats

        project = next((p for p in client.projects if p.project_code == item.project_code), None)
        if project is None:
            client.projects.append(ProjectSeats(item.project_code, item.seats))
        else:
            project.seats += item.seats

        flat = next((p for p in bu.projects if p.project_code == item.project_code), None)
        if flat is None:
            bu.projects.append(BusinessUnitProject(item.project_code, item.client_code, item.seats))
        else:
            flat.seats += item.seats

    for bu in grouped.values():
        bu.clients.sort(key=lambda c: c.total_seats, reverse=True)
        for client in bu.clients:
            client.projects.sort(key=lambda p: p.seats, reverse=True)

    return grouped


def aggregate_occupancy(
    floor: Floor,
    year_month: str,
) -> Tuple[List[OccupancyItem], Dict[str, BusinessUnitSummary]]:
    """Breakdown and grouped hierarchy for a closing floor in one month."""
    items = build_occupancy_breakdown(floor, year_month)
    grouped = group_by_business_unit(items)
    logger.debug(
        "Floor %s in %s: %d assignments across %d business units",
        floor.floor_id, year_month, len(items), len(grouped),
    )
    return items, grouped


def compute_seats_on_floor(floor: Floor, year_month: str) -> int:
    """Total seats assigned on a floor for a month (default seats affected by a closure)."""
    return sum(zone.occupied_for(year_month) for zone in floor.zones)

"""Destination site capacity for a month, excluding floors that are already closed."""

import logging
from typing import List

from models.building import Site
from models.capacity import ZoneAvailability, FloorBreakdown, SiteCapacity
from engine.utilization import available_seats, utilization_pct

logger = logging.getLogger(__name__)


def compute_site_capacity(site: Site, year_month: str) -> SiteCapacity:
    """Totals and floor/zone breakdown for one site in one month."""
    total_capacity = 0
    total_occupied = 0
    floor_breakdown: List[FloorBreakdown] = []

    for floor in site.floors:
        # A floor vacated by a PLANNED closure contributes nothing
        if floor.is_closed_by(year_month):
            continue

        floor_capacity = 0
        floor_occupied = 0
        zones: List[ZoneAvailability] = []

        for zone in floor.zones:
            capacity = zone.capacity_for(year_month) or 0
            occupied = zone.occupied_for(year_month)
            floor_capacity += capacity
            floor_occupied += occupied

            zone_available = available_seats(capacity, occupied)
            if zone_available > 0:
                zones.append(ZoneAvailability(
                    zone_id=zone.zone_id,
                    zone_name=zone.name,
                    capacity=capacity,
                    occupied=occupied,
                    available=zone_available,
                ))

        total_capacity += floor_capacity
        total_occupied += floor_occupied

        if zones:
            zones.sort(key=lambda z: z.available, reverse=True)
            floor_breakdown.append(FloorBreakdown(
                floor_id=floor.floor_id,
                floor_name=floor.name,
                total_capacity=floor_capacity,
                total_occupied=floor_occupied,
                total_available=available_seats(floor_capacity, floor_occupied),
                zones=zones,
            ))

    floor_breakdown.sort(key=lambda f: f.total_available, reverse=True)

    return SiteCapacity(
        site_id=site.site_id,
        site_name=site.name,
        site_code=site.code,
        region_id=site.region.region_id,
        region_code=site.region.code,
        region_name=site.region.name,
        total_capacity=total_capacity,
        total_occupied=total_occupied,
        available_capacity=available_seats(total_capacity, total_occupied),
        current_utilization=utilization_pct(total_occupied, total_capacity),
        opening_date=site.opening_date.isoformat() if site.opening_date else None,
        floor_breakdown=floor_breakdown,
    )


def rank_site_capacities(sites: List[Site], year_month: str) -> List[SiteCapacity]:
    """Capacities for the given sites, largest available first.

    Ties keep the order the sites were supplied in.
    """
    capacities = [compute_site_capacity(site, year_month) for site in sites]
    capacities.sort(key=lambda s: s.available_capacity, reverse=True)
    return capacities


def eligible_sites(sites: List[Site], region_id: str, exclude_site_id: str) -> List[Site]:
    return [
        s for s in sites
        if s.is_active and s.region_id == region_id and s.site_id != exclude_site_id
    ]


def compute_site_capacities(
    repository,
    region_id: str,
    exclude_site_id: str,
    year_month: str,
) -> List[SiteCapacity]:
    """Candidate destination sites for a closure, ordered by available capacity.

    An unknown region or source site yields an empty list, never an error.
    """
    sites = repository.list_active_sites_in_region(region_id, exclude_site_id, year_month)
    sites = eligible_sites(sites, region_id, exclude_site_id)
    capacities = rank_site_capacities(sites, year_month)
    logger.debug(
        "Region %s in %s: %d candidate sites, %d seats available",
        region_id, year_month, len(capacities),
        sum(c.available_capacity for c in capacities),
    )
    return capacities


def compute_region_available(sites: List[Site], year_month: str) -> int:
    """Scalar regional availability: sum of per-zone available seats on open floors."""
    total = 0
    for site in sites:
        for floor in site.floors:
            if floor.is_closed_by(year_month):
                continue
            for zone in floor.zones:
                capacity = zone.capacity_for(year_month) or 0
                total += available_seats(capacity, zone.occupied_for(year_month))
    return total


def get_region_capacity_for_month(
    repository,
    region_id: str,
    exclude_site_id: str,
    year_month: str,
) -> int:
    sites = repository.list_active_sites_in_region(region_id, exclude_site_id, year_month)
    total = compute_region_available(eligible_sites(sites, region_id, exclude_site_id), year_month)
    logger.debug("Region %s available in %s: %d seats", region_id, year_month, total)
    return total

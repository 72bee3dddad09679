"""Stable closure month recommender.

Looks from the requested closure month through December of the same year
for a month whose regional availability covers the displaced seats and
keeps covering them every month until year-end. The scan never rolls into
the next year.
"""

import logging
from typing import Callable, Dict, List, Optional

from models.recommendation import DateRecommendation
from engine.explainer import (
    reason_stable_to_year_end, reason_needs_reallocation, reason_later_month,
    reason_no_stable_month,
)
from engine.months import (
    parse_year_month, months_after_through_december, december_of, month_name,
)
from engine.site_capacity import get_region_capacity_for_month

logger = logging.getLogger(__name__)


def _stable_through(
    capacity_for: Callable[[str], int],
    seats_needed: int,
    from_year_month: str,
) -> Optional[str]:
    """Walk forward from the month after from_year_month.

    Returns None when every month through December holds, otherwise the
    last month that passed (from_year_month itself when the next one fails).
    """
    last_ok = from_year_month
    for ym in months_after_through_december(from_year_month):
        if capacity_for(ym) < seats_needed:
            return last_ok
        last_ok = ym
    return None


def recommend_closure_month(
    capacity_for: Callable[[str], int],
    seats_needed: int,
    start_year_month: str,
) -> DateRecommendation:
    """Pure recommender over a month -> regional available seats function."""
    _, start_month = parse_year_month(start_year_month)
    december = december_of(start_year_month)

    current = capacity_for(start_year_month)
    if current >= seats_needed:
        broken_after = _stable_through(capacity_for, seats_needed, start_year_month)
        if broken_after is None:
            return DateRecommendation(
                has_capacity=True,
                suggested_closure_month=None,
                suggested_month_name=None,
                capacity_available=current,
                stable_through=december,
                reason=reason_stable_to_year_end(),
            )
        _, last_month = parse_year_month(broken_after)
        return DateRecommendation(
            has_capacity=True,
            suggested_closure_month=None,
            suggested_month_name=None,
            capacity_available=current,
            stable_through=broken_after,
            reason=reason_needs_reallocation(last_month),
        )

    for ym in months_after_through_december(start_year_month):
        available = capacity_for(ym)
        if available < seats_needed:
            continue
        if _stable_through(capacity_for, seats_needed, ym) is not None:
            logger.debug("Candidate month %s has capacity but is not stable to December", ym)
            continue
        year, month = parse_year_month(ym)
        return DateRecommendation(
            has_capacity=False,
            suggested_closure_month=ym,
            suggested_month_name=f"{month_name(ym)} {year}",
            capacity_available=available,
            stable_through=december,
            reason=reason_later_month(start_month, month),
        )

    return DateRecommendation(
        has_capacity=False,
        suggested_closure_month=None,
        suggested_month_name=None,
        capacity_available=0,
        stable_through=None,
        reason=reason_no_stable_month(),
    )


def find_stable_closure_month(
    repository,
    region_id: str,
    source_site_id: str,
    seats_needed: int,
    start_year_month: str,
) -> DateRecommendation:
    """Recommend a closure month using regional capacity read from the repository.

    Each month is read at most once per call.
    """
    cache: Dict[str, int] = {}

    def capacity_for(year_month: str) -> int:
        if year_month not in cache:
            cache[year_month] = get_region_capacity_for_month(
                repository, region_id, source_site_id, year_month,
            )
        return cache[year_month]

    recommendation = recommend_closure_month(capacity_for, seats_needed, start_year_month)
    logger.debug(
        "Closure month advice for region %s from %s (%d seats): %s",
        region_id, start_year_month, seats_needed, recommendation.reason,
    )
    return recommendation


def region_capacity_timeline(
    repository,
    region_id: str,
    source_site_id: str,
    start_year_month: str,
) -> List[dict]:
    """Regional availability for each month from start_year_month through December."""
    months = [start_year_month] + months_after_through_december(start_year_month)
    return [
        {
            "year_month": ym,
            "available": get_region_capacity_for_month(repository, region_id, source_site_id, ym),
        }
        for ym in months
    ]

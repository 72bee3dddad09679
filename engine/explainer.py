"""Generates human-readable explanations for placements and closure-month advice."""

from typing import List

from config.defaults import MONTH_NAMES


def explain_whole_unit(business_unit: str, seats: int, site_name: str, remaining: int) -> str:
    return (
        f"{business_unit} ({seats} seats) placed intact on {site_name} "
        f"=> {remaining} seats left there"
    )


def explain_split_unit(business_unit: str, seats: int, project_count: int) -> str:
    return (
        f"{business_unit} ({seats} seats) does not fit on any single site "
        f"=> placing its {project_count} projects individually"
    )


def explain_project(project_code: str, seats: int, site_name: str, remaining: int) -> str:
    return f"  {project_code} ({seats} seats) -> {site_name} => {remaining} seats left there"


def explain_unseated(project_code: str, seats: int) -> str:
    return f"  {project_code} ({seats} seats) has no site with enough room => unseated"


def explain_placement_summary(
    seats_to_place: int,
    total_allocated: int,
    total_unseated: int,
    site_count: int,
) -> List[str]:
    """Opening and closing steps framing a placement run."""
    steps = [
        f"Step 1 - Demand: {seats_to_place} seats to relocate, "
        f"{site_count} candidate sites in region (largest available first)",
    ]
    if total_unseated == 0:
        steps.append(f"Result: all {total_allocated} seats placed")
    else:
        steps.append(
            f"Result: {total_allocated} seats placed, {total_unseated} seats unseated "
            f"- consider adding capacity or a later closure month"
        )
    return steps


def month_label(month: int) -> str:
    return MONTH_NAMES[month - 1]


def reason_stable_to_year_end() -> str:
    return "Capacity available and stable through year-end"


def reason_needs_reallocation(stable_through_month: int) -> str:
    return f"Capacity available but may need reallocation after {month_label(stable_through_month)}"


def reason_later_month(start_month: int, suggested_month: int) -> str:
    return (
        f"No capacity in {month_label(start_month)}. Recommend closing in "
        f"{month_label(suggested_month)} (stable through December)"
    )


def reason_no_stable_month() -> str:
    return (
        "No month with stable capacity through December found. "
        "Consider adding new capacity or phased closure."
    )

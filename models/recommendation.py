from dataclasses import dataclass
from typing import Optional


@dataclass
class DateRecommendation:
    """Advice on the earliest closure month whose capacity holds through December."""
    has_capacity: bool                     # start month itself has enough regional capacity
    suggested_closure_month: Optional[str]  # later "YYYY-MM" when the start month lacks capacity
    suggested_month_name: Optional[str]     # e.g. "March 2025"
    capacity_available: int
    stable_through: Optional[str]           # last month capacity holds, "YYYY-12" when stable to year-end
    reason: str

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Optional

from config.defaults import CLOSURE_STATUS_PLANNED

if TYPE_CHECKING:
    from models.building import Floor


@dataclass
class ClosurePlan:
    plan_id: str
    floor_id: str
    closure_date: date
    year_month: str          # derived from closure_date, "YYYY-MM"
    seats_affected: int
    status: str = CLOSURE_STATUS_PLANNED
    floor: Optional["Floor"] = field(default=None, repr=False, compare=False)

    @property
    def is_planned(self) -> bool:
        return self.status == CLOSURE_STATUS_PLANNED

    def closes_by(self, year_month: str) -> bool:
        """True when this plan has vacated its floor at or before year_month."""
        return self.is_planned and self.year_month <= year_month

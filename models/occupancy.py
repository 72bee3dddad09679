from dataclasses import dataclass, field
from typing import List


@dataclass
class OccupancyItem:
    """One seated project assignment on the closing floor."""
    project_code: str
    client_code: str
    business_unit: str
    business_unit_code: str
    seats: int


@dataclass
class ProjectSeats:
    project_code: str
    seats: int


@dataclass
class ClientSummary:
    client: str
    total_seats: int = 0
    projects: List[ProjectSeats] = field(default_factory=list)


@dataclass
class BusinessUnitProject:
    project_code: str
    client: str
    seats: int


@dataclass
class BusinessUnitSummary:
    business_unit: str
    business_unit_code: str
    total_seats: int = 0
    clients: List[ClientSummary] = field(default_factory=list)
    projects: List[BusinessUnitProject] = field(default_factory=list)  # flat union across clients

    @property
    def project_codes(self) -> List[str]:
        return [p.project_code for p in self.projects]

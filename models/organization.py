from dataclasses import dataclass


@dataclass
class Client:
    client_id: str
    code: str
    name: str


@dataclass
class Project:
    project_id: str
    code: str
    name: str
    client: Client


@dataclass
class Queue:
    """A business unit: the organizational grouping relocated together."""
    queue_id: str
    code: str
    name: str


@dataclass
class ProjectAssignment:
    zone_id: str
    project: Project
    queue: Queue
    year_month: str   # "YYYY-MM"
    seats: int

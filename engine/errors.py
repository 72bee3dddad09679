"""Exception taxonomy for the allocation engine.

Insufficient capacity is never an exception: it is reported as unseated
projects on the result.
"""


class AllocationError(Exception):
    """Base class for all engine failures."""


class InvalidInputError(AllocationError):
    """A required identifier is missing or malformed."""


class NotFoundError(AllocationError):
    """A referenced closure plan, floor, site or region does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class RepositoryError(AllocationError):
    """The capacity snapshot could not be read or is internally inconsistent."""

"""
Error types raised by the search and statistics services.

Routes translate these into HTTP responses; everything else propagates.
"""


class InvalidSearchError(ValueError):
    """Search or listing parameters are out of range."""


class NotFoundError(LookupError):
    """A requested entity does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")

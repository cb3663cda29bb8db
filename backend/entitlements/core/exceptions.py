class EntitlementError(Exception):
    """Base exception for the entitlement backend."""

    pass


class NotFoundError(EntitlementError):
    """Raised when a referenced tier or user does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class BadRequestError(EntitlementError):
    """Raised when an operation is refused because of the current data state."""

    pass


class ConflictError(EntitlementError):
    """Raised when a write loses a race against a concurrent write."""

    pass

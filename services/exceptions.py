"""Errors raised by the service layer."""


class PropertyNotFoundError(LookupError):
    """A write referenced a property that does not exist."""

    def __init__(self, property_id: int):
        super().__init__(f"Property with id {property_id} not found")
        self.property_id = property_id

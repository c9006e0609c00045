"""Domain errors translated to HTTP responses by the handlers in main.py."""


class VenueValidationError(ValueError):
    """Malformed request input (e.g. a non-numeric minStars filter)."""


class VenueNotFoundError(LookupError):
    """No venue document exists for the requested id."""

    def __init__(self, venue_id: str):
        super().__init__(f"Restaurant {venue_id} not found")
        self.venue_id = venue_id

# Schemas package
from .health import HealthResponse
from .venues import (
    Comment,
    CommentCreate,
    Contact,
    Rate,
    RateCreate,
    VenueQuery,
    VenueResponse,
    VenueWrite,
)

__all__ = [
    "Comment",
    "CommentCreate",
    "Contact",
    "HealthResponse",
    "Rate",
    "RateCreate",
    "VenueQuery",
    "VenueResponse",
    "VenueWrite",
]

"""Pydantic schemas for restaurant (venue) API."""
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field


class Contact(BaseModel):
    """Contact details; location is a [longitude, latitude] pair."""

    phone: Optional[str] = None
    email: Optional[str] = None
    location: Optional[Annotated[list[float], Field(min_length=2, max_length=2)]] = None


class Comment(BaseModel):
    """Stored comment."""

    user: Optional[str] = None
    text: Optional[str] = None
    date: Optional[datetime] = None


class Rate(BaseModel):
    """Stored rating event."""

    date: Optional[datetime] = None
    stars: Optional[float] = None


class VenueWrite(BaseModel):
    """Payload for creating or fully replacing a restaurant. Every field is optional."""

    name: Optional[str] = None
    contact: Optional[Contact] = None
    stars: Optional[float] = None
    categories: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    rates: list[Rate] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Document body as stored in MongoDB (without _id). Unset scalars are left out so a
        null location never reaches the 2dsphere index."""
        return self.model_dump(exclude_none=True)


class CommentCreate(BaseModel):
    """Payload for POST /restaurants/{id}/comments. Any client-supplied date is ignored."""

    user: str
    text: str


class RateCreate(BaseModel):
    """Payload for POST /restaurants/{id}/rates. Any client-supplied date is ignored."""

    stars: float


class VenueResponse(BaseModel):
    """Restaurant in API responses."""

    id: str
    name: Optional[str] = None
    contact: Optional[Contact] = None
    stars: Optional[float] = None
    categories: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    rates: list[Rate] = Field(default_factory=list)

    @classmethod
    def from_document(cls, doc: dict) -> "VenueResponse":
        """Build from a MongoDB document, exposing _id as a string id."""
        body = {k: v for k, v in doc.items() if k != "_id"}
        # Older documents may hold explicit nulls for the arrays.
        for key in ("categories", "comments", "rates"):
            if body.get(key) is None:
                body[key] = []
        return cls(id=str(doc["_id"]), **body)


class VenueQuery(BaseModel):
    """Optional search criteria for GET /restaurants; None means absent."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    minStars: Optional[str] = None
    category: Optional[str] = None
    longitude: Optional[str] = None
    latitude: Optional[str] = None

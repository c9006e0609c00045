"""Restaurant API routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pymongo.collection import Collection

from db import get_venue_collection
from repositories.venue_repository import (
    add_comment as repo_add_comment,
    add_rate as repo_add_rate,
    create_venue as repo_create_venue,
    delete_venue as repo_delete_venue,
    get_venue as repo_get_venue,
    list_venues as repo_list_venues,
    replace_venue as repo_replace_venue,
)
from schemas.venues import CommentCreate, RateCreate, VenueQuery, VenueResponse, VenueWrite
from utils.errors import VenueNotFoundError
from utils.venue_filters import build_venue_filter

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


def _found(doc: Optional[dict], venue_id: str) -> VenueResponse:
    """Response for doc, or VenueNotFoundError when the store had no such venue."""
    if doc is None:
        raise VenueNotFoundError(venue_id)
    return VenueResponse.from_document(doc)


def venue_query(
    name: Optional[str] = None,
    phone: Optional[str] = None,
    email: Optional[str] = None,
    min_stars: Optional[str] = Query(None, alias="minStars"),
    category: Optional[str] = None,
    longitude: Optional[str] = None,
    latitude: Optional[str] = None,
) -> VenueQuery:
    """Collect the list filters from the query string; parsing happens in build_venue_filter."""
    return VenueQuery(
        name=name,
        phone=phone,
        email=email,
        minStars=min_stars,
        category=category,
        longitude=longitude,
        latitude=latitude,
    )


@router.get("", response_model=list[VenueResponse])
def list_restaurants(
    query: VenueQuery = Depends(venue_query),
    collection: Collection = Depends(get_venue_collection),
) -> list[VenueResponse]:
    """List restaurants matching every supplied filter (nearest first for a location search)."""
    predicate = build_venue_filter(query)
    return [VenueResponse.from_document(doc) for doc in repo_list_venues(collection, predicate)]


@router.post("", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    body: VenueWrite,
    collection: Collection = Depends(get_venue_collection),
) -> VenueResponse:
    """Create a restaurant; all fields are optional."""
    return VenueResponse.from_document(repo_create_venue(collection, body))


@router.get("/{venue_id}", response_model=VenueResponse)
def get_restaurant(venue_id: str, collection: Collection = Depends(get_venue_collection)) -> VenueResponse:
    """Fetch one restaurant by id."""
    return _found(repo_get_venue(collection, venue_id), venue_id)


@router.put("/{venue_id}", response_model=VenueResponse)
def replace_restaurant(
    venue_id: str,
    body: VenueWrite,
    collection: Collection = Depends(get_venue_collection),
) -> VenueResponse:
    """Replace a restaurant wholesale; fields missing from the body are cleared."""
    return _found(repo_replace_venue(collection, venue_id, body), venue_id)


@router.delete("/{venue_id}", response_model=VenueResponse)
def delete_restaurant(venue_id: str, collection: Collection = Depends(get_venue_collection)) -> VenueResponse:
    """Delete a restaurant and return it as it was before deletion."""
    return _found(repo_delete_venue(collection, venue_id), venue_id)


@router.post("/{venue_id}/comments", response_model=VenueResponse)
def add_comment(
    venue_id: str,
    body: CommentCreate,
    collection: Collection = Depends(get_venue_collection),
) -> VenueResponse:
    """Append a comment (server-dated) and return the updated restaurant."""
    return _found(repo_add_comment(collection, venue_id, body), venue_id)


@router.post("/{venue_id}/rates", response_model=VenueResponse)
def add_rate(
    venue_id: str,
    body: RateCreate,
    collection: Collection = Depends(get_venue_collection),
) -> VenueResponse:
    """Append a rating (server-dated) and return the updated restaurant."""
    return _found(repo_add_rate(collection, venue_id, body), venue_id)

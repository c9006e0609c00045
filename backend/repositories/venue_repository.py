"""Venue repository: list, get, create, replace, delete, append comment/rate."""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection

from schemas.venues import CommentCreate, RateCreate, VenueWrite

LOG = logging.getLogger(__name__)


def _object_id(venue_id: str) -> Optional[ObjectId]:
    """Parse a venue id; None when it is not an ObjectId (so no document can match)."""
    try:
        return ObjectId(venue_id)
    except (InvalidId, TypeError):
        return None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def list_venues(collection: Collection, predicate: dict[str, Any]) -> list[dict]:
    """Return all venues matching predicate (nearest first when it holds a $near condition)."""
    return list(collection.find(predicate))


def get_venue(collection: Collection, venue_id: str) -> Optional[dict]:
    """Return a venue by id or None."""
    oid = _object_id(venue_id)
    if oid is None:
        return None
    return collection.find_one({"_id": oid})


def create_venue(collection: Collection, payload: VenueWrite) -> dict:
    """Insert a venue and return the stored document with its new _id."""
    doc = payload.to_document()
    result = collection.insert_one(doc)
    doc["_id"] = result.inserted_id
    LOG.info("Created restaurant %s", result.inserted_id)
    return doc


def replace_venue(collection: Collection, venue_id: str, payload: VenueWrite) -> Optional[dict]:
    """Replace the whole document (no merge). Returns the new state or None if not found."""
    oid = _object_id(venue_id)
    if oid is None:
        return None
    doc = collection.find_one_and_replace(
        {"_id": oid},
        payload.to_document(),
        return_document=ReturnDocument.AFTER,
    )
    if doc is not None:
        LOG.info("Replaced restaurant %s", venue_id)
    return doc


def delete_venue(collection: Collection, venue_id: str) -> Optional[dict]:
    """Delete a venue. Returns the document as it was before deletion, or None if not found."""
    oid = _object_id(venue_id)
    if oid is None:
        return None
    doc = collection.find_one_and_delete({"_id": oid})
    if doc is not None:
        LOG.info("Deleted restaurant %s", venue_id)
    return doc


def _push(collection: Collection, venue_id: str, field: str, element: dict) -> Optional[dict]:
    """
    Append element to the embedded array field with a single atomic $push.

    The append and the parent lookup are one server-side operation, so concurrent appends to
    the same venue cannot overwrite each other.
    """
    oid = _object_id(venue_id)
    if oid is None:
        return None
    doc = collection.find_one_and_update(
        {"_id": oid},
        {"$push": {field: element}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is not None:
        LOG.info("Appended to %s of restaurant %s", field, venue_id)
    return doc


def add_comment(collection: Collection, venue_id: str, comment: CommentCreate) -> Optional[dict]:
    """Append a comment stamped with the current time. Returns the updated venue or None."""
    element = {"user": comment.user, "text": comment.text, "date": _now()}
    return _push(collection, venue_id, "comments", element)


def add_rate(collection: Collection, venue_id: str, rate: RateCreate) -> Optional[dict]:
    """Append a rating event stamped with the current time. Returns the updated venue or None."""
    element = {"date": _now(), "stars": rate.stars}
    return _push(collection, venue_id, "rates", element)

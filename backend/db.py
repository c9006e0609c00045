"""MongoDB client, collection dependency and index setup."""
import logging
import os

from fastapi import Request
from pymongo import ASCENDING, DESCENDING, GEOSPHERE, MongoClient
from pymongo.collection import Collection

from utils.config import MONGO_COLLECTION, MONGO_DB, MONGO_TIMEOUT_MS, MONGO_URL

LOG = logging.getLogger(__name__)

# Runtime safety: tests must never write to a production database.
if os.environ.get("TESTING") == "true" and "test" not in MONGO_DB.lower():
    raise RuntimeError(
        "Tests must not run against production. Set TESTING_MONGO_DB to a name containing 'test'."
    )

# MongoDB allows at most one array field per compound index, so the array paths
# (categories, comments.*, rates.*) each get their own index.
VENUE_INDEXES = (
    [("name", ASCENDING), ("contact.phone", ASCENDING), ("contact.email", ASCENDING)],
    [("contact.location", GEOSPHERE)],
    [("stars", DESCENDING)],
    [("categories", ASCENDING)],
    [("comments.date", DESCENDING)],
    [("rates.date", DESCENDING)],
    [("rates.stars", DESCENDING)],
)


def create_client(url: str = MONGO_URL) -> MongoClient:
    """Create a pooled client; connection happens lazily on first operation."""
    return MongoClient(
        url,
        serverSelectionTimeoutMS=MONGO_TIMEOUT_MS,
        socketTimeoutMS=MONGO_TIMEOUT_MS,
    )


def venue_collection(client: MongoClient) -> Collection:
    """Return the configured restaurants collection on client."""
    return client[MONGO_DB][MONGO_COLLECTION]


def ensure_indexes(collection: Collection) -> list[str]:
    """Create the venue indexes if missing (idempotent). Returns the index names."""
    names = [collection.create_index(keys) for keys in VENUE_INDEXES]
    LOG.info("Ensured %d indexes on %s", len(names), collection.name)
    return names


def get_venue_collection(request: Request) -> Collection:
    """FastAPI dependency: the collection owned by the running app."""
    return request.app.state.venues

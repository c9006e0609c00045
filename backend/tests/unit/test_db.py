"""Unit tests: db helpers (index setup, collection dependency)."""
from unittest.mock import MagicMock

import pytest
from pymongo import DESCENDING, GEOSPHERE

from db import VENUE_INDEXES, ensure_indexes, get_venue_collection, venue_collection
from utils.config import MONGO_COLLECTION, MONGO_DB

pytestmark = pytest.mark.unit


def test_ensure_indexes_creates_each_index():
    """ensure_indexes calls create_index once per index spec and returns the names."""
    collection = MagicMock()
    collection.create_index.side_effect = lambda keys: "_".join(f"{k}_{d}" for k, d in keys)
    names = ensure_indexes(collection)
    assert collection.create_index.call_count == len(VENUE_INDEXES)
    assert "contact.location_2dsphere" in names
    assert "stars_-1" in names


def test_location_has_geospatial_index():
    """contact.location is indexed 2dsphere on its own (required by $near)."""
    assert [("contact.location", GEOSPHERE)] in VENUE_INDEXES


def test_no_index_spans_two_array_fields():
    """Each index touches at most one of the embedded arrays."""
    array_roots = {"categories", "comments", "rates"}
    for keys in VENUE_INDEXES:
        roots = {field.split(".")[0] for field, _ in keys} & array_roots
        assert len(roots) <= 1


def test_date_and_rate_indexes_descending():
    """Comment/rate dates and rate stars are indexed descending."""
    for field in ("comments.date", "rates.date", "rates.stars"):
        assert [(field, DESCENDING)] in VENUE_INDEXES


def test_venue_collection_uses_configured_names(mongo_client):
    """venue_collection resolves the configured database and collection."""
    coll = venue_collection(mongo_client)
    assert coll.name == MONGO_COLLECTION
    assert coll.database.name == MONGO_DB


def test_get_venue_collection_reads_app_state():
    """The request dependency returns the collection stored on app.state."""
    request = MagicMock()
    assert get_venue_collection(request) is request.app.state.venues

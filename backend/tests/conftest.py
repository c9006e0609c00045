# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_MONGO_DB"] = "restaurants_test"

import mongomock
import pytest
from fastapi.testclient import TestClient

from db import venue_collection
from main import create_app
from utils.config import MONGO_DB


@pytest.fixture
def mongo_client():
    """In-memory MongoDB client; the test database is dropped on teardown."""
    client = mongomock.MongoClient()
    try:
        yield client
    finally:
        client.drop_database(MONGO_DB)


@pytest.fixture
def collection(mongo_client):
    """The restaurants collection the app under test reads and writes."""
    return venue_collection(mongo_client)


@pytest.fixture
def client(mongo_client):
    """API test client for an app built around the in-memory Mongo client."""
    app = create_app(mongo_client)
    with TestClient(app) as c:
        yield c


"""
Mflix API: Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is pointed at harmless values BEFORE any app import, and
       endpoint tests swap the MongoDB-backed store for an in-memory one via
       `app.dependency_overrides`, so no test needs a running server.

Fixtures:
    store:         Empty InMemoryDocumentStore
    seeded_store:  One movie with 25 comments, a second movie with none,
                   15 unrelated comments, and 3 theaters
    test_client:   HTTPX AsyncClient bound to the app, using `store`
"""

import os

os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "sample_mflix_test"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["RETRY_MIN_WAIT"] = "0"
os.environ["RETRY_MAX_WAIT"] = "1"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from tests.fakes import InMemoryDocumentStore, make_comment


@pytest.fixture
def movie_id() -> ObjectId:
    return ObjectId("573a1390f29313caabcd42e8")


@pytest.fixture
def quiet_movie_id() -> ObjectId:
    return ObjectId("573a1390f29313caabcd4323")


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def seeded_store(store, movie_id, quiet_movie_id) -> InMemoryDocumentStore:
    """
    movies:   The Great Train Robbery (25 comments), Blacksmith Scene (0)
    comments: 25 for the first movie + 15 for a movie not in `movies`
    theaters: 3
    """
    orphan_movie = ObjectId()
    store.collections = {
        "movies": [
            {"_id": movie_id, "title": "The Great Train Robbery", "year": 1903},
            {"_id": quiet_movie_id, "title": "Blacksmith Scene", "year": 1893},
        ],
        "comments": [make_comment(movie_id, n) for n in range(25)]
        + [make_comment(orphan_movie, 100 + n) for n in range(15)],
        "theaters": [
            {
                "_id": ObjectId(),
                "theaterId": 1000 + n,
                "location": {
                    "address": {
                        "street1": f"{n} Main St",
                        "city": "Bloomington",
                        "state": "MN",
                        "zipcode": "55425",
                    },
                    "geo": {"type": "Point", "coordinates": [-93.24565, 44.85466]},
                },
            }
            for n in range(3)
        ],
    }
    return store


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The transport does not run the lifespan, so no connection is attempted;
    every route gets `store` through the overridden get_store dependency.
    """
    from mflix_api.database import get_store
    from mflix_api.main import app

    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

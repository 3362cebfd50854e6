"""
Blog API — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    ├── mock_collection: AsyncMock standing in for a Motor collection
    ├── mongo_collection: In-memory collection from mongomock-motor
    ├── app: Fresh FastAPI instance per test (no shared router state)
    ├── test_client: HTTPX AsyncClient wired to `mongo_collection`
    └── mock_client: HTTPX AsyncClient wired to `mock_collection`
"""

import os

# Override settings for testing BEFORE any blog_api imports
os.environ["MONGO_URL"] = "mongodb://localhost:27017"
os.environ["MONGO_DATABASE"] = "blog_test"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from blog_api.database import get_posts_collection
from blog_api.main import create_app


# ══════════════════════════════════════════════════════════════════════════
# Collections
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_collection():
    """
    Provides a mock Motor collection.

    Usage:
        async def test_get(mock_collection):
            mock_collection.find_one.return_value = {"_id": oid, ...}
            result = await post_service.get_post(mock_collection, str(oid))
    """
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mongo_collection():
    """A fresh in-memory posts collection for each test."""
    client = AsyncMongoMockClient()
    return client["blog_test"]["posts"]


@pytest.fixture
def sample_post_document():
    return {
        "_id": ObjectId("65a1b2c3d4e5f6a7b8c9d0e1"),
        "title": "First post",
        "content": "Hello, world.",
    }


# ══════════════════════════════════════════════════════════════════════════
# HTTP Clients
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app():
    """A new application per test; the lifespan is not run by ASGITransport."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


async def _client_for(app, collection):
    app.dependency_overrides[get_posts_collection] = lambda: collection
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(app, mongo_collection):
    """
    HTTPX client whose requests hit an in-memory MongoDB collection.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/posts")
            assert response.status_code == 200
    """
    async with await _client_for(app, mongo_collection) as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(app, mock_collection):
    """HTTPX client backed by `mock_collection`, for asserting database calls."""
    async with await _client_for(app, mock_collection) as client:
        yield client

"""
TripNest Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_collection: AsyncMock collection for service unit tests
    ├── memory_collection: in-memory collection double with pymongo's call shapes
    ├── memory_store: store handle wrapping memory_collection
    ├── test_client: HTTPX AsyncClient bound to an app using memory_store
    └── sample_spot: a tourist spot payload
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

# Must be set before tripnest.config is imported anywhere
os.environ["DB_USER"] = "test-user"
os.environ["DB_PASSWORD"] = "test-password"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# In-memory collection double
# ══════════════════════════════════════════════════════════════════════════

def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in query.items())


class InMemoryCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        docs = [copy.deepcopy(doc) for doc in self._documents]
        return docs if length is None else docs[:length]


class InMemoryCollection:
    """
    Test double for AsyncCollection covering the calls TouristSpotService makes.

    Supports top-level equality filters and `$set` updates only.
    """

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []

    def find(self, query: Optional[Dict[str, Any]] = None) -> InMemoryCursor:
        query = query or {}
        return InMemoryCursor([doc for doc in self.documents if _matches(doc, query)])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.documents:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        # pymongo adds the generated _id to the caller's dict
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(acknowledged=True, inserted_id=document["_id"])

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> SimpleNamespace:
        for doc in self.documents:
            if _matches(doc, query):
                changes = update["$set"]
                modified = any(doc.get(key) != value for key, value in changes.items())
                doc.update(copy.deepcopy(changes))
                return SimpleNamespace(
                    acknowledged=True,
                    matched_count=1,
                    modified_count=1 if modified else 0,
                    upserted_id=None,
                )
        return SimpleNamespace(acknowledged=True, matched_count=0, modified_count=0, upserted_id=None)

    async def delete_one(self, query: Dict[str, Any]) -> SimpleNamespace:
        for index, doc in enumerate(self.documents):
            if _matches(doc, query):
                del self.documents[index]
                return SimpleNamespace(acknowledged=True, deleted_count=1)
        return SimpleNamespace(acknowledged=True, deleted_count=0)


class InMemoryStore:
    """Stands in for MongoStore: same `collection`, `ping` and `close` surface."""

    def __init__(self, collection: Any, reachable: bool = True):
        self.collection = collection
        self.reachable = reachable
        self.closed = False

    async def ping(self) -> None:
        if not self.reachable:
            from pymongo.errors import ServerSelectionTimeoutError
            raise ServerSelectionTimeoutError("no servers available")

    async def connect(self) -> None:
        await self.ping()

    async def close(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_collection():
    """
    Provides a mock async collection.

    Usage:
        mock_collection.find_one.return_value = {"_id": oid, "name": "Beach"}
        result = await TouristSpotService(mock_collection).get_spot(str(oid))

    `find` is synchronous in pymongo and returns a cursor whose to_list is awaited.
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def memory_collection():
    return InMemoryCollection()


@pytest.fixture
def memory_store(memory_collection):
    return InMemoryStore(memory_collection)


@pytest.fixture
def sample_spot():
    return {
        "name": "Cox's Bazar",
        "country": "Bangladesh",
        "average_cost": 500,
        "email": "traveller@example.com",
    }


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    Provides an async HTTP test client for endpoint testing.

    How:     ASGITransport routes requests straight to an app built with the
             in-memory store, so no MongoDB deployment is needed.
    """
    from tripnest.main import create_app

    app = create_app(store=memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

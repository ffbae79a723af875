"""
Users API - Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_collection: In-memory stand-in for the users collection
    ├── fake_mongo: Handle wrapping fake_collection (ping always succeeds)
    ├── mock_collection: AsyncMock collection for service unit tests
    ├── app: FastAPI app with database dependencies overridden
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any users_api import so `settings` never points at a real server
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["MONGO_DATABASE"] = "users_api_test"
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# In-memory MongoDB stand-ins
# ══════════════════════════════════════════════════════════════════════════

class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return list(self._documents)


class FakeCollection:
    """
    Implements the slice of AsyncCollection that UserService uses.

    Queries are limited to `{}` and `{"_id": ObjectId}`, which is all the
    service issues. Set `error` to make every call raise it.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.error: Optional[PyMongoError] = None
        self.calls: List[str] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    def _match(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.documents.get(query.get("_id"))

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self._record("find")
        return FakeCursor([copy.deepcopy(doc) for doc in self.documents.values()])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._record("find_one")
        doc = self._match(query)
        return copy.deepcopy(doc) if doc is not None else None

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        self._record("insert_one")
        oid = document.get("_id") or ObjectId()
        self.documents[oid] = {**copy.deepcopy(document), "_id": oid}
        return SimpleNamespace(inserted_id=oid, acknowledged=True)

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        return_document: bool = ReturnDocument.BEFORE,
    ) -> Optional[Dict[str, Any]]:
        self._record("find_one_and_update")
        doc = self._match(query)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        doc.update(update.get("$set", {}))
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._record("find_one_and_delete")
        doc = self._match(query)
        if doc is None:
            return None
        return self.documents.pop(doc["_id"])


class FakeMongoHandle:
    def __init__(self, users: FakeCollection, reachable: bool = True):
        self.users = users
        self.reachable = reachable

    async def ping(self) -> bool:
        return self.reachable

    async def close(self) -> None:
        pass


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def fake_mongo(fake_collection):
    return FakeMongoHandle(fake_collection)


@pytest.fixture
def mock_collection():
    """
    A MagicMock shaped like AsyncCollection.

    `find` is synchronous in the async driver (it returns a cursor), so it is
    a plain MagicMock whose cursor has an awaitable `to_list`.

    Usage:
        mock_collection.find.return_value.to_list.return_value = [doc]
        result = await service.list_users(mock_collection)
    """
    collection = MagicMock()
    collection.find = MagicMock()
    collection.find.return_value.to_list = AsyncMock(return_value=[])
    collection.find_one = AsyncMock()
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.find_one_and_delete = AsyncMock()
    return collection


@pytest.fixture
def app(fake_mongo):
    """A fresh application whose database dependencies resolve to fakes."""
    from users_api.database import get_mongo, get_users_collection
    from users_api.main import create_app

    application = create_app(mongo=fake_mongo)
    application.dependency_overrides[get_mongo] = lambda: fake_mongo
    application.dependency_overrides[get_users_collection] = lambda: fake_mongo.users
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client talking to the app in-process.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/v1/users")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

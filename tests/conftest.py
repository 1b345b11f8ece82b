"""
Test infrastructure for the Blog Record Service.

Strategy
--------
- ``FakeCollection`` is an in-memory stand-in for pymongo's
  ``AsyncCollection`` covering exactly the five calls the service makes
  (``find_one``, ``insert_one``, ``find_one_and_update``, ``delete_one``,
  ``find``).  No MongoDB instance is needed in CI.
- Every call is appended to ``FakeCollection.calls`` so tests can assert
  that a request never reached storage.
- Failure injection: ``fail_writes`` makes writes raise
  ``OperationFailure``; ``cursor_fail_after`` makes a cursor raise after
  that many documents.  Malformed documents are injected by appending
  raw dicts to ``FakeCollection.documents``.
- Every cursor handed out is kept in ``FakeCollection.cursors`` with a
  ``closed`` flag so tests can check it was released.
- The app's ``get_collection`` dependency is overridden per test, and the
  lifespan never runs under ``ASGITransport``, so no real client is
  created.
"""
import copy

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from pymongo import ReturnDocument
from pymongo.errors import OperationFailure
from pymongo.results import DeleteResult, InsertOneResult

from blog_api.database import get_collection
from blog_api.main import app
from blog_api.services.blog_service import BlogService

# ---------------------------------------------------------------------------
# In-memory collection double
# ---------------------------------------------------------------------------


class FakeCursor:
    def __init__(self, documents: list[dict], fail_after: int | None = None) -> None:
        self._documents = documents
        self._fail_after = fail_after
        self._position = 0
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self) -> dict:
        if self.closed:
            raise StopAsyncIteration
        if self._fail_after is not None and self._position >= self._fail_after:
            raise OperationFailure("cursor id not found")
        if self._position >= len(self._documents):
            raise StopAsyncIteration
        document = copy.deepcopy(self._documents[self._position])
        self._position += 1
        return document

    async def close(self) -> None:
        self.closed = True


class FakeCollection:
    def __init__(self) -> None:
        self.documents: list[dict] = []
        self.calls: list[str] = []
        self.cursors: list[FakeCursor] = []
        self.fail_writes = False
        self.cursor_fail_after: int | None = None

    def _match(self, filter: dict) -> list[dict]:
        return [d for d in self.documents if all(d.get(k) == v for k, v in filter.items())]

    async def find_one(self, filter: dict) -> dict | None:
        self.calls.append("find_one")
        matches = self._match(filter)
        return copy.deepcopy(matches[0]) if matches else None

    async def insert_one(self, document: dict) -> InsertOneResult:
        self.calls.append("insert_one")
        if self.fail_writes:
            raise OperationFailure("not primary")
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return InsertOneResult(stored["_id"], acknowledged=True)

    async def find_one_and_update(self, filter: dict, update: dict, return_document=ReturnDocument.BEFORE):
        self.calls.append("find_one_and_update")
        if self.fail_writes:
            raise OperationFailure("not primary")
        matches = self._match(filter)
        if not matches:
            return None
        document = matches[0]
        before = copy.deepcopy(document)
        document.update(update.get("$set", {}))
        return copy.deepcopy(document) if return_document == ReturnDocument.AFTER else before

    async def delete_one(self, filter: dict) -> DeleteResult:
        self.calls.append("delete_one")
        if self.fail_writes:
            raise OperationFailure("not primary")
        matches = self._match(filter)
        if matches:
            self.documents.remove(matches[0])
        return DeleteResult({"n": len(matches[:1]), "ok": 1}, acknowledged=True)

    def find(self, filter: dict | None = None) -> FakeCursor:
        self.calls.append("find")
        cursor = FakeCursor(self._match(filter or {}), self.cursor_fail_after)
        self.cursors.append(cursor)
        return cursor


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def service(collection: FakeCollection) -> BlogService:
    return BlogService(collection)


@pytest_asyncio.fixture
async def async_client(collection: FakeCollection) -> AsyncClient:
    """
    Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport,
    with ``get_collection`` pointed at this test's ``FakeCollection``.
    """
    app.dependency_overrides[get_collection] = lambda: collection
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_collection, None)

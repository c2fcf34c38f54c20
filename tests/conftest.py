import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from agroscan.core.database import mongodb
from agroscan.main import app


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in (query or {}).items())


class FakeCursor:
    """Just enough of motor's cursor for the routers: sort/skip/limit and async iteration."""

    def __init__(self, docs):
        self._docs = list(docs)
        self._skip = 0
        self._limit = 0

    def sort(self, key, direction=1):
        self._docs.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def skip(self, count):
        self._skip = count
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _window(self):
        docs = self._docs[self._skip:]
        return docs[:self._limit] if self._limit else docs

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._window():
            yield doc

    async def to_list(self, length=None):
        docs = self._window()
        return docs[:length] if length else docs


class FakeCollection:
    def __init__(self):
        self.docs = []

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def insert_many(self, docs):
        ids = [(await self.insert_one(doc)).inserted_id for doc in docs]
        return SimpleNamespace(inserted_ids=ids)

    def find(self, query=None):
        return FakeCursor(copy.deepcopy(doc) for doc in self.docs if _matches(doc, query))

    async def find_one(self, query=None, sort=None):
        cursor = self.find(query)
        for key, direction in sort or []:
            cursor.sort(key, direction)
        docs = await cursor.to_list()
        return docs[0] if docs else None

    async def update_one(self, query, update):
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                self.docs.remove(doc)
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, query):
        keep = [doc for doc in self.docs if not _matches(doc, query)]
        deleted = len(self.docs) - len(keep)
        self.docs = keep
        return SimpleNamespace(deleted_count=deleted)

    async def count_documents(self, query):
        return sum(1 for doc in self.docs if _matches(doc, query))


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDatabase()
    monkeypatch.setattr(mongodb, "db", db)
    return db


@pytest.fixture
def client(fake_db):
    # Not used as a context manager, so the lifespan never opens a real connection
    return TestClient(app)


@pytest.fixture
def completion_calls(monkeypatch):
    """Replace the Perplexity client with a recorder that answers every prompt."""
    calls = []

    def fake_completion(prompt, max_tokens=100):
        calls.append({"prompt": prompt, "max_tokens": max_tokens})
        return "  Plant maize after the first rains.  "

    monkeypatch.setattr("agroscan.services.advisor_service.call_perplexity", fake_completion)
    return calls

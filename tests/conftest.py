"""Shared pytest fixtures.

Services talk to MongoDB through pymongo's async collection API. The classes below
implement the part of that API the services use, backed by plain dicts, so tests run
without a database server.
"""

import copy
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Any
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError
from pymongo.results import UpdateResult

from chatroom.app import App
from chatroom.config import Config
from chatroom.core.core import Core
from chatroom.web.server import create_fastapi_app

TEST_BASE_URL = "https://chat.test"


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = doc.get(key)
        if isinstance(condition, dict):
            for op, operand in condition.items():
                if op == "$gt" and not (value is not None and value > operand):
                    return False
                if op == "$in" and value not in operand:
                    return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self._limit: int | None = None

    def sort(self, key_or_list: str | list[tuple[str, int]], direction: int = 1) -> "FakeCursor":
        keys = [(key_or_list, direction)] if isinstance(key_or_list, str) else key_or_list
        for key, key_direction in reversed(keys):
            self._docs.sort(key=lambda d, k=key: d[k], reverse=key_direction < 0)
        return self

    def limit(self, limit: int) -> "FakeCursor":
        self._limit = limit
        return self

    async def __aiter__(self) -> AsyncIterator[dict[str, Any]]:
        docs = self._docs if self._limit is None else self._docs[: self._limit]
        for doc in docs:
            yield copy.deepcopy(doc)


class FakeCollection:
    def __init__(self, database: "FakeDatabase") -> None:
        self._database = database
        self.docs: dict[Any, dict[str, Any]] = {}
        self.unique_fields: set[str] = set()

    def _check(self) -> None:
        if self._database.broken:
            raise PyMongoError("connection refused")

    def _find(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        return [doc for doc in self.docs.values() if _matches(doc, query)]

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False) -> str:
        if unique and len(keys) == 1:
            self.unique_fields.add(keys[0][0])
        return "_".join(f"{k}_{d}" for k, d in keys)

    async def insert_one(self, document: dict[str, Any]) -> None:
        self._check()
        if document["_id"] in self.docs:
            raise DuplicateKeyError("duplicate _id")
        for field in self.unique_fields:
            if any(doc.get(field) == document.get(field) for doc in self.docs.values()):
                raise DuplicateKeyError(f"duplicate {field}")
        self.docs[document["_id"]] = copy.deepcopy(document)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        found = self._find(query)
        return copy.deepcopy(found[0]) if found else None

    def find(self, query: dict[str, Any]) -> FakeCursor:
        self._check()
        return FakeCursor(self._find(query))

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> UpdateResult:
        self._check()
        found = self._find(query)[:1]
        for doc in found:
            doc.update(update.get("$set", {}))
        return UpdateResult({"n": len(found), "nModified": len(found)}, acknowledged=True)

    async def delete_one(self, query: dict[str, Any]) -> None:
        self._check()
        for doc in self._find(query)[:1]:
            del self.docs[doc["_id"]]

    async def find_one_and_delete(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        found = self._find(query)
        if not found:
            return None
        return self.docs.pop(found[0]["_id"])

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        upsert: bool = False,
        return_document: bool = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        self._check()
        found = self._find(query)
        if not found:
            if not upsert:
                return None
            doc = dict(query)
            self.docs[doc["_id"]] = doc
        else:
            doc = found[0]
        before = copy.deepcopy(doc)
        for key, amount in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + amount
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.broken = False

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(self)
        return self.collections[name]


@pytest.fixture
def config():
    """Configuration that never reads the environment or a .env file."""
    return Config(
        _env_file=None,  # type: ignore[call-arg]
        database_url="mongodb://localhost:27017/chatroom_test",
        base_url=TEST_BASE_URL,
        resend_api_key="re_test_key",
    )


@pytest.fixture
def database():
    return FakeDatabase()


@pytest_asyncio.fixture
async def core(config, database) -> AsyncGenerator[Core]:
    """Core wired to the in-memory database, with indexes registered."""
    core = Core(config, database)  # type: ignore[arg-type]
    async with core.lifespan():
        yield core


@pytest.fixture
def send_email(monkeypatch):
    """Replace the Resend call with a mock that reports success."""
    mock = AsyncMock(return_value=(True, None))
    monkeypatch.setattr("chatroom.core.modules.mail.service.send_email", mock)
    return mock


@pytest_asyncio.fixture
async def app(config, database, send_email) -> AsyncGenerator[App]:
    app = App(config, database)  # type: ignore[arg-type]
    async with app.lifespan():
        yield app


@pytest_asyncio.fixture
async def client(app, config) -> AsyncGenerator[AsyncClient]:
    """HTTP client driving the FastAPI app in-process over https, so secure cookies round-trip."""
    fastapi_app = create_fastapi_app(app, config)
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url=TEST_BASE_URL) as client:
        yield client


async def create_verified_user(core: Core, email: str = "alice@example.com", password: str = "longpassword") -> str:
    """Create a user and mark it verified, returning its ID."""
    user = await core.services.user.create_user(email, password)
    await core.services.user.mark_verified(user.id)
    return user.id


@pytest.fixture
def verified_user_factory():
    return create_verified_user

"""Pytest configuration file for setting up test environment."""

from collections.abc import AsyncGenerator, Iterator
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from getducked import AppConfig, configure_fastapi_app
from getducked.auth import AuthQueries, SecurityManager

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"  # noqa: S105
TEST_BCRYPT_ROUNDS = 4


class FakeCollection:
    """In-memory stand-in for a MongoDB collection.

    Supports exact-match ``find_one``, ``insert_one`` and unique indexes,
    which is all the application uses.
    """

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []
        self.unique_fields: set[str] = set()

    async def create_index(self, keys: list[tuple[str, int]], **kwargs: Any) -> str:
        fields = [field for field, _ in keys]
        if kwargs.get("unique"):
            self.unique_fields.update(fields)
        return "_".join(f"{field}_1" for field in fields)

    async def find_one(
        self,
        query: dict[str, Any],
        projection: dict[str, int] | None = None,
    ) -> dict[str, Any] | None:
        for document in self.documents:
            if all(document.get(key) == value for key, value in query.items()):
                if projection:
                    return {
                        key: value
                        for key, value in document.items()
                        if key == "_id" or projection.get(key)
                    }
                return dict(document)
        return None

    async def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        for field in self.unique_fields:
            if any(d.get(field) == document.get(field) for d in self.documents):
                msg = f"E11000 duplicate key error index: {field}_1"
                raise DuplicateKeyError(msg, code=11000)
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return SimpleNamespace(inserted_id=document["_id"], acknowledged=True)


class FakeDatabase:
    """In-memory stand-in for a MongoDB database."""

    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def app_config() -> AppConfig:
    """Create a test configuration with a cheap bcrypt cost."""
    return AppConfig(
        mongodb_uri="mongodb://localhost:27017",
        database_name="getducked_test",
        logging_level="DEBUG",
        root_path="",
        jwt_secret=TEST_JWT_SECRET,
        jwt_algorithm="HS256",
        access_token_expire_minutes=None,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
    )


@pytest.fixture
def security_manager(app_config: AppConfig) -> SecurityManager:
    return app_config.security_manager


@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def users_collection(fake_database: FakeDatabase) -> FakeCollection:
    return fake_database[AuthQueries.USERS_COLLECTION]


@pytest.fixture
def client(app_config: AppConfig, fake_database: FakeDatabase) -> Iterator[TestClient]:
    """Create a test client whose app runs its lifespan against the fake database."""

    @asynccontextmanager
    async def connector(config: AppConfig) -> AsyncGenerator[FakeDatabase, Any]:
        yield fake_database

    app = configure_fastapi_app(app_config, connector)
    with TestClient(app) as test_client:
        yield test_client

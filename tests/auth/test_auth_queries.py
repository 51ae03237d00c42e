"""Tests for the users collection repository."""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from getducked.auth import AuthQueries
from getducked.common import Failure, Ok


@pytest.fixture
def mock_collection() -> AsyncMock:
    collection = AsyncMock()
    collection.find_one.return_value = None
    collection.insert_one.return_value = SimpleNamespace(inserted_id=ObjectId())
    return collection


@pytest.mark.asyncio
async def test_initialize_indexes_creates_unique_email_index(
    mock_collection: AsyncMock,
) -> None:
    await AuthQueries(mock_collection).initialize_indexes()

    mock_collection.create_index.assert_awaited_once_with([("email", 1)], unique=True)


@pytest.mark.asyncio
async def test_email_exists_fetches_only_the_id(mock_collection: AsyncMock) -> None:
    queries = AuthQueries(mock_collection)

    assert await queries.email_exists("a@b.com") == Ok(False)
    mock_collection.find_one.assert_awaited_once_with({"email": "a@b.com"}, {"_id": 1})

    mock_collection.find_one.return_value = {"_id": ObjectId()}
    assert await queries.email_exists("a@b.com") == Ok(True)


@pytest.mark.asyncio
async def test_email_exists_returns_failure(mock_collection: AsyncMock) -> None:
    error = ServerSelectionTimeoutError("no servers")
    mock_collection.find_one.side_effect = error

    result = await AuthQueries(mock_collection).email_exists("a@b.com")

    assert result == Failure(error)


@pytest.mark.asyncio
async def test_find_user_by_email_uses_exact_match(mock_collection: AsyncMock) -> None:
    result = await AuthQueries(mock_collection).find_user_by_email("a@b.com")

    assert result == Ok(None)
    mock_collection.find_one.assert_awaited_once_with({"email": "a@b.com"})


@pytest.mark.asyncio
async def test_find_user_by_email_maps_document(mock_collection: AsyncMock) -> None:
    user_id = ObjectId()
    mock_collection.find_one.return_value = {
        "_id": user_id,
        "email": "a@b.com",
        "passwordHash": "hash",
        "role": None,
    }

    result = await AuthQueries(mock_collection).find_user_by_email("a@b.com")

    assert isinstance(result, Ok)
    assert result.value.id == str(user_id)
    assert result.value.role == "user"


@pytest.mark.asyncio
async def test_find_user_by_email_returns_failure(mock_collection: AsyncMock) -> None:
    error = ServerSelectionTimeoutError("no servers")
    mock_collection.find_one.side_effect = error

    result = await AuthQueries(mock_collection).find_user_by_email("a@b.com")

    assert result == Failure(error)


@pytest.mark.asyncio
async def test_create_user_builds_record(mock_collection: AsyncMock) -> None:
    result = await AuthQueries(mock_collection).create_user("a@b.com", "hash")

    document = mock_collection.insert_one.await_args.args[0]
    assert document["email"] == "a@b.com"
    assert document["passwordHash"] == "hash"
    assert document["role"] == "user"
    assert isinstance(document["createdAt"], datetime)

    assert isinstance(result, Ok)
    inserted_id = mock_collection.insert_one.return_value.inserted_id
    assert result.value.id == str(inserted_id)


@pytest.mark.asyncio
async def test_create_user_flags_duplicate_key(mock_collection: AsyncMock) -> None:
    mock_collection.insert_one.side_effect = DuplicateKeyError("E11000", code=11000)

    result = await AuthQueries(mock_collection).create_user("a@b.com", "hash")

    assert isinstance(result, Failure)
    assert result.duplicate_key


@pytest.mark.asyncio
async def test_create_user_other_errors_are_not_duplicates(
    mock_collection: AsyncMock,
) -> None:
    mock_collection.insert_one.side_effect = RuntimeError("disk full")

    result = await AuthQueries(mock_collection).create_user("a@b.com", "hash")

    assert isinstance(result, Failure)
    assert not result.duplicate_key

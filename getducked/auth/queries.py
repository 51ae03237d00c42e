"""All queries related to user accounts.

Using the AuthQueries class as a repository for the users collection.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from getducked.common import DEFAULT_ROLE, Failure, Ok, User

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection
    from pymongo.asynchronous.database import AsyncDatabase

LOGGER = logging.getLogger(__name__)


class AuthQueries:
    """Repository for user account queries."""

    USERS_COLLECTION = "users"

    def __init__(self, collection: AsyncCollection) -> None:
        self.collection = collection

    @classmethod
    def from_database(cls, database: AsyncDatabase) -> AuthQueries:
        """Create an AuthQueries instance bound to the users collection.

        :param database: The database holding the users collection
        :return: Configured AuthQueries instance
        """
        return cls(database[cls.USERS_COLLECTION])

    async def initialize_indexes(self) -> None:
        """Create the unique email index if it does not exist.

        The index is what makes concurrent registrations of one email safe,
        so a failure here is raised rather than returned.
        """
        await self.collection.create_index([("email", ASCENDING)], unique=True)
        LOGGER.info("Ensured unique email index on %s", self.USERS_COLLECTION)

    async def email_exists(self, email: str) -> Ok[bool] | Failure:
        """Check whether any user record holds this exact email.

        Only the id is fetched, so records missing other fields still count.
        """
        try:
            document = await self.collection.find_one({"email": email}, {"_id": 1})
        except Exception as e:  # noqa: BLE001
            return Failure(e)
        return Ok(document is not None)

    async def find_user_by_email(self, email: str) -> Ok[User | None] | Failure:
        """Look up a user by exact email match.

        :param email: The email address to look up
        :return: Ok with the user, or with None if no user has this email
        """
        try:
            document = await self.collection.find_one({"email": email})
        except Exception as e:  # noqa: BLE001
            return Failure(e)

        if document is None:
            return Ok(None)

        try:
            return Ok(User.from_document(document))
        except (KeyError, TypeError) as e:
            return Failure(e)

    async def create_user(self, email: str, password_hash: str) -> Ok[User] | Failure:
        """Insert a new user record with the default role.

        :param email: The email address of the new account
        :param password_hash: bcrypt hash of the account password
        :return: Ok with the stored user, or Failure with ``duplicate_key``
            set when another account already holds the email
        """
        document: dict[str, Any] = {
            "email": email,
            "passwordHash": password_hash,
            "role": DEFAULT_ROLE,
            "createdAt": datetime.now(UTC),
        }

        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            return Failure(e, duplicate_key=True)
        except Exception as e:  # noqa: BLE001
            return Failure(e)

        return Ok(
            User(
                id=str(result.inserted_id),
                email=email,
                password_hash=password_hash,
                role=document["role"],
                created_at=document["createdAt"],
            ),
        )

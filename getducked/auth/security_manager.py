"""Password hashing and JWT utility functions.

bcrypt and token signing are CPU bound, so the coroutine wrappers run them in
a worker thread and leave the event loop free for other requests.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from bcrypt import checkpw, gensalt, hashpw

from getducked.common import User

LOGGER = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_PASSWORD_BYTES]


@dataclass
class SecurityManager:
    """Manager for password hashing and access token issuance.

    :param str secret_key: Secret key for JWT signing (generated if not provided)
    :param str algorithm: JWT signing algorithm
    :param int expire_minutes: Token lifetime in minutes, None for no expiry
    :param int bcrypt_rounds: bcrypt cost factor
    """

    DEFAULT_JWT_ALGORITHM = "HS256"
    DEFAULT_BCRYPT_ROUNDS = 10
    MINIMUM_BCRYPT_ROUNDS = 4
    MAXIMUM_BCRYPT_ROUNDS = 31

    secret_key: str | None = None
    algorithm: str = DEFAULT_JWT_ALGORITHM
    expire_minutes: int | None = None
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS

    def __post_init__(self) -> None:
        """Generate secret key if not provided."""
        if not self.secret_key:
            LOGGER.warning(
                "No JWT secret configured, tokens will not survive a restart",
            )
            self.secret_key = os.urandom(64).hex()

    def hash_password_sync(self, password: str) -> str:
        """Hash a password with a fresh salt.

        :param password: The plaintext password
        :return: The bcrypt hash, salt included
        """
        salt = gensalt(rounds=self.bcrypt_rounds)
        return hashpw(_password_bytes(password), salt).decode()

    def verify_password_sync(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored bcrypt hash.

        :raises ValueError: If the stored hash is not a valid bcrypt hash
        """
        return checkpw(_password_bytes(password), password_hash.encode())

    async def hash_password(self, password: str) -> str:
        return await asyncio.to_thread(self.hash_password_sync, password)

    async def verify_password(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(
            self.verify_password_sync,
            password,
            password_hash,
        )

    def create_access_token_sync(self, user: User) -> str:
        """Create a new JWT access token for the user.

        :param User user: The user for whom to create the token
        :return: A JWT access token as a string
        """
        now = datetime.now(UTC)
        payload: dict[str, Any] = {**user.token_claims(), "iat": now}
        if self.expire_minutes is not None:
            payload["exp"] = now + timedelta(minutes=self.expire_minutes)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    async def create_access_token(self, user: User) -> str:
        return await asyncio.to_thread(self.create_access_token_sync, user)

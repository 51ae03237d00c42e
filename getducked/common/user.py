"""Fundamental user data model for app."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

DEFAULT_ROLE = "user"


@dataclass(frozen=True)
class User:
    """A user record as stored in the users collection.

    :param id: String form of the store-assigned identifier
    :param email: Email address, unique and case-sensitive as stored
    :param password_hash: bcrypt hash of the password
    :param role: Role name, ``"user"`` when the stored record has none
    :param created_at: Creation timestamp, if the record carries one
    """

    id: str
    email: str
    password_hash: str
    role: str = DEFAULT_ROLE
    created_at: datetime | None = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> User:
        """Build a user from a raw users collection document."""
        return cls(
            id=str(document["_id"]),
            email=document["email"],
            password_hash=document["passwordHash"],
            role=document.get("role") or DEFAULT_ROLE,
            created_at=document.get("createdAt"),
        )

    def token_claims(self) -> dict[str, str]:
        """Claims carried by an access token issued for this user."""
        return {"userId": self.id, "email": self.email, "role": self.role}

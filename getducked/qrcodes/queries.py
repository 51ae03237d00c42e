"""Queries for the QR code collection."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from pymongo import ASCENDING

from getducked.common import Failure, Ok

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection
    from pymongo.asynchronous.database import AsyncDatabase

LOGGER = logging.getLogger(__name__)


class QRCodeQueries:
    """Repository for QR code shells."""

    QR_CODES_COLLECTION = "qrCodes"

    def __init__(self, collection: AsyncCollection) -> None:
        self.collection = collection

    @classmethod
    def from_database(cls, database: AsyncDatabase) -> QRCodeQueries:
        return cls(database[cls.QR_CODES_COLLECTION])

    async def initialize_indexes(self) -> None:
        """Create the unique index on QR code ids."""
        await self.collection.create_index([("id", ASCENDING)], unique=True)
        LOGGER.info("Ensured unique id index on %s", self.QR_CODES_COLLECTION)

    async def find_qr_code(self, qr_code_id: str) -> Ok[dict[str, Any] | None] | Failure:
        """Look up a QR code shell by its id.

        :param qr_code_id: The QR code id
        :return: Ok with the stored document, or with None if it does not exist
        """
        try:
            return Ok(await self.collection.find_one({"id": qr_code_id}))
        except Exception as e:  # noqa: BLE001
            return Failure(e)

    async def create_qr_code(self) -> Ok[str] | Failure:
        """Insert a new QR code shell with a random UUID4 id.

        :return: Ok with the new QR code id
        """
        qr_code_id = str(uuid4())
        try:
            await self.collection.insert_one(
                {"id": qr_code_id, "createdAt": datetime.now(UTC)},
            )
        except Exception as e:  # noqa: BLE001
            return Failure(e)
        return Ok(qr_code_id)

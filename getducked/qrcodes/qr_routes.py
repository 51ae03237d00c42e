"""QR code routes for the FastAPI application."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from getducked.common import Failure
from getducked.errors import QRCodeError

from .queries import QRCodeQueries

LOGGER = logging.getLogger(__name__)


class QRCodeMessage(BaseModel):
    message: str


class GeneratedQRCode(QRCodeMessage):
    id: str


async def _get_qr_code(qr_code_queries: QRCodeQueries, qr_code_id: str) -> QRCodeMessage:
    found = await qr_code_queries.find_qr_code(qr_code_id)
    if isinstance(found, Failure):
        LOGGER.error(
            "QR code lookup error for %s: %s",
            qr_code_id,
            found.error,
            exc_info=found.error,
        )
        raise QRCodeError()
    if found.value is None:
        LOGGER.debug("QR code %s not found", qr_code_id)
    return QRCodeMessage(message="QR Code endpoint")


async def _generate_qr_code(qr_code_queries: QRCodeQueries) -> GeneratedQRCode:
    created = await qr_code_queries.create_qr_code()
    if isinstance(created, Failure):
        LOGGER.error("QR code generation error: %s", created.error, exc_info=created.error)
        raise QRCodeError()
    return GeneratedQRCode(message="QR Code generated", id=created.value)


def configure_qr_router(
    router: APIRouter,
    qr_code_queries: QRCodeQueries,
) -> APIRouter:
    """Configure the QR code router.

    :param router: The APIRouter to configure
    :param qr_code_queries: The QRCodeQueries instance for database operations
    :return: The configured APIRouter
    """

    @router.get("/{qr_code_id}", response_model=QRCodeMessage)
    async def get_qr_code(qr_code_id: str) -> QRCodeMessage:
        return await _get_qr_code(qr_code_queries, qr_code_id)

    @router.post("/generate", response_model=GeneratedQRCode)
    async def generate_qr_code() -> GeneratedQRCode:
        return await _generate_qr_code(qr_code_queries)

    return router

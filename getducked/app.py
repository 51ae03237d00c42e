"""FastAPI application factory for the Get Ducked API."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo import AsyncMongoClient

from getducked.auth import AuthQueries, configure_auth_router
from getducked.errors import ApiError, ValidationError
from getducked.qrcodes import QRCodeQueries, configure_qr_router

from .config import configure_logging, load_config_from_env

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from contextlib import AbstractAsyncContextManager

    from pymongo.asynchronous.database import AsyncDatabase

    from .config import AppConfig

    DatabaseConnector = Callable[[AppConfig], AbstractAsyncContextManager[AsyncDatabase]]

LOGGER = logging.getLogger(__name__)

_BODY_FIELDS = ("email", "password")


@asynccontextmanager
async def connect_database(config: AppConfig) -> AsyncGenerator[AsyncDatabase, Any]:
    """Open a MongoDB client for the lifetime of the application.

    The database named in the connection string is used, falling back to
    the configured database name.
    """
    async with AsyncMongoClient(config.mongodb_uri) as client:
        yield client.get_default_database(config.database_name)


def _request_validation_field(exc: RequestValidationError) -> str:
    for error in exc.errors():
        for part in error.get("loc", ()):
            if part in _BODY_FIELDS:
                return part
    return "body"


def register_exception_handlers(app: FastAPI) -> None:
    """Render API errors as ``{"error", "code"[, "field"]}`` bodies."""

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        LOGGER.debug("Rejected request body for %s: %s", request.url.path, exc.errors())
        error = ValidationError(field=_request_validation_field(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_content())


def configure_fastapi_app(
    config: AppConfig,
    database_connector: DatabaseConnector = connect_database,
) -> FastAPI:
    """Configure and return the FastAPI application.

    :param config: Application configuration
    :param database_connector: Async context manager factory yielding the database
    :return: Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[Any, Any]:
        """Application lifespan manager.

        Handles opening the database, creating indexes and wiring the routers.
        """
        LOGGER.info("Get Ducked API is starting")

        async with database_connector(config) as database:
            auth_queries = AuthQueries.from_database(database)
            qr_code_queries = QRCodeQueries.from_database(database)

            await auth_queries.initialize_indexes()
            await qr_code_queries.initialize_indexes()

            auth_router = configure_auth_router(
                APIRouter(),
                auth_queries,
                config.security_manager,
            )
            qr_router = configure_qr_router(APIRouter(), qr_code_queries)

            app.include_router(auth_router, prefix="/auth", tags=["auth"])
            app.include_router(qr_router, prefix="/qrCode", tags=["qrCode"])

            yield

            LOGGER.info("Get Ducked API is shutting down")

    app = FastAPI(
        title="Get Ducked API",
        description="API for managing QR codes and their associated content",
        version="1.0.0",
        lifespan=lifespan,
        root_path=config.root_path,
        openapi_tags=[
            {"name": "auth", "description": "Authentication endpoints"},
            {"name": "qrCode", "description": "QR code management endpoints"},
        ],
    )

    register_exception_handlers(app)

    @app.get("/")
    def read_root() -> str:
        return "Get Ducked API"

    return app


def create_app(env_file: str | None = os.environ.get("ENV_FILE", ".env")) -> FastAPI:
    """Create and configure the FastAPI application.

    The default here is for uvicorn command line usage, in which case the user
    should set ENV_FILE environment variable if they want a different file.

    :param env_file: Optional path to the environment configuration file
    :return: Configured FastAPI application
    """
    config = load_config_from_env(env_file)
    configure_logging(config)
    return configure_fastapi_app(config)

"""Authentication routes for the FastAPI application.

Provides endpoints for account registration and login.
"""

import logging

from fastapi import APIRouter, status

from getducked.common import Failure, User
from getducked.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    LoginError,
    RegistrationError,
)

from .models import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from .queries import AuthQueries
from .security_manager import SecurityManager
from .validation import validate_login, validate_registration

LOGGER = logging.getLogger(__name__)


def _registration_failed(email: str, error: BaseException) -> RegistrationError:
    LOGGER.error("Registration error for %s: %s", email, error, exc_info=error)
    return RegistrationError()


def _login_failed(email: str, error: BaseException) -> LoginError:
    LOGGER.error("Login error for %s: %s", email, error, exc_info=error)
    return LoginError()


async def _issue(
    security_manager: SecurityManager,
    user: User,
) -> AuthResponse:
    token = await security_manager.create_access_token(user)
    return AuthResponse(token=token, user=UserResponse.from_user(user))


async def _register(
    auth_queries: AuthQueries,
    security_manager: SecurityManager,
    request: RegisterRequest,
) -> AuthResponse:
    """Create an account and issue a token for it.

    A duplicate found by the lookup and a duplicate key reported by the
    insert both end in the same DUPLICATE_EMAIL error.
    """
    error = validate_registration(request)
    if error:
        raise error

    email, password = request.email, request.password

    existing = await auth_queries.email_exists(email)
    if isinstance(existing, Failure):
        raise _registration_failed(email, existing.error)
    if existing.value:
        raise DuplicateEmailError()

    try:
        password_hash = await security_manager.hash_password(password)
    except Exception as e:
        raise _registration_failed(email, e) from e

    created = await auth_queries.create_user(email, password_hash)
    if isinstance(created, Failure):
        if created.duplicate_key:
            LOGGER.info("Concurrent registration rejected for %s", email)
            raise DuplicateEmailError()
        raise _registration_failed(email, created.error)

    try:
        response = await _issue(security_manager, created.value)
    except Exception as e:
        raise _registration_failed(email, e) from e

    LOGGER.info("Registered account %s", created.value.id)
    return response


async def _login(
    auth_queries: AuthQueries,
    security_manager: SecurityManager,
    request: LoginRequest,
) -> AuthResponse:
    """Verify credentials and issue a token.

    An unknown email and a wrong password produce the same error so the
    response does not reveal whether the account exists.
    """
    error = validate_login(request)
    if error:
        raise error

    email, password = request.email, request.password

    found = await auth_queries.find_user_by_email(email)
    if isinstance(found, Failure):
        raise _login_failed(email, found.error)
    user = found.value
    if user is None:
        raise InvalidCredentialsError()

    try:
        valid = await security_manager.verify_password(password, user.password_hash)
    except Exception as e:
        raise _login_failed(email, e) from e
    if not valid:
        raise InvalidCredentialsError()

    try:
        return await _issue(security_manager, user)
    except Exception as e:
        raise _login_failed(email, e) from e


def configure_auth_router(
    router: APIRouter,
    auth_queries: AuthQueries,
    security_manager: SecurityManager,
) -> APIRouter:
    """Configure the authentication router.

    :param router: The APIRouter to configure
    :param auth_queries: The AuthQueries instance for database operations
    :param security_manager: The SecurityManager instance for hashing and tokens
    :return: The configured APIRouter
    """

    @router.post(
        "/register",
        response_model=AuthResponse,
        status_code=status.HTTP_201_CREATED,
        description="Register a new user account",
        responses={
            status.HTTP_400_BAD_REQUEST: {
                "model": ErrorResponse,
                "description": "Validation error",
            },
            status.HTTP_409_CONFLICT: {
                "model": ErrorResponse,
                "description": "Email already exists",
            },
            status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        },
    )
    async def register(request: RegisterRequest) -> AuthResponse:
        return await _register(auth_queries, security_manager, request)

    @router.post(
        "/login",
        response_model=AuthResponse,
        description="Login with email and password",
        responses={
            status.HTTP_400_BAD_REQUEST: {
                "model": ErrorResponse,
                "description": "Validation error",
            },
            status.HTTP_401_UNAUTHORIZED: {
                "model": ErrorResponse,
                "description": "Invalid credentials",
            },
            status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        },
    )
    async def login(request: LoginRequest) -> AuthResponse:
        return await _login(auth_queries, security_manager, request)

    return router

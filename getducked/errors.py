"""Exceptions rendered as JSON error responses.

Every subclass of :class:`ApiError` carries the HTTP status, the machine
readable code and the client facing message. The application installs a
single handler that turns them into ``{"error", "code"[, "field"]}`` bodies.
"""

from __future__ import annotations

from typing import ClassVar

from fastapi import status


class ApiError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: ClassVar[str] = "INTERNAL_ERROR"
    default_message: ClassVar[str] = "An unexpected error occurred"

    def __init__(self, message: str | None = None, field: str | None = None) -> None:
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def to_content(self) -> dict[str, str]:
        """Return the JSON body for this error."""
        content = {"error": self.message, "code": self.code}
        if self.field is not None:
            content["field"] = self.field
        return content


class ValidationError(ApiError):
    """Raised when request input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_message = "Invalid request body"


class DuplicateEmailError(ApiError):
    """Raised when an account already exists for the email."""

    status_code = status.HTTP_409_CONFLICT
    code = "DUPLICATE_EMAIL"
    default_message = "An account with this email already exists"


class InvalidCredentialsError(ApiError):
    """Raised for an unknown email and for a wrong password alike."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class RegistrationError(ApiError):
    """Raised when account creation fails for an infrastructure reason."""

    code = "REGISTRATION_ERROR"
    default_message = "Failed to create account"


class LoginError(ApiError):
    """Raised when login fails for an infrastructure reason."""

    code = "LOGIN_ERROR"
    default_message = "Failed to process login"


class QRCodeError(ApiError):
    """Raised when the QR code store cannot be read or written."""

    code = "QR_CODE_ERROR"
    default_message = "Failed to process QR code request"

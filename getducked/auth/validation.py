"""Input validation for account registration and login.

Each validator returns the first failing check as a
:class:`~getducked.errors.ValidationError`, or None when the input is valid.
"""

import re

from getducked.errors import ValidationError

from .models import LoginRequest, RegisterRequest

PASSWORD_MIN_LENGTH = 8

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def _missing(field: str) -> ValidationError:
    return ValidationError(f"Missing required field: {field}", field=field)


def validate_credentials_present(
    request: RegisterRequest | LoginRequest,
) -> ValidationError | None:
    """Check that both email and password were provided and are non-empty."""
    if not request.email:
        return _missing("email")
    if not request.password:
        return _missing("password")
    return None


def validate_email(email: str) -> ValidationError | None:
    if EMAIL_PATTERN.fullmatch(email) is None:
        return ValidationError("Invalid email format", field="email")
    return None


def validate_password(password: str) -> ValidationError | None:
    """Validate password against the minimum length requirement."""
    if len(password) >= PASSWORD_MIN_LENGTH:
        return None

    return ValidationError(
        f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
        field="password",
    )


def validate_registration(request: RegisterRequest) -> ValidationError | None:
    """Validate a registration request.

    Checks run in order: email present, password present, email format,
    password length. The first failure wins.
    """
    error = validate_credentials_present(request)
    if error:
        return error

    return validate_email(request.email) or validate_password(request.password)


def validate_login(request: LoginRequest) -> ValidationError | None:
    """Validate a login request. Only presence is checked on login."""
    return validate_credentials_present(request)

"""Common data models and utilities for the application."""

from .results import Failure, Ok
from .user import DEFAULT_ROLE, User

__all__ = ["DEFAULT_ROLE", "Failure", "Ok", "User"]

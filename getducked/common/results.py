"""Result values returned by store queries.

Queries never raise for store failures. They return either :class:`Ok`
wrapping the value or :class:`Failure` wrapping the error, and the route
layer decides which response each outcome maps to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful query outcome."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Failed query outcome.

    :param error: The exception raised by the store
    :param duplicate_key: True when the failure is a unique index violation
    """

    error: Exception
    duplicate_key: bool = False

"""All authentication-related modules and routes."""

from .auth_routes import configure_auth_router
from .queries import AuthQueries
from .security_manager import SecurityManager

__all__ = [
    "AuthQueries",
    "SecurityManager",
    "configure_auth_router",
]

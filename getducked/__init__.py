"""Get Ducked API package."""

from .app import configure_fastapi_app, connect_database, create_app
from .config import AppConfig, load_config_from_env

__all__ = [
    "AppConfig",
    "configure_fastapi_app",
    "connect_database",
    "create_app",
    "load_config_from_env",
]

"""QR code registry routes and queries."""

from .qr_routes import configure_qr_router
from .queries import QRCodeQueries

__all__ = ["QRCodeQueries", "configure_qr_router"]

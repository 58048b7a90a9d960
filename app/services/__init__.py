"""Services module"""

from app.services.gateway import ProfileGateway

__all__ = [
    "ProfileGateway",
]

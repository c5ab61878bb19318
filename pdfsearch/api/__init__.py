"""
HTTP layer: FastAPI application, routes and error mapping.
"""

from .app import create_app
from .dependencies import Services, get_current_user, get_services

__all__ = [
    "create_app",
    "Services",
    "get_current_user",
    "get_services"
]

"""Routers package for the Mission Control API."""

from .admin import router as admin_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .tasks import router as tasks_router
from .taxonomy import router as taxonomy_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "auth_router",
    "dashboard_router",
    "tasks_router",
    "taxonomy_router",
    "users_router",
]
